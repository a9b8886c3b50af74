import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

from dotenv import find_dotenv, load_dotenv

from .config import EXIT_DELAY
from .di import Container
from .logging_setup import flush_logging, setup_logging
from .pipeline import execute

log = logging.getLogger("tile_backup")


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="tile-backup",
        description="Download a tile region, stitch it into one PNG, save it and post it to a webhook.",
    )
    ap.add_argument("--output-dir", type=Path, default=None, help="Directory for backup PNGs")
    ap.add_argument("--skip-publish", action="store_true", help="Save locally, do not post to the webhook")
    ap.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING/ERROR (default: $LOG_LEVEL or INFO)")
    return ap.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None, container: Optional[Container] = None) -> None:
    args = _parse_args(argv)
    load_dotenv(find_dotenv(usecwd=True))
    setup_logging(args.log_level)

    if container is None:
        overrides = {"output_dir": args.output_dir}
        if args.skip_publish:
            overrides["publish"] = False
        container = Container(**overrides)

    result = execute(container)
    if result.ok:
        log.info("Backup run finished", extra={"extra": {"path": str(result.artifact_path)}})
    else:
        log.error("Backup run failed", extra={"extra": {"kind": result.kind, "error": result.message}})

    flush_logging()
    time.sleep(EXIT_DELAY)
    sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
