"""Scheduled backup of a map tile region: download, stitch, store, post to a webhook."""

from .version import __version__

__all__ = ["__version__"]
