class BackupError(Exception):
    """Base class for failures that abort a backup run."""

    kind = "backup"


class DownloadError(BackupError):
    kind = "download"


class CompositeError(BackupError):
    kind = "composite"


class PersistenceError(BackupError):
    kind = "persistence"


class ConfigurationError(BackupError):
    kind = "configuration"


class PublishError(BackupError):
    kind = "publish"
