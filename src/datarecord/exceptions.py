class DataRecordError(Exception):
    """Base class for exceptions in this module."""


class ConfigError(DataRecordError):
    """Raised when settings fail validation."""
