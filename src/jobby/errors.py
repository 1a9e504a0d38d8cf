"""Jobby errors."""

from pathlib import Path


class JobbyError(Exception):
    """Base exception for jobby errors."""


class LockError(JobbyError):
    """Error acquiring or releasing a job lock."""

    def __init__(self, message: str, path: str | Path) -> None:
        super().__init__(message)
        self.path = Path(path)


class LockHeldError(LockError):
    """Raised when another holder already owns the lock."""


class ConfigError(JobbyError):
    """Raised when the config file cannot be read or validated."""
