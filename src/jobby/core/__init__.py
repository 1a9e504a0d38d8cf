"""Core logic for jobby.

- platform: host platform family detection
- tempdir: scratch directory resolution
- escape: filesystem-safe job identifiers
- lock_manager: exclusive non-blocking job locks
- identity: deployment environment and host name
- notifier: job status mail composition
"""

from .escape import escape
from .identity import get_environment_name, get_host, get_identity
from .lock_manager import (
    LockBackend,
    LockManager,
    PosixLockBackend,
    WindowsLockBackend,
    lock_path_for,
    select_backend,
)
from .notifier import Mailer, Notifier
from .platform import current_platform, detect
from .tempdir import resolve_temp_dir

__all__ = [
    "LockBackend",
    "LockManager",
    "Mailer",
    "Notifier",
    "PosixLockBackend",
    "WindowsLockBackend",
    "current_platform",
    "detect",
    "escape",
    "get_environment_name",
    "get_host",
    "get_identity",
    "lock_path_for",
    "resolve_temp_dir",
    "select_backend",
]
