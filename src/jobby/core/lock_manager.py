"""Lock manager for job concurrency control.

Provides exclusive, non-blocking advisory file locks so that only one
instance of a job runs at a time on a host. A denied lock is reported
immediately as LockHeldError; there is no waiting or queuing.

The OS lock is tied to the open file handle, so a crashed holder
releases it implicitly. Lock files are never deleted, only unlocked.
"""

import contextlib
import errno
import logging
import os
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path
from typing import IO, Protocol

from ..constants import LOCK_FILE_SUFFIX
from ..errors import LockError, LockHeldError
from ..models import LockToken, PlatformKind
from .escape import escape
from .platform import current_platform
from .tempdir import resolve_temp_dir

logger = logging.getLogger(__name__)

# errno values a non-blocking lock request fails with when the lock is taken
# (flock gives EAGAIN/EWOULDBLOCK, msvcrt LK_NBLCK gives EACCES)
_CONTENTION_ERRNOS = frozenset({errno.EAGAIN, errno.EWOULDBLOCK, errno.EACCES})


class LockBackend(Protocol):
    """Platform-specific exclusive lock on an open file handle."""

    def lock(self, handle: IO[str]) -> None:
        """Take an exclusive lock without blocking.

        Raises:
            OSError: If the lock is held elsewhere
        """
        ...

    def unlock(self, handle: IO[str]) -> None:
        """Drop the lock taken by lock()."""
        ...


class PosixLockBackend:
    """flock(2) based advisory locks."""

    def lock(self, handle: IO[str]) -> None:
        import fcntl

        fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)

    def unlock(self, handle: IO[str]) -> None:
        import fcntl

        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


class WindowsLockBackend:
    """msvcrt byte-range locks on the first byte of the file."""

    def lock(self, handle: IO[str]) -> None:
        import msvcrt

        handle.seek(0)
        msvcrt.locking(handle.fileno(), msvcrt.LK_NBLCK, 1)  # type: ignore[attr-defined]

    def unlock(self, handle: IO[str]) -> None:
        import msvcrt

        handle.seek(0)
        msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, 1)  # type: ignore[attr-defined]


def select_backend(kind: PlatformKind | None = None) -> LockBackend:
    """Get the lock backend for a platform family.

    Args:
        kind: Platform family (defaults to the host's)

    Returns:
        Lock backend instance
    """
    if kind is None:
        kind = current_platform()
    if kind == PlatformKind.WINDOWS:
        return WindowsLockBackend()
    return PosixLockBackend()


def lock_path_for(job_name: str, directory: Path | None = None) -> Path:
    """Get the lock file path for a job.

    Args:
        job_name: Name of the job
        directory: Directory holding lock files (defaults to the temp dir)

    Returns:
        Path of the form <directory>/<escaped job name>.lck
    """
    if directory is None:
        directory = resolve_temp_dir()
    return directory / f"{escape(job_name)}{LOCK_FILE_SUFFIX}"


def _key(path: str | Path) -> Path:
    return Path(os.path.abspath(path))


class LockManager:
    """Tracks the job locks held by this process.

    Each acquire must be paired with exactly one release before the same
    path can be acquired again. Not safe for concurrent use from several
    threads; use one manager per thread or serialise calls.
    """

    def __init__(self, backend: LockBackend | None = None) -> None:
        self._backend = backend if backend is not None else select_backend()
        self._tokens: dict[Path, LockToken] = {}

    def is_held(self, path: str | Path) -> bool:
        """Return True if this manager holds a lock on path."""
        return _key(path) in self._tokens

    def acquire(self, path: str | Path) -> LockToken:
        """Acquire an exclusive lock on path.

        The lock file is created if missing.

        Args:
            path: Lock file path

        Returns:
            Token for the held lock

        Raises:
            LockError: If this manager already holds path, or the file
                cannot be opened or locked for a reason other than contention
            LockHeldError: If another holder owns the lock
        """
        key = _key(path)
        if key in self._tokens:
            raise LockError(f"Lock already acquired by this manager: {key}", key)

        try:
            handle = open(key, "a+")  # noqa: SIM115
        except OSError as e:
            raise LockError(f"Cannot open lock file {key}: {e}", key) from e

        try:
            self._backend.lock(handle)
        except OSError as e:
            handle.close()
            if isinstance(e, BlockingIOError) or e.errno in _CONTENTION_ERRNOS:
                raise LockHeldError(f"Lock is held by another process: {key}", key) from e
            raise LockError(f"Cannot lock {key}: {e}", key) from e

        token = LockToken(path=key, handle=handle)
        self._tokens[key] = token
        logger.debug(f"Acquired lock {key}")
        return token

    def release(self, path: str | Path) -> None:
        """Release the lock held on path.

        The lock file stays on disk.

        Args:
            path: Lock file path

        Raises:
            LockError: If this manager holds no lock on path
        """
        key = _key(path)
        token = self._tokens.pop(key, None)
        if token is None:
            raise LockError(f"Lock not held: {key}", key)

        try:
            self._backend.unlock(token.handle)
        finally:
            # Closing the handle drops the OS lock even if unlock failed
            token.handle.close()
        held = (datetime.now() - token.acquired_at).total_seconds()
        logger.debug(f"Released lock {key} after {held:.1f}s")

    @contextlib.contextmanager
    def locked(self, path: str | Path) -> Iterator[LockToken]:
        """Hold the lock on path for the duration of a with-block.

        If the block already released the lock itself, nothing is released
        on exit.

        Raises:
            LockError: If the lock cannot be acquired
        """
        token = self.acquire(path)
        try:
            yield token
        finally:
            if self._tokens.get(token.path) is token:
                self.release(token.path)

    def release_all(self) -> None:
        """Release every lock held by this manager."""
        for key in list(self._tokens):
            self.release(key)
