"""Lock token for held job locks.

A token is created by a successful LockManager.acquire and is only
meaningful to the manager that created it.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import IO


@dataclass
class LockToken:
    """Open handle holding an exclusive advisory lock.

    Attributes:
        path: Absolute path of the lock file.
        handle: Open file object the OS lock is attached to.
        pid: Process ID that acquired the lock.
        acquired_at: When the lock was acquired.
    """

    path: Path
    handle: IO[str] = field(repr=False)
    pid: int = field(default_factory=os.getpid)
    acquired_at: datetime = field(default_factory=datetime.now)

    @property
    def closed(self) -> bool:
        """True once the underlying handle has been closed."""
        return self.handle.closed
