"""Host platform detection.

Lock semantics differ between POSIX hosts (flock advisory locks) and
Windows hosts (msvcrt byte-range locks). Anything that is not Windows is
treated as POSIX.
"""

import functools
import logging
import os

from ..models import PlatformKind

logger = logging.getLogger(__name__)


def detect(os_name: str | None = None) -> PlatformKind:
    """Detect the platform family.

    Args:
        os_name: Value of ``os.name`` to classify (defaults to the host's)

    Returns:
        PlatformKind.WINDOWS for "nt", PlatformKind.POSIX otherwise
    """
    name = os.name if os_name is None else os_name
    if name == "nt":
        return PlatformKind.WINDOWS
    if name != "posix":
        logger.debug(f"Unknown platform {name!r}, falling back to POSIX lock semantics")
    return PlatformKind.POSIX


@functools.cache
def current_platform() -> PlatformKind:
    """Platform family of this host, detected once per process."""
    return detect()
