"""Host platform family."""

from enum import Enum


class PlatformKind(str, Enum):
    """Operating-system families with distinct lock semantics."""

    POSIX = "posix"
    WINDOWS = "windows"
