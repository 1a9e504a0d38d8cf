"""Name escaping for lock files and other identifiers."""

import re

_INVALID = re.compile(r"[^a-z0-9_.\s-]")
_WHITESPACE = re.compile(r"\s+")


def escape(name: str) -> str:
    """Convert a job name into a filesystem-safe identifier.

    Lowercases, drops everything outside ``[a-z0-9_.-]`` and whitespace,
    trims the ends and collapses each whitespace run to one underscore.

    Args:
        name: Name to escape

    Returns:
        Escaped identifier (may be empty)
    """
    kept = _INVALID.sub("", name.lower()).strip()
    return _WHITESPACE.sub("_", kept)
