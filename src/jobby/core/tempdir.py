"""Scratch directory resolution."""

import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

from ..constants import TEMP_DIR_ENV_VARS


def resolve_temp_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Resolve the directory used for lock files and other scratch data.

    Precedence: TMP, TEMP, TMPDIR (first non-empty wins), then the system
    temp directory, then the current working directory. Nothing is
    created on disk.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Path to the scratch directory
    """
    env = os.environ if environ is None else environ
    for key in TEMP_DIR_ENV_VARS:
        value = env.get(key)
        if value:
            return Path(value)

    try:
        return Path(tempfile.gettempdir())
    except FileNotFoundError:
        # No usable system temp dir
        return Path.cwd()
