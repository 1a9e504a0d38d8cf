"""Deployment environment and host identity."""

import functools
import os
import platform
import socket
from collections.abc import Mapping

from ..constants import APPLICATION_ENV_VAR
from ..models import HostIdentity


def get_environment_name(environ: Mapping[str, str] | None = None) -> str | None:
    """Read the deployment environment name.

    The variable is read on every call so changes made by the running
    process are picked up.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Value of APPLICATION_ENV, or None if unset
    """
    env = os.environ if environ is None else environ
    return env.get(APPLICATION_ENV_VAR)


@functools.cache
def get_host() -> str:
    """Get the network host name of this machine.

    Tries socket.gethostname() first and falls back to platform.node().
    The result is cached for the lifetime of the process.
    """
    try:
        host = socket.gethostname()
    except OSError:
        host = ""
    return host or platform.node()


def get_identity() -> HostIdentity:
    """Current host name and environment."""
    return HostIdentity(host=get_host(), environment=get_environment_name())
