"""Data models for jobby.

This package defines the values passed between jobby components:
- Host platform family (PlatformKind)
- Held lock handles (LockToken)
- Job run reports and their options (JobRunReport, JobOptions)
- Composed notification mail (MailMessage, MailAddress)
- Host identity (HostIdentity)

Value models are Pydantic BaseModel subclasses. LockToken wraps a live
OS file handle and is a plain dataclass.

Example:
    >>> from jobby.models import JobOptions
    >>> JobOptions(output="done", recipients="ops@example.com")
"""

from .identity import HostIdentity
from .lock import LockToken
from .mail import MailAddress, MailMessage
from .platform import PlatformKind
from .report import JobOptions, JobRunReport

__all__ = [
    "HostIdentity",
    "JobOptions",
    "JobRunReport",
    "LockToken",
    "MailAddress",
    "MailMessage",
    "PlatformKind",
]
