"""Host identity model."""

from pydantic import BaseModel


class HostIdentity(BaseModel):
    """Host name and deployment environment of the current process."""

    host: str
    environment: str | None = None
