"""Job run report passed to the notifier."""

from pydantic import BaseModel, ConfigDict, Field


class JobOptions(BaseModel):
    """Job options recognised when composing a notification.

    Job runners usually pass their whole job configuration; keys other
    than these are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    output: str = Field(default="", description="Captured stdout/stderr of the run")
    recipients: str = Field(default="", description="Comma-separated address list")

    def recipient_list(self) -> list[str]:
        """Split recipients on commas.

        Surrounding whitespace is stripped and empty entries are dropped.
        Duplicates and order are kept as given.
        """
        return [part.strip() for part in self.recipients.split(",") if part.strip()]


class JobRunReport(BaseModel):
    """Outcome of a single job run, consumed once to build a mail."""

    job_name: str
    options: JobOptions = Field(default_factory=JobOptions)
    message: str = ""
