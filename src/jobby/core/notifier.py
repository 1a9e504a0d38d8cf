"""Job status notifications.

Composes the operator mail for a job run and hands it to a Mailer. The
notifier never retries and never catches transport errors.
"""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from ..constants import MAIL_FROM_NAME
from ..models import JobOptions, JobRunReport, MailAddress, MailMessage
from .identity import get_environment_name, get_host

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    """Anything able to deliver a composed mail."""

    def send(self, message: MailMessage) -> Any:
        """Deliver message."""
        ...


class Notifier:
    """Builds and sends job status mails.

    Args:
        mailer: Transport used to deliver mails
        host: Host name used in the subject and sender (defaults to get_host())
    """

    def __init__(self, mailer: Mailer, host: str | None = None) -> None:
        self.mailer = mailer
        self._host = host

    @property
    def host(self) -> str:
        return self._host if self._host is not None else get_host()

    @property
    def sender_address(self) -> str:
        return f"{MAIL_FROM_NAME}@{self.host}"

    def compose(self, report: JobRunReport) -> MailMessage:
        """Build the mail for a job run without sending it."""
        host = self.host
        sender = self.sender_address
        return MailMessage(
            subject=f"{report.job_name} [{host}]",
            from_addresses=[MailAddress(address=sender, name=MAIL_FROM_NAME)],
            sender=sender,
            to=report.options.recipient_list(),
            body=self._render_body(report, host),
        )

    def _render_body(self, report: JobRunReport, host: str) -> str:
        lines = []
        if report.message:
            lines += [report.message, ""]
        lines.append(f"Job '{report.job_name}' ran on {host}.")
        environment = get_environment_name()
        if environment:
            lines.append(f"Environment: {environment}")
        lines += ["", "Output:", report.options.output, "", "Best,", self.sender_address]
        return "\n".join(lines)

    def send_mail(
        self,
        job_name: str,
        options: JobOptions | Mapping[str, Any],
        message: str,
    ) -> MailMessage:
        """Compose a status mail for a job and send it once.

        Args:
            job_name: Name of the job
            options: Job options; only output and recipients are used
            message: Free text placed at the top of the body

        Returns:
            The mail handed to the mailer
        """
        if not isinstance(options, JobOptions):
            options = JobOptions.model_validate(dict(options))
        report = JobRunReport(job_name=job_name, options=options, message=message)
        mail = self.compose(report)
        logger.debug(f"Sending notification for {job_name} to {', '.join(mail.to)}")
        self.mailer.send(mail)
        return mail
