"""Concrete Mailer implementations.

Transports deliver a composed MailMessage exactly once. Failures are
raised to the caller unchanged; there are no retries.
"""

import logging
import shlex
import smtplib
import subprocess

from ..config import MailerConfig, SmtpSecurity, TransportType
from ..constants import SENDMAIL_TIMEOUT, SMTP_TIMEOUT
from ..core.notifier import Mailer
from ..models import MailMessage

logger = logging.getLogger(__name__)


class SendmailMailer:
    """Pipe mails to a local sendmail-compatible binary."""

    def __init__(
        self, command: str = "/usr/sbin/sendmail", timeout: int = SENDMAIL_TIMEOUT
    ) -> None:
        self.command = command
        self.timeout = timeout

    def send(self, message: MailMessage) -> None:
        """Send message via sendmail -t.

        Raises:
            subprocess.CalledProcessError: If sendmail exits non-zero
            subprocess.TimeoutExpired: If sendmail does not finish in time
        """
        args = [*shlex.split(self.command), "-t", "-i", "-f", message.sender]
        logger.debug(f"Running {' '.join(args)}")
        subprocess.run(
            args,
            input=message.to_email_message().as_bytes(),
            capture_output=True,
            check=True,
            timeout=self.timeout,
        )


class SmtpMailer:
    """Deliver mails to an SMTP relay."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 25,
        username: str | None = None,
        password: str | None = None,
        security: SmtpSecurity = SmtpSecurity.NONE,
        timeout: int = SMTP_TIMEOUT,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.security = security
        self.timeout = timeout

    def _connect(self) -> smtplib.SMTP:
        if self.security == SmtpSecurity.SSL:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        return smtplib.SMTP(self.host, self.port, timeout=self.timeout)

    def send(self, message: MailMessage) -> None:
        """Send message over SMTP.

        Raises:
            smtplib.SMTPException: On protocol errors
            OSError: On connection errors
        """
        logger.debug(f"Connecting to SMTP {self.host}:{self.port}")
        with self._connect() as conn:
            if self.security == SmtpSecurity.STARTTLS:
                conn.ehlo()
                conn.starttls()
                conn.ehlo()
            if self.username and self.password:
                conn.login(self.username, self.password)
            conn.send_message(
                message.to_email_message(),
                from_addr=message.sender,
                to_addrs=message.to,
            )


def build_mailer(config: MailerConfig) -> Mailer:
    """Create the transport described by config."""
    if config.transport == TransportType.SMTP:
        return SmtpMailer(
            host=config.smtp_host,
            port=config.smtp_port,
            username=config.smtp_username,
            password=config.smtp_password,
            security=config.smtp_security,
        )
    return SendmailMailer(command=config.sendmail_command)
