"""Mail transports for jobby notifications."""

from .mailers import SendmailMailer, SmtpMailer, build_mailer

__all__ = [
    "SendmailMailer",
    "SmtpMailer",
    "build_mailer",
]
