"""Tests for mail transports."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from jobby.config import MailerConfig, SmtpSecurity, TransportType
from jobby.models import MailAddress, MailMessage
from jobby.services.mailers import SendmailMailer, SmtpMailer, build_mailer


@pytest.fixture
def mail() -> MailMessage:
    return MailMessage(
        subject="job [box]",
        from_addresses=[MailAddress(address="jobby@box", name="jobby")],
        sender="jobby@box",
        to=["a@a.com", "b@b.com"],
        body="output",
    )


class TestSendmailMailer:
    """Tests for SendmailMailer."""

    def test_pipes_message_to_sendmail(self, mail: MailMessage) -> None:
        with patch("jobby.services.mailers.subprocess.run") as mock_run:
            SendmailMailer("/usr/sbin/sendmail").send(mail)

        mock_run.assert_called_once()
        args = mock_run.call_args.args[0]
        assert args == ["/usr/sbin/sendmail", "-t", "-i", "-f", "jobby@box"]
        kwargs = mock_run.call_args.kwargs
        assert kwargs["check"] is True
        assert b"Subject: job [box]" in kwargs["input"]

    def test_command_with_arguments(self, mail: MailMessage) -> None:
        with patch("jobby.services.mailers.subprocess.run") as mock_run:
            SendmailMailer("msmtp --account=ops").send(mail)
        assert mock_run.call_args.args[0][:2] == ["msmtp", "--account=ops"]

    def test_failure_propagates(self, mail: MailMessage) -> None:
        error = subprocess.CalledProcessError(75, ["sendmail"])
        with (
            patch("jobby.services.mailers.subprocess.run", side_effect=error),
            pytest.raises(subprocess.CalledProcessError),
        ):
            SendmailMailer().send(mail)


class TestSmtpMailer:
    """Tests for SmtpMailer."""

    def test_plain_smtp(self, mail: MailMessage) -> None:
        with patch("jobby.services.mailers.smtplib.SMTP") as mock_smtp:
            SmtpMailer(host="relay", port=2525).send(mail)

        mock_smtp.assert_called_once_with("relay", 2525, timeout=30)
        conn = mock_smtp.return_value.__enter__.return_value
        conn.starttls.assert_not_called()
        conn.login.assert_not_called()
        conn.send_message.assert_called_once()
        assert conn.send_message.call_args.kwargs["to_addrs"] == ["a@a.com", "b@b.com"]
        assert conn.send_message.call_args.kwargs["from_addr"] == "jobby@box"

    def test_starttls_and_login(self, mail: MailMessage) -> None:
        with patch("jobby.services.mailers.smtplib.SMTP") as mock_smtp:
            SmtpMailer(
                host="relay",
                port=587,
                username="user",
                password="secret",
                security=SmtpSecurity.STARTTLS,
            ).send(mail)

        conn = mock_smtp.return_value.__enter__.return_value
        conn.starttls.assert_called_once()
        conn.login.assert_called_once_with("user", "secret")

    def test_ssl(self, mail: MailMessage) -> None:
        with (
            patch("jobby.services.mailers.smtplib.SMTP_SSL") as mock_ssl,
            patch("jobby.services.mailers.smtplib.SMTP") as mock_smtp,
        ):
            SmtpMailer(host="relay", port=465, security=SmtpSecurity.SSL).send(mail)

        mock_ssl.assert_called_once_with("relay", 465, timeout=30)
        mock_smtp.assert_not_called()

    def test_failure_propagates(self, mail: MailMessage) -> None:
        with (
            patch("jobby.services.mailers.smtplib.SMTP", side_effect=ConnectionRefusedError),
            pytest.raises(ConnectionRefusedError),
        ):
            SmtpMailer().send(mail)


class TestBuildMailer:
    """Tests for build_mailer."""

    def test_default_is_sendmail(self) -> None:
        mailer = build_mailer(MailerConfig())
        assert isinstance(mailer, SendmailMailer)
        assert mailer.command == "/usr/sbin/sendmail"

    def test_smtp(self) -> None:
        config = MailerConfig(
            transport=TransportType.SMTP,
            smtp_host="relay",
            smtp_port=587,
            smtp_username="u",
            smtp_password="p",
            smtp_security=SmtpSecurity.STARTTLS,
        )
        mailer = build_mailer(config)
        assert isinstance(mailer, SmtpMailer)
        assert mailer.host == "relay"
        assert mailer.port == 587
        assert mailer.security == SmtpSecurity.STARTTLS

    def test_mailer_satisfies_notifier(self, mail: MailMessage) -> None:
        """Built mailers plug into Notifier."""
        from jobby.core import Notifier

        mailer = MagicMock(spec=SendmailMailer)
        Notifier(mailer, host="box").send_mail("job", {"recipients": "a@a.com"}, "")
        mailer.send.assert_called_once()
