"""Composed notification mail."""

from email.headerregistry import Address
from email.message import EmailMessage

from pydantic import BaseModel, Field


class MailAddress(BaseModel):
    """Address with an optional display name."""

    address: str
    name: str = ""

    def formatted(self) -> str:
        """Render as an RFC 5322 address header value."""
        if not self.name:
            return self.address
        return str(Address(display_name=self.name, addr_spec=self.address))


class MailMessage(BaseModel):
    """Fully composed mail handed to a Mailer.

    Attributes:
        subject: Subject line.
        from_addresses: From header entries.
        sender: Envelope sender address.
        to: Recipient addresses.
        body: Plain text body.
    """

    subject: str
    from_addresses: list[MailAddress] = Field(default_factory=list)
    sender: str
    to: list[str] = Field(default_factory=list)
    body: str = ""

    def to_email_message(self) -> EmailMessage:
        """Convert to a stdlib EmailMessage for transports."""
        message = EmailMessage()
        message["Subject"] = self.subject
        message["From"] = ", ".join(a.formatted() for a in self.from_addresses)
        message["Sender"] = self.sender
        message["To"] = ", ".join(self.to)
        message.set_content(self.body)
        return message
