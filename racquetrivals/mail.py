"""Outgoing email: the message type and the SMTP delivery backend."""

from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass, field
from email.headerregistry import Address as EmailAddress
from email.message import EmailMessage
from typing import Optional, Protocol

from .config import Settings
from .exceptions import ConfigurationError, MailDeliveryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Address:
    address: str
    name: str = ""

    def formatted(self) -> str:
        if not self.name:
            return self.address
        return str(EmailAddress(display_name=self.name, addr_spec=self.address))


@dataclass
class Message:
    """A single HTML email."""

    sender: Address
    to: list[Address]
    subject: str
    html: str
    text: Optional[str] = None
    headers: dict[str, str] = field(default_factory=dict)

    def to_email_message(self) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.sender.formatted()
        msg["To"] = ", ".join(a.formatted() for a in self.to)
        msg["Subject"] = self.subject
        for key, value in self.headers.items():
            msg[key] = value
        msg.set_content(self.text or "This message requires an HTML capable client.")
        msg.add_alternative(self.html, subtype="html")
        return msg


class Mailer(Protocol):
    """Delivers one message. Raises on failure."""

    def send(self, message: Message) -> None: ...


class SMTPMailer:
    """Send messages through an SMTP relay, one connection per message."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
        starttls: bool = True,
        timeout: int = 30,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self._password = password
        self.starttls = starttls
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SMTPMailer":
        if not settings.smtp_host:
            raise ConfigurationError("SMTP_HOST is not set")
        return cls(
            settings.smtp_host,
            settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            starttls=settings.smtp_starttls,
        )

    def send(self, message: Message) -> None:
        if not message.to:
            raise ValueError("Message has no recipients")
        email_message = message.to_email_message()
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.starttls:
                    smtp.starttls()
                if self.username:
                    # Never log the password
                    smtp.login(self.username, self._password or "")
                smtp.send_message(email_message)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailDeliveryError(
                f"Failed to send '{message.subject}' via {self.host}:{self.port}: {exc}"
            ) from exc
        logger.debug(f"Sent '{message.subject}' to {len(message.to)} recipient(s)")


__all__ = ["Address", "Message", "Mailer", "SMTPMailer"]
