"""Outgoing e-mail."""

import smtplib
from abc import ABC, abstractmethod
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import structlog

from productlists.infrastructure.files import StoredFile

logger = structlog.get_logger()


class Mailer(ABC):
    """Sends e-mail messages."""

    @abstractmethod
    def send(
        self,
        recipient: str,
        subject: str,
        body: str,
        attachments: list[StoredFile] | None = None,
    ) -> None:
        """Send a plain-text message with optional attachments."""


class SmtpMailer(Mailer):
    """Mailer delivering through an SMTP server."""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = False,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def build_message(
        self,
        recipient: str,
        subject: str,
        body: str,
        attachments: list[StoredFile] | None = None,
    ) -> MIMEMultipart:
        """Build the MIME message sent by ``send``."""
        message = MIMEMultipart()
        message["From"] = self.sender
        message["To"] = recipient
        message["Subject"] = subject
        message.attach(MIMEText(body, "plain", "utf-8"))

        for stored in attachments or []:
            subtype = stored.media_type.partition("/")[2]
            part = MIMEApplication(stored.content, _subtype=subtype or "octet-stream")
            part.add_header("Content-Disposition", "attachment", filename=stored.name)
            message.attach(part)

        return message

    def send(
        self,
        recipient: str,
        subject: str,
        body: str,
        attachments: list[StoredFile] | None = None,
    ) -> None:
        message = self.build_message(recipient, subject, body, attachments)

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.sendmail(self.sender, [recipient], message.as_string())

        logger.info(
            "Email sent",
            recipient=recipient,
            subject=subject,
            attachment_count=len(attachments or []),
        )
