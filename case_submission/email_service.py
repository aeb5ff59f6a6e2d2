"""
Case email delivery over SMTP
Builds the MIME message for a submitted case and hands it to the configured relay
"""

import asyncio
import logging
import mimetypes
import smtplib
import ssl
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email import encoders
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import parseaddr

from .config import MailSettings
from .exceptions import TransportFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attachment:
    filename: str
    content: bytes


@dataclass
class OutboundMessage:
    from_address: str
    to_address: str
    subject: str
    html: str
    attachments: list[Attachment] = field(default_factory=list)


def build_mime_message(message: OutboundMessage) -> MIMEMultipart:
    """Assemble the multipart/mixed message: HTML body first, then attachments in order"""
    msg = MIMEMultipart("mixed")
    msg["Subject"] = message.subject
    msg["From"] = message.from_address
    msg["To"] = message.to_address

    msg.attach(MIMEText(message.html, "html"))

    for attachment in message.attachments:
        content_type, _ = mimetypes.guess_type(attachment.filename)
        maintype, subtype = (content_type or "application/octet-stream").split("/", 1)
        part = MIMEBase(maintype, subtype)
        part.set_payload(attachment.content)
        encoders.encode_base64(part)
        part.add_header("Content-Disposition", "attachment", filename=attachment.filename)
        msg.attach(part)

    return msg


class SMTPMailTransport:
    """Send case emails through a single SMTP relay"""

    def __init__(self, settings: MailSettings):
        self.settings = settings

    def _connect(self) -> smtplib.SMTP:
        host = self.settings.smtp_host
        port = self.settings.smtp_port
        timeout = self.settings.smtp_timeout

        if port == 465:
            context = ssl.create_default_context()
            return smtplib.SMTP_SSL(host, port, context=context, timeout=timeout)

        server = smtplib.SMTP(host, port, timeout=timeout)
        if self.settings.smtp_use_tls:
            context = ssl.create_default_context()
            try:
                server.starttls(context=context)
            except Exception:
                server.close()
                raise
        return server

    def send_sync(self, message: OutboundMessage) -> dict:
        msg = build_mime_message(message)
        sender = parseaddr(message.from_address)[1] or self.settings.sender_email

        # Leaving the block sends QUIT and ignores a disconnect at QUIT
        try:
            with self._connect() as server:
                server.login(self.settings.smtp_username, self.settings.smtp_password)
                server.sendmail(sender, [message.to_address], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"❌ SMTP send via {self.settings.smtp_host} failed: {e}")
            raise TransportFailure(f"SMTP delivery failed: {e}") from e

        logger.info(f"✅ Case email sent via {self.settings.smtp_host} to {message.to_address}")
        return {"id": f"smtp-{datetime.now(timezone.utc).timestamp()}", "success": True}

    async def send(self, message: OutboundMessage) -> dict:
        logger.info(f"📧 Sending case email via SMTP: {self.settings.smtp_host}")
        return await asyncio.to_thread(self.send_sync, message)
