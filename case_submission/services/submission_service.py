"""
Case submission dispatch
Renders the submitted case into an HTML body and a PDF summary and emails both,
together with the uploaded files, to the case inbox.
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Optional, Protocol

from ..config import MailSettings
from ..email_service import Attachment, OutboundMessage
from ..email_templates import render_case_html
from ..exceptions import RenderFailure
from ..field_catalog import FIELD_CATALOG, Section
from .case_pdf_generator import CasePDFGenerator

logger = logging.getLogger(__name__)

CASE_PDF_FILENAME = "case-summary.pdf"


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    content: bytes


@dataclass(frozen=True)
class RenderedDocument:
    html: str
    pdf: bytes


class MailTransport(Protocol):
    async def send(self, message: OutboundMessage) -> dict: ...


class SubmissionDispatcher:
    """Turn one case submission into one outbound email"""

    def __init__(
        self,
        settings: MailSettings,
        transport: MailTransport,
        catalog: Sequence[Section] = FIELD_CATALOG,
        pdf_generator_factory=CasePDFGenerator,
    ):
        self.settings = settings
        self.transport = transport
        self.catalog = catalog
        self.pdf_generator_factory = pdf_generator_factory

    def render(
        self, form: Mapping[str, str], attachment_names: Optional[Sequence[str]] = None
    ) -> RenderedDocument:
        """Render the PDF summary and the HTML body from the same form"""
        pdf_bytes = self.pdf_generator_factory(form, self.catalog).generate()
        try:
            html = render_case_html(form, self.catalog, attachment_names)
        except Exception as e:
            raise RenderFailure(f"Failed to build case email body: {e}") from e
        return RenderedDocument(html=html, pdf=pdf_bytes)

    async def dispatch(
        self, form: Mapping[str, str], files: Sequence[UploadedFile] = ()
    ) -> OutboundMessage:
        """
        Render and send a case.

        Raises RenderFailure or TransportFailure; nothing is sent when rendering fails.
        """
        attachment_names = [CASE_PDF_FILENAME] + [f.filename for f in files]
        document = await asyncio.to_thread(self.render, form, attachment_names)

        message = OutboundMessage(
            from_address=self.settings.from_address,
            to_address=self.settings.recipient,
            subject=self.settings.subject,
            html=document.html,
            attachments=[Attachment(CASE_PDF_FILENAME, document.pdf)]
            + [Attachment(f.filename, f.content) for f in files],
        )

        await self.transport.send(message)
        logger.info(f"✅ Case dispatched to {message.to_address} with {len(message.attachments)} attachment(s)")
        return message
