"""Tests for the submission dispatcher."""

import pytest

from case_submission.exceptions import RenderFailure, TransportFailure
from case_submission.services.submission_service import (
    CASE_PDF_FILENAME,
    SubmissionDispatcher,
    UploadedFile,
)

from .conftest import RejectingTransport


class BrokenPDFGenerator:
    def __init__(self, form, catalog):
        pass

    def generate(self):
        raise RenderFailure("layout exploded")


@pytest.mark.asyncio
async def test_dispatch_sends_pdf_then_uploads_verbatim(dispatcher, transport, mail_settings):
    scan = UploadedFile("scan (1).png", b"\x89PNG\r\n\x1a\nraw")
    notes = UploadedFile("../notes.txt", b"plain")

    message = await dispatcher.dispatch({"patientName": "Jane Doe"}, [scan, notes])

    assert transport.sent == [message]
    assert message.from_address == '"Case Submission" <cases@test.local>'
    assert message.to_address == mail_settings.recipient
    assert message.subject == "New Case Submission"
    assert [a.filename for a in message.attachments] == [CASE_PDF_FILENAME, "scan (1).png", "../notes.txt"]
    assert message.attachments[0].content.startswith(b"%PDF")
    assert message.attachments[1].content == scan.content
    assert message.attachments[2].content == notes.content
    assert "<strong>Patient Name:</strong> Jane Doe" in message.html


@pytest.mark.asyncio
async def test_envelope_ignores_submitted_fields(dispatcher, mail_settings):
    message = await dispatcher.dispatch({"email": "attacker@example.com", "subject": "spam"})
    assert message.to_address == mail_settings.recipient
    assert message.subject == mail_settings.subject


@pytest.mark.asyncio
async def test_render_failure_sends_nothing(mail_settings, transport):
    dispatcher = SubmissionDispatcher(
        settings=mail_settings, transport=transport, pdf_generator_factory=BrokenPDFGenerator
    )
    with pytest.raises(RenderFailure):
        await dispatcher.dispatch({"patientName": "Jane Doe"})
    assert transport.sent == []


@pytest.mark.asyncio
async def test_transport_failure_propagates(mail_settings):
    transport = RejectingTransport()
    dispatcher = SubmissionDispatcher(settings=mail_settings, transport=transport)
    with pytest.raises(TransportFailure):
        await dispatcher.dispatch({"patientName": "Jane Doe"})
    assert transport.attempts == 1


def test_render_returns_matching_html_and_pdf(dispatcher):
    document = dispatcher.render({"doctorName": "Dr. Smith"})
    assert "Dr. Smith" in document.html
    assert document.pdf.startswith(b"%PDF")
