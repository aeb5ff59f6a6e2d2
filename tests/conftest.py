"""Pytest fixtures for case submission tests."""

import pytest
from fastapi.testclient import TestClient

from case_submission.config import MailSettings
from case_submission.exceptions import TransportFailure
from case_submission.main import app
from case_submission.routes.cases import get_dispatcher
from case_submission.services.submission_service import SubmissionDispatcher


class RecordingTransport:
    """Mail transport double that keeps every message it is asked to send."""

    def __init__(self):
        self.sent = []

    async def send(self, message):
        self.sent.append(message)
        return {"id": "test", "success": True}


class RejectingTransport:
    """Mail transport double whose relay always refuses the message."""

    def __init__(self):
        self.attempts = 0

    async def send(self, message):
        self.attempts += 1
        raise TransportFailure("550 relay rejected")


@pytest.fixture
def mail_settings():
    return MailSettings(
        smtp_host="smtp.test.local",
        smtp_port=465,
        smtp_username="cases@test.local",
        smtp_password="secret",
        sender_email="cases@test.local",
        recipient="inbox@test.local",
        subject="New Case Submission",
    )


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def dispatcher(mail_settings, transport):
    return SubmissionDispatcher(settings=mail_settings, transport=transport)


@pytest.fixture
def client(dispatcher):
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
