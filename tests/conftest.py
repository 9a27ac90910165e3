import os
import sys
from typing import List

import pytest

# Ensure project root is on sys.path for `import app`, `import api`, etc.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app.delivery import DeliveryError  # noqa: E402
from app.notifications import Notification  # noqa: E402
from app.storage import InMemorySubmissionStore  # noqa: E402


class RecordingSender:
    """EmailSender stand-in that keeps every notification it is given."""

    def __init__(self, fail: bool = False):
        self.sent: List[Notification] = []
        self.fail = fail

    def send(self, notification: Notification) -> str:
        if self.fail:
            raise DeliveryError("mail provider unavailable")
        self.sent.append(notification)
        return f"ack-{len(self.sent)}"


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def store():
    return InMemorySubmissionStore()


@pytest.fixture
def contact_payload():
    return {
        "name": "Marie Joseph",
        "email": "marie@example.ht",
        "phone": "+509 3712 3456",
        "subject": "general",
        "message": "Bonjour, I would like new kitchen cabinets.",
    }


@pytest.fixture
def quote_payload():
    return {
        "name": "Jean Baptiste",
        "email": "jean@example.ht",
        "phone": "37123456",
        "address": "12 Rue Capois, Port-au-Prince",
        "projectType": "kitchen",
        "cabinetStyle": "modern",
        "finish": "white",
        "budget": "50000-75000",
        "timeline": "1-month",
    }


@pytest.fixture
def client(sender, store):
    from fastapi.testclient import TestClient

    from api.server import app, get_email_sender, get_submission_store

    app.dependency_overrides[get_email_sender] = lambda: sender
    app.dependency_overrides[get_submission_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
