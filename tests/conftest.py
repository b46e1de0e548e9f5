import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("MAIL_BACKEND", "log")

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from contact_relay.api.v1.contact import get_contact_config, get_mail_sender_dependency
from contact_relay.core.exceptions import MailSendError
from contact_relay.domain.schemas import ContactConfig, OutboundEmail
from contact_relay.main import app


class FakeMailSender:
    def __init__(self, error: Optional[str] = None):
        self.sent: List[OutboundEmail] = []
        self.error = error

    async def send(self, email: OutboundEmail) -> None:
        self.sent.append(email)
        if self.error:
            raise MailSendError(self.error, provider="fake")


@pytest.fixture
def contact_config() -> ContactConfig:
    return ContactConfig(
        mail_to="hello@hyped.dk",
        mail_from="no-reply@hyped.dk",
        mail_from_name="Hyped.dk Contact Worker",
    )


@pytest.fixture
def mail_sender() -> FakeMailSender:
    return FakeMailSender()


@pytest.fixture
def client(mail_sender, contact_config):
    app.dependency_overrides[get_mail_sender_dependency] = lambda: mail_sender
    app.dependency_overrides[get_contact_config] = lambda: contact_config
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
