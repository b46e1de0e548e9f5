"""
Contact form endpoint.

Accepts every method on the contact path so that non-POST requests get the
handler's own 405 instead of the framework default.
"""
from functools import lru_cache

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from contact_relay.core.config import settings
from contact_relay.domain.schemas import ContactConfig
from contact_relay.infrastructure.email_service import MailSender, get_mail_sender
from contact_relay.services.contact.handler import ContactHandler

router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_contact_config() -> ContactConfig:
    return ContactConfig.from_settings(settings)


@lru_cache(maxsize=1)
def get_mail_sender_dependency() -> MailSender:
    return get_mail_sender(settings)


def get_contact_handler(
    config: ContactConfig = Depends(get_contact_config),
    mail_sender: MailSender = Depends(get_mail_sender_dependency),
) -> ContactHandler:
    return ContactHandler(config, mail_sender)


@router.api_route(
    settings.contact_path,
    methods=ALL_METHODS,
    include_in_schema=False,
)
async def submit_contact_form(
    request: Request,
    handler: ContactHandler = Depends(get_contact_handler),
) -> Response:
    """Relay a contact form submission to the configured inbox."""
    return await handler.handle(request)
