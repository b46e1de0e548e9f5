"""
Contact submission handler.

One request in, one response out:
method check -> decode -> derive -> validate -> render -> send -> respond.
Every failure raises a ContactError subclass which the application turns
into a plain-text response with the matching status.
"""

import structlog
from starlette.requests import Request
from starlette.responses import HTMLResponse, PlainTextResponse, Response

from contact_relay.core.exceptions import (
    MailSendError,
    MalformedBodyError,
    MethodNotAllowedError,
    MissingMessageError,
    SendFailureError,
    UnsupportedContentTypeError,
)
from contact_relay.domain.schemas import ContactConfig, DecodeFailure
from contact_relay.infrastructure.email_service import MailSender
from contact_relay.services.contact.decoding import (
    classify_content_type,
    decode_submission,
)
from contact_relay.services.contact.formatting import (
    build_email,
    derive_fields,
    render_redirect_page,
    render_text_body,
)

logger = structlog.get_logger()

SUCCESS_TEXT = "OK: email sent"


class ContactHandler:
    def __init__(self, config: ContactConfig, mail_sender: MailSender):
        self.config = config
        self.mail_sender = mail_sender

    async def handle(self, request: Request) -> Response:
        logger.info(
            "contact_request_received",
            method=request.method,
            content_type=request.headers.get("content-type", ""),
        )

        if request.method != "POST":
            raise MethodNotAllowedError()

        kind = classify_content_type(request.headers.get("content-type"))
        if kind is None:
            raise UnsupportedContentTypeError()

        result = await decode_submission(request, kind)
        if isinstance(result, DecodeFailure):
            raise MalformedBodyError(details={"kind": result.kind.value})
        submission = result

        fields = derive_fields(submission, self.config.default_subject)
        if not fields.message.strip():
            raise MissingMessageError()

        text_body = render_text_body(submission, fields)
        email = build_email(fields, text_body, self.config)

        try:
            await self.mail_sender.send(email)
        except MailSendError as e:
            logger.error(
                "email_send_failed",
                error=e.message,
                provider=e.provider,
                to_address=email.to_address,
                subject=email.subject,
            )
            raise SendFailureError(e.message, details={"provider": e.provider}) from e

        return self.success_response()

    def success_response(self) -> Response:
        if self.config.response_style == "html":
            return HTMLResponse(
                render_redirect_page(
                    self.config.redirect_url, self.config.redirect_delay_seconds
                ),
                status_code=200,
            )
        return PlainTextResponse(SUCCESS_TEXT, status_code=200)
