from contact_relay.services.contact.decoding import (
    classify_content_type,
    decode_submission,
    parse_line_text,
)
from contact_relay.services.contact.formatting import (
    build_email,
    derive_fields,
    render_redirect_page,
    render_text_body,
)
from contact_relay.services.contact.handler import ContactHandler

__all__ = [
    "ContactHandler",
    "build_email",
    "classify_content_type",
    "decode_submission",
    "derive_fields",
    "parse_line_text",
    "render_redirect_page",
    "render_text_body",
]
