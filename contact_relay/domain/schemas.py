from email.message import EmailMessage
from enum import Enum
from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field

from contact_relay.core.config import Settings

# Decoded body of one request, field name -> value
Submission = Dict[str, Any]


class BodyKind(str, Enum):
    JSON = "json"
    FORM = "form"
    TEXT = "text"


class DecodeFailure(BaseModel):
    """Body could not be decoded for its declared content type"""

    model_config = ConfigDict(frozen=True)

    kind: BodyKind
    reason: str


class DerivedFields(BaseModel):
    """Named values read from a Submission with defaults applied"""

    model_config = ConfigDict(frozen=True)

    subject: str
    name: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""


class ContactConfig(BaseModel):
    """Deployment constants handed to the contact handler at construction."""

    model_config = ConfigDict(frozen=True)

    mail_to: str
    mail_from: str
    mail_from_name: str
    default_subject: str = "New POST to Hyped.dk"
    response_style: Literal["text", "html"] = "text"
    redirect_url: str = "https://hyped.dk/"
    redirect_delay_seconds: int = Field(default=8, ge=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContactConfig":
        return cls(
            mail_to=settings.mail_to,
            mail_from=settings.mail_from,
            mail_from_name=settings.mail_from_name,
            default_subject=settings.default_subject,
            response_style=settings.response_style,
            redirect_url=settings.redirect_url,
            redirect_delay_seconds=settings.redirect_delay_seconds,
        )


class OutboundEmail(BaseModel):
    """A fully built email ready for a MailSender"""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    from_address: str
    from_name: str
    to_address: str
    subject: str
    text_body: str
    mime: EmailMessage

    @property
    def message_id(self) -> str:
        return self.mime["Message-ID"]

    def as_bytes(self) -> bytes:
        return self.mime.as_bytes()
