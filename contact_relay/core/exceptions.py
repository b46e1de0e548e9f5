"""Custom exceptions for contact submission errors"""

from typing import Any, Dict, Optional


class ContactError(Exception):
    """Base exception for errors that end a contact request.

    Each subclass maps to exactly one HTTP status and a short plain-text body.
    """

    status_code: int = 500
    default_message: str = "Internal Server Error"
    headers: Optional[Dict[str, str]] = None

    def __init__(
        self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class MethodNotAllowedError(ContactError):
    """Raised when the request method is not POST"""

    status_code = 405
    default_message = "Method Not Allowed"
    headers = {"Allow": "POST"}


class UnsupportedContentTypeError(ContactError):
    """Raised when the Content-Type is not one we can decode"""

    status_code = 415
    default_message = "Unsupported Content-Type"


class MalformedBodyError(ContactError):
    """Raised when the body could not be decoded for its declared type"""

    status_code = 400
    default_message = "Bad Request: could not parse body"


class MissingMessageError(ContactError):
    """Raised when neither message nor body carries any text"""

    status_code = 400
    default_message = "Bad Request: message/body is required"


class SendFailureError(ContactError):
    """Raised when the mail sender reports an error"""

    status_code = 500

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        self.reason = reason
        super().__init__(f"Email send failed: {reason}", details)


# Infrastructure Errors
class MailSendError(Exception):
    """Raised by a mail sender when delivery to the provider fails"""

    def __init__(self, message: str, provider: str = ""):
        self.message = message
        self.provider = provider
        super().__init__(message)
