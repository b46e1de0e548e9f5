"""
Body decoding for contact submissions.

Every supported encoding normalises to the same flat Submission mapping so
field derivation never needs to know how the body arrived. Parse problems
come back as a DecodeFailure value instead of an exception.
"""

import json
from typing import Optional, Union

from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from contact_relay.domain.schemas import BodyKind, DecodeFailure, Submission

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

DecodeResult = Union[Submission, DecodeFailure]


def classify_content_type(content_type: Optional[str]) -> Optional[BodyKind]:
    """Map a Content-Type header to the decoder for it, or None if unsupported."""
    content_type = (content_type or "").lower()

    if "application/json" in content_type:
        return BodyKind.JSON
    if any(form_type in content_type for form_type in FORM_CONTENT_TYPES):
        return BodyKind.FORM
    if "text/plain" in content_type:
        return BodyKind.TEXT
    return None


def parse_line_text(text: str) -> Submission:
    """
    Parse ``key=value`` lines.

    The first ``=`` splits a line; key and value are trimmed. Lines with no
    ``=``, a leading ``=`` or a blank key are skipped.
    """
    data: Submission = {}
    for line in text.split("\n"):
        equal_index = line.find("=")
        if equal_index > 0:
            key = line[:equal_index].strip()
            value = line[equal_index + 1 :].strip()
            if key:
                data[key] = value
    return data


def _form_value(value: Union[str, UploadFile]) -> str:
    if isinstance(value, UploadFile):
        return value.filename or ""
    return value


async def _decode_json(request: Request) -> DecodeResult:
    raw = await request.body()
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        return DecodeFailure(kind=BodyKind.JSON, reason=str(e))

    if not isinstance(data, dict):
        return DecodeFailure(
            kind=BodyKind.JSON,
            reason=f"expected a JSON object, got {type(data).__name__}",
        )
    return data


async def _decode_form(request: Request) -> DecodeResult:
    data: Submission = {}
    try:
        async with request.form() as form:
            # Repeated keys: the last occurrence wins
            for key, value in form.multi_items():
                data[key] = _form_value(value)
    except (MultiPartException, StarletteHTTPException, ValueError) as e:
        return DecodeFailure(kind=BodyKind.FORM, reason=str(getattr(e, "detail", e)))
    return data


async def _decode_text(request: Request) -> DecodeResult:
    raw = await request.body()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        return DecodeFailure(kind=BodyKind.TEXT, reason=str(e))
    return parse_line_text(text)


_DECODERS = {
    BodyKind.JSON: _decode_json,
    BodyKind.FORM: _decode_form,
    BodyKind.TEXT: _decode_text,
}


async def decode_submission(request: Request, kind: BodyKind) -> DecodeResult:
    """Read the request body and decode it according to ``kind``."""
    return await _DECODERS[kind](request)
