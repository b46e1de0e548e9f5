"""Field derivation and email rendering for contact submissions."""

import html
import json
from email.message import EmailMessage
from email.policy import SMTP
from email.utils import formataddr, formatdate, make_msgid
from typing import Any, List, Optional

from contact_relay.domain.schemas import (
    ContactConfig,
    DerivedFields,
    OutboundEmail,
    Submission,
)

HEADER_LINE = "You received a new POST submission:"


def _is_set(value: Any) -> bool:
    # Empty containers still count as supplied values
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def as_text(value: Any) -> str:
    """Coerce a decoded JSON/form value to the text used in the email."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def to_utf8_safe(value: str) -> str:
    """Replace lone surrogates (valid in JSON escapes) that UTF-8 cannot encode."""
    return value.encode("utf-8", "replace").decode("utf-8")


def _single_line(value: str) -> str:
    return to_utf8_safe(" ".join(value.splitlines()).strip())


def derive_fields(submission: Submission, default_subject: str) -> DerivedFields:
    subject = submission.get("subject")
    message = submission.get("message")
    if not _is_set(message):
        message = submission.get("body")
    phone = submission.get("phone")

    return DerivedFields(
        subject=_single_line(as_text(subject)) if _is_set(subject) else default_subject,
        name=as_text(submission.get("name")) if _is_set(submission.get("name")) else "",
        email=as_text(submission.get("email")) if _is_set(submission.get("email")) else "",
        phone=as_text(phone) if _is_set(phone) else "",
        message=as_text(message) if _is_set(message) else "",
    )


def dump_submission(submission: Submission) -> str:
    return json.dumps(submission, indent=2, ensure_ascii=False, default=str)


def render_text_body(submission: Submission, fields: DerivedFields) -> str:
    """
    Render the plain-text body.

    Name, Email and Phone lines only appear when they have a value; the
    blank separator lines are always present.
    """
    lines: List[Optional[str]] = [
        HEADER_LINE,
        "",
        f"Name: {fields.name}" if fields.name else None,
        f"Email: {fields.email}" if fields.email else None,
        f"Phone: {fields.phone}" if fields.phone else None,
        "",
        "Message:",
        fields.message,
        "",
        "Raw payload:",
        dump_submission(submission),
    ]
    return to_utf8_safe("\n".join(line for line in lines if line is not None))


def build_email(
    fields: DerivedFields, text_body: str, config: ContactConfig
) -> OutboundEmail:
    """Build the MIME message. Envelope addresses only ever come from config."""
    sender_domain = config.mail_from.rpartition("@")[2] or None

    mime = EmailMessage(policy=SMTP)
    mime["From"] = formataddr((config.mail_from_name, config.mail_from))
    mime["To"] = config.mail_to
    mime["Subject"] = fields.subject
    mime["Date"] = formatdate(usegmt=True)
    mime["Message-ID"] = make_msgid(domain=sender_domain)
    mime.set_content(text_body, subtype="plain", charset="utf-8")

    return OutboundEmail(
        from_address=config.mail_from,
        from_name=config.mail_from_name,
        to_address=config.mail_to,
        subject=fields.subject,
        text_body=text_body,
        mime=mime,
    )


def render_redirect_page(redirect_url: str, delay_seconds: int) -> str:
    """Static confirmation page that sends the browser back after a delay."""
    url_attr = html.escape(redirect_url, quote=True)
    url_js = json.dumps(redirect_url).replace("</", "<\\/")
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta http-equiv="refresh" content="{delay_seconds};url={url_attr}">
  <title>Thank you</title>
</head>
<body>
  <h1>Thank you!</h1>
  <p>Your message has been sent. You will be redirected in
    <span id="countdown">{delay_seconds}</span> seconds.</p>
  <p><a href="{url_attr}">Go back now</a></p>
  <script>
    var remaining = {delay_seconds};
    var counter = document.getElementById("countdown");
    setInterval(function () {{
      remaining = Math.max(remaining - 1, 0);
      counter.textContent = remaining;
    }}, 1000);
    setTimeout(function () {{
      window.location.href = {url_js};
    }}, {delay_seconds * 1000});
  </script>
</body>
</html>
"""
