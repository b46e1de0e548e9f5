"""
Mail senders for contact submissions.

Each sender takes a fully built OutboundEmail and either delivers it or
raises MailSendError carrying the provider's message.
"""
from typing import Protocol

import aiosmtplib
import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from contact_relay.core.config import Settings
from contact_relay.core.exceptions import MailSendError
from contact_relay.domain.schemas import OutboundEmail

logger = structlog.get_logger()


class MailSender(Protocol):
    async def send(self, email: OutboundEmail) -> None:
        ...


class SesMailSender:
    """Send raw MIME through AWS SES."""

    provider = "ses"

    def __init__(
        self,
        region_name: str,
        aws_access_key_id: str = "",
        aws_secret_access_key: str = "",
        client=None,
    ):
        # Empty credentials fall back to the default boto3 chain (env, IAM role)
        self.client = client or boto3.client(
            "ses",
            region_name=region_name,
            aws_access_key_id=aws_access_key_id or None,
            aws_secret_access_key=aws_secret_access_key or None,
        )

    async def send(self, email: OutboundEmail) -> None:
        try:
            # boto3 is blocking, keep it off the event loop
            response = await run_in_threadpool(
                self.client.send_raw_email,
                Source=email.from_address,
                Destinations=[email.to_address],
                RawMessage={"Data": email.as_bytes()},
            )
        except ClientError as e:
            error_message = e.response.get("Error", {}).get("Message") or str(e)
            raise MailSendError(error_message, provider=self.provider) from e
        except BotoCoreError as e:
            raise MailSendError(str(e), provider=self.provider) from e

        logger.info(
            "email_sent",
            provider=self.provider,
            message_id=response.get("MessageId"),
            to_address=email.to_address,
        )


class SmtpMailSender:
    """Send through an SMTP relay with aiosmtplib."""

    provider = "smtp"

    def __init__(
        self,
        hostname: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        start_tls: bool = True,
        timeout: float = 30.0,
    ):
        self.hostname = hostname
        self.port = port
        self.username = username
        self.password = password
        self.start_tls = start_tls
        self.timeout = timeout

    async def send(self, email: OutboundEmail) -> None:
        try:
            await aiosmtplib.send(
                email.mime,
                sender=email.from_address,
                recipients=[email.to_address],
                hostname=self.hostname,
                port=self.port,
                username=self.username or None,
                password=self.password or None,
                start_tls=self.start_tls,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            raise MailSendError(str(e), provider=self.provider) from e

        logger.info(
            "email_sent",
            provider=self.provider,
            message_id=email.message_id,
            to_address=email.to_address,
        )


class LoggingMailSender:
    """Development sender: logs the email instead of delivering it."""

    provider = "log"

    async def send(self, email: OutboundEmail) -> None:
        logger.warning(
            "mail_backend_not_configured",
            message="Email not sent - log backend in use",
            to_address=email.to_address,
            subject=email.subject,
            message_id=email.message_id,
        )
        logger.debug("email_body", text_body=email.text_body)


def get_mail_sender(settings: Settings) -> MailSender:
    """Build the sender selected by MAIL_BACKEND."""
    if settings.mail_backend == "ses":
        return SesMailSender(
            region_name=settings.aws_ses_region,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
        )
    if settings.mail_backend == "smtp":
        return SmtpMailSender(
            hostname=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            start_tls=settings.smtp_start_tls,
            timeout=settings.smtp_timeout,
        )
    return LoggingMailSender()
