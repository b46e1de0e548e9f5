from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    api_title: str = Field(default="Contact Relay")
    api_version: str = Field(default="1.0.0")
    port: int = Field(default=8000)
    log_level: str = Field(default="INFO")

    # Environment (development, staging, production, test)
    environment: str = Field(default="development")

    # Route the contact form posts to
    contact_path: str = Field(default="/")

    # Outbound email envelope. The sender must be on a domain we control
    # and have authorised for outbound sending.
    mail_to: str = Field(default="hello@hyped.dk")
    mail_from: str = Field(default="no-reply@hyped.dk")
    mail_from_name: str = Field(default="Hyped.dk Contact Worker")
    default_subject: str = Field(default="New POST to Hyped.dk")

    # Success response: plain text or an HTML page redirecting back to the site
    response_style: Literal["text", "html"] = Field(default="text")
    redirect_url: str = Field(default="https://hyped.dk/")
    redirect_delay_seconds: int = Field(default=8, ge=0)

    # Mail backend: ses, smtp or log (development only, nothing is delivered)
    mail_backend: Literal["ses", "smtp", "log"] = Field(default="ses")

    # AWS SES Email
    aws_access_key_id: str = Field(default="")
    aws_secret_access_key: str = Field(default="")
    aws_ses_region: str = Field(default="eu-west-1")

    # SMTP
    smtp_host: str = Field(default="localhost")
    smtp_port: int = Field(default=587)
    smtp_username: str = Field(default="")
    smtp_password: str = Field(default="")
    smtp_start_tls: bool = Field(default=True)
    smtp_timeout: float = Field(default=30.0)

    # Sentry (optional, disabled if empty)
    sentry_dsn: str = Field(default="")

    @field_validator("contact_path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        return v if v.startswith("/") else f"/{v}"


settings = Settings()
