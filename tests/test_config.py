import pytest
from pydantic import ValidationError

from contact_relay.core.config import Settings
from contact_relay.core.logging_config import get_log_level
from contact_relay.domain.schemas import ContactConfig


def test_defaults_match_deployment_constants():
    config = ContactConfig.from_settings(Settings())

    assert config.mail_to == "hello@hyped.dk"
    assert config.mail_from == "no-reply@hyped.dk"
    assert config.mail_from_name == "Hyped.dk Contact Worker"
    assert config.default_subject == "New POST to Hyped.dk"
    assert config.redirect_delay_seconds == 8


def test_contact_config_is_immutable():
    config = ContactConfig.from_settings(Settings())

    with pytest.raises(ValidationError):
        config.mail_to = "someone@example.com"


def test_contact_path_gets_leading_slash():
    assert Settings(contact_path="contact").contact_path == "/contact"


def test_response_style_is_validated():
    with pytest.raises(ValidationError):
        Settings(response_style="xml")


def test_log_level_explicit_wins():
    assert get_log_level(Settings(log_level="error", environment="development")) == "ERROR"


def test_log_level_environment_default():
    assert get_log_level(Settings(environment="production")) == "INFO"
