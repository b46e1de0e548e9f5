from contact_relay.core.exceptions import (
    ContactError,
    MalformedBodyError,
    MethodNotAllowedError,
    SendFailureError,
)


def test_only_method_not_allowed_carries_headers():
    assert ContactError.headers is None
    assert MalformedBodyError().headers is None
    assert MethodNotAllowedError().headers == {"Allow": "POST"}


def test_send_failure_message_embeds_reason():
    error = SendFailureError("Throttling")

    assert error.status_code == 500
    assert error.message == "Email send failed: Throttling"
    assert error.reason == "Throttling"
