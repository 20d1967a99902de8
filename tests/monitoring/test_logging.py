"""Tests for log sanitization helpers."""

from blogku.managers.token_manager import create_access_token
from blogku.monitoring import redact_pii, sanitize_headers, sanitize_log_message
from blogku.monitoring.logging import sanitize_event_dict


def test_control_characters_are_escaped() -> None:
    assert sanitize_log_message("line1\nline2\r\tend\x00") == "line1\\nline2\\r\\tend"


def test_emails_and_tokens_are_redacted() -> None:
    token = create_access_token(1)

    message = redact_pii(f"admin@example.com used {token}")

    assert message == "[REDACTED_EMAIL] used [REDACTED_JWT]"


def test_sensitive_headers_are_masked() -> None:
    headers = {"Authorization": "Bearer x", "Cookie": "authToken=y", "Accept": "application/json"}

    assert sanitize_headers(headers) == {
        "Authorization": "[REDACTED]",
        "Cookie": "[REDACTED]",
        "Accept": "application/json",
    }


def test_event_dict_is_sanitized_in_place() -> None:
    event = {"event": "Login for admin@example.com", "headers": {"X-API-Key": "k"}, "count": 3}

    result = sanitize_event_dict(None, "info", event)

    assert result["event"] == "Login for [REDACTED_EMAIL]"
    assert result["headers"] == {"X-API-Key": "[REDACTED]"}
    assert result["count"] == 3
