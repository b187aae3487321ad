"""
tests.test_logging

Secret redaction in structured log events.
"""

from __future__ import annotations

from dmm_bridge.observability.logging import REDACTED, redact_secrets


def test_redacts_top_level_and_nested_secrets() -> None:
    event = {
        "event": "webhook_received",
        "Authorization": "s3cret",
        "headers": {"authorization": "s3cret", "user-agent": "Overseerr"},
        "title": "The Matrix",
    }

    out = redact_secrets(None, "info", event)

    assert out["Authorization"] == REDACTED
    assert out["headers"] == {"authorization": REDACTED, "user-agent": "Overseerr"}
    assert out["title"] == "The Matrix"


# --- Module Notes -----------------------------------------------------------
# Only the redaction processor is tested; renderer output is structlog's concern.
