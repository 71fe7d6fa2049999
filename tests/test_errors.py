from __future__ import annotations

import pytest

from crisis_assistant.errors import FALLBACK_MESSAGES, ErrorKind, classify_error, fallback_message


@pytest.mark.parametrize(
    ("error", "kind"),
    [
        ("Too many requests. Please wait a moment and try again.", ErrorKind.RATE_LIMIT),
        ("Gemini quota exhausted", ErrorKind.RATE_LIMIT),
        ("RATE LIMIT exceeded", ErrorKind.RATE_LIMIT),
        ("The chat service is temporarily unavailable.", ErrorKind.BUSY),
        ("Service busy due to high demand", ErrorKind.BUSY),
        ("Unable to connect to the chat service.", ErrorKind.CONNECTIVITY),
        ("Request failed with status 500", ErrorKind.UNKNOWN),
        ("", ErrorKind.UNKNOWN),
    ],
)
def test_classify_error(error: str, kind: ErrorKind) -> None:
    assert classify_error(error) == kind


def test_rate_limit_wins_over_connectivity() -> None:
    """Earlier markers take priority when several match."""
    error = "rate limit hit while trying to connect"
    assert classify_error(error) == ErrorKind.RATE_LIMIT
    assert fallback_message(error) == FALLBACK_MESSAGES[ErrorKind.RATE_LIMIT]


def test_busy_wins_over_connectivity() -> None:
    assert classify_error("temporarily unavailable, could not connect") == ErrorKind.BUSY


def test_every_template_is_non_empty_and_distinct() -> None:
    templates = list(FALLBACK_MESSAGES.values())
    assert len(templates) == 4
    assert all(template.strip() for template in templates)
    assert len(set(templates)) == 4
    assert "wait about 30 seconds" in FALLBACK_MESSAGES[ErrorKind.RATE_LIMIT]
    assert "wait about 30 seconds" in FALLBACK_MESSAGES[ErrorKind.BUSY]
