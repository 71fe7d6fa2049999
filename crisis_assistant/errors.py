"""Map backend error strings to user-facing fallback copy."""
from __future__ import annotations

from enum import Enum
from typing import Tuple


class ErrorKind(str, Enum):
    RATE_LIMIT = "rate_limit"
    BUSY = "busy"
    CONNECTIVITY = "connectivity"
    UNKNOWN = "unknown"


# Checked in order; the first kind with a matching marker wins.
_ERROR_MARKERS: Tuple[Tuple[ErrorKind, Tuple[str, ...]], ...] = (
    (ErrorKind.RATE_LIMIT, ("too many requests", "rate limit", "rate-limit", "quota")),
    (ErrorKind.BUSY, ("temporarily unavailable", "high demand")),
    (ErrorKind.CONNECTIVITY, ("connect",)),
)

FALLBACK_MESSAGES = {
    ErrorKind.RATE_LIMIT: (
        "I'm receiving a lot of questions right now. Please wait about 30 seconds and try again. "
        "In the meantime, the organizations we've matched are ready to help with this crisis, "
        "and you can proceed with a donation whenever you're ready."
    ),
    ErrorKind.BUSY: (
        "I'm temporarily unavailable due to high demand. Please wait about 30 seconds and try again. "
        "The organizations we've matched specialize in this type of crisis. "
        "Would you like to learn more about them?"
    ),
    ErrorKind.CONNECTIVITY: (
        "I'm having trouble connecting right now. However, the organizations we've matched are vetted "
        "and ready to help. Would you like to learn more about them or proceed with a donation?"
    ),
    ErrorKind.UNKNOWN: (
        "I'm having a brief issue, but I'm here to help. The organizations we've matched are trusted "
        "and ready to assist with this crisis. What would you like to know?"
    ),
}

# Quick replies attached to a reported backend failure.
FAILURE_QUICK_REPLIES: Tuple[str, ...] = ("What happened?", "How bad is it?", "How can I help?")

# Used when the client call itself blew up.
CONNECTION_APOLOGY = (
    "I'm having trouble connecting right now. However, I can tell you that the organizations "
    "we've matched are ready to help with this crisis. Would you like to proceed with a donation?"
)
CONNECTION_APOLOGY_QUICK_REPLIES: Tuple[str, ...] = ("Tell me about the organizations", "I'm ready to donate")


def classify_error(error: str) -> ErrorKind:
    """Return the kind of a backend error string; never raises."""
    normalized = (error or "").lower()
    for kind, markers in _ERROR_MARKERS:
        if any(marker in normalized for marker in markers):
            return kind
    return ErrorKind.UNKNOWN


def fallback_message(error: str) -> str:
    """Pick the fallback template for an error string."""
    return FALLBACK_MESSAGES[classify_error(error)]
