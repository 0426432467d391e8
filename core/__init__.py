"""Core package - exports session and request helpers."""

from .session import (
    sessions,
    get_session,
    save_session,
    discard_session,
    session_exists,
)
from .helpers import (
    InvalidRequest,
    event_from_request,
    state_to_dict,
    supports_rich_text,
)

__all__ = [
    "sessions",
    "get_session",
    "save_session",
    "discard_session",
    "session_exists",
    "InvalidRequest",
    "event_from_request",
    "state_to_dict",
    "supports_rich_text",
]
