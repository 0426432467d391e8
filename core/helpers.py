"""
Core Helpers

Request parsing, channel capabilities and state serialization.
"""

from typing import Optional

from models import (
    Attachment,
    ConversationState,
    EventKind,
    Filter,
    InboundEvent,
)
from config.settings import PLAIN_TEXT_CHANNELS


class InvalidRequest(ValueError):
    """The /chat request body can't be turned into an event."""


def supports_rich_text(channel_id: Optional[str]) -> bool:
    """Whether the channel renders markdown in card text."""
    return (channel_id or "").strip().lower() not in PLAIN_TEXT_CHANNELS


def event_from_request(body: dict) -> InboundEvent:
    """Build an InboundEvent from a /chat request body."""
    session_id = str(body.get("session_id") or "").strip()
    if not session_id:
        raise InvalidRequest("Missing 'session_id'")

    kind_value = body.get("event") or EventKind.MESSAGE.value
    try:
        kind = EventKind(kind_value)
    except ValueError:
        raise InvalidRequest(f"Unknown event '{kind_value}'")

    attachments = []
    for raw in body.get("attachments") or []:
        if isinstance(raw, dict) and raw.get("content_url"):
            attachments.append(Attachment(
                content_url=str(raw["content_url"]),
                content_type=str(raw.get("content_type") or ""),
            ))

    message = body.get("message")
    catalog_filter = None
    if kind == EventKind.FILTER_SELECTED:
        raw_filter = body.get("filter")
        if raw_filter is not None and not isinstance(raw_filter, dict):
            raise InvalidRequest("'filter' must be an object")
        catalog_filter = Filter.from_dict(raw_filter)

    success = body.get("success", True)
    if not isinstance(success, bool):
        raise InvalidRequest("'success' must be true or false")

    return InboundEvent(
        session_id=session_id,
        kind=kind,
        text=message if isinstance(message, str) else "",
        attachments=attachments,
        channel_id=str(body.get("channel_id") or ""),
        filter=catalog_filter,
        success=success,
    )


def state_to_dict(state: ConversationState) -> dict:
    """Plain dict view of a conversation state for responses and debugging."""
    pending = state.pending_purchase
    return {
        "flow_state": state.continuation.value,
        "current_page": state.current_page,
        "filter": state.filter.to_dict() if state.filter else None,
        "pending_purchase": {
            "product_id": pending.product_id,
            "product_name": pending.product_name,
            "picture_url": pending.picture_url,
            "unit_price": str(pending.unit_price),
        } if pending else None,
        "last_total_count": state.last_total_count,
    }
