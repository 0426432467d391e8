"""
Data models for the catalog chat flow.
"""

from enum import Enum
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, List, Tuple


@dataclass(frozen=True)
class Filter:
    """Active catalog filter for one conversation.

    ``tags is None`` means no image search was requested.
    ``tags == ()`` means classification ran and found nothing to search for.
    """
    brand: Optional[str] = None
    type: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None

    def with_tags(self, tags: Optional[List[str]]) -> "Filter":
        """Return a copy whose tags are replaced wholesale (never merged)."""
        return Filter(
            brand=self.brand,
            type=self.type,
            tags=tuple(tags) if tags is not None else None,
        )

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Filter":
        data = data or {}
        tags = data.get("tags")
        return cls(
            brand=data.get("brand") or None,
            type=data.get("type") or None,
            tags=tuple(str(t) for t in tags) if tags is not None else None,
        )

    def to_dict(self) -> dict:
        return {
            "brand": self.brand,
            "type": self.type,
            "tags": list(self.tags) if self.tags is not None else None,
        }


@dataclass(frozen=True)
class CatalogItem:
    id: str
    name: str
    price: Decimal
    picture_uri: str = ""


@dataclass(frozen=True)
class CatalogPage:
    items: List[CatalogItem] = field(default_factory=list)
    total_count: int = 0

    @classmethod
    def empty(cls) -> "CatalogPage":
        return cls(items=[], total_count=0)


@dataclass(frozen=True)
class PendingPurchase:
    """Product picked with "Add to cart", held until a quantity arrives."""
    product_id: str
    product_name: str
    picture_url: str
    unit_price: Decimal


@dataclass(frozen=True)
class AuthUser:
    user_id: str
    access_token: str
    expires_at: Optional[float] = None  # epoch seconds; None = no expiry


@dataclass
class BasketItem:
    id: str
    product_id: str
    product_name: str
    picture_url: str
    unit_price: Decimal
    quantity: int

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "productId": self.product_id,
            "productName": self.product_name,
            "pictureUrl": self.picture_url,
            "unitPrice": str(self.unit_price),
            "quantity": self.quantity,
        }


class Continuation(Enum):
    """Which handler receives the next inbound event for a session."""
    AWAITING_FILTER = "awaiting_filter"
    AWAITING_SELECTION = "awaiting_selection"
    AWAITING_QUANTITY = "awaiting_quantity"
    AWAITING_LOGIN = "awaiting_login"
    AWAITING_BASKET_RESULT = "awaiting_basket_result"
    DONE = "done"


class SubFlow(Enum):
    """Sub-conversations the catalog flow hands control to."""
    FILTER = "filter"
    LOGIN = "login"
    BASKET = "basket"


@dataclass(frozen=True)
class ConversationState:
    """Everything the catalog flow remembers between turns."""
    continuation: Continuation = Continuation.AWAITING_FILTER
    current_page: int = 0
    filter: Optional[Filter] = None
    pending_purchase: Optional[PendingPurchase] = None
    # Total count seen on the last render; bounds NextPage
    last_total_count: Optional[int] = None

    @property
    def is_done(self) -> bool:
        return self.continuation == Continuation.DONE


class EventKind(Enum):
    MESSAGE = "message"
    FILTER_SELECTED = "filter_selected"
    LOGIN_COMPLETED = "login_completed"
    BASKET_COMPLETED = "basket_completed"


@dataclass
class Attachment:
    content_url: str
    content_type: str = ""


@dataclass
class InboundEvent:
    """One inbound message or sub-flow result for a session."""
    session_id: str
    kind: EventKind = EventKind.MESSAGE
    text: str = ""
    attachments: List[Attachment] = field(default_factory=list)
    channel_id: str = ""

    # Sub-flow results
    filter: Optional[Filter] = None
    success: bool = True

    @property
    def has_text(self) -> bool:
        return bool(self.text and self.text.strip())


@dataclass
class FlowResult:
    """Outcome of one transition: the new state plus what to send back."""
    state: ConversationState
    replies: List[dict] = field(default_factory=list)
    delegate: Optional[SubFlow] = None
