"""
Action Codec — structured button payloads.

Every interactive button carries a small JSON object naming one action:

    {"ActionType": "NextPage"}
    {"ActionType": "AddBasket", "ProductId": "p1", "ProductName": "Mug",
     "PictureUrl": "http://x/m.png", "UnitPrice": "9.99"}

When the user taps a button, the channel sends that JSON back as the message
text. ``decode_action`` turns it into one of the action dataclasses below.
Free text and broken payloads are expected input, so decoding reports them
through ``DecodeStatus`` rather than raising.
"""

import json
from enum import Enum
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional, Union


class ActionType(Enum):
    NEXT_PAGE = "NextPage"
    PREVIOUS_PAGE = "PreviousPage"
    ADD_BASKET = "AddBasket"
    LOGIN = "Login"
    BACK = "Back"


ACTION_TYPE_KEY = "ActionType"

# Wire field → AddToBasket attribute
ADD_BASKET_FIELDS = {
    "ProductId": "product_id",
    "ProductName": "product_name",
    "PictureUrl": "picture_url",
    "UnitPrice": "unit_price",
}


@dataclass(frozen=True)
class NextPage:
    action_type = ActionType.NEXT_PAGE


@dataclass(frozen=True)
class PreviousPage:
    action_type = ActionType.PREVIOUS_PAGE


@dataclass(frozen=True)
class AddToBasket:
    product_id: str
    product_name: str
    picture_url: str
    unit_price: Decimal

    action_type = ActionType.ADD_BASKET


@dataclass(frozen=True)
class Login:
    action_type = ActionType.LOGIN


@dataclass(frozen=True)
class Back:
    action_type = ActionType.BACK


Action = Union[NextPage, PreviousPage, AddToBasket, Login, Back]

_SIMPLE_ACTIONS = {
    ActionType.NEXT_PAGE: NextPage,
    ActionType.PREVIOUS_PAGE: PreviousPage,
    ActionType.LOGIN: Login,
    ActionType.BACK: Back,
}


class DecodeStatus(Enum):
    ACTION = "action"
    NOT_AN_ACTION = "not_an_action"              # free text, not a payload at all
    UNRECOGNIZED_ACTION = "unrecognized_action"  # payload with a bad or missing tag/fields


@dataclass(frozen=True)
class DecodeResult:
    status: DecodeStatus
    action: Optional[Action] = None
    reason: str = ""

    @property
    def is_action(self) -> bool:
        return self.status == DecodeStatus.ACTION


# ═══════════════════════════════════════════
# ENCODE
# ═══════════════════════════════════════════

def encode_action(action: Action) -> str:
    """Serialize an action into the button payload string."""
    payload = {ACTION_TYPE_KEY: action.action_type.value}
    if isinstance(action, AddToBasket):
        payload["ProductId"] = action.product_id
        payload["ProductName"] = action.product_name
        payload["PictureUrl"] = action.picture_url
        payload["UnitPrice"] = str(action.unit_price)
    return json.dumps(payload, separators=(",", ":"))


def next_page_action() -> NextPage:
    return NextPage()


def previous_page_action() -> PreviousPage:
    return PreviousPage()


def login_action() -> Login:
    return Login()


def back_action() -> Back:
    return Back()


def add_to_basket_action(product_id, product_name, picture_url, unit_price) -> AddToBasket:
    return AddToBasket(
        product_id=str(product_id),
        product_name=str(product_name),
        picture_url=str(picture_url or ""),
        unit_price=_parse_price(unit_price),
    )


# ═══════════════════════════════════════════
# DECODE
# ═══════════════════════════════════════════

def decode_action(text: Optional[str]) -> DecodeResult:
    """Parse inbound message text into an action. Never raises."""
    if not text or not isinstance(text, str):
        return DecodeResult(DecodeStatus.NOT_AN_ACTION, reason="empty")

    try:
        payload = json.loads(text)
    except (ValueError, RecursionError):
        return DecodeResult(DecodeStatus.NOT_AN_ACTION, reason="not json")

    # Bare numbers, strings and lists are plain text to us
    if not isinstance(payload, dict):
        return DecodeResult(DecodeStatus.NOT_AN_ACTION, reason="not an object")

    raw_type = payload.get(ACTION_TYPE_KEY)
    if not isinstance(raw_type, str):
        return DecodeResult(DecodeStatus.UNRECOGNIZED_ACTION, reason="missing ActionType")

    try:
        action_type = ActionType(raw_type)
    except ValueError:
        return DecodeResult(DecodeStatus.UNRECOGNIZED_ACTION, reason=f"unknown ActionType {raw_type!r}")

    if action_type in _SIMPLE_ACTIONS:
        return DecodeResult(DecodeStatus.ACTION, action=_SIMPLE_ACTIONS[action_type]())

    return _decode_add_basket(payload)


def _decode_add_basket(payload: dict) -> DecodeResult:
    values = {}
    for wire_name, attr in ADD_BASKET_FIELDS.items():
        value = payload.get(wire_name)
        if value is None or isinstance(value, (dict, list, bool)):
            return DecodeResult(DecodeStatus.UNRECOGNIZED_ACTION, reason=f"missing {wire_name}")
        values[attr] = value

    if not str(values["product_id"]).strip() or not str(values["product_name"]).strip():
        return DecodeResult(DecodeStatus.UNRECOGNIZED_ACTION, reason="empty product fields")

    try:
        action = add_to_basket_action(**values)
    except ValueError as e:
        return DecodeResult(DecodeStatus.UNRECOGNIZED_ACTION, reason=str(e))

    return DecodeResult(DecodeStatus.ACTION, action=action)


def _parse_price(value) -> Decimal:
    """String-encoded decimal → Decimal. Rejects NaN, infinities and negatives."""
    if isinstance(value, Decimal):
        price = value
    else:
        try:
            price = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValueError(f"invalid UnitPrice {value!r}")
    if not price.is_finite() or price < 0:
        raise ValueError(f"invalid UnitPrice {value!r}")
    return price
