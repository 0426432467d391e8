"""
Card Builder

Builds the card and button dicts the chat channel renders.
"""

from typing import List, Optional
from urllib.parse import urlsplit, urlunsplit

from action_codec import encode_action, next_page_action, login_action, back_action
from config.settings import PICTURE_BASE_URL
from config import text_resources
from models import CatalogItem

THUMBNAIL_CARD = "thumbnail"
POST_BACK = "postBack"


def create_button(title: str, value: str, button_type: str = POST_BACK) -> dict:
    return {"type": button_type, "title": title, "value": value}


def create_home_button() -> dict:
    return create_button(text_resources.HOME_BUTTON, encode_action(back_action()))


def create_login_button() -> dict:
    return create_button(text_resources.LOGIN_BUTTON, encode_action(login_action()))


def create_show_more_button() -> dict:
    return create_button(text_resources.SHOW_MORE_BUTTON, encode_action(next_page_action()))


def create_catalog_item_card(
    item: CatalogItem,
    buttons: List[dict],
    markdown_supported: bool,
) -> dict:
    """Thumbnail card for one catalog item."""
    price = f"${item.price:.2f}"
    if markdown_supported:
        text = f"**{item.name}**\n\nPrice: **{price}**"
    else:
        text = f"{item.name} - Price: {price}"

    picture = replace_picture_uri(item.picture_uri)
    return {
        "type": THUMBNAIL_CARD,
        "title": item.name,
        "subtitle": price,
        "text": text,
        "images": [{"url": picture}] if picture else [],
        "buttons": buttons,
    }


def replace_picture_uri(uri: Optional[str], public_base: Optional[str] = None) -> str:
    """
    Point a picture URI at the public host.

    Catalog pictures come back with the service's internal host; the chat
    channel can only fetch them through *public_base* (``PICTURE_BASE_URL``).
    """
    if not uri:
        return ""
    base = PICTURE_BASE_URL if public_base is None else public_base
    if not base:
        return uri

    target = urlsplit(base)
    source = urlsplit(uri)
    if not source.netloc:
        return uri
    return urlunsplit((target.scheme or source.scheme, target.netloc, source.path, source.query, source.fragment))
