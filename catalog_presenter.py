"""
Catalog Presenter

Turns one page of catalog items into a chat reply: a header line, a carousel
of item cards and the suggested navigation buttons.
"""

from typing import List

from action_codec import encode_action, add_to_basket_action
from config import text_resources
from models import CatalogItem, CatalogPage
from pagination import PageWindow
from services import card_builder

CAROUSEL_LAYOUT = "carousel"


def render_catalog(
    page: CatalogPage,
    window: PageWindow,
    is_authenticated: bool,
    supports_rich_text: bool,
) -> dict:
    """Build the catalog reply for *page*."""
    reply = {
        "text": "",
        "attachment_layout": CAROUSEL_LAYOUT,
        "attachments": [],
        "suggested_actions": navigation_buttons(window, is_authenticated),
    }

    if window.is_empty:
        reply["text"] = text_resources.NO_RESULTS
    elif not page.items or window.is_beyond_last_page:
        reply["text"] = text_resources.NO_FURTHER_ITEMS
    else:
        reply["text"] = text_resources.PAGE_HEADER.format(
            page=window.current_page + 1,
            page_count=window.page_count,
            total=window.total_count,
        )
        reply["attachments"] = catalog_carousel(page.items, is_authenticated, supports_rich_text)

    return reply


def catalog_carousel(
    items: List[CatalogItem],
    is_authenticated: bool,
    supports_rich_text: bool,
) -> List[dict]:
    return [build_catalog_item_card(item, is_authenticated, supports_rich_text) for item in items]


def build_catalog_item_card(item: CatalogItem, is_authenticated: bool, supports_rich_text: bool) -> dict:
    buttons = []
    # Anonymous users can browse but not buy
    if is_authenticated:
        action = add_to_basket_action(item.id, item.name, item.picture_uri, item.price)
        buttons.append(card_builder.create_button(text_resources.ADD_TO_CART_BUTTON, encode_action(action)))
    return card_builder.create_catalog_item_card(item, buttons, supports_rich_text)


def navigation_buttons(window: PageWindow, is_authenticated: bool) -> List[dict]:
    """Home always, Log in for anonymous users, Show more while pages remain."""
    buttons = [card_builder.create_home_button()]
    if not is_authenticated:
        buttons.append(card_builder.create_login_button())
    if window.has_next_page:
        buttons.append(card_builder.create_show_more_button())
    return buttons


def text_reply(text: str) -> dict:
    """Plain text reply with no cards or buttons."""
    return {"text": text, "attachment_layout": None, "attachments": [], "suggested_actions": []}
