"""
Catalog Conversation Flow for the catalog chat bot.

Drives one browsing session:
  - Filter selection → paginated catalog carousel
  - Image search (attachment → tags → filtered catalog)
  - Add to cart → quantity → basket review
  - Login hand-off and return

Each inbound event is classified into a ``Trigger`` and dispatched through a
table keyed by ``(Continuation, Trigger)``. Handlers take the current
``ConversationState`` and return a ``FlowResult`` holding the next state, the
replies to post and, when control moves to a sub-flow, which one.
"""

import re
import uuid
from enum import Enum
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Tuple

from action_codec import ActionType, DecodeResult, decode_action
from catalog_filter import fetch_catalog_page
from catalog_presenter import render_catalog, text_reply
from chat_logger import get_logger
from config import text_resources
from core.helpers import supports_rich_text
from models import (
    BasketItem,
    Continuation,
    ConversationState,
    EventKind,
    Filter,
    FlowResult,
    InboundEvent,
    PendingPurchase,
    SubFlow,
)
from pagination import PAGE_SIZE, next_page, page_count, page_window, previous_page
from services.card_builder import replace_picture_uri
from services.errors import ServiceError

logger = get_logger("catalog_chat")


class Trigger(Enum):
    """What an inbound event means, given where the conversation is."""
    FILTER_RESULT = "filter_result"
    NEXT_PAGE = "next_page"
    PREVIOUS_PAGE = "previous_page"
    ADD_TO_BASKET = "add_to_basket"
    LOGIN = "login"
    BACK = "back"
    INVALID_SELECTION = "invalid_selection"
    ATTACHMENT = "attachment"
    QUANTITY = "quantity"
    LOGIN_RESULT = "login_result"
    BASKET_RESULT = "basket_result"


class CommitOutcome(Enum):
    ADDED = "added"
    NOT_AUTHENTICATED = "not_authenticated"
    FAILED = "failed"


_ACTION_TRIGGERS = {
    ActionType.NEXT_PAGE: Trigger.NEXT_PAGE,
    ActionType.PREVIOUS_PAGE: Trigger.PREVIOUS_PAGE,
    ActionType.ADD_BASKET: Trigger.ADD_TO_BASKET,
    ActionType.LOGIN: Trigger.LOGIN,
    ActionType.BACK: Trigger.BACK,
}

_SUB_FLOW_TRIGGERS = {
    EventKind.FILTER_SELECTED: Trigger.FILTER_RESULT,
    EventKind.LOGIN_COMPLETED: Trigger.LOGIN_RESULT,
    EventKind.BASKET_COMPLETED: Trigger.BASKET_RESULT,
}

_QUANTITY_RE = re.compile(r"\s*\+?(\d{1,9})\s*")


def parse_quantity(text: Optional[str]) -> Optional[int]:
    """Positive whole number typed by the user, or None."""
    if not text:
        return None
    match = _QUANTITY_RE.fullmatch(text)
    if not match:
        return None
    quantity = int(match.group(1))
    return quantity if quantity > 0 else None


def classify_event(state: ConversationState, event: InboundEvent) -> Tuple[Trigger, Any]:
    """Map an inbound event onto a trigger plus the data its handler needs."""
    if event.kind in _SUB_FLOW_TRIGGERS:
        return _SUB_FLOW_TRIGGERS[event.kind], None

    if state.continuation == Continuation.AWAITING_QUANTITY:
        return Trigger.QUANTITY, event.text

    if event.attachments:
        return Trigger.ATTACHMENT, event.attachments

    decoded = decode_action(event.text)
    if not decoded.is_action:
        return Trigger.INVALID_SELECTION, decoded
    return _ACTION_TRIGGERS[decoded.action.action_type], decoded.action


@dataclass
class CatalogServices:
    """Backend collaborators the flow talks to."""
    catalog: Any
    catalog_ai: Any
    identity: Any
    basket: Any
    classifier: Any
    attachments: Any
    page_size: int = PAGE_SIZE


Handler = Callable[[ConversationState, InboundEvent, Any], FlowResult]


class CatalogFlow:
    def __init__(self, services: CatalogServices):
        self.services = services
        self._handlers: Dict[Tuple[Continuation, Trigger], Handler] = {
            (Continuation.AWAITING_FILTER, Trigger.FILTER_RESULT): self._on_filter_selected,
            (Continuation.AWAITING_SELECTION, Trigger.NEXT_PAGE): self._on_next_page,
            (Continuation.AWAITING_SELECTION, Trigger.PREVIOUS_PAGE): self._on_previous_page,
            (Continuation.AWAITING_SELECTION, Trigger.ADD_TO_BASKET): self._on_add_to_basket,
            (Continuation.AWAITING_SELECTION, Trigger.LOGIN): self._on_login,
            (Continuation.AWAITING_SELECTION, Trigger.BACK): self._on_back,
            (Continuation.AWAITING_SELECTION, Trigger.INVALID_SELECTION): self._on_invalid_selection,
            (Continuation.AWAITING_SELECTION, Trigger.ATTACHMENT): self._on_attachment,
            (Continuation.AWAITING_QUANTITY, Trigger.QUANTITY): self._on_quantity,
            (Continuation.AWAITING_LOGIN, Trigger.LOGIN_RESULT): self._on_login_result,
            (Continuation.AWAITING_BASKET_RESULT, Trigger.BASKET_RESULT): self._on_basket_result,
        }

    # ─────────────────────────────────────────────
    # Entry points
    # ─────────────────────────────────────────────

    def start(self, state: ConversationState, event: InboundEvent) -> FlowResult:
        """Begin (or restart) browsing: ask for a filter first if there is none."""
        if state.filter is None:
            logger.info(f"Flow | session={event.session_id} | start → filter sub-flow")
            return FlowResult(
                state=replace(state, continuation=Continuation.AWAITING_FILTER),
                delegate=SubFlow.FILTER,
            )
        return self._show_catalog(state, event)

    def handle(self, state: ConversationState, event: InboundEvent) -> FlowResult:
        """Route one inbound event to the single handler for the current continuation."""
        trigger, payload = classify_event(state, event)
        handler = self._handlers.get((state.continuation, trigger))

        if handler is None:
            logger.warning(
                f"Flow | session={event.session_id} | no handler for "
                f"{state.continuation.value} + {trigger.value}"
            )
            return FlowResult(state=state, replies=[text_reply(text_resources.PLEASE_MAKE_A_SELECTION)])

        try:
            result = handler(state, event, payload)
        except ServiceError as e:
            logger.error(f"Flow | session={event.session_id} | {trigger.value} failed | {e}")
            result = self._service_failure(state)

        logger.info(
            f"Flow | session={event.session_id} | {state.continuation.value} + {trigger.value} "
            f"→ {result.state.continuation.value} | page={result.state.current_page}"
            + (f" | delegate={result.delegate.value}" if result.delegate else "")
        )
        return result

    # ─────────────────────────────────────────────
    # Filter & navigation
    # ─────────────────────────────────────────────

    def _on_filter_selected(self, state, event, _payload) -> FlowResult:
        catalog_filter = event.filter or Filter()
        return self._show_catalog(replace(state, filter=catalog_filter), event)

    def _on_next_page(self, state, event, _action) -> FlowResult:
        page = next_page(state.current_page, state.last_total_count, self.services.page_size)
        return self._show_catalog(replace(state, current_page=page), event, fallback=state)

    def _on_previous_page(self, state, event, _action) -> FlowResult:
        page = previous_page(state.current_page)
        return self._show_catalog(replace(state, current_page=page), event, fallback=state)

    def _on_invalid_selection(self, state, event, decoded: DecodeResult) -> FlowResult:
        if decoded is not None and decoded.reason:
            logger.debug(f"Flow | session={event.session_id} | invalid selection | {decoded.reason}")
        return self._show_catalog(state, event, [text_reply(text_resources.PLEASE_MAKE_A_SELECTION)])

    def _on_back(self, state, event, _action) -> FlowResult:
        return FlowResult(
            state=replace(state, continuation=Continuation.DONE),
            replies=[text_reply(text_resources.TYPE_WHAT_DO_YOU_WANT_TO_DO)],
        )

    def _on_attachment(self, state, event, attachments) -> FlowResult:
        content = self.services.attachments.fetch_first(attachments)
        if content is None:
            return self._on_invalid_selection(state, event, None)

        tags = self.services.classifier.classify(content)
        logger.info(f"Flow | session={event.session_id} | image tags={tags}")
        catalog_filter = (state.filter or Filter()).with_tags(tags)
        return self._show_catalog(replace(state, filter=catalog_filter), event, fallback=state)

    # ─────────────────────────────────────────────
    # Login
    # ─────────────────────────────────────────────

    def _on_login(self, state, event, _action) -> FlowResult:
        return FlowResult(
            state=replace(state, continuation=Continuation.AWAITING_LOGIN),
            delegate=SubFlow.LOGIN,
        )

    def _on_login_result(self, state, event, _payload) -> FlowResult:
        return self._show_catalog(state, event)

    # ─────────────────────────────────────────────
    # Basket
    # ─────────────────────────────────────────────

    def _on_add_to_basket(self, state, event, action) -> FlowResult:
        pending = PendingPurchase(
            product_id=action.product_id,
            product_name=action.product_name,
            picture_url=action.picture_url,
            unit_price=action.unit_price,
        )
        return FlowResult(
            state=replace(state, pending_purchase=pending, continuation=Continuation.AWAITING_QUANTITY),
            replies=[text_reply(
                text_resources.HOW_MANY_DO_YOU_WANT_TO_BUY.format(product_name=pending.product_name)
            )],
        )

    def _on_quantity(self, state, event, text) -> FlowResult:
        quantity = parse_quantity(text)
        if quantity is None:
            return FlowResult(state=state, replies=[text_reply(text_resources.PLEASE_TYPE_A_NUMBER)])

        if state.pending_purchase is None:
            return self._on_invalid_selection(replace(state, continuation=Continuation.AWAITING_SELECTION), event, None)

        outcome = self._commit_purchase(event.session_id, state.pending_purchase, quantity)

        if outcome == CommitOutcome.NOT_AUTHENTICATED:
            # The re-rendered catalog carries the Log in button
            return self._show_catalog(state, event, [text_reply(text_resources.LOGIN_REQUIRED)])

        if outcome == CommitOutcome.FAILED:
            return self._service_failure(state)

        product_name = state.pending_purchase.product_name
        return FlowResult(
            state=replace(state, pending_purchase=None, continuation=Continuation.AWAITING_BASKET_RESULT),
            replies=[text_reply(text_resources.YOU_HAVE_ADDED_TO_YOUR_BASKET.format(product_name=product_name))],
            delegate=SubFlow.BASKET,
        )

    def _commit_purchase(self, session_id: str, pending: PendingPurchase, quantity: int) -> CommitOutcome:
        auth_user = self.services.identity.get_session_auth_data(session_id)
        if auth_user is None:
            logger.warning(f"Basket | session={session_id} | add refused: not authenticated")
            return CommitOutcome.NOT_AUTHENTICATED

        item = BasketItem(
            id=str(uuid.uuid4()),
            product_id=pending.product_id,
            product_name=pending.product_name,
            picture_url=replace_picture_uri(pending.picture_url),
            unit_price=pending.unit_price,
            quantity=quantity,
        )
        result = self.services.basket.add_item(auth_user.user_id, item, auth_user.access_token)
        return CommitOutcome.ADDED if result.get("success") else CommitOutcome.FAILED

    def _on_basket_result(self, state, event, _payload) -> FlowResult:
        if event.success:
            return self._show_catalog(state, event)
        return FlowResult(
            state=replace(state, continuation=Continuation.DONE),
            replies=[text_reply(text_resources.TYPE_WHAT_DO_YOU_WANT_TO_DO)],
        )

    # ─────────────────────────────────────────────
    # Rendering
    # ─────────────────────────────────────────────

    def _fetch_page(self, state):
        services = self.services
        return fetch_catalog_page(
            state.filter or Filter(),
            state.current_page,
            services.page_size,
            services.catalog,
            services.catalog_ai,
        )

    def _show_catalog(self, state, event, replies=None, fallback=None) -> FlowResult:
        """
        Render the current page and wait for the next selection.

        The page is pulled back to the last one the new total allows. When the
        query fails, the conversation returns to *fallback* (the state before
        this turn's page or filter change) rather than the attempted one.
        """
        replies = list(replies or [])
        services = self.services
        try:
            authenticated = services.identity.is_authenticated(event.session_id)
            page = self._fetch_page(state)
            last_index = max(0, page_count(page.total_count, services.page_size) - 1)
            if state.current_page > last_index:
                logger.info(
                    f"Catalog | session={event.session_id} | page {state.current_page} "
                    f"past the end, showing {last_index}"
                )
                state = replace(state, current_page=last_index)
                if page.total_count > 0:
                    page = self._fetch_page(state)
        except ServiceError as e:
            logger.error(f"Catalog | session={event.session_id} | query failed | {e}")
            stable = fallback if fallback is not None else state
            failed = self._service_failure(replace(stable, continuation=Continuation.AWAITING_SELECTION))
            return FlowResult(state=failed.state, replies=replies + failed.replies)

        window = page_window(state.current_page, page.total_count, services.page_size)
        replies.append(render_catalog(page, window, authenticated, supports_rich_text(event.channel_id)))
        return FlowResult(
            state=replace(
                state,
                continuation=Continuation.AWAITING_SELECTION,
                last_total_count=page.total_count,
            ),
            replies=replies,
        )

    def _service_failure(self, state: ConversationState) -> FlowResult:
        """Tell the user to retry and fall back to the last stable continuation."""
        continuation = Continuation.AWAITING_SELECTION if state.filter is not None else state.continuation
        return FlowResult(
            state=replace(state, continuation=continuation),
            replies=[text_reply(text_resources.SOMETHING_WENT_WRONG)],
        )
