"""
Pytest configuration and fixtures for catalog-chat tests.

Provides in-memory stand-ins for the catalog, basket, classifier and
attachment services so the flow can be driven without any network.
"""

from decimal import Decimal
from typing import List, Optional

import pytest

from catalog_flow import CatalogFlow, CatalogServices
from models import (
    Attachment,
    CatalogItem,
    CatalogPage,
    ConversationState,
    Continuation,
    EventKind,
    Filter,
    InboundEvent,
)
from services.errors import ServiceError
from services.identity_service import IdentityService


def make_items(count: int, prefix: str = "p") -> List[CatalogItem]:
    return [
        CatalogItem(
            id=f"{prefix}{i}",
            name=f"Product {i}",
            price=Decimal("9.99") + i,
            picture_uri=f"http://catalog.internal/pics/{prefix}{i}.png",
        )
        for i in range(1, count + 1)
    ]


class FakeCatalog:
    """Plain brand/type catalog backed by a list of items."""

    def __init__(self, items: Optional[List[CatalogItem]] = None):
        self.items = list(items or [])
        self.calls = []
        self.fail = False

    def _page(self, page, page_size):
        if self.fail:
            raise ServiceError("catalog", "connection refused")
        start = page * page_size
        return CatalogPage(items=self.items[start:start + page_size], total_count=len(self.items))

    def get_items(self, page, page_size, brand=None, item_type=None):
        self.calls.append({"page": page, "page_size": page_size, "brand": brand, "type": item_type})
        return self._page(page, page_size)


class FakeCatalogAI(FakeCatalog):
    """Tag-based catalog backed by a list of items."""

    def get_items_by_tags(self, page, page_size, brand, item_type, tags):
        self.calls.append({
            "page": page, "page_size": page_size, "brand": brand, "type": item_type, "tags": list(tags),
        })
        return self._page(page, page_size)


class FakeBasket:
    def __init__(self):
        self.calls = []
        self.succeed = True

    def add_item(self, user_id, item, access_token):
        self.calls.append({"user_id": user_id, "item": item, "access_token": access_token})
        if self.succeed:
            return {"success": True, "data": None}
        return {"success": False, "error": "HTTP 500: basket unavailable"}


class FakeClassifier:
    def __init__(self, tags=None):
        self.tags = list(tags or [])
        self.calls = []
        self.fail = False

    def classify(self, content):
        self.calls.append(content)
        if self.fail:
            raise ServiceError("classifier", "timeout")
        return list(self.tags)


class FakeAttachments:
    def __init__(self, content: Optional[bytes] = b"\x89PNG fake image"):
        self.content = content
        self.calls = []

    def fetch_first(self, attachments):
        self.calls.append(attachments)
        if not attachments:
            return None
        return self.content


@pytest.fixture
def catalog():
    return FakeCatalog(make_items(25))


@pytest.fixture
def catalog_ai():
    return FakeCatalogAI(make_items(3, prefix="t"))


@pytest.fixture
def identity():
    return IdentityService(ttl_seconds=0)


@pytest.fixture
def basket():
    return FakeBasket()


@pytest.fixture
def classifier():
    return FakeClassifier(tags=["mug", "white"])


@pytest.fixture
def attachments():
    return FakeAttachments()


@pytest.fixture
def services(catalog, catalog_ai, identity, basket, classifier, attachments):
    return CatalogServices(
        catalog=catalog,
        catalog_ai=catalog_ai,
        identity=identity,
        basket=basket,
        classifier=classifier,
        attachments=attachments,
        page_size=10,
    )


@pytest.fixture
def flow(services):
    return CatalogFlow(services)


@pytest.fixture
def browsing_state():
    """A session that has picked a filter and is looking at page 1."""
    return ConversationState(
        continuation=Continuation.AWAITING_SELECTION,
        current_page=0,
        filter=Filter(brand="Contoso"),
        last_total_count=25,
    )


@pytest.fixture
def message():
    """Factory for inbound chat messages."""
    def _message(text="", session_id="session-1", attachments=None, channel_id="webchat"):
        return InboundEvent(
            session_id=session_id,
            kind=EventKind.MESSAGE,
            text=text,
            attachments=[Attachment(content_url=url) for url in (attachments or [])],
            channel_id=channel_id,
        )
    return _message


@pytest.fixture
def signed_in(identity):
    identity.set_session_auth_data("session-1", "user-42", "token-abcdef")
    return identity
