"""
Basket Client
=============
Adds a line to the signed-in user's basket.

  - POST /{user_id}/items   (Authorization: Bearer <access token>)
"""

from config.settings import BASKET_API_URL
from models import BasketItem
from chat_logger import get_logger
from .http_client import ServiceClient

logger = get_logger("catalog_chat")


class BasketClient(ServiceClient):
    def __init__(self, base_url: str = BASKET_API_URL, **kwargs):
        super().__init__(base_url, **kwargs)

    def add_item(self, user_id: str, item: BasketItem, access_token: str) -> dict:
        """
        Add *item* to the user's basket.

        Returns ``{"success": True, "data": ...}`` or
        ``{"success": False, "error": "..."}``; never raises for transport errors.
        """
        result = self._post(
            f"{user_id}/items",
            json_body=item.to_payload(),
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if result["success"]:
            logger.info(f"Basket | user={user_id} | added product={item.product_id} x{item.quantity}")
        else:
            logger.warning(f"Basket | user={user_id} | add failed | {result.get('error')}")
        return result
