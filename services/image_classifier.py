"""
Image classification client: raw image bytes in, ordered product tags out.
"""

from typing import List

from config.settings import CLASSIFIER_API_URL
from .errors import ServiceError
from .http_client import ServiceClient


class ImageClassifierClient(ServiceClient):
    def __init__(self, base_url: str = CLASSIFIER_API_URL, **kwargs):
        super().__init__(base_url, **kwargs)

    def classify(self, content: bytes) -> List[str]:
        """
        Return the tags recognised in *content*, best match first.
        An empty list means nothing useful was recognised.
        """
        result = self._post(
            "",
            data=content,
            headers={"Content-Type": "application/octet-stream"},
        )
        if not result["success"]:
            raise ServiceError("classifier", result.get("error", "request failed"))

        body = result.get("data")
        # Accept both a bare list and {"tags": [...]}
        if isinstance(body, dict):
            body = body.get("tags")
        if body is None:
            return []
        if not isinstance(body, list):
            raise ServiceError("classifier", "unexpected response body")
        return [str(tag) for tag in body if str(tag).strip()]
