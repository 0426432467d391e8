"""
Downloads the bytes behind a chat attachment reference.
"""

from typing import List, Optional

import requests as http_requests

from config.settings import REQUEST_TIMEOUT, DEFAULT_HEADERS
from models import Attachment
from .errors import ServiceError


class AttachmentClient:
    def __init__(self, timeout: int = REQUEST_TIMEOUT):
        self.timeout = timeout
        self.session = http_requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

    def fetch_first(self, attachments: List[Attachment]) -> Optional[bytes]:
        """Return the first attachment's content, or None when there is nothing to fetch."""
        if not attachments:
            return None
        url = attachments[0].content_url
        if not url:
            return None

        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except http_requests.exceptions.RequestException as e:
            raise ServiceError("attachments", str(e))

        return resp.content or None
