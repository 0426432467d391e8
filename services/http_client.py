"""
Shared HTTP plumbing for backend service clients.

Every call goes through one ``requests.Session`` with a bounded timeout and
comes back as a result dict, so callers decide what a failure means.
"""

from typing import Optional

import requests as http_requests

from config.settings import REQUEST_TIMEOUT, DEFAULT_HEADERS
from chat_logger import get_logger

logger = get_logger("catalog_chat")


class ServiceClient:
    def __init__(self, base_url: str, timeout: int = REQUEST_TIMEOUT):
        self.base = base_url.rstrip("/")
        self.timeout = timeout
        self.session = http_requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

    # ─────────────────────────────────────────────
    # INTERNAL: GET / POST
    # ─────────────────────────────────────────────

    def _url(self, endpoint: str) -> str:
        if not endpoint:
            return self.base
        return f"{self.base}/{endpoint.lstrip('/')}"

    def _get(self, endpoint: str, params: Optional[dict] = None, headers: Optional[dict] = None) -> dict:
        try:
            resp = self.session.get(
                self._url(endpoint),
                params=params or {},
                headers=headers,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            return {"success": True, "data": resp.json(), "status_code": resp.status_code}
        except http_requests.exceptions.HTTPError as e:
            return self._http_error(e)
        except (http_requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"GET {self._url(endpoint)} failed | {e}")
            return {"success": False, "data": None, "error": str(e)}

    def _post(
        self,
        endpoint: str,
        json_body=None,
        data: Optional[bytes] = None,
        headers: Optional[dict] = None,
    ) -> dict:
        try:
            resp = self.session.post(
                self._url(endpoint),
                json=json_body,
                data=data,
                headers=headers,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            body = resp.json() if resp.content else None
            return {"success": True, "data": body, "status_code": resp.status_code}
        except http_requests.exceptions.HTTPError as e:
            return self._http_error(e)
        except (http_requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"POST {self._url(endpoint)} failed | {e}")
            return {"success": False, "data": None, "error": str(e)}

    def _http_error(self, e: http_requests.exceptions.HTTPError) -> dict:
        status = e.response.status_code if e.response is not None else None
        body = e.response.text[:300] if e.response is not None else "N/A"
        logger.warning(f"HTTP {status} from {self.base} | {body}")
        return {
            "success": False,
            "data": None,
            "status_code": status,
            "error": f"HTTP {status}: {body}",
        }
