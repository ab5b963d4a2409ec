import logging
import threading
from typing import Any, Callable, Dict, List, Optional

import requests

from storefront.exceptions import (
    AccountSuspended,
    ServerRejected,
    ServiceUnavailable,
    SessionExpired,
)

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Authentication error. Please try logging out and back in."


def is_suspension(response: requests.Response) -> bool:
    if response.status_code != 403:
        return False
    return bool(_json_or_empty(response).get("suspended"))


def _json_or_empty(response: requests.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def error_from_response(response: requests.Response, fallback: str):
    payload = _json_or_empty(response)
    message = payload.get("message") or fallback

    if response.status_code == 401:
        return SessionExpired(
            payload.get("message") or SESSION_EXPIRED_MESSAGE,
            status_code=401,
            payload=payload,
        )

    if is_suspension(response):
        return AccountSuspended(message, status_code=403, payload=payload)

    return ServerRejected(message, status_code=response.status_code, payload=payload)


class ApiClient:
    """
    Shared HTTP client for the bookstore REST backend.

    The session's default Authorization header is the single authorization
    context every request reads. `auth_ready` is set exactly when a token has
    been committed to that header and cleared when it is removed.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: int = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.auth_ready = threading.Event()
        self._suspension_handlers: List[Callable[[Dict[str, Any]], None]] = []

        self.session.hooks["response"].append(self._watch_suspension)

    # -------------------------
    # Authorization context
    # -------------------------
    def set_token(self, token: str) -> None:
        self.session.headers["Authorization"] = f"Bearer {token}"
        self.auth_ready.set()

    def clear_token(self) -> None:
        self.auth_ready.clear()
        self.session.headers.pop("Authorization", None)

    @property
    def has_auth_header(self) -> bool:
        return "Authorization" in self.session.headers

    def on_suspended(self, callback: Callable[[Dict[str, Any]], None]) -> None:
        self._suspension_handlers.append(callback)

    def off_suspended(self, callback: Callable[[Dict[str, Any]], None]) -> None:
        self._suspension_handlers = [
            handler for handler in self._suspension_handlers if handler != callback
        ]

    def _watch_suspension(self, response: requests.Response, *args, **kwargs):
        if is_suspension(response):
            payload = _json_or_empty(response)
            logger.warning(f"Suspended account detected on {response.url}")
            for handler in list(self._suspension_handlers):
                handler(payload)
        return response

    # -------------------------
    # Requests
    # -------------------------
    def request(
        self,
        method: str,
        path: str,
        error_message: str = "Request failed",
        **kwargs,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        kwargs.setdefault("timeout", self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ServiceUnavailable("Unable to reach the server. Please try again.") from e

        if response.status_code >= 400:
            error = error_from_response(response, error_message)
            logger.error(f"{method} {path} returned {response.status_code}: {error.message}")
            raise error

        if not response.content:
            return {}
        return _json_or_empty(response)

    def get(self, path: str, **kwargs) -> Dict[str, Any]:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, json: Optional[dict] = None, **kwargs) -> Dict[str, Any]:
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path: str, json: Optional[dict] = None, **kwargs) -> Dict[str, Any]:
        return self.request("PUT", path, json=json, **kwargs)

    def patch(self, path: str, json: Optional[dict] = None, **kwargs) -> Dict[str, Any]:
        return self.request("PATCH", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> Dict[str, Any]:
        return self.request("DELETE", path, **kwargs)

    def close(self) -> None:
        self.session.close()
