"""HTTP client for the contacts service."""

from __future__ import annotations

import logging
import os
from typing import Any

import requests

CONTACTS_API_URL = os.getenv("CONTACTS_API_URL", "http://localhost:5000/api/contacts")
CONTACTS_API_TIMEOUT = float(os.getenv("CONTACTS_API_TIMEOUT", "10"))


class ApiError(RuntimeError):
    """Raised for transport failures and non-2xx responses."""

    def __init__(self, message: str, status_code: int | None = None, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class ContactsClient:
    def __init__(
        self,
        base_url: str = CONTACTS_API_URL,
        session: requests.Session | None = None,
        timeout: float = CONTACTS_API_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str = "", **kwargs: Any) -> Any:
        url = self.base_url + path
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logging.warning("%s %s failed: %s", method, url, exc)
            raise ApiError(str(exc)) from exc
        try:
            body = resp.json() if resp.content else None
        except ValueError:
            body = resp.text
        if not resp.ok:
            logging.warning("%s %s returned %s: %s", method, url, resp.status_code, body)
            raise ApiError(
                f"{method} {url} returned {resp.status_code}",
                status_code=resp.status_code,
                payload=body,
            )
        return body

    def list_contacts(self) -> list[dict[str, Any]]:
        return self._request("GET")

    def get_contact(self, contact_id: str) -> dict[str, Any]:
        return self._request("GET", f"/{contact_id}")

    def create_contact(self, fields: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", json=fields)

    def update_contact(self, contact_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
        return self._request("PUT", f"/{contact_id}", json=fields)

    def delete_contact(self, contact_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/{contact_id}")
