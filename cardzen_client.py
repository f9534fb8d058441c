"""CARDZEN API client.

This module defines a small client wrapper around the CARDZEN REST API
using the ``requests`` library.  It exposes high‑level methods for
every public operation:

* :meth:`register` and :meth:`login` – create an account and obtain a
  token.  A successful login stores the token on the client so that
  later calls are authenticated.
* :meth:`list_cards`, :meth:`get_card`, :meth:`create_card`,
  :meth:`update_card`, :meth:`delete_card` – card CRUD.
* :meth:`buy_card` and :meth:`list_transactions` – purchases.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` and ``error`` is a
dictionary with keys ``status_code`` and ``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class CardzenAPI:
    """Client for interacting with the CARDZEN API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3000``.
            token: Optional access token.  If set, an ``Authorization``
                header with the value ``Bearer <token>`` is sent with
                every request.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/cards``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    message = exc.response.json().get("message", "")
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def register(self, username: str, email: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request(
            "POST",
            "/register",
            json_body={"username": username, "email": email, "password": password},
        )

    def login(self, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Log in and keep the returned token for subsequent calls."""
        data, error = self._request(
            "POST", "/login", json_body={"username": username, "password": password}
        )
        if data and data.get("token"):
            self.token = data["token"]
        return data, error

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------
    def list_cards(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/cards")
        if error:
            return [], error
        return data or [], None

    def get_card(self, card_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/cards/{card_id}")

    def create_card(self, name: str, description: str, price: float) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request(
            "POST",
            "/cards",
            json_body={"name": name, "description": description, "price": price},
        )

    def update_card(self, card_id: int, **fields: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Update a card.  Pass any of ``name``, ``description``, ``price``."""
        allowed = {k: v for k, v in fields.items() if k in ("name", "description", "price")}
        return self._request("PUT", f"/cards/{card_id}", json_body=allowed)

    def delete_card(self, card_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("DELETE", f"/cards/{card_id}")

    # ------------------------------------------------------------------
    # Purchases
    # ------------------------------------------------------------------
    def buy_card(self, card_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", f"/buy/{card_id}")

    def list_transactions(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/transactions")
        if error:
            return [], error
        return data or [], None
