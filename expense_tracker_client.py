"""Expense Tracker API client.

A thin wrapper around the HTTP API for scripts and other Python
consumers.  The client keeps the bearer token returned by
:meth:`ExpenseTrackerClient.login` or
:meth:`ExpenseTrackerClient.register` and sends it with every later
request.

Every public method returns a tuple ``(data, error)``.  On success
``data`` holds the decoded JSON response and ``error`` is ``None``; on
failure ``data`` is ``None`` and ``error`` is a dictionary with keys
``status_code`` and ``message``.  Network problems are reported the
same way with ``status_code`` set to ``None``.

Example::

    client = ExpenseTrackerClient(base_url="http://localhost:5000")
    client.login("bob@example.com", "Passw0rd!")
    client.create_entry("expense", {"category": "Food", "amount": 50, "description": "lunch"})
    summary, error = client.summary("expense")
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]

LEDGER_KINDS = ("income", "expense")


class ExpenseTrackerClient:
    """Client for the Expense Tracker HTTP API."""

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
            base_url: Server root, e.g. ``http://localhost:5000``.  The
                ``/api`` prefix is added by the client.
            token: Optional bearer token from an earlier login.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout
        self.user: Optional[Dict[str, Any]] = None

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        json_body: Any | None = None,
    ) -> Result:
        """Perform an HTTP request against ``/api<path>``."""
        url = f"{self.base_url}/api{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params or None,
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
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _ledger_path(kind: str, suffix: str = "") -> str:
        if kind not in LEDGER_KINDS:
            raise ValueError(f"Unknown ledger kind {kind!r}; expected one of {LEDGER_KINDS}")
        return f"/{kind}{suffix}"

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def register(self, name: str, email: str, password: str, role: Optional[str] = None) -> Result:
        """Create an account and keep its token for later calls."""
        body: Dict[str, Any] = {"name": name, "email": email, "password": password}
        if role:
            body["role"] = role
        data, error = self._request("POST", "/auth/register", json_body=body)
        if data:
            self._remember(data)
        return data, error

    def login(self, email: str, password: str) -> Result:
        data, error = self._request("POST", "/auth/login", json_body={"email": email, "password": password})
        if data:
            self._remember(data)
        return data, error

    def logout(self) -> None:
        """Forget the stored token.  Tokens are stateless; nothing is sent."""
        self.token = None
        self.user = None

    def _remember(self, data: Dict[str, Any]) -> None:
        self.token = data.get("token")
        self.user = {key: value for key, value in data.items() if key != "token"}

    # ------------------------------------------------------------------
    # Income and expense entries
    # ------------------------------------------------------------------
    def list_entries(
        self,
        kind: str,
        *,
        sort: Optional[str] = None,
        category: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Result:
        params = {"sort": sort, "category": category, "startDate": start_date, "endDate": end_date}
        return self._request("GET", self._ledger_path(kind), params=params)

    def get_entry(self, kind: str, entry_id: str) -> Result:
        return self._request("GET", self._ledger_path(kind, f"/{entry_id}"))

    def create_entry(self, kind: str, payload: Dict[str, Any]) -> Result:
        return self._request("POST", self._ledger_path(kind), json_body=payload)

    def update_entry(self, kind: str, entry_id: str, payload: Dict[str, Any]) -> Result:
        return self._request("PUT", self._ledger_path(kind, f"/{entry_id}"), json_body=payload)

    def delete_entry(self, kind: str, entry_id: str) -> Result:
        return self._request("DELETE", self._ledger_path(kind, f"/{entry_id}"))

    def summary(self, kind: str) -> Result:
        return self._request("GET", self._ledger_path(kind, "/stats/summary"))

    # ------------------------------------------------------------------
    # Contact messages
    # ------------------------------------------------------------------
    def send_contact(self, name: str, email: str, subject: str, message: str) -> Result:
        body = {"name": name, "email": email, "subject": subject, "message": message}
        return self._request("POST", "/contact", json_body=body)

    def my_contacts(self) -> Result:
        return self._request("GET", "/contact")

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------
    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/admin/users")
        return (data or []), error

    def delete_user(self, user_id: str) -> Result:
        return self._request("DELETE", f"/admin/users/{user_id}")

    def list_contacts(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/admin/contacts")
        return (data or []), error

    def update_contact_status(self, contact_id: str, status: str) -> Result:
        return self._request("PUT", f"/admin/contacts/{contact_id}", json_body={"status": status})

    def stats(self) -> Result:
        return self._request("GET", "/admin/stats")
