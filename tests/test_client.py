"""Tests for the requests-based API client, using a fake session."""

import pytest
import requests

from expense_tracker_client import ExpenseTrackerClient


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload
        self.content = b"" if payload is None else b"{}"
        self.text = "" if payload is None else str(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("no body")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


AUTH_BODY = {"id": "u1", "name": "Bob Smith", "email": "bob@x.com", "role": "user", "token": "tok"}


class TestExpenseTrackerClient:
    def test_login_stores_token_and_sends_it_later(self):
        session = FakeSession(FakeResponse(200, AUTH_BODY), FakeResponse(200, []))
        client = ExpenseTrackerClient(base_url="http://api.test/", session=session)

        data, error = client.login("bob@x.com", "Passw0rd!")
        assert error is None
        assert client.token == "tok"
        assert client.user == {"id": "u1", "name": "Bob Smith", "email": "bob@x.com", "role": "user"}

        entries, error = client.list_entries("expense", sort="amount-asc", category="Food")
        assert entries == [] and error is None
        call = session.calls[1]
        assert call["method"] == "GET"
        assert call["url"] == "http://api.test/api/expense"
        assert call["headers"] == {"Authorization": "Bearer tok"}
        assert call["params"] == {"sort": "amount-asc", "category": "Food"}

    def test_error_detail_is_returned(self):
        session = FakeSession(FakeResponse(403, {"detail": "Not authorized as an admin"}))
        client = ExpenseTrackerClient(base_url="http://api.test", token="tok", session=session)
        users, error = client.list_users()
        assert users == []
        assert error == {"status_code": 403, "message": "Not authorized as an admin"}

    def test_network_failure(self):
        session = FakeSession(requests.ConnectionError("refused"))
        client = ExpenseTrackerClient(base_url="http://api.test", session=session)
        data, error = client.stats()
        assert data is None
        assert error["status_code"] is None
        assert "refused" in error["message"]

    def test_entry_paths(self):
        session = FakeSession(FakeResponse(200, {"message": "Income removed successfully"}))
        client = ExpenseTrackerClient(base_url="http://api.test", token="tok", session=session)
        data, _ = client.delete_entry("income", "abc")
        assert data == {"message": "Income removed successfully"}
        assert session.calls[0]["method"] == "DELETE"
        assert session.calls[0]["url"] == "http://api.test/api/income/abc"

    def test_unknown_kind(self):
        client = ExpenseTrackerClient(base_url="http://api.test", session=FakeSession())
        with pytest.raises(ValueError):
            client.summary("savings")

    def test_logout_forgets_token(self):
        client = ExpenseTrackerClient(base_url="http://api.test", token="tok", session=FakeSession())
        client.logout()
        assert client.token is None
