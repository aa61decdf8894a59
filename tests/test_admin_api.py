"""End-to-end tests for the administrator endpoints."""

import pytest

from .conftest import bearer, register


CONTACT = {
    "name": "Bob Smith",
    "email": "bob@x.com",
    "subject": "Help please",
    "message": "I cannot find the export button.",
}


def seed_user_data(client, token):
    headers = bearer(token)
    client.post("/api/income", json={"category": "Salary", "amount": 1000, "description": "pay"}, headers=headers)
    client.post("/api/expense", json={"category": "Food", "amount": 40, "description": "groceries"}, headers=headers)
    response = client.post("/api/contact", json=CONTACT, headers=headers)
    return response.json()["contact"]


class TestAccessControl:
    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/api/admin/users"),
            ("delete", "/api/admin/users/someone"),
            ("get", "/api/admin/contacts"),
            ("put", "/api/admin/contacts/something"),
            ("get", "/api/admin/stats"),
        ],
    )
    def test_regular_user_is_forbidden(self, client, bob, method, path):
        kwargs = {"headers": bearer(bob["token"])}
        if method == "put":
            kwargs["json"] = {"status": "reviewed"}
        response = getattr(client, method)(path, **kwargs)
        assert response.status_code == 403
        assert response.json()["detail"] == "Not authorized as an admin"

    def test_anonymous_is_unauthenticated(self, client):
        assert client.get("/api/admin/users").status_code == 401


class TestUsers:
    def test_lists_users_newest_first_without_passwords(self, client, admin, bob, alice):
        response = client.get("/api/admin/users", headers=bearer(admin["token"]))
        assert response.status_code == 200
        users = response.json()
        assert [user["email"] for user in users] == ["alice@x.com", "bob@x.com", "admin@expense.com"]
        for user in users:
            assert "password" not in user
            assert "passwordHash" not in user
            assert set(user) >= {"id", "name", "email", "role", "createdAt"}

    def test_delete_cascades(self, client, admin, bob, alice):
        seed_user_data(client, bob["token"])
        seed_user_data(client, alice["token"])
        headers = bearer(admin["token"])

        response = client.delete(f"/api/admin/users/{bob['id']}", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"message": "User and associated data removed successfully"}

        # Bob's token no longer resolves to a user.
        assert client.get("/api/income", headers=bearer(bob["token"])).status_code == 401

        emails = [user["email"] for user in client.get("/api/admin/users", headers=headers).json()]
        assert "bob@x.com" not in emails
        contacts = client.get("/api/admin/contacts", headers=headers).json()
        assert all(contact["userId"] != bob["id"] for contact in contacts)
        assert len(contacts) == 1

        stats = client.get("/api/admin/stats", headers=headers).json()
        assert stats["totalIncomes"] == 1
        assert stats["totalExpenses"] == 1

        # Alice is unaffected.
        assert len(client.get("/api/income", headers=bearer(alice["token"])).json()) == 1

    def test_delete_unknown_user(self, client, admin):
        response = client.delete("/api/admin/users/ghost", headers=bearer(admin["token"]))
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    def test_admin_cannot_delete_self(self, client, admin):
        response = client.delete(f"/api/admin/users/{admin['id']}", headers=bearer(admin["token"]))
        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot delete your own account"

    def test_admin_can_delete_another_admin(self, client, admin):
        other = register(client, "Other Admin", "other@x.com", role="admin")
        response = client.delete(f"/api/admin/users/{other['id']}", headers=bearer(admin["token"]))
        assert response.status_code == 200


class TestContacts:
    def test_lists_all_with_submitter(self, client, admin, bob, alice):
        seed_user_data(client, bob["token"])
        seed_user_data(client, alice["token"])
        response = client.get("/api/admin/contacts", headers=bearer(admin["token"]))
        assert response.status_code == 200
        contacts = response.json()
        assert [contact["user"]["email"] for contact in contacts] == ["alice@x.com", "bob@x.com"]
        assert contacts[1]["user"] == {"id": bob["id"], "name": "Bob Smith", "email": "bob@x.com"}

    def test_mark_reviewed(self, client, admin, bob):
        contact = seed_user_data(client, bob["token"])
        headers = bearer(admin["token"])
        response = client.put(f"/api/admin/contacts/{contact['id']}", json={"status": "reviewed"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["status"] == "reviewed"
        # The owner sees the new status too.
        mine = client.get("/api/contact", headers=bearer(bob["token"])).json()
        assert mine[0]["status"] == "reviewed"

    def test_empty_status_keeps_current_value(self, client, admin, bob):
        contact = seed_user_data(client, bob["token"])
        response = client.put(
            f"/api/admin/contacts/{contact['id']}", json={"status": ""}, headers=bearer(admin["token"])
        )
        assert response.status_code == 200
        assert response.json()["status"] == "pending"

    def test_unknown_contact(self, client, admin):
        response = client.put(
            "/api/admin/contacts/ghost", json={"status": "reviewed"}, headers=bearer(admin["token"])
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Contact message not found"


class TestStats:
    def test_counts_and_totals(self, client, admin, bob, alice):
        contact = seed_user_data(client, bob["token"])
        seed_user_data(client, alice["token"])
        headers = bearer(admin["token"])
        client.put(f"/api/admin/contacts/{contact['id']}", json={"status": "reviewed"}, headers=headers)

        response = client.get("/api/admin/stats", headers=headers)
        assert response.status_code == 200
        assert response.json() == {
            "totalUsers": 3,
            "totalIncomes": 2,
            "totalExpenses": 2,
            "pendingContacts": 1,
            "totalIncomeAmount": 2000,
            "totalExpenseAmount": 80,
        }

    def test_empty_system(self, client, admin):
        stats = client.get("/api/admin/stats", headers=bearer(admin["token"])).json()
        assert stats["totalUsers"] == 1
        assert stats["totalIncomeAmount"] == 0
