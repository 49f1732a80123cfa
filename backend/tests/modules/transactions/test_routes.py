"""Tests for transaction routes."""

import pytest

BASE = "/api/transactions"


def create(client, headers, **overrides):
    body = {
        "type": "expense",
        "amount": 25.5,
        "category": "Food & Dining",
        "description": "Lunch",
        "date": "2025-01-10T12:00:00+00:00",
    }
    body.update(overrides)
    return client.post(BASE, json=body, headers=headers)


class TestCreateTransaction:
    def test_create(self, client, auth_headers, registered_user):
        response = create(client, auth_headers)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["amount"] == 25.5
        assert data["type"] == "expense"
        assert data["userId"] == registered_user["user"]["id"]
        assert len(data["id"]) == 24

    def test_requires_auth(self, client):
        assert create(client, {}).status_code == 401

    def test_rejects_three_decimals(self, client, auth_headers):
        response = create(client, auth_headers, amount=10.123)
        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "body.amount", "message": "Amount cannot have more than 2 decimal places"}
        ]

    def test_rejects_bad_type(self, client, auth_headers):
        response = create(client, auth_headers, type="gift")
        assert response.json()["errors"] == [
            {"field": "body.type", "message": "Type must be either income or expense"}
        ]

    def test_ignores_unknown_fields(self, client, auth_headers, registered_user):
        """Clients can't set the owner through the body."""
        response = create(client, auth_headers, userId="f" * 24)
        assert response.json()["data"]["userId"] == registered_user["user"]["id"]


class TestReadTransactions:
    def test_list_and_filter(self, client, auth_headers):
        create(client, auth_headers)
        create(client, auth_headers, type="income", amount=1000, category="Salary")
        create(client, auth_headers, date="2024-12-20T00:00:00+00:00")

        everything = client.get(BASE, headers=auth_headers).json()
        assert everything["count"] == 3

        january = client.get(BASE, params={"month": "2025-01"}, headers=auth_headers).json()
        assert january["count"] == 2

        income = client.get(BASE, params={"type": "income"}, headers=auth_headers).json()
        assert [t["category"] for t in income["data"]] == ["Salary"]

    def test_invalid_month(self, client, auth_headers):
        response = client.get(BASE, params={"month": "2024-13"}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "query.month"

    def test_get_one(self, client, auth_headers):
        created = create(client, auth_headers).json()["data"]
        response = client.get(f"{BASE}/{created['id']}", headers=auth_headers)
        assert response.json()["data"] == created

    def test_invalid_id(self, client, auth_headers):
        response = client.get(f"{BASE}/123", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "params.id", "message": "Invalid transaction ID"}
        ]

    def test_not_found(self, client, auth_headers):
        response = client.get(f"{BASE}/{'0' * 24}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Transaction not found"

    def test_other_users_transaction(self, client, auth_headers, other_auth_headers):
        created = create(client, other_auth_headers).json()["data"]
        response = client.get(f"{BASE}/{created['id']}", headers=auth_headers)
        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized to access this transaction"

    def test_summary(self, client, auth_headers):
        create(client, auth_headers, type="income", amount=1000, category="Salary")
        create(client, auth_headers, amount=250)

        response = client.get(f"{BASE}/summary", headers=auth_headers)

        assert response.status_code == 200
        summary = response.json()["summary"]
        assert summary["totalIncome"] == 1000
        assert summary["totalExpenses"] == 250
        assert summary["balance"] == 750
        assert summary["byMonth"] == [
            {"month": "2025-01", "income": 1000, "expenses": 250, "balance": 750}
        ]


class TestModifyTransactions:
    def test_update(self, client, auth_headers):
        created = create(client, auth_headers).json()["data"]
        response = client.put(
            f"{BASE}/{created['id']}", json={"amount": 30}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["amount"] == 30
        assert response.json()["data"]["category"] == "Food & Dining"

    def test_update_other_user(self, client, auth_headers, other_auth_headers):
        created = create(client, other_auth_headers).json()["data"]
        response = client.put(
            f"{BASE}/{created['id']}", json={"amount": 30}, headers=auth_headers
        )
        assert response.status_code == 403

    def test_delete(self, client, auth_headers):
        created = create(client, auth_headers).json()["data"]
        response = client.delete(f"{BASE}/{created['id']}", headers=auth_headers)
        assert response.json() == {"success": True, "message": "Transaction deleted successfully"}
        assert client.get(f"{BASE}/{created['id']}", headers=auth_headers).status_code == 404
