"""Tests for AI assistant routes."""

from unittest.mock import ANY, AsyncMock

import pytest

STATEMENT_CSV = (
    "Fecha;Concepto;Importe\n"
    "15/01/2025;Supermercado Dia;-45,20\n"
    "31/01/2025;ACME S.L.;1.500,00\n"
).encode()


class TestQuery:
    def test_query(self, client, auth_headers, assistant, registered_user):
        response = client.post(
            "/api/ai/query", json={"message": "How much did I spend?"}, headers=auth_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["query"] == "How much did I spend?"
        assert body["answer"] == "You spent 42.00 on food this month."
        assert body["timestamp"].startswith("2025-01-15T12:00:00")

        user = assistant.answer.call_args.args[0]
        assert user.id == registered_user["user"]["id"]
        assert assistant.answer.call_args.args[1:] == ("How much did I spend?",)

    def test_message_required(self, client, auth_headers, assistant):
        response = client.post("/api/ai/query", json={}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "body.message", "message": "Message is required"}
        ]
        assistant.answer.assert_not_called()

    def test_requires_auth(self, client):
        response = client.post("/api/ai/query", json={"message": "hi"})
        assert response.status_code == 401

    def test_ai_rate_limit(self, client, container, auth_headers):
        """The assistant has its own, tighter budget."""
        container.settings.ai_rate_limit_max = 2
        for _ in range(2):
            response = client.post("/api/ai/query", json={"message": "hi"}, headers=auth_headers)
            assert response.status_code == 200

        response = client.post("/api/ai/query", json={"message": "hi"}, headers=auth_headers)
        assert response.status_code == 429
        assert response.json()["message"] == (
            "You have reached the AI assistant query limit. Please try again in an hour."
        )
        # The general budget is separate
        assert client.get("/api/transactions", headers=auth_headers).status_code == 200

    def test_missing_api_key(self, client, container, auth_headers):
        """Without an API key the real assistant fails with a configuration error."""
        container._assistant_override = None
        container.reset()

        response = client.post("/api/ai/query", json={"message": "hi"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "AI service configuration error"}


class TestSuggestions:
    def test_suggestions(self, client, auth_headers, assistant):
        response = client.get("/api/ai/suggestions", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["suggestions"] == ["What is my current balance?"]
        assistant.suggest_questions.assert_awaited_once_with(ANY)


@pytest.fixture
def chat_provider(container) -> AsyncMock:
    """Stub Claude client behind the real document importer."""
    mock = AsyncMock()
    mock.complete.return_value = '{"categorizations": [{"index": 0, "category": "Food & Dining"}]}'
    mock.extract_text.return_value = "2025-01-15 | Farmacia Central | -12.30"
    container._chat_provider = mock
    return mock


class TestImportDocument:
    def test_csv_preview(self, client, auth_headers, chat_provider):
        response = client.post(
            "/api/ai/import-document",
            files={"file": ("enero.csv", STATEMENT_CSV, "text/csv")},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["transactions"] == [
            {
                "date": "2025-01-15",
                "amount": 45.2,
                "description": "Supermercado Dia",
                "type": "expense",
                "category": "Food & Dining",
            },
            {
                "date": "2025-01-31",
                "amount": 1500.0,
                "description": "ACME S.L.",
                "type": "income",
                "category": "Other Income",
            },
        ]
        assert body["metadata"] == {
            "totalTransactions": 2,
            "fileType": "CSV",
            "parsingMethod": "csv",
            "categorizedBy": "ai",
        }

    def test_nothing_is_saved(self, client, auth_headers, chat_provider):
        client.post(
            "/api/ai/import-document",
            files={"file": ("enero.csv", STATEMENT_CSV, "text/csv")},
            headers=auth_headers,
        )
        assert client.get("/api/transactions", headers=auth_headers).json()["count"] == 0

    def test_image(self, client, auth_headers, chat_provider):
        response = client.post(
            "/api/ai/import-document",
            files={"file": ("ticket.png", b"\x89PNG", "image/png")},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["metadata"]["parsingMethod"] == "ocr"
        assert body["transactions"][0]["category"] == "Healthcare"
        chat_provider.extract_text.assert_awaited_once_with(b"\x89PNG", "image/png")

    def test_file_required(self, client, auth_headers, chat_provider):
        response = client.post("/api/ai/import-document", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "body.file", "message": "File is required"}]
        chat_provider.complete.assert_not_called()

    def test_unsupported_type(self, client, auth_headers, chat_provider):
        response = client.post(
            "/api/ai/import-document",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"].startswith("Unsupported file type")

    def test_requires_auth(self, client, chat_provider):
        response = client.post(
            "/api/ai/import-document",
            files={"file": ("enero.csv", STATEMENT_CSV, "text/csv")},
        )
        assert response.status_code == 401
        chat_provider.complete.assert_not_called()

    def test_counts_against_ai_budget(self, client, container, auth_headers, chat_provider):
        container.settings.ai_rate_limit_max = 1
        files = {"file": ("enero.csv", STATEMENT_CSV, "text/csv")}
        assert client.post("/api/ai/import-document", files=files, headers=auth_headers).status_code == 200

        response = client.post("/api/ai/import-document", files=files, headers=auth_headers)

        assert response.status_code == 429
        assert response.headers["RateLimit-Remaining"] == "0"
