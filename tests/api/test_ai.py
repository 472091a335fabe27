"""Tests for the /api/ai endpoints."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from api import app
from api.dependencies import get_ai_service, get_container
from modules.ai.service import AIService
from providers.base import ModelConfig


client = TestClient(app)


@pytest.fixture
def llm():
    llm = MagicMock()
    llm.ainvoke = AsyncMock(
        return_value=AIMessage(
            content="4",
            usage_metadata={"input_tokens": 8, "output_tokens": 1, "total_tokens": 9},
        )
    )
    return llm


@pytest.fixture(autouse=True)
def ai_service(llm):
    """Route the AI service to a mocked chat model, sharing the container's stores."""
    provider = MagicMock()
    provider.get_llm.return_value = llm

    def _service():
        container = get_container()
        return AIService(
            provider=provider,
            model_config=ModelConfig(provider_type="gemini", model_id="gemini-2.0-flash", api_key="k"),
            subscriptions=container.subscriptions,
            audit=container.audit_log,
        )

    app.dependency_overrides[get_ai_service] = _service
    yield
    app.dependency_overrides.pop(get_ai_service, None)


def subscribe(headers, plan):
    response = client.post("/api/subscriptions/subscribe", json={"plan": plan}, headers=headers)
    assert response.status_code == 201


def ask(headers, query="What is 2+2?", **extra):
    return client.post("/api/ai/query", json={"query": query, **extra}, headers=headers)


class TestQuery:
    def test_requires_subscription(self, auth_headers):
        response = ask(auth_headers)

        assert response.status_code == 403
        assert response.json()["message"] == "No active subscription found"

    def test_answer(self, auth_headers, llm):
        subscribe(auth_headers, "free")

        response = ask(auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "result": "4"}
        usage = client.get("/api/subscriptions/usage", headers=auth_headers).json()
        assert usage["used"] == 1

    def test_free_plan_quota(self, auth_headers, llm):
        subscribe(auth_headers, "free")

        for _ in range(100):
            assert ask(auth_headers).status_code == 200

        response = ask(auth_headers)

        assert response.status_code == 429
        assert response.json()["quota"] == 100
        assert response.json()["used"] == 100
        assert response.json()["error"] == "QUOTA_EXCEEDED"
        assert llm.ainvoke.await_count == 100

    def test_premium_has_no_ceiling(self, auth_headers):
        subscribe(auth_headers, "premium")

        for _ in range(120):
            assert ask(auth_headers).status_code == 200

    def test_upgrade_restores_access(self, auth_headers):
        subscribe(auth_headers, "free")
        for _ in range(100):
            ask(auth_headers)

        client.put("/api/subscriptions/upgrade", json={"plan": "basic"}, headers=auth_headers)

        assert ask(auth_headers).status_code == 200

    @pytest.mark.parametrize(
        "query,error",
        [
            ("", "Query is required"),
            ("   ", "Query must be a non-empty string"),
            ("x" * 2001, "Query must be less than 2000 characters"),
        ],
    )
    def test_invalid_query(self, auth_headers, query, error):
        subscribe(auth_headers, "free")

        response = ask(auth_headers, query)

        assert response.status_code == 400
        assert response.json()["errors"] == [error]

    def test_options_forwarded(self, auth_headers):
        subscribe(auth_headers, "basic")
        response = ask(auth_headers, options={"temperature": 0.2, "maxTokens": 50})
        assert response.status_code == 200

    def test_model_failure(self, auth_headers, llm):
        subscribe(auth_headers, "free")
        llm.ainvoke.side_effect = RuntimeError("upstream unavailable")

        response = ask(auth_headers)

        assert response.status_code == 500
        assert response.json()["message"] == "Error processing AI query"
        assert response.json()["error"] == "AI_QUERY_FAILED"
        usage = client.get("/api/subscriptions/usage", headers=auth_headers).json()
        assert usage["used"] == 0


class TestHistory:
    def test_logs_and_analysis(self, auth_headers):
        subscribe(auth_headers, "basic")
        ask(auth_headers, "first")
        ask(auth_headers, "second")

        logs = client.get("/api/ai/logs", headers=auth_headers).json()
        analysis = client.get("/api/ai/analysis", headers=auth_headers).json()

        assert [entry["message"] for entry in logs] == ["second", "first"]
        assert logs[0]["type"] == "ai_query"
        assert logs[0]["metadata"]["response"] == "4"
        assert analysis == {"total_queries": 2, "average_tokens": 9.0, "max_tokens": 9}

    def test_incidents(self, auth_headers, llm):
        subscribe(auth_headers, "free")
        llm.ainvoke.side_effect = RuntimeError("upstream unavailable")
        ask(auth_headers)

        incidents = client.get("/api/ai/incidents", headers=auth_headers).json()

        assert len(incidents) == 1
        assert incidents[0]["message"] == "AI query processing failed"
        assert incidents[0]["severity"] == 2

    def test_history_requires_auth(self):
        assert client.get("/api/ai/logs").status_code == 401
