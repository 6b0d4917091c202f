from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from fakes import FakeLanguageModel, FakeQuoteProvider
from ir_assistant.application.agent.graph import build_chat_graph
from ir_assistant.application.services.error_mapper import NETWORK_MESSAGE, RATE_LIMIT_MESSAGE
from ir_assistant.application.use_cases.get_realtime_quote import GetRealtimeQuoteUseCase
from ir_assistant.application.use_cases.run_chat import RunChatUseCase
from ir_assistant.domain.errors import CompletionError
from ir_assistant.infrastructure.entrypoints.fastapi_app import (
    INVALID_BODY,
    INVALID_HISTORY,
    MESSAGE_REQUIRED,
    create_app,
)


def _client(provider: FakeQuoteProvider, llm: FakeLanguageModel) -> TestClient:
    graph = build_chat_graph(GetRealtimeQuoteUseCase(provider), llm)
    return TestClient(create_app(RunChatUseCase(graph)))


def test_share_price_question_returns_quote_first(
    quote_provider: FakeQuoteProvider, llm: FakeLanguageModel
) -> None:
    response = _client(quote_provider, llm).post(
        "/chat", json={"message": "What is the share price of Apple?"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["stockData"] == {
        "symbol": "AAPL",
        "price": "150.00",
        "change": "+50.00",
        "changePercent": "+50.00%",
        "currency": "USD",
        "marketState": "OPEN",
        "previousClose": "100.00",
    }
    assert body["message"].startswith("📊 **AAPL Real-time Stock Price**")
    assert body["message"].endswith(llm.answer)


def test_conversation_history_is_forwarded(
    quote_provider: FakeQuoteProvider, llm: FakeLanguageModel
) -> None:
    response = _client(quote_provider, llm).post(
        "/chat",
        json={
            "message": "and what is EBITDA margin?",
            "conversationHistory": [
                {"role": "user", "content": "What is EBITDA?"},
                {"role": "assistant", "content": "Earnings before interest..."},
            ],
        },
    )

    assert response.status_code == 200
    assert "stockData" not in response.json()
    assert [t.role for t in llm.calls[0]] == ["system", "user", "assistant", "user"]


def test_blank_message_returns_400_without_outbound_calls(
    quote_provider: FakeQuoteProvider, llm: FakeLanguageModel
) -> None:
    client = _client(quote_provider, llm)

    for payload in ({"message": ""}, {"message": "   "}, {}):
        response = client.post("/chat", json=payload)
        assert response.status_code == 400
        assert response.json() == {"error": "Message is required", "success": False}

    assert quote_provider.requested == []
    assert llm.calls == []


def test_rate_limited_backend_returns_429(quote_provider: FakeQuoteProvider) -> None:
    llm = FakeLanguageModel(error=CompletionError("limited", status_code=429))

    response = _client(quote_provider, llm).post("/chat", json={"message": "hello"})

    assert response.status_code == 429
    assert response.json() == {"error": RATE_LIMIT_MESSAGE, "success": False}


def test_unreachable_backend_returns_503(quote_provider: FakeQuoteProvider) -> None:
    llm = FakeLanguageModel(error=CompletionError("dns", unreachable=True))

    response = _client(quote_provider, llm).post("/chat", json={"message": "hello"})

    assert response.status_code == 503
    assert response.json()["error"] == NETWORK_MESSAGE


def test_health_reports_status_and_timestamp(
    quote_provider: FakeQuoteProvider, llm: FakeLanguageModel
) -> None:
    response = _client(quote_provider, llm).get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "timestamp" in response.json()


@pytest.mark.parametrize(
    ("payload", "expected_message"),
    [
        ({"message": 123}, MESSAGE_REQUIRED),
        ({"message": ["hi"]}, MESSAGE_REQUIRED),
        ({"message": "hello", "conversationHistory": "nope"}, INVALID_HISTORY),
        (
            {"message": "hello", "conversationHistory": [{"role": "tool", "content": "x"}]},
            INVALID_HISTORY,
        ),
        ({"message": "hello", "conversationHistory": [{"role": "user"}]}, INVALID_HISTORY),
    ],
)
def test_malformed_fields_return_400_error_body(
    quote_provider: FakeQuoteProvider,
    llm: FakeLanguageModel,
    payload: dict,
    expected_message: str,
) -> None:
    response = _client(quote_provider, llm).post("/chat", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": expected_message, "success": False}
    assert quote_provider.requested == []
    assert llm.calls == []


def test_non_json_body_returns_400_error_body(
    quote_provider: FakeQuoteProvider, llm: FakeLanguageModel
) -> None:
    response = _client(quote_provider, llm).post(
        "/chat", content=b"not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": INVALID_BODY, "success": False}
    assert llm.calls == []


def test_shutdown_hooks_run_when_app_stops(
    quote_provider: FakeQuoteProvider, llm: FakeLanguageModel
) -> None:
    closed: list[str] = []
    graph = build_chat_graph(GetRealtimeQuoteUseCase(quote_provider), llm)
    app = create_app(RunChatUseCase(graph), shutdown_hooks=[lambda: closed.append("quotes")])

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        assert closed == []

    assert closed == ["quotes"]
