from __future__ import annotations

import pytest

from fakes import FakeLanguageModel, FakeQuoteProvider
from ir_assistant.application.agent.graph import build_chat_graph
from ir_assistant.application.use_cases.get_realtime_quote import GetRealtimeQuoteUseCase
from ir_assistant.application.use_cases.run_chat import RunChatUseCase
from ir_assistant.domain.entities.quote import Quote


@pytest.fixture
def apple_quote() -> Quote:
    return Quote.from_prices(
        symbol="AAPL",
        price=150.0,
        previous_close=100.0,
        currency="USD",
        market_state="OPEN",
    )


@pytest.fixture
def quote_provider(apple_quote: Quote) -> FakeQuoteProvider:
    return FakeQuoteProvider(apple_quote)


@pytest.fixture
def llm() -> FakeLanguageModel:
    return FakeLanguageModel()


@pytest.fixture
def chat_use_case(quote_provider: FakeQuoteProvider, llm: FakeLanguageModel) -> RunChatUseCase:
    graph = build_chat_graph(GetRealtimeQuoteUseCase(quote_provider), llm)
    return RunChatUseCase(graph)
