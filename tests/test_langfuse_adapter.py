from __future__ import annotations

import sys
from types import SimpleNamespace

import pytest

from ir_assistant.infrastructure.observability.langfuse_adapter import LangfuseObservabilityHandler


class FakeCallbackHandler:
    pass


@pytest.fixture
def flushed(monkeypatch: pytest.MonkeyPatch) -> list[bool]:
    calls: list[bool] = []
    fake_client = SimpleNamespace(flush=lambda: calls.append(True))
    monkeypatch.setitem(sys.modules, "langfuse", SimpleNamespace(get_client=lambda: fake_client))
    monkeypatch.setitem(
        sys.modules, "langfuse.langchain", SimpleNamespace(CallbackHandler=FakeCallbackHandler)
    )
    return calls


def test_run_config_tags_trace_and_groups_by_session(flushed: list[bool]) -> None:
    config = LangfuseObservabilityHandler().run_config("session-42")

    [callback] = config["callbacks"]
    assert isinstance(callback, FakeCallbackHandler)
    assert config["metadata"] == {
        "langfuse_tags": ["ir-assistant"],
        "langfuse_session_id": "session-42",
    }


def test_run_config_without_session_only_tags(flushed: list[bool]) -> None:
    config = LangfuseObservabilityHandler(tags=["ir-assistant", "staging"]).run_config()

    assert config["metadata"] == {"langfuse_tags": ["ir-assistant", "staging"]}


def test_callback_handler_is_shared_across_runs(flushed: list[bool]) -> None:
    handler = LangfuseObservabilityHandler()

    first = handler.run_config("a")["callbacks"][0]
    second = handler.run_config("b")["callbacks"][0]

    assert first is second


def test_flush_delegates_to_langfuse_client(flushed: list[bool]) -> None:
    LangfuseObservabilityHandler().flush()

    assert flushed == [True]
