"""
Infrastructure adapter: OpenAI-compatible chat completions (ChatOpenAI) → ILanguageModel.

All ChatOpenAI / openai SDK details are confined here. SDK exceptions are
translated into CompletionError so the application layer can classify
failures without importing openai or httpx. Groq is the default backend; any
OpenAI-compatible endpoint works by changing base_url.
"""

from typing import Any, Optional

import httpx
import openai
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from ir_assistant.domain.entities.conversation import ConversationTurn
from ir_assistant.domain.errors import CompletionError, EmptyCompletionError
from ir_assistant.domain.ports.llm_port import ILanguageModel


_MESSAGE_TYPES = {
    "system": SystemMessage,
    "user": HumanMessage,
    "assistant": AIMessage,
}


class OpenAICompatibleChatAdapter(ILanguageModel):
    """Wraps ChatOpenAI and exposes the ILanguageModel interface."""

    BASE_URL = "https://api.groq.com/openai/v1"
    MODEL_ID = "llama-3.1-8b-instant"
    TEMPERATURE = 0.7
    MAX_TOKENS = 500

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        model: str = MODEL_ID,
        timeout: float = 30.0,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        """
        Args:
            api_key:     Bearer token for the completion backend.
            base_url:    OpenAI-compatible API root.
            model:       Model identifier sent with every request.
            timeout:     Per-request timeout in seconds.
            http_client: Optional pre-configured httpx client (used by tests).
        """
        # The output cap goes through extra_body so the wire key stays "max_tokens";
        # ChatOpenAI's own max_tokens field is sent as "max_completion_tokens",
        # which older OpenAI-compatible servers ignore.
        self._llm = ChatOpenAI(
            model=model,
            api_key=api_key,
            base_url=base_url,
            temperature=self.TEMPERATURE,
            extra_body={"max_tokens": self.MAX_TOKENS},
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    def invoke(self, turns: list[ConversationTurn], config: Optional[Any] = None) -> str:
        messages = [self._to_lc_message(turn) for turn in turns]
        try:
            response = self._llm.invoke(messages, config=config)
        except openai.APIStatusError as exc:
            raise CompletionError(
                f"Completion backend returned {exc.status_code}",
                status_code=exc.status_code,
                detail=_upstream_detail(exc),
            ) from exc
        except openai.APITimeoutError as exc:
            raise CompletionError("Completion backend timed out") from exc
        except openai.APIConnectionError as exc:
            raise CompletionError(
                "Could not reach completion backend",
                unreachable=isinstance(exc.__cause__, httpx.ConnectError),
            ) from exc

        content = response.content if isinstance(response.content, str) else ""
        if not content.strip():
            raise EmptyCompletionError("No response from AI")
        return content

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _to_lc_message(turn: ConversationTurn) -> BaseMessage:
        return _MESSAGE_TYPES[turn.role](content=turn.content)


def _upstream_detail(exc: openai.APIStatusError) -> Optional[str]:
    """Return error.message from the backend's JSON body, if it has one."""
    try:
        payload = exc.response.json()
    except ValueError:
        return None
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return None
