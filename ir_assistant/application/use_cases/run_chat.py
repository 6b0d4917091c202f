"""
Use-case: answer one chat message through the compiled chat pipeline graph.
langchain_core / langgraph are treated as framework (not infrastructure)
because LangGraph is the orchestration framework used in the application layer.
"""

from typing import Any, Optional, Sequence

from ir_assistant.domain.entities.conversation import ChatReply, ConversationTurn
from ir_assistant.domain.errors import InvalidChatRequestError
from ir_assistant.domain.ports.observability_port import IObservabilityHandler


class RunChatUseCase:
    def __init__(
        self,
        graph: Any,
        observability: Optional[IObservabilityHandler] = None,
    ) -> None:
        """
        Args:
            graph:         Compiled LangGraph StateGraph returned by build_chat_graph().
            observability: Optional IObservabilityHandler (e.g. Langfuse adapter).
        """
        self._graph = graph
        self._observability = observability

    def execute(
        self,
        message: Optional[str],
        history: Sequence[ConversationTurn] = (),
        session_id: Optional[str] = None,
    ) -> ChatReply:
        """Answer *message* in the context of *history*.

        Raises:
            InvalidChatRequestError: if *message* is missing or blank. Nothing
                                     else runs in that case.
            CompletionError: if the completion backend fails.
        """
        if not message or not message.strip():
            raise InvalidChatRequestError("Message is required")

        config = (
            self._observability.run_config(session_id)
            if self._observability is not None
            else {}
        )

        final_state = self._graph.invoke(
            {"message": message.strip(), "history": list(history)},
            config=config,
        )
        return ChatReply(
            message=final_state["reply"],
            success=True,
            quote=final_state.get("quote"),
        )
