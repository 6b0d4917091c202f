"""
LangGraph chat pipeline state definition.
langgraph is the orchestration framework and is allowed in the application layer.
"""

from typing import Optional, TypedDict

from ir_assistant.domain.entities.conversation import ConversationTurn
from ir_assistant.domain.entities.quote import Quote


class ChatState(TypedDict, total=False):
    """State threaded through every node of one chat request.

    message:    trimmed user message.
    history:    caller-supplied turns, replayed verbatim.
    symbol:     ticker detected in the message, if any.
    quote:      quote fetched for *symbol*, if the lookup succeeded.
    turns:      full turn sequence sent to the completion backend.
    completion: raw assistant text.
    reply:      final display text.
    """

    message: str
    history: list[ConversationTurn]
    symbol: Optional[str]
    quote: Optional[Quote]
    turns: list[ConversationTurn]
    completion: str
    reply: str
