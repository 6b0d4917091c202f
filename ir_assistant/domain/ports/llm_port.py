"""
Port (interface) for language model providers.
Infrastructure adapters (e.g. OpenAICompatibleChatAdapter) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ir_assistant.domain.entities.conversation import ConversationTurn


class ILanguageModel(ABC):
    @abstractmethod
    def invoke(self, turns: list[ConversationTurn], config: Optional[Any] = None) -> str:
        """Send *turns* to the model and return the assistant's text.

        Raises:
            CompletionError: on any backend or transport failure.
            EmptyCompletionError: if the backend returned no usable content.
        """
        ...
