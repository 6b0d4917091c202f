"""
Domain entities for a chat exchange.
Zero external dependencies, pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Optional

from ir_assistant.domain.entities.quote import Quote

ROLES = frozenset({"system", "user", "assistant"})


@dataclass(frozen=True)
class ConversationTurn:
    role: str
    content: str

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"Unknown conversation role: {self.role!r}")


@dataclass(frozen=True)
class ChatReply:
    message: str
    success: bool = True
    quote: Optional[Quote] = None
