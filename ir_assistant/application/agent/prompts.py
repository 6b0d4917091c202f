"""
System prompts and prompt composition for the investor-relations assistant.
Keeping the prompts in the application layer keeps them close to the business
rules they encode, while remaining independent from any infrastructure SDK.
"""

from typing import Optional, Sequence

from ir_assistant.domain.entities.conversation import ConversationTurn
from ir_assistant.domain.entities.quote import Quote

SYSTEM_PROMPT = (
    "You are an expert in investor relations. Define financial and investment "
    "terminology clearly and concisely in the context of investor relations. "
    "Keep responses focused and professional."
)

REALTIME_SYSTEM_PROMPT = (
    "You are an expert investor relations assistant. IMPORTANT: The user has "
    "asked about a stock price, and real-time data has been provided in their "
    "message. You MUST use this real-time data in your response. Do NOT say you "
    "don't have current data or refer to knowledge cutoffs. Present the "
    "real-time stock price data clearly and professionally. For other "
    "questions, define financial and investment terminology clearly and "
    "concisely in the context of investor relations."
)


def annotate_with_quote(message: str, quote: Quote) -> str:
    """Append a machine-readable real-time data annotation to *message*."""
    return (
        f"{message}\n\n"
        f"[Real-time stock data for {quote.symbol}: "
        f"Current price: {quote.currency} {quote.price_display}, "
        f"Change: {quote.change_display} ({quote.change_percent_display}), "
        f"Previous close: {quote.currency} {quote.previous_close_display}]"
    )


def compose_turns(
    message: str,
    history: Sequence[ConversationTurn],
    quote: Optional[Quote] = None,
) -> list[ConversationTurn]:
    """Return [system directive] + history (unmodified) + [user turn]."""
    if quote is not None:
        system = ConversationTurn(role="system", content=REALTIME_SYSTEM_PROMPT)
        content = annotate_with_quote(message, quote)
    else:
        system = ConversationTurn(role="system", content=SYSTEM_PROMPT)
        content = message
    return [system, *history, ConversationTurn(role="user", content=content)]
