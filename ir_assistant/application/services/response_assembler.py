"""
Application service: build the text shown to the user.
The quote block always comes first so real-time data is never buried under
the model's narrative.
"""

from typing import Optional

from ir_assistant.domain.entities.quote import Quote

QUOTE_DIVIDER = "\n\n---\n\n"


def format_quote_block(quote: Quote) -> str:
    return (
        f"📊 **{quote.symbol} Real-time Stock Price**\n\n"
        f"💰 **Current Price:** {quote.currency} {quote.price_display}\n"
        f"📈 **Change:** {quote.change_display} ({quote.change_percent_display})\n"
        f"📉 **Previous Close:** {quote.currency} {quote.previous_close_display}\n"
        f"🕐 **Market Status:** {quote.market_state}"
    )


def assemble_reply(text: str, quote: Optional[Quote] = None) -> str:
    if quote is None:
        return text
    return format_quote_block(quote) + QUOTE_DIVIDER + text
