"""
Use-case: retrieve the current real-time quote for a given symbol.
Depends only on Domain ports and entities; no infrastructure imports.
"""

from typing import Optional

from ir_assistant.domain.entities.quote import Quote
from ir_assistant.domain.ports.quote_provider_port import IQuoteProvider


class GetRealtimeQuoteUseCase:
    def __init__(self, provider: IQuoteProvider) -> None:
        self._provider = provider

    def execute(self, symbol: str) -> Optional[Quote]:
        """Fetch the current quote for *symbol* (uppercased).

        Returns None for a blank symbol or when the provider has no data.
        """
        if not symbol or not symbol.strip():
            return None
        return self._provider.get_quote(symbol.upper().strip())
