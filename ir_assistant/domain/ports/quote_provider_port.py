"""
Port (interface) for real-time quote providers.
Infrastructure adapters (e.g. YahooChartQuoteProvider) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ir_assistant.domain.entities.quote import Quote


class IQuoteProvider(ABC):
    @abstractmethod
    def get_quote(self, symbol: str) -> Optional[Quote]:
        """Return the latest quote for *symbol*, or None when it cannot be fetched.

        Implementations must not raise: lookup failures degrade to None.
        """
        ...
