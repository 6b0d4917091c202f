"""
Domain entity for a point-in-time stock quote.
Zero external dependencies, pure Python dataclass only.

change and change_percent are only ever derived in Quote.from_prices(); the
display properties render them for prompts, reply blocks and HTTP payloads.
"""

from dataclasses import dataclass


def _signed(value: float) -> str:
    # round() first so -0.001 renders as "+0.00", not "-0.00"
    return f"{round(value, 2) or 0.0:+.2f}"


@dataclass(frozen=True)
class Quote:
    symbol: str
    price: float
    change: float
    change_percent: float
    currency: str
    market_state: str
    previous_close: float

    @classmethod
    def from_prices(
        cls,
        symbol: str,
        price: float,
        previous_close: float,
        currency: str = "USD",
        market_state: str = "CLOSED",
    ) -> "Quote":
        """Build a Quote, computing change and percent change against *previous_close*.

        Percent change is 0.00 when *previous_close* is zero or equal to *price*.
        """
        change = price - previous_close
        if previous_close == 0 or previous_close == price:
            change_percent = 0.0
        else:
            change_percent = change / previous_close * 100
        return cls(
            symbol=symbol,
            price=round(price, 2),
            change=round(change, 2),
            change_percent=round(change_percent, 2),
            currency=currency,
            market_state=market_state,
            previous_close=round(previous_close, 2),
        )

    @property
    def price_display(self) -> str:
        return f"{self.price:.2f}"

    @property
    def previous_close_display(self) -> str:
        return f"{self.previous_close:.2f}"

    @property
    def change_display(self) -> str:
        return _signed(self.change)

    @property
    def change_percent_display(self) -> str:
        return f"{_signed(self.change_percent)}%"
