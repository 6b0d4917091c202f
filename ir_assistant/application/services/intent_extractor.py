"""
Application service: detect a stock-price intent in free text.

Business decisions owned here:
  - Which words signal a price question.
  - Which company names resolve to which ticker, and in what order.
  - Which symbol-shaped words are too common to be tickers.

Confident company-name matches win over loose symbol-shaped tokens. The stop
list only covers the most frequent false positives; any other capitalized
word of ticker shape can still be picked up by the bare-token pattern.
"""

import logging
import re
from types import MappingProxyType
from typing import Optional

logger = logging.getLogger(__name__)

PRICE_KEYWORDS = ("price", "share", "stock", "quote")

# Multi-word names must come before their own prefixes ("tata steel" before "tata").
COMPANY_SYMBOLS = MappingProxyType(
    {
        "apple": "AAPL",
        "microsoft": "MSFT",
        "google": "GOOGL",
        "amazon": "AMZN",
        "meta": "META",
        "tesla": "TSLA",
        "tata steel": "TATASTEEL",
        "tata": "TATASTEEL",
        "reliance": "RELIANCE",
        "infosys": "INFY",
        "tcs": "TCS",
    }
)

STOP_WORDS = frozenset(
    {
        "A", "ALL", "AM", "AN", "AND", "ARE", "AS", "AT", "BE", "BUT", "BY",
        "CAN", "DAY", "DO", "FOR", "GET", "HAD", "HAS", "HER", "HIM", "HIS",
        "HOW", "I", "IF", "IN", "IS", "IT", "ITS", "MAN", "MAY", "ME", "MY",
        "NEW", "NO", "NOT", "NOW", "OF", "OLD", "ON", "ONE", "OR", "OUR",
        "OUT", "PRICE", "QUOTE", "SEE", "SHARE", "SHE", "SO", "STOCK", "THE",
        "TO", "TWO", "UP", "USE", "WAS", "WAY", "WE", "WHAT", "WHO", "WHY",
        "YOU",
        # investor-relations vocabulary
        "CEO", "CFO", "E", "EPS", "ETF", "GDP", "IPO", "P", "ROE", "ROI",
        # contraction and possessive fragments ("nvidia's", "don't")
        "D", "LL", "M", "RE", "S", "T", "VE",
    }
)

# Exchange-qualified form first so "RELIANCE.NS"-style symbols are not cut at the dot.
_SYMBOL = r"([A-Za-z]{2,5}\.[A-Za-z]{2}|[A-Za-z]{1,5})"

SYMBOL_PATTERNS = (
    re.compile(
        rf"(?:share price|stock price|price of|quote for)\s+(?:of\s+)?{_SYMBOL}\b",
        re.IGNORECASE,
    ),
    re.compile(rf"\b{_SYMBOL}\s+(?:share|stock)\s+price", re.IGNORECASE),
    re.compile(r"\b([A-Z]{2,5}\.[A-Z]{2}|[A-Z]{1,5})\b"),
)

_COMPANY_PATTERNS = tuple(
    (re.compile(rf"\b{re.escape(name)}\b"), symbol)
    for name, symbol in COMPANY_SYMBOLS.items()
)


def has_price_keyword(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in PRICE_KEYWORDS)


def match_company(text: str) -> Optional[str]:
    """Return the ticker of the first known company named in *text*."""
    lowered = text.lower()
    for pattern, symbol in _COMPANY_PATTERNS:
        if pattern.search(lowered):
            return symbol
    return None


def match_symbol_pattern(text: str) -> Optional[str]:
    """Return the first non-stop-word candidate captured by SYMBOL_PATTERNS."""
    for pattern in SYMBOL_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        candidate = match.group(1).upper()
        if candidate in STOP_WORDS:
            continue
        return candidate
    return None


def extract_stock_symbol(text: str) -> Optional[str]:
    """Extract a ticker symbol from a user message, or None if there is no price intent.

    Precedence: company name (only when a price keyword is present), then the
    phrase patterns, then a bare uppercase token.
    """
    if has_price_keyword(text):
        symbol = match_company(text)
        if symbol:
            logger.debug("Resolved company name to %s", symbol)
            return symbol
    return match_symbol_pattern(text)
