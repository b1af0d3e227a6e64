from __future__ import annotations

import hashlib
import re
from typing import Iterable, List
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

_TICKER_RE = re.compile(r"\$([A-Z]{1,5})\b|\b([A-Z]{2,5})\b")

_TRACKING_PARAMS = {"ref", "fbclid", "gclid", "mc_cid", "mc_eid"}

TAG_KEYWORDS: dict[str, list[str]] = {
    "earnings": ["earnings", "profit", "revenue", "eps"],
    "merger": ["merger", "acquisition", "buyout", "takeover"],
    "ipo": ["ipo", "initial public offering", "going public"],
    "dividend": ["dividend", "payout", "yield"],
    "guidance": ["guidance", "forecast", "outlook"],
    "upgrade": ["upgrade", "downgrade", "analyst", "rating"],
    "breaking": ["breaking", "alert", "just in"],
}


def generate_hash(value: str) -> str:
    """sha256 hex digest, the dedup key of a news item."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def extract_tickers(text: str, known_symbols: Iterable[str] | None = None) -> List[str]:
    """
    `$TSLA` style cashtags and bare 2-5 letter uppercase tokens, first-seen order.
    Without *known_symbols* ordinary acronyms (CEO, GDP ...) come through too.
    """
    found: List[str] = []
    for match in _TICKER_RE.finditer(text or ""):
        symbol = match.group(1) or match.group(2)
        if symbol and len(symbol) >= 2 and symbol not in found:
            found.append(symbol)

    if known_symbols is not None:
        allowed = set(known_symbols)
        found = [s for s in found if s in allowed]
    return found


def extract_tags(text: str) -> List[str]:
    lower = (text or "").lower()
    return [
        tag
        for tag, keywords in TAG_KEYWORDS.items()
        if any(kw in lower for kw in keywords)
    ]


def normalize_url(url: str) -> str:
    """Lower-cased URL without tracking params (utm_*, ref, fbclid ...) or fragment."""
    try:
        scheme, netloc, path, query, _ = urlsplit(url)
        keep = [
            (k, v)
            for k, v in parse_qsl(query, keep_blank_values=True)
            if not k.lower().startswith("utm_") and k.lower() not in _TRACKING_PARAMS
        ]
        return urlunsplit((scheme, netloc, path, urlencode(keep), "")).lower()
    except ValueError:
        return url.lower()


def calculate_relevance(
    sentiment: float | None, ticker_count: int, is_breaking: bool = False
) -> float:
    score = 0.5
    if sentiment is not None:
        score += abs(sentiment) * 0.2
    if ticker_count > 0:
        score += min(ticker_count * 0.1, 0.2)
    if is_breaking:
        score += 0.2
    return min(score, 1.0)
