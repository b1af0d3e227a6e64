"""
Keyword/weight asset-type classifier.

Every category owns groups of (keywords, weight). A category scores the sum of
the weights of its keywords found as substrings of the lower-cased text; the
best-scoring category wins. Ties go to the category declared first in
`AssetType`, which keeps results stable from run to run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from makro_news.models.asset_type import ASSET_TYPE_VALUES, AssetType

MULTI_LABEL_THRESHOLD = 0.5

PATTERNS: Dict[str, List[Tuple[List[str], float]]] = {
    AssetType.EQUITY: [
        (
            [
                "stock", "shares", "earnings", "revenue", "profit", "loss",
                "q1", "q2", "q3", "q4", "quarterly", "annual report",
                "dividend", "buyback",
            ],
            1.0,
        ),
        (["nasdaq", "nyse", "ipo", "listing", "delist"], 0.9),
        (["beat expectations", "miss estimates", "guidance", "forecast"], 0.8),
    ],
    AssetType.ETF: [
        (
            [
                "etf", "exchange traded fund", "index fund", "tracker", "spdr",
                "ishares", "vanguard", "ark invest",
            ],
            1.0,
        ),
        (["flows", "inflows", "outflows", "aum", "assets under management"], 0.8),
    ],
    AssetType.FUND: [
        (
            [
                "mutual fund", "hedge fund", "pension fund",
                "sovereign wealth fund", "nbim", "gpfg",
            ],
            1.0,
        ),
        (["fund manager", "portfolio", "allocation"], 0.7),
    ],
    AssetType.ADR: [
        (["adr", "american depositary receipt", "foreign listing"], 1.0),
    ],
    AssetType.CRYPTO: [
        (
            [
                "bitcoin", "btc", "ethereum", "eth", "crypto", "cryptocurrency",
                "blockchain", "token", "altcoin", "defi", "web3",
            ],
            1.0,
        ),
        (["mining", "staking", "wallet", "exchange hack", "crypto scam"], 0.9),
        (["satoshi", "halving", "hard fork", "airdrop"], 0.8),
    ],
    AssetType.BOND: [
        (
            ["bond", "treasury", "yield", "fixed income", "duration", "maturity", "coupon"],
            1.0,
        ),
        (["10-year", "2-year", "30-year", "t-note", "t-bill"], 0.9),
        (["credit rating", "junk bond", "investment grade"], 0.8),
    ],
    AssetType.COMMODITY: [
        (["oil", "crude", "brent", "wti", "natural gas", "gasoline", "petrol"], 1.0),
        (["gold", "silver", "copper", "platinum", "precious metals"], 1.0),
        (["wheat", "corn", "soy", "agriculture", "grain"], 0.9),
        (["opec", "commodity", "futures", "spot price"], 0.8),
    ],
    AssetType.FOREX: [
        (["currency", "exchange rate", "usd", "eur", "gbp", "jpy", "nok"], 1.0),
        (["forex", "fx", "dollar", "euro", "yen", "pound"], 0.9),
        (["central bank", "monetary policy", "interest rate"], 0.7),
    ],
    AssetType.INDEX: [
        (["s&p 500", "nasdaq", "dow jones", "index", "benchmark"], 1.0),
        (["obx", "ftse", "dax", "cac", "nikkei", "hang seng"], 0.9),
        (["all-time high", "correction", "bear market", "bull market"], 0.8),
    ],
    AssetType.DERIVATIVE: [
        (["option", "call", "put", "future", "forward", "swap", "derivative"], 1.0),
        (["expiry", "strike price", "premium", "open interest"], 0.8),
    ],
    AssetType.OTHER: [],
    AssetType.MACRO: [
        (["fed", "gdp", "inflation", "economy", "central bank"], 0.8),
    ],
    AssetType.POLITICS: [
        (["election", "policy", "regulation", "government"], 0.8),
    ],
    AssetType.GEOPOLITICS: [
        (["war", "conflict", "sanctions", "tensions"], 0.8),
    ],
}


@dataclass(frozen=True)
class DetectionResult:
    asset_type: str
    confidence: float
    keywords: List[str] = field(default_factory=list)


def _score(lower_text: str, groups: List[Tuple[List[str], float]]) -> Tuple[float, List[str]]:
    score = 0.0
    matched: List[str] = []
    for keywords, weight in groups:
        for keyword in keywords:
            if keyword in lower_text:
                score += weight
                matched.append(keyword)
    return score, matched


def _score_all(text: str) -> List[Tuple[str, float, List[str]]]:
    lower_text = (text or "").lower()
    return [
        (asset_type, *_score(lower_text, PATTERNS.get(asset_type, [])))
        for asset_type in ASSET_TYPE_VALUES
    ]


def detect_asset_type(text: str, default_type: str = AssetType.OTHER) -> DetectionResult:
    scored = _score_all(text)

    best_type, best_score, best_keywords = default_type, 0.0, []
    for asset_type, score, keywords in scored:
        if score > best_score:  # strict: earlier category keeps a tie
            best_type, best_score, best_keywords = asset_type, score, keywords

    total = sum(score for _, score, _ in scored)
    if best_score <= 0:
        return DetectionResult(asset_type=default_type, confidence=0.0, keywords=[])

    return DetectionResult(
        asset_type=best_type,
        confidence=min(best_score / total, 1.0),
        keywords=best_keywords,
    )


def detect_multiple_asset_types(text: str) -> List[DetectionResult]:
    """All categories above the multi-label threshold, most confident first."""
    results = [
        DetectionResult(asset_type=asset_type, confidence=min(score / 3, 1.0), keywords=keywords)
        for asset_type, score, keywords in _score_all(text)
        if asset_type != AssetType.OTHER and score > MULTI_LABEL_THRESHOLD
    ]
    return sorted(results, key=lambda r: r.confidence, reverse=True)
