"""
Financial news sentiment.

The fast path is a weighted bullish/bearish keyword scan. When its confidence is
low and the AI pass is allowed, a chat-completion model is asked for a JSON
verdict; any failure there falls back to the rule-based result.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from django.conf import settings
from langchain_core.messages import HumanMessage, SystemMessage

from makro_news.services.llm import get_llm, llm_configured

logger = logging.getLogger(__name__)

POSITIVE_THRESHOLD = 0.2
NEGATIVE_THRESHOLD = -0.2
MAX_CONFIDENCE = 0.95
NO_SIGNAL_CONFIDENCE = 0.5
EXPLANATION_MAX_LENGTH = 50

AI_TIMEOUT: float = getattr(settings, "SENTIMENT_AI_TIMEOUT", 3)
AI_MIN_CONFIDENCE: float = getattr(settings, "SENTIMENT_AI_MIN_CONFIDENCE", 0.7)

BULLISH_TERMS: List[Tuple[str, float]] = [
    ("surge", 1.0),
    ("soar", 1.0),
    ("rally", 1.0),
    ("skyrocket", 1.0),
    ("bullish", 1.0),
    ("record high", 0.9),
    ("all-time high", 0.9),
    ("breakout", 0.8),
    ("outperform", 0.8),
    ("upgrade", 0.8),
    ("jump", 0.8),
    ("beat", 0.7),
    ("exceed", 0.7),
    ("rebound", 0.7),
    ("optimistic", 0.7),
    ("recovery", 0.6),
    ("boost", 0.6),
    ("gain", 0.6),
    ("climb", 0.6),
    ("growth", 0.5),
    ("profit", 0.5),
    ("strong", 0.5),
    ("rise", 0.5),
    ("higher", 0.4),
    ("confident", 0.4),
]

BEARISH_TERMS: List[Tuple[str, float]] = [
    ("plunge", 1.0),
    ("crash", 1.0),
    ("plummet", 1.0),
    ("collapse", 1.0),
    ("bearish", 1.0),
    ("tumble", 0.9),
    ("sell-off", 0.9),
    ("selloff", 0.9),
    ("bankruptcy", 0.9),
    ("downgrade", 0.8),
    ("underperform", 0.8),
    ("slump", 0.8),
    ("recession", 0.8),
    ("crisis", 0.8),
    ("panic", 0.8),
    ("miss", 0.7),
    ("sink", 0.7),
    ("decline", 0.6),
    ("drop", 0.6),
    ("fall", 0.6),
    ("loss", 0.6),
    ("fear", 0.6),
    ("layoff", 0.6),
    ("weak", 0.5),
    ("warning", 0.5),
    ("lower", 0.4),
    ("concern", 0.4),
]

_SYSTEM_PROMPT = (
    "You are a financial sentiment analyzer. Analyze the sentiment of financial "
    "news and return ONLY a JSON object with:\n"
    '- "score": number between -1 (very bearish) and 1 (very bullish)\n'
    '- "label": "positive", "negative" or "neutral"\n'
    '- "confidence": number between 0 and 1\n'
    f'- "explanation": brief explanation (max {EXPLANATION_MAX_LENGTH} chars)\n'
    "Consider market reaction words (surge, plunge, rally, crash), earnings "
    "context and monetary policy implications. No other text."
)

_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
_JSON_RE = re.compile(r"\{.*\}", re.DOTALL)

_LABELS = {"positive", "negative", "neutral"}


class SentimentParseError(ValueError):
    """Raised when the AI reply does not carry the expected JSON object."""


@dataclass(frozen=True)
class SentimentResult:
    score: float
    label: str
    confidence: float
    explanation: str
    source: str = "rule-based"


def label_for_score(score: float) -> str:
    if score > POSITIVE_THRESHOLD:
        return "positive"
    if score < NEGATIVE_THRESHOLD:
        return "negative"
    return "neutral"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _matched(text: str, terms: List[Tuple[str, float]]) -> Tuple[float, int]:
    weight, hits = 0.0, 0
    for term, term_weight in terms:
        if term in text:
            weight += term_weight
            hits += 1
    return weight, hits


# --------------------------------------------------------------------------- #
#   FAST PATH
# --------------------------------------------------------------------------- #
def analyze_sentiment_fast(
    title: str, summary: str | None = None, asset_type: str | None = None
) -> SentimentResult:
    text = f"{title or ''} {summary or ''}".lower()

    positive, n_pos = _matched(text, BULLISH_TERMS)
    negative, n_neg = _matched(text, BEARISH_TERMS)
    total = positive + negative

    if total == 0:
        return SentimentResult(
            score=0.0,
            label="neutral",
            confidence=NO_SIGNAL_CONFIDENCE,
            explanation="No clear sentiment indicators",
        )

    score = _clamp((positive - negative) / max(total, 3), -1.0, 1.0)
    return SentimentResult(
        score=score,
        label=label_for_score(score),
        confidence=min(0.4 + total * 0.15, MAX_CONFIDENCE),
        explanation=f"{n_pos} bullish, {n_neg} bearish indicators",
    )


# --------------------------------------------------------------------------- #
#   AI PATH  (robust JSON extraction)
# --------------------------------------------------------------------------- #
def _extract_json(content: str) -> Dict[str, Any]:
    fenced = _FENCED_JSON_RE.search(content)
    candidate = fenced.group(1) if fenced else content.strip()
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        m = _JSON_RE.search(candidate)
        if m:
            try:
                return json.loads(m.group())
            except json.JSONDecodeError:
                pass
    raise SentimentParseError(f"No JSON object in reply: {content[:80]!r}")


def parse_ai_reply(content: str) -> SentimentResult:
    js = _extract_json(content or "")
    if not isinstance(js, dict):
        raise SentimentParseError("Reply JSON is not an object")

    score, confidence = js.get("score"), js.get("confidence")
    label, explanation = js.get("label"), js.get("explanation", "")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise SentimentParseError(f"Invalid score: {score!r}")
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise SentimentParseError(f"Invalid confidence: {confidence!r}")
    if label not in _LABELS:
        raise SentimentParseError(f"Invalid label: {label!r}")
    if not isinstance(explanation, str):
        raise SentimentParseError("Invalid explanation")

    return SentimentResult(
        score=_clamp(float(score), -1.0, 1.0),
        label=label,
        confidence=_clamp(float(confidence), 0.0, 1.0),
        explanation=explanation[:EXPLANATION_MAX_LENGTH],
        source="ai",
    )


def _build_prompt(title: str, summary: str | None, asset_type: str | None, source: str) -> str:
    return (
        "Analyze the sentiment of this financial news:\n\n"
        f"TITLE: {title}\n"
        f"SUMMARY: {summary or 'N/A'}\n"
        f"SOURCE: {source or 'N/A'}\n"
        f"ASSET TYPE: {asset_type or 'OTHER'}\n\n"
        "Return sentiment as JSON with score, label, confidence and explanation."
    )


def analyze_sentiment_ai(
    title: str, summary: str | None, asset_type: str | None, source: str = ""
) -> SentimentResult:
    llm = get_llm(timeout=AI_TIMEOUT)
    resp = llm.invoke(
        [
            SystemMessage(content=_SYSTEM_PROMPT),
            HumanMessage(content=_build_prompt(title, summary, asset_type, source)),
        ]
    )
    return parse_ai_reply(resp.content if hasattr(resp, "content") else str(resp))


def ai_permitted(allow_ai: bool | None = None) -> bool:
    if allow_ai is None:
        allow_ai = getattr(settings, "SENTIMENT_AI_ENABLED", False)
    return bool(allow_ai) and llm_configured()


def analyze_sentiment(
    title: str,
    summary: str | None = None,
    asset_type: str | None = None,
    source: str = "",
    allow_ai: bool | None = None,
) -> SentimentResult:
    """
    Rule-based verdict, escalated to the AI model when it is unsure.
    Never raises because of the AI pass: `source` tells which path answered.
    """
    fast = analyze_sentiment_fast(title, summary, asset_type)
    if fast.confidence >= AI_MIN_CONFIDENCE or not ai_permitted(allow_ai):
        return fast

    try:
        return analyze_sentiment_ai(title, summary, asset_type, source)
    except SentimentParseError as exc:
        logger.warning("AI sentiment reply unusable, using rules: %s", exc)
    except Exception as exc:  # noqa: BLE001
        # Timeout, auth, transport ... the rule-based verdict stands.
        logger.warning("AI sentiment failed for %r: %s", (title or "")[:40], exc)
    return fast
