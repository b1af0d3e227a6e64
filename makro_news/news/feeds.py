"""
Fetch an RSS/Atom feed and normalise its entries into ParsedNewsItem records:
trimmed title, plain-text summary, dedup hash, asset type, tickers and tags.

A feed that cannot be fetched or parsed yields an empty list; one bad
source never aborts a batch.
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List

import feedparser
import requests
from bs4 import BeautifulSoup
from dateutil import parser as date_parser
from django.conf import settings

from makro_news.analytics.asset_detector import detect_asset_type
from makro_news.helpers.helpers import extract_tags, extract_tickers, generate_hash

# --------------------------------------------------------------------------- #
logger = logging.getLogger(__name__)
UTC = dt.timezone.utc

FEED_TIMEOUT: float = getattr(settings, "NEWS_FEED_TIMEOUT", 10)
USER_AGENT: str = getattr(
    settings, "NEWS_FEED_USER_AGENT", "MakroOppdatering/1.0 (News Aggregator)"
)
MAX_AGE_DAYS: int = getattr(settings, "NEWS_MAX_AGE_DAYS", 7)
SUMMARY_MAX_LENGTH: int = getattr(settings, "NEWS_SUMMARY_MAX_LENGTH", 500)
DEFAULT_LANGUAGE = "en"

_WS_RE = re.compile(r"\s+")


class FeedFetchError(RuntimeError):
    """Raised when a feed cannot be downloaded or parsed."""


@dataclass
class ParsedNewsItem:
    hash: str
    title: str
    summary: str
    url: str
    source: str
    published_at: dt.datetime
    asset_type: str
    source_url: str | None = None
    language: str = DEFAULT_LANGUAGE
    tickers: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    @property
    def is_breaking(self) -> bool:
        return "breaking" in self.tags


# --------------------------------------------------------------------------- #
#   HELPERS
# --------------------------------------------------------------------------- #
def _utc_now() -> dt.datetime:
    return dt.datetime.now(UTC)


def _parse_dt(raw: str | None) -> dt.datetime | None:
    """Robust RFC-822/ISO date → tz-aware UTC datetime or None."""
    if not raw:
        return None
    try:
        dt_obj = date_parser.parse(raw)
        if dt_obj.tzinfo is None:
            dt_obj = dt_obj.replace(tzinfo=UTC)
        return dt_obj.astimezone(UTC)
    except (ValueError, OverflowError):
        logger.debug("Date-parse failed for %s", raw)
        return None


def clean_summary(raw: str | None, max_length: int = SUMMARY_MAX_LENGTH) -> str:
    """HTML → plain text, whitespace collapsed, hard-capped."""
    if not raw:
        return ""
    text = BeautifulSoup(raw, "html.parser").get_text(" ")
    return _WS_RE.sub(" ", text).strip()[:max_length]


def _feed_language(feed: Any) -> str:
    lang = (feed.feed.get("language") or "").strip().lower()
    return lang.split("-")[0] if lang else DEFAULT_LANGUAGE


def fetch_feed(feed_url: str) -> Any:
    try:
        resp = requests.get(
            feed_url, timeout=FEED_TIMEOUT, headers={"User-Agent": USER_AGENT}
        )
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FeedFetchError(f"GET {feed_url} failed: {exc}") from exc

    feed = feedparser.parse(resp.content)
    if feed.bozo and not feed.entries:
        raise FeedFetchError(f"Unparseable feed {feed_url}: {feed.get('bozo_exception')}")
    return feed


# --------------------------------------------------------------------------- #
#   NORMALISATION
# --------------------------------------------------------------------------- #
def normalize_entry(
    entry: Any,
    source_name: str,
    default_asset_type: str,
    *,
    fetched_at: dt.datetime,
    horizon: dt.datetime,
    source_url: str | None = None,
    language: str = DEFAULT_LANGUAGE,
    known_symbols: Iterable[str] | None = None,
) -> ParsedNewsItem | None:
    raw_title = (entry.get("title") or "").strip()
    link = (entry.get("link") or "").strip()
    if not raw_title and not link:
        return None
    title = raw_title or link

    published_at = (
        _parse_dt(entry.get("published"))
        or _parse_dt(entry.get("updated"))
        or fetched_at
    )
    if published_at < horizon:
        return None

    summary = clean_summary(entry.get("summary") or entry.get("description"))
    text = f"{title} {summary}"

    return ParsedNewsItem(
        hash=generate_hash(f"{title}{source_name}{published_at.isoformat()}"),
        title=title,
        summary=summary,
        url=link,
        source=source_name,
        source_url=source_url,
        published_at=published_at,
        language=language,
        asset_type=detect_asset_type(text, default_asset_type).asset_type,
        tickers=extract_tickers(text, known_symbols),
        tags=extract_tags(text),
    )


def parse_rss_feed(
    feed_url: str,
    source_name: str,
    default_asset_type: str,
    *,
    now: dt.datetime | None = None,
    known_symbols: Iterable[str] | None = None,
) -> List[ParsedNewsItem]:
    """
    Normalised, recency-filtered items of one feed. Any failure → [].
    """
    logger.info("Fetching RSS feed: %s", source_name)
    now = now or _utc_now()
    horizon = now - dt.timedelta(days=MAX_AGE_DAYS)
    if known_symbols is not None:
        known_symbols = set(known_symbols)

    try:
        feed = fetch_feed(feed_url)
        source_url = feed.feed.get("link")
        language = _feed_language(feed)

        items = []
        for entry in feed.entries:
            item = normalize_entry(
                entry,
                source_name,
                default_asset_type,
                fetched_at=now,
                horizon=horizon,
                source_url=source_url,
                language=language,
                known_symbols=known_symbols,
            )
            if item is not None:
                items.append(item)
    except FeedFetchError as exc:
        logger.warning("Skipping feed %s: %s", source_name, exc)
        return []
    except Exception as exc:  # noqa: BLE001
        logger.warning("Error parsing RSS feed %s: %s", source_name, exc, exc_info=True)
        return []

    logger.info("Parsed %d items from %s", len(items), source_name)
    return items
