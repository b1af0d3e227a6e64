"""
Preprocessed news-feed cache.

A listing + aggregate stats payload is computed per normalised filter set and
stored in PreprocessedCache for a fixed TTL. The clock and TTL are injected so
freshness can be tested without waiting on the wall clock.
"""

from __future__ import annotations

import datetime as dt
import hashlib
import json
import logging
import time
from collections import Counter
from typing import Any, Callable, Dict, Iterable, List

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db.models import Max, Min, Q, Sum
from django.db.models.functions import Length
from django.utils import timezone

from makro_news.analytics.sentiment import NEGATIVE_THRESHOLD, POSITIVE_THRESHOLD
from makro_news.models import NewsItem, PreprocessedCache
from makro_news.serializers.news import NewsItemSerializer

logger = logging.getLogger(__name__)

CACHE_TTL_MINUTES: int = getattr(settings, "PREPROCESS_CACHE_TTL_MINUTES", 5)
DEFAULT_LIMIT = 100
DEFAULT_TIME_RANGE = "24h"

TIME_RANGES: Dict[str, dt.timedelta] = {
    "1h": dt.timedelta(hours=1),
    "6h": dt.timedelta(hours=6),
    "24h": dt.timedelta(hours=24),
    "3d": dt.timedelta(days=3),
    "7d": dt.timedelta(days=7),
    "30d": dt.timedelta(days=30),
}

COMMON_TIME_RANGES = ["1h", "6h", "24h", "7d"]
COMMON_ASSET_TYPES: List[List[str]] = [[], ["MACRO"], ["CRYPTO"], ["EQUITY"]]

TOP_TICKERS = 10
TREND_HOURS = 24

Clock = Callable[[], dt.datetime]


# --------------------------------------------------------------------------- #
#   FILTER NORMALISATION
# --------------------------------------------------------------------------- #
def _joined(values: Iterable[str] | None) -> str:
    return ",".join(sorted(values or []))


def normalize_filters(
    filters: Dict[str, Any] | None, limit: int = DEFAULT_LIMIT
) -> Dict[str, Any]:
    filters = filters or {}
    return {
        "limit": int(limit),
        "asset_types": _joined(filters.get("asset_types")),
        "sources": _joined(filters.get("sources")),
        "tickers": _joined(filters.get("tickers")),
        "time_range": filters.get("time_range") or DEFAULT_TIME_RANGE,
        "sentiment": filters.get("sentiment") or "all",
        "search": filters.get("search") or "",
    }


def generate_filter_hash(
    filters: Dict[str, Any] | None, limit: int = DEFAULT_LIMIT
) -> str:
    normalized = normalize_filters(filters, limit)
    return hashlib.sha256(
        json.dumps(normalized, sort_keys=True).encode("utf-8")
    ).hexdigest()


def resolve_time_range(time_range: str | None, now: dt.datetime) -> tuple[dt.datetime, dt.datetime]:
    delta = TIME_RANGES.get((time_range or "").lower(), TIME_RANGES[DEFAULT_TIME_RANGE])
    return now - delta, now


# --------------------------------------------------------------------------- #
#   AGGREGATES
# --------------------------------------------------------------------------- #
def calculate_stats(news: List[NewsItem]) -> Dict[str, Any]:
    by_asset_type: Counter = Counter()
    by_source: Counter = Counter()
    tickers: Counter = Counter()
    hourly: Counter = Counter()
    distribution = {"bullish": 0, "bearish": 0, "neutral": 0}

    for item in news:
        by_asset_type[item.asset_type] += 1
        by_source[item.source] += 1

        if item.sentiment is not None and item.sentiment > POSITIVE_THRESHOLD:
            distribution["bullish"] += 1
        elif item.sentiment is not None and item.sentiment < NEGATIVE_THRESHOLD:
            distribution["bearish"] += 1
        else:
            distribution["neutral"] += 1

        for ticker in item.tickers.all():
            tickers[ticker.symbol] += 1

        published = item.published_at.astimezone(dt.timezone.utc)
        hourly[published.strftime("%Y-%m-%dT%H")] += 1

    latest_hours = sorted(hourly.items())[-TREND_HOURS:]
    return {
        "total_count": len(news),
        "by_asset_type": dict(by_asset_type),
        "by_source": dict(by_source),
        "sentiment_distribution": distribution,
        "top_tickers": [
            {"symbol": symbol, "count": count}
            for symbol, count in tickers.most_common(TOP_TICKERS)
        ],
        "hourly_trend": [
            {"bucket": hour, "hour": f"{hour[11:13]}:00", "count": count}
            for hour, count in latest_hours
        ],
    }


def _sentiment_q(bucket: str) -> Q | None:
    if bucket == "positive":
        return Q(sentiment__gt=POSITIVE_THRESHOLD)
    if bucket == "negative":
        return Q(sentiment__lt=NEGATIVE_THRESHOLD)
    if bucket == "neutral":
        return Q(sentiment__isnull=True) | Q(
            sentiment__gte=NEGATIVE_THRESHOLD, sentiment__lte=POSITIVE_THRESHOLD
        )
    return None


# --------------------------------------------------------------------------- #
#   CACHE
# --------------------------------------------------------------------------- #
class NewsFeedPreprocessor:
    def __init__(self, clock: Clock | None = None, ttl: dt.timedelta | None = None):
        self.clock = clock or timezone.now
        self.ttl = ttl or dt.timedelta(minutes=CACHE_TTL_MINUTES)

    def query_news(self, filters: Dict[str, Any], limit: int, now: dt.datetime) -> List[NewsItem]:
        date_from, date_to = resolve_time_range(filters.get("time_range"), now)
        qs = NewsItem.objects.filter(
            published_at__gte=date_from,
            published_at__lte=date_to,
            is_duplicate=False,
        )
        if filters.get("asset_types"):
            qs = qs.filter(asset_type__in=filters["asset_types"])
        if filters.get("sources"):
            qs = qs.filter(source__in=filters["sources"])
        if filters.get("tickers"):
            qs = qs.filter(tickers__symbol__in=filters["tickers"]).distinct()
        if filters.get("search"):
            search = filters["search"]
            qs = qs.filter(Q(title__icontains=search) | Q(summary__icontains=search))
        sentiment_q = _sentiment_q(filters.get("sentiment") or "all")
        if sentiment_q is not None:
            qs = qs.filter(sentiment_q)

        return list(
            qs.prefetch_related("tickers", "tags").order_by("-published_at", "-id")[:limit]
        )

    def preprocess(
        self,
        filters: Dict[str, Any] | None = None,
        limit: int = DEFAULT_LIMIT,
        force: bool = False,
    ) -> Dict[str, Any]:
        filters = filters or {}
        filter_hash = generate_filter_hash(filters, limit)
        now = self.clock()

        if not force:
            cached = PreprocessedCache.objects.filter(
                filter_hash=filter_hash, expires_at__gt=now
            ).first()
            if cached is not None:
                logger.debug("Cache HIT for %s", filter_hash[:8])
                return {**json.loads(cached.data), "from_cache": True}

        logger.info(
            "Cache MISS for %s (time_range=%s), generating",
            filter_hash[:8],
            filters.get("time_range") or DEFAULT_TIME_RANGE,
        )
        news = self.query_news(filters, limit, now)
        payload = json.dumps(
            {
                "news": NewsItemSerializer(news, many=True).data,
                "stats": calculate_stats(news),
            },
            cls=DjangoJSONEncoder,
        )

        PreprocessedCache.objects.update_or_create(
            filter_hash=filter_hash,
            defaults={
                "data": payload,
                "generated_at": now,
                "expires_at": now + self.ttl,
            },
        )
        return {**json.loads(payload), "from_cache": False}

    def warm_common_filters(self) -> int:
        logger.info("Starting batch preprocessing...")
        started = time.monotonic()
        processed = 0
        for time_range in COMMON_TIME_RANGES:
            for asset_types in COMMON_ASSET_TYPES:
                self.preprocess(
                    {"time_range": time_range, "asset_types": asset_types},
                    DEFAULT_LIMIT,
                    force=True,
                )
                processed += 1
        logger.info(
            "Completed %d filter combinations in %.2fs",
            processed,
            time.monotonic() - started,
        )
        return processed

    def purge_expired(self) -> int:
        deleted, _ = PreprocessedCache.objects.filter(expires_at__lt=self.clock()).delete()
        logger.info("Cleaned %d expired cache entries", deleted)
        return deleted

    def cache_stats(self) -> Dict[str, Any]:
        agg = PreprocessedCache.objects.aggregate(
            oldest=Min("generated_at"),
            newest=Max("generated_at"),
            size=Sum(Length("data")),
        )
        return {
            "total_entries": PreprocessedCache.objects.count(),
            "total_size_bytes": agg["size"] or 0,
            "oldest_entry": agg["oldest"],
            "newest_entry": agg["newest"],
        }


_default = NewsFeedPreprocessor()


def preprocess_news_feed(
    filters: Dict[str, Any] | None = None, limit: int = DEFAULT_LIMIT
) -> Dict[str, Any]:
    return _default.preprocess(filters, limit)


def warm_common_filters() -> int:
    return _default.warm_common_filters()


def purge_expired_cache() -> int:
    return _default.purge_expired()


def get_cache_stats() -> Dict[str, Any]:
    return _default.cache_stats()
