"""
Scheduled ingestion: every active RSS source is fetched and saved in turn,
then near-duplicate URLs of the last day are flagged.
"""

from __future__ import annotations

import datetime as dt
import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from django.conf import settings
from django.db.models import F
from django.utils import timezone

from makro_news.helpers.helpers import normalize_url
from makro_news.models import NewsItem, RssSource, Ticker
from makro_news.news.batch_save import save_news_items
from makro_news.news.feeds import parse_rss_feed

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
SOURCE_DELAY: float = getattr(settings, "INGEST_SOURCE_DELAY", 1.0)
VALIDATE_TICKERS: bool = getattr(settings, "INGEST_VALIDATE_TICKERS", False)
DUPLICATE_WINDOW = dt.timedelta(hours=24)


@dataclass
class IngestReport:
    sources: int = 0
    saved: int = 0
    duplicates: int = 0
    errors: int = 0
    failed_sources: List[str] = field(default_factory=list)
    duplicates_marked: int = 0

    def as_dict(self) -> Dict[str, object]:
        return {
            "sources": self.sources,
            "saved": self.saved,
            "duplicates": self.duplicates,
            "errors": self.errors,
            "failed_sources": list(self.failed_sources),
            "duplicates_marked": self.duplicates_marked,
        }


def _touch(source: RssSource) -> None:
    RssSource.objects.filter(pk=source.pk).update(
        last_fetched=timezone.now(), fetch_count=F("fetch_count") + 1
    )


def run_ingestion(
    *,
    fetcher: Callable = parse_rss_feed,
    saver: Callable = save_news_items,
    sleep: Callable[[float], None] = time.sleep,
    delay: float = SOURCE_DELAY,
) -> IngestReport:
    """
    1. fetch + save each active source (primary-key order)
    2. a failing source is logged and skipped, the rest still run
    3. flag duplicate URLs of the last 24 h
    """
    report = IngestReport()
    sources = list(RssSource.objects.filter(is_active=True).order_by("pk"))
    report.sources = len(sources)
    logger.info("Starting ingestion for %d active sources", len(sources))

    fetch_kwargs = {}
    if VALIDATE_TICKERS:
        fetch_kwargs["known_symbols"] = set(
            Ticker.objects.values_list("symbol", flat=True)
        )

    for idx, source in enumerate(sources):
        if idx:
            sleep(delay)
        try:
            items = fetcher(source.url, source.name, source.asset_type, **fetch_kwargs)
            stats = saver(items)
            report.saved += stats.saved
            report.duplicates += stats.duplicates
            report.errors += stats.errors
            logger.info(
                "%s: %d saved, %d duplicates", source.name, stats.saved, stats.duplicates
            )
        except Exception as exc:  # noqa: BLE001
            report.failed_sources.append(source.name)
            logger.error("Error processing %s: %s", source.name, exc, exc_info=True)
        finally:
            _touch(source)

    report.duplicates_marked = cleanup_duplicates()
    logger.info(
        "Ingestion complete: %d saved, %d duplicates, %d errors, %d failed sources",
        report.saved,
        report.duplicates,
        report.errors,
        len(report.failed_sources),
    )
    return report


def cleanup_duplicates(now: dt.datetime | None = None) -> int:
    """Flag all but the earliest-fetched item of each normalised URL (last 24 h)."""
    now = now or timezone.now()
    recent = (
        NewsItem.objects.filter(
            published_at__gte=now - DUPLICATE_WINDOW, is_duplicate=False
        )
        .exclude(url="")
        .order_by("fetched_at", "id")
        .values_list("id", "url")
    )

    groups: Dict[str, List[int]] = defaultdict(list)
    for pk, url in recent:
        groups[normalize_url(url)].append(pk)

    duplicate_ids = [pk for ids in groups.values() for pk in ids[1:]]
    if not duplicate_ids:
        return 0

    marked = NewsItem.objects.filter(id__in=duplicate_ids).update(is_duplicate=True)
    logger.info("Marked %d duplicates", marked)
    return marked
