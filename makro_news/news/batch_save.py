"""
Persist normalised feed items.

1. one query partitions the batch into new vs. already-stored hashes
2. every referenced ticker / tag is resolved (or created) to an id
3. each new item is inserted on its own savepoint, so a failure only
   costs that item
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence

from django.db import IntegrityError, transaction
from django.utils import timezone

from makro_news.analytics.sentiment import SentimentResult, analyze_sentiment_fast
from makro_news.helpers.helpers import calculate_relevance
from makro_news.models import NewsItem, Tag, Ticker
from makro_news.news.feeds import ParsedNewsItem

logger = logging.getLogger(__name__)

Scorer = Callable[[str, str | None, str | None], SentimentResult]


@dataclass
class SaveStats:
    saved: int = 0
    duplicates: int = 0
    errors: int = 0


def _split_new(items: Sequence[ParsedNewsItem]) -> List[ParsedNewsItem]:
    existing = set(
        NewsItem.objects.filter(hash__in={i.hash for i in items}).values_list(
            "hash", flat=True
        )
    )
    new_items = []
    for item in items:
        if item.hash in existing:
            continue
        existing.add(item.hash)  # same article twice in one batch
        new_items.append(item)
    return new_items


def resolve_tickers(symbols: Dict[str, str]) -> Dict[str, int]:
    """symbol → id for every symbol in *symbols* (symbol → asset type), creating missing rows."""
    if not symbols:
        return {}
    ids = dict(
        Ticker.objects.filter(symbol__in=list(symbols)).values_list("symbol", "id")
    )
    missing = [s for s in symbols if s not in ids]
    if missing:
        Ticker.objects.bulk_create(
            [Ticker(symbol=s, asset_type=symbols[s]) for s in missing],
            ignore_conflicts=True,
        )
        ids.update(
            Ticker.objects.filter(symbol__in=missing).values_list("symbol", "id")
        )
    return ids


def resolve_tags(names: Iterable[str]) -> Dict[str, int]:
    names = set(names)
    if not names:
        return {}
    ids = dict(Tag.objects.filter(name__in=names).values_list("name", "id"))
    missing = [n for n in names if n not in ids]
    if missing:
        Tag.objects.bulk_create([Tag(name=n) for n in missing], ignore_conflicts=True)
        ids.update(Tag.objects.filter(name__in=missing).values_list("name", "id"))
    return ids


def save_news_items(
    items: Sequence[ParsedNewsItem], scorer: Scorer = analyze_sentiment_fast
) -> SaveStats:
    stats = SaveStats()
    if not items:
        return stats

    new_items = _split_new(items)
    stats.duplicates = len(items) - len(new_items)
    if not new_items:
        logger.info("All %d items are duplicates", len(items))
        return stats

    symbols: Dict[str, str] = {}
    tag_names = set()
    for item in new_items:
        for symbol in item.tickers:
            symbols.setdefault(symbol, item.asset_type)
        tag_names.update(item.tags)

    ticker_ids = resolve_tickers(symbols)
    tag_ids = resolve_tags(tag_names)

    for item in new_items:
        try:
            sentiment = scorer(item.title, item.summary, item.asset_type)
            item_ticker_ids = [ticker_ids[s] for s in item.tickers if s in ticker_ids]
            item_tag_ids = [tag_ids[t] for t in item.tags if t in tag_ids]

            with transaction.atomic():
                news = NewsItem.objects.create(
                    hash=item.hash,
                    title=item.title,
                    summary=item.summary,
                    url=item.url,
                    source=item.source,
                    source_url=item.source_url,
                    published_at=item.published_at,
                    fetched_at=timezone.now(),
                    language=item.language,
                    asset_type=item.asset_type,
                    sentiment=sentiment.score,
                    relevance=calculate_relevance(
                        sentiment.score, len(item_ticker_ids), item.is_breaking
                    ),
                    is_duplicate=False,
                )
                news.tickers.set(item_ticker_ids)
                news.tags.set(item_tag_ids)
        except IntegrityError:
            # Another run stored the same hash after our pre-check.
            stats.duplicates += 1
            logger.info("Duplicate on insert: %s...", item.title[:50])
            continue
        except Exception:  # noqa: BLE001
            stats.errors += 1
            logger.exception("Failed to save: %s...", item.title[:50])
            continue

        stats.saved += 1
        if abs(sentiment.score) > 0.1:
            logger.debug("Saved %.2f - %s...", sentiment.score, item.title[:40])

    logger.info(
        "Batch save complete: %d saved, %d duplicates, %d errors",
        stats.saved,
        stats.duplicates,
        stats.errors,
    )
    return stats
