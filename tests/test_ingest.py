import datetime as dt

import pytest
from django.db import DatabaseError
from django.utils import timezone

from makro_news.models import AssetType, NewsItem, RssSource
from makro_news.news import ingest
from makro_news.news.batch_save import SaveStats, save_news_items
from makro_news.news.feeds import parse_rss_feed
from makro_news.news.ingest import cleanup_duplicates, run_ingestion

pytestmark = pytest.mark.django_db


@pytest.fixture
def sources():
    return [
        RssSource.objects.create(name="Alpha", url="https://alpha.example.com/rss"),
        RssSource.objects.create(
            name="Beta", url="https://beta.example.com/rss", asset_type=AssetType.CRYPTO
        ),
        RssSource.objects.create(name="Gamma", url="https://gamma.example.com/rss"),
    ]


def test_failing_source_does_not_stop_the_run(sources, parsed_item):
    RssSource.objects.create(name="Off", url="https://off.example.com/rss", is_active=False)
    fetched, sleeps = [], []

    def fetcher(url, name, asset_type, **kwargs):
        fetched.append((name, asset_type))
        if name == "Beta":
            raise RuntimeError("feed exploded")
        return [parsed_item(source=name)]

    report = run_ingestion(fetcher=fetcher, sleep=sleeps.append, delay=0.25)

    assert fetched == [("Alpha", AssetType.MACRO), ("Beta", AssetType.CRYPTO), ("Gamma", AssetType.MACRO)]
    assert sleeps == [0.25, 0.25]
    assert report.sources == 3
    assert report.saved == 2
    assert report.failed_sources == ["Beta"]
    assert NewsItem.objects.count() == 2


def test_source_metadata_updated_after_every_attempt(sources):
    def fetcher(url, name, asset_type, **kwargs):
        if name == "Gamma":
            raise RuntimeError("down")
        return []

    run_ingestion(fetcher=fetcher, sleep=lambda s: None)
    run_ingestion(fetcher=fetcher, sleep=lambda s: None)

    for source in RssSource.objects.all():
        assert source.fetch_count == 2
        assert source.last_fetched is not None


def test_counts_are_summed(sources):
    def saver(items):
        return SaveStats(saved=2, duplicates=1, errors=1)

    report = run_ingestion(fetcher=lambda *a, **k: [], saver=saver, sleep=lambda s: None)

    assert (report.saved, report.duplicates, report.errors) == (6, 3, 3)


def test_identical_feed_entries_store_one_row(sources, rss_feed, fake_get):
    RssSource.objects.exclude(name="Alpha").update(is_active=False)
    published = timezone.now().replace(microsecond=0) - dt.timedelta(hours=1)
    entry = ("Fed holds rates steady", "https://alpha.example.com/fed", published, None)
    fake_get(rss_feed([entry, entry]))

    report = run_ingestion(fetcher=parse_rss_feed, saver=save_news_items, sleep=lambda s: None)

    assert NewsItem.objects.count() == 1
    assert (report.saved, report.duplicates) == (1, 1)


def test_ticker_validation_passes_known_symbols(sources, monkeypatch):
    from makro_news.models import Ticker

    Ticker.objects.create(symbol="AAPL")
    monkeypatch.setattr(ingest, "VALIDATE_TICKERS", True)
    seen = []

    def fetcher(url, name, asset_type, known_symbols=None):
        seen.append(known_symbols)
        return []

    run_ingestion(fetcher=fetcher, sleep=lambda s: None)

    assert seen == [{"AAPL"}] * 3


def test_store_failure_propagates(sources, monkeypatch):
    def broken(now=None):
        raise DatabaseError("database is gone")

    monkeypatch.setattr(ingest, "cleanup_duplicates", broken)

    with pytest.raises(DatabaseError):
        run_ingestion(fetcher=lambda *a, **k: [], sleep=lambda s: None)


# --------------------------------------------------------------------------- #
#   duplicate-URL cleanup
# --------------------------------------------------------------------------- #
def test_urls_differing_by_tracking_params_are_flagged(news_item):
    now = timezone.now()
    first = news_item(
        url="https://ex.com/story",
        published_at=now - dt.timedelta(hours=2),
        fetched_at=now - dt.timedelta(hours=2),
    )
    second = news_item(
        url="https://EX.com/story?utm_source=twitter",
        published_at=now - dt.timedelta(hours=1),
        fetched_at=now - dt.timedelta(hours=1),
    )

    assert cleanup_duplicates(now) == 1

    first.refresh_from_db()
    second.refresh_from_db()
    assert first.is_duplicate is False
    assert second.is_duplicate is True
    assert cleanup_duplicates(now) == 0


def test_cleanup_ignores_old_and_empty_urls(news_item):
    now = timezone.now()
    news_item(url="https://ex.com/old", published_at=now - dt.timedelta(days=2))
    news_item(url="https://ex.com/old?ref=rss", published_at=now - dt.timedelta(days=2))
    news_item(url="", published_at=now - dt.timedelta(hours=1))
    news_item(url="", published_at=now - dt.timedelta(hours=1))

    assert cleanup_duplicates(now) == 0
    assert not NewsItem.objects.filter(is_duplicate=True).exists()


def test_cleanup_keeps_rows(news_item):
    now = timezone.now()
    for n in range(3):
        news_item(
            url=f"https://ex.com/same?utm_campaign={n}",
            published_at=now - dt.timedelta(hours=1),
            fetched_at=now - dt.timedelta(minutes=30 - n),
        )

    assert cleanup_duplicates(now) == 2
    assert NewsItem.objects.count() == 3
    assert NewsItem.objects.filter(is_duplicate=False).count() == 1
