import datetime as dt
import itertools
from email.utils import format_datetime
from types import SimpleNamespace

import pytest

from makro_news.models import AssetType, NewsItem
from makro_news.news.feeds import ParsedNewsItem

UTC = dt.timezone.utc
NOW = dt.datetime(2026, 1, 15, 12, 0, tzinfo=UTC)

_counter = itertools.count()


class FakeClock:
    def __init__(self, start=NOW):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += dt.timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rss_feed():
    """Render (title, link, published, description) tuples as an RSS 2.0 document."""

    def _build(entries, language="en-us", link="https://news.example.com"):
        items = []
        for title, url, published, description in entries:
            parts = []
            if title is not None:
                parts.append(f"<title>{title}</title>")
            if url is not None:
                parts.append(f"<link>{url}</link>")
            if published is not None:
                parts.append(f"<pubDate>{format_datetime(published)}</pubDate>")
            if description is not None:
                parts.append(f"<description><![CDATA[{description}]]></description>")
            items.append("<item>" + "".join(parts) + "</item>")
        return (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<rss version="2.0"><channel>'
            "<title>Example News</title>"
            f"<link>{link}</link>"
            f"<language>{language}</language>"
            + "".join(items)
            + "</channel></rss>"
        ).encode("utf-8")

    return _build


@pytest.fixture
def fake_get(monkeypatch):
    """Patch requests.get in the feed module; returns the list of calls made."""
    calls = []

    def _install(content=b"", status_code=200, exc=None):
        import requests

        def _get(url, timeout=None, headers=None):
            calls.append(SimpleNamespace(url=url, timeout=timeout, headers=headers))
            if exc is not None:
                raise exc

            def raise_for_status():
                if status_code >= 400:
                    raise requests.HTTPError(f"{status_code} error")

            return SimpleNamespace(
                content=content, status_code=status_code, raise_for_status=raise_for_status
            )

        monkeypatch.setattr("makro_news.news.feeds.requests.get", _get)
        return calls

    return _install


@pytest.fixture
def parsed_item():
    def _make(**overrides):
        n = next(_counter)
        data = dict(
            hash=f"{n:064x}",
            title=f"Headline {n}",
            summary="",
            url=f"https://news.example.com/{n}",
            source="Example",
            published_at=NOW - dt.timedelta(hours=1),
            asset_type=AssetType.MACRO,
        )
        data.update(overrides)
        return ParsedNewsItem(**data)

    return _make


@pytest.fixture
def news_item(db):
    def _make(tickers=(), **overrides):
        n = next(_counter)
        data = dict(
            hash=f"stored-{n}",
            title=f"Stored headline {n}",
            summary="",
            url=f"https://news.example.com/stored/{n}",
            source="Example",
            published_at=NOW - dt.timedelta(hours=1),
            fetched_at=NOW - dt.timedelta(hours=1),
            asset_type=AssetType.MACRO,
            sentiment=0.0,
        )
        data.update(overrides)
        item = NewsItem.objects.create(**data)
        if tickers:
            from makro_news.models import Ticker

            item.tickers.set(
                Ticker.objects.get_or_create(symbol=s)[0] for s in tickers
            )
        return item

    return _make
