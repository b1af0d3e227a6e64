import datetime as dt

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from makro_news.models import AssetType, PreprocessedCache, RssSource, Ticker
from makro_news.news.ingest import IngestReport

pytestmark = pytest.mark.django_db


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def recent(news_item):
    def _make(**overrides):
        overrides.setdefault("published_at", timezone.now() - dt.timedelta(hours=1))
        return news_item(**overrides)

    return _make


def test_news_listing(client, recent):
    recent(title="Bitcoin rally", asset_type=AssetType.CRYPTO, tickers=["BTC"])
    recent(title="Fed holds", asset_type=AssetType.MACRO)

    resp = client.get("/api/news/", {"time_range": "24h", "asset_type": ["CRYPTO"]})

    assert resp.status_code == 200
    body = resp.json()
    assert [n["title"] for n in body["news"]] == ["Bitcoin rally"]
    assert body["news"][0]["tickers"] == [{"symbol": "BTC"}]
    assert body["stats"]["total_count"] == 1
    assert body["from_cache"] is False

    again = client.get("/api/news/", {"time_range": "24h", "asset_type": ["CRYPTO"]}).json()
    assert again["from_cache"] is True
    assert again["news"] == body["news"]


def test_news_ticker_filter_is_case_insensitive(client, recent):
    recent(title="Ether upgrade", tickers=["ETH"])

    body = client.get("/api/news/", {"ticker": "eth"}).json()

    assert [n["title"] for n in body["news"]] == ["Ether upgrade"]


def test_news_filters_use_snake_case_names(client, recent):
    recent(title="Old macro", published_at=timezone.now() - dt.timedelta(hours=3))
    recent(title="Fresh crypto", asset_type=AssetType.CRYPTO)

    body = client.get("/api/news/", {"time_range": "1h", "asset_type": "CRYPTO"}).json()

    assert [n["title"] for n in body["news"]] == ["Fresh crypto"]
    assert "by_asset_type" in body["stats"]
    assert "asset_type" in body["news"][0]


def test_small_limit_does_not_leak_into_default_listing(client, recent):
    for _ in range(3):
        recent()

    limited = client.get("/api/news/", {"limit": 1}).json()
    full = client.get("/api/news/").json()

    assert len(limited["news"]) == 1
    assert full["from_cache"] is False
    assert len(full["news"]) == 3


@pytest.mark.parametrize(
    "params",
    [{"time_range": "2y"}, {"limit": 500}, {"asset_type": "STAMPS"}, {"sentiment": "angry"}],
)
def test_news_rejects_invalid_filters(client, params):
    assert client.get("/api/news/", params).status_code == 400


def test_filter_options(client, recent):
    recent(source="Reuters")
    recent(source="CNBC")
    recent(source="Reuters")
    Ticker.objects.create(symbol="AAPL", name="Apple Inc.")

    body = client.get("/api/filters/").json()

    assert body["sources"] == ["CNBC", "Reuters"]
    assert {"symbol": "AAPL", "name": "Apple Inc."} in body["tickers"]
    assert body["asset_types"][0] == "EQUITY"
    assert "GEOPOLITICS" in body["asset_types"]


# --------------------------------------------------------------------------- #
#   cron endpoints
# --------------------------------------------------------------------------- #
def test_ingest_requires_cron_secret(client, settings):
    settings.CRON_SECRET = "s3cret"

    assert client.get("/api/ingest/").status_code == 401
    assert (
        client.get("/api/ingest/", HTTP_AUTHORIZATION="Bearer wrong").status_code == 401
    )


def test_ingest_runs_with_secret(client, settings, monkeypatch):
    settings.CRON_SECRET = "s3cret"
    monkeypatch.setattr(
        "makro_news.views.ingest.run_ingestion",
        lambda: IngestReport(sources=2, saved=5, failed_sources=["Beta"]),
    )

    resp = client.get("/api/ingest/", HTTP_AUTHORIZATION="Bearer s3cret")

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert resp.json()["report"]["saved"] == 5
    assert resp.json()["report"]["failed_sources"] == ["Beta"]


def test_ingest_failure_is_500(client, settings, monkeypatch):
    settings.CRON_SECRET = ""

    def boom():
        raise RuntimeError("database unreachable")

    monkeypatch.setattr("makro_news.views.ingest.run_ingestion", boom)

    resp = client.get("/api/ingest/")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Ingestion failed"}


def test_preprocess_stats_are_public(client, settings):
    settings.CRON_SECRET = "s3cret"

    resp = client.get("/api/preprocess/")

    assert resp.status_code == 200
    assert resp.json()["stats"]["total_entries"] == 0


def test_preprocess_post_requires_secret(client, settings):
    settings.CRON_SECRET = "s3cret"
    assert client.post("/api/preprocess/", {"mode": "all"}, format="json").status_code == 401


def test_preprocess_modes(client, settings):
    settings.CRON_SECRET = ""

    resp = client.post("/api/preprocess/", {}, format="json")
    assert resp.status_code == 200
    assert resp.json()["mode"] == "default"
    assert resp.json()["stats"]["total_entries"] == 1

    resp = client.post("/api/preprocess/", {"mode": "all"}, format="json")
    assert resp.json()["stats"]["total_entries"] == 16

    PreprocessedCache.objects.update(expires_at=timezone.now() - dt.timedelta(minutes=1))
    resp = client.post("/api/preprocess/", {"mode": "cleanup"}, format="json")
    assert resp.json()["success"] is True
    assert resp.json()["cleaned"] == 16

    assert client.post("/api/preprocess/", {"mode": "common"}, format="json").status_code == 400


# --------------------------------------------------------------------------- #
#   sources CRUD
# --------------------------------------------------------------------------- #
def test_sources_require_authentication(client):
    assert client.get("/api/sources/").status_code == 401


def test_sources_crud(client):
    user = get_user_model().objects.create_user("editor", password="pw")
    client.force_authenticate(user)

    resp = client.post(
        "/api/sources/",
        {"name": "Kitco", "url": "https://www.kitco.com/rss/news.rss", "asset_type": "COMMODITY"},
        format="json",
    )
    assert resp.status_code == 201
    assert resp.json()["fetch_count"] == 0

    source_id = resp.json()["id"]
    resp = client.patch(f"/api/sources/{source_id}/", {"is_active": False}, format="json")
    assert resp.status_code == 200
    assert RssSource.objects.get(pk=source_id).is_active is False

    assert client.delete(f"/api/sources/{source_id}/").status_code == 204
    assert not RssSource.objects.exists()
