import pytest

from makro_news.analytics.asset_detector import (
    detect_asset_type,
    detect_multiple_asset_types,
)
from makro_news.models import AssetType


def test_bitcoin_headline_is_crypto():
    result = detect_asset_type("Bitcoin surges past $45,000")

    assert result.asset_type == AssetType.CRYPTO
    assert "bitcoin" in result.keywords
    assert result.confidence == 1.0


def test_no_match_returns_default_with_zero_confidence():
    result = detect_asset_type("Quiet afternoon", AssetType.MACRO)

    assert result.asset_type == AssetType.MACRO
    assert result.confidence == 0.0
    assert result.keywords == []


def test_tie_goes_to_first_declared_category():
    # "etf" and "crypto" both weigh 1.0; ETF is declared before CRYPTO
    assert detect_asset_type("crypto etf").asset_type == AssetType.ETF
    assert detect_asset_type("etf crypto").asset_type == AssetType.ETF
    assert detect_asset_type("crypto etf").confidence == pytest.approx(0.5)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "Fed signals rate hike as inflation bites",
        "Oil and gold climb while bitcoin slides; Nasdaq index flat",
        "Treasury yields jump after election, sanctions weigh on euro",
    ],
)
def test_detection_is_deterministic_and_bounded(text):
    first = detect_asset_type(text)
    assert first == detect_asset_type(text)
    assert 0.0 <= first.confidence <= 1.0


def test_multiple_asset_types():
    results = detect_multiple_asset_types("Bitcoin and gold prices")

    assert {r.asset_type for r in results} == {AssetType.CRYPTO, AssetType.COMMODITY}
    assert all(r.confidence == pytest.approx(1 / 3) for r in results)


def test_multiple_asset_types_sorted_by_confidence():
    results = detect_multiple_asset_types("Bitcoin blockchain crypto rally lifts gold")

    assert results[0].asset_type == AssetType.CRYPTO
    assert [r.confidence for r in results] == sorted(
        (r.confidence for r in results), reverse=True
    )
