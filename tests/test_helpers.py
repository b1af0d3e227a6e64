import pytest

from makro_news.helpers.helpers import (
    calculate_relevance,
    extract_tags,
    extract_tickers,
    generate_hash,
    normalize_url,
)


def test_generate_hash_is_stable_and_distinct():
    assert generate_hash("abc") == generate_hash("abc")
    assert generate_hash("abc") != generate_hash("abd")
    assert len(generate_hash("abc")) == 64


def test_extract_tickers_cashtags_and_bare_symbols_in_order():
    assert extract_tickers("$TSLA and AAPL beat, CEO says $TSLA") == ["TSLA", "AAPL", "CEO"]


def test_extract_tickers_drops_single_letter_cashtag():
    assert extract_tickers("$A rallies") == []


def test_extract_tickers_with_known_symbols():
    text = "$TSLA and AAPL beat, CEO says"
    assert extract_tickers(text, known_symbols={"TSLA", "AAPL"}) == ["TSLA", "AAPL"]


def test_extract_tags():
    assert extract_tags("Breaking: Apple earnings beat") == ["earnings", "breaking"]
    assert extract_tags("Nothing to see") == []


def test_normalize_url_strips_tracking_and_fragment():
    assert (
        normalize_url("https://Ex.com/a?utm_source=tw&id=1&fbclid=x#frag")
        == "https://ex.com/a?id=1"
    )
    assert normalize_url("https://ex.com/a?utm_medium=rss") == normalize_url(
        "https://ex.com/a"
    )


@pytest.mark.parametrize("sentiment", [-1.0, -0.3, 0.0, None, 0.4, 1.0])
@pytest.mark.parametrize("tickers", [0, 1, 2, 7])
@pytest.mark.parametrize("breaking", [False, True])
def test_relevance_bounds(sentiment, tickers, breaking):
    assert 0.5 <= calculate_relevance(sentiment, tickers, breaking) <= 1.0


def test_relevance_components():
    assert calculate_relevance(0.0, 0) == 0.5
    assert calculate_relevance(0.5, 1) == pytest.approx(0.7)
    assert calculate_relevance(-0.5, 3, True) == pytest.approx(1.0)
