"""
Default RSS sources and reference tickers, upserted by `manage.py seed_sources`.
"""

from __future__ import annotations

from typing import Tuple

from makro_news.models import AssetType, RssSource, Ticker

DEFAULT_SOURCES = [
    # Major financial news
    ("MarketWatch", "https://feeds.marketwatch.com/marketwatch/topstories", AssetType.MACRO),
    ("Yahoo Finance", "https://finance.yahoo.com/rss/topstories", AssetType.MACRO),
    ("CNBC", "https://www.cnbc.com/id/100003114/device/rss/rss.html", AssetType.MACRO),
    (
        "Reuters",
        "https://www.reutersagency.com/feed/?taxonomy=markets&post_type=reuters-best",
        AssetType.MACRO,
    ),
    ("Financial Times", "https://www.ft.com/?format=rss", AssetType.MACRO),
    ("WSJ", "https://feeds.a.dj.com/rss/RSSMarketsMain.xml", AssetType.MACRO),
    ("Bloomberg", "https://feeds.bloomberg.com/markets/news.rss", AssetType.MACRO),
    # Crypto
    ("CoinDesk", "https://www.coindesk.com/arc/outboundfeeds/rss/", AssetType.CRYPTO),
    ("CoinTelegraph", "https://cointelegraph.com/rss", AssetType.CRYPTO),
    ("CryptoNews", "https://crypto.news/feed/", AssetType.CRYPTO),
    ("Bitcoin Magazine", "https://bitcoinmagazine.com/feed", AssetType.CRYPTO),
    # Tech
    ("TechCrunch", "https://techcrunch.com/feed/", AssetType.EQUITY),
    ("The Verge", "https://www.theverge.com/rss/index.xml", AssetType.EQUITY),
    ("Ars Technica", "https://arstechnica.com/feed/", AssetType.EQUITY),
    # Nordic
    ("E24", "https://e24.no/rss", AssetType.MACRO),
    ("Finansavisen", "https://www.finansavisen.no/rss", AssetType.MACRO),
    ("Dagens Næringsliv", "https://www.dn.no/rss", AssetType.MACRO),
    ("Børsen", "https://borsen.dk/rss", AssetType.MACRO),
    # Specialised
    ("Seeking Alpha", "https://seekingalpha.com/feed.xml", AssetType.EQUITY),
    ("Investopedia", "https://www.investopedia.com/feedprovider/news.rss", AssetType.MACRO),
    ("ZeroHedge", "https://feeds.feedburner.com/zerohedge/feed", AssetType.MACRO),
    ("Kitco", "https://www.kitco.com/rss/news.rss", AssetType.MACRO),
    # Geopolitics
    ("Foreign Policy", "https://foreignpolicy.com/feed/", AssetType.GEOPOLITICS),
    ("Stratfor", "https://worldview.stratfor.com/feed", AssetType.GEOPOLITICS),
]

DEFAULT_TICKERS = [
    ("AAPL", "Apple Inc.", AssetType.EQUITY),
    ("MSFT", "Microsoft Corp.", AssetType.EQUITY),
    ("GOOGL", "Alphabet Inc.", AssetType.EQUITY),
    ("META", "Meta Platforms", AssetType.EQUITY),
    ("TSLA", "Tesla Inc.", AssetType.EQUITY),
    ("NVDA", "NVIDIA Corp.", AssetType.EQUITY),
    ("AMZN", "Amazon.com", AssetType.EQUITY),
    ("NFLX", "Netflix Inc.", AssetType.EQUITY),
    ("JPM", "JPMorgan Chase", AssetType.EQUITY),
    ("BAC", "Bank of America", AssetType.EQUITY),
    ("GS", "Goldman Sachs", AssetType.EQUITY),
    ("MA", "Mastercard", AssetType.EQUITY),
    ("XOM", "Exxon Mobil", AssetType.EQUITY),
    ("CVX", "Chevron Corp.", AssetType.EQUITY),
    ("JNJ", "Johnson & Johnson", AssetType.EQUITY),
    ("PFE", "Pfizer Inc.", AssetType.EQUITY),
    ("UNH", "UnitedHealth", AssetType.EQUITY),
    ("BTC", "Bitcoin", AssetType.CRYPTO),
    ("ETH", "Ethereum", AssetType.CRYPTO),
    ("SOL", "Solana", AssetType.CRYPTO),
    ("COIN", "Coinbase", AssetType.EQUITY),
    ("EQNR", "Equinor", AssetType.EQUITY),
    ("NHY", "Norsk Hydro", AssetType.EQUITY),
    ("TEL", "Telenor", AssetType.EQUITY),
    ("ABB", "ABB Ltd", AssetType.EQUITY),
    ("SPY", "SPDR S&P 500", AssetType.ETF),
    ("QQQ", "Invesco QQQ", AssetType.ETF),
    ("IWM", "iShares Russell 2000", AssetType.ETF),
    ("VTI", "Vanguard Total Stock", AssetType.ETF),
    ("ARKK", "ARK Innovation", AssetType.ETF),
    ("SPX", "S&P 500", AssetType.INDEX),
    ("DJI", "Dow Jones", AssetType.INDEX),
    ("IXIC", "NASDAQ", AssetType.INDEX),
]


def seed_defaults() -> Tuple[int, int]:
    """Insert missing sources and tickers; existing rows are left untouched."""
    sources_created = 0
    for name, url, asset_type in DEFAULT_SOURCES:
        _, created = RssSource.objects.get_or_create(
            url=url, defaults={"name": name, "asset_type": asset_type}
        )
        sources_created += created

    tickers_created = 0
    for symbol, name, asset_type in DEFAULT_TICKERS:
        _, created = Ticker.objects.get_or_create(
            symbol=symbol, defaults={"name": name, "asset_type": asset_type}
        )
        tickers_created += created
    return sources_created, tickers_created
