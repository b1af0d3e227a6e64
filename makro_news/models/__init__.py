from makro_news.models.asset_type import ASSET_TYPE_VALUES, AssetType
from makro_news.models.ticker import Tag, Ticker
from makro_news.models.news_item import NewsItem
from makro_news.models.rss_source import RssSource
from makro_news.models.preprocessed_cache import PreprocessedCache

__all__ = [
    "ASSET_TYPE_VALUES",
    "AssetType",
    "NewsItem",
    "PreprocessedCache",
    "RssSource",
    "Tag",
    "Ticker",
]
