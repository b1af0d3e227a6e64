from makro_news.views.filters import filter_options
from makro_news.views.ingest import trigger_ingest
from makro_news.views.news import news_feed
from makro_news.views.preprocess import preprocess_cache
from makro_news.views.rss_source import RssSourceViewSet

__all__ = [
    "RssSourceViewSet",
    "filter_options",
    "news_feed",
    "preprocess_cache",
    "trigger_ingest",
]
