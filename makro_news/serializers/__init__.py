from makro_news.serializers.filters import NewsFilterSerializer, PreprocessRequestSerializer
from makro_news.serializers.news import NewsItemSerializer
from makro_news.serializers.rss_source import RssSourceSerializer

__all__ = [
    "NewsFilterSerializer",
    "NewsItemSerializer",
    "PreprocessRequestSerializer",
    "RssSourceSerializer",
]
