import re

from rest_framework import serializers

from makro_news.models import ASSET_TYPE_VALUES

TIME_RANGES = ("1h", "6h", "24h", "3d", "7d", "30d")
SENTIMENT_BUCKETS = ("all", "positive", "negative", "neutral")

_UNSAFE_SEARCH_RE = re.compile(r"[<>'\";`]")


def sanitize_search(value: str) -> str:
    return _UNSAFE_SEARCH_RE.sub("", value).strip()[:200]


class NewsFilterSerializer(serializers.Serializer):
    """Query-string filters of the news listing (list params may repeat)."""

    time_range = serializers.ChoiceField(choices=TIME_RANGES, default="24h")
    asset_type = serializers.ListField(
        child=serializers.ChoiceField(choices=ASSET_TYPE_VALUES), required=False
    )
    source = serializers.ListField(
        child=serializers.CharField(min_length=1, max_length=100), required=False
    )
    ticker = serializers.ListField(
        child=serializers.CharField(min_length=1, max_length=10), required=False
    )
    search = serializers.CharField(max_length=200, required=False, allow_blank=True)
    sentiment = serializers.ChoiceField(choices=SENTIMENT_BUCKETS, default="all")
    limit = serializers.IntegerField(min_value=1, max_value=100, default=100)

    def to_filters(self) -> dict:
        data = self.validated_data
        return {
            "time_range": data["time_range"],
            "asset_types": data.get("asset_type", []),
            "sources": data.get("source", []),
            "tickers": [t.upper() for t in data.get("ticker", [])],
            "search": sanitize_search(data.get("search", "")),
            "sentiment": data["sentiment"],
        }


class PreprocessRequestSerializer(serializers.Serializer):
    mode = serializers.ChoiceField(choices=["default", "all", "cleanup"], default="default")
