from rest_framework import serializers

from makro_news.models import NewsItem, Tag, Ticker


class TickerRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Ticker
        fields = ("symbol",)


class TagRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ("name",)


class NewsItemSerializer(serializers.ModelSerializer):
    tickers = TickerRefSerializer(many=True, read_only=True)
    tags = TagRefSerializer(many=True, read_only=True)

    class Meta:
        model = NewsItem
        fields = (
            "id",
            "title",
            "summary",
            "url",
            "source",
            "published_at",
            "asset_type",
            "sentiment",
            "relevance",
            "tickers",
            "tags",
        )
