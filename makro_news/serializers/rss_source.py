from rest_framework import serializers

from makro_news.models import RssSource


class RssSourceSerializer(serializers.ModelSerializer):
    class Meta:
        model = RssSource
        fields = (
            "id",
            "name",
            "url",
            "asset_type",
            "is_active",
            "last_fetched",
            "fetch_count",
            "created",
        )
        read_only_fields = ("last_fetched", "fetch_count", "created")
