from django.db import models
from model_utils.models import TimeStampedModel

from makro_news.models.asset_type import AssetType


class RssSource(TimeStampedModel):
    name = models.CharField(max_length=100)
    url = models.URLField(max_length=500, unique=True)
    asset_type = models.CharField(
        choices=AssetType, max_length=12, default=AssetType.MACRO
    )
    is_active = models.BooleanField(default=True)
    last_fetched = models.DateTimeField(null=True, blank=True)
    fetch_count = models.PositiveIntegerField(default=0)

    def __str__(self):
        return f"{self.name} ({self.url})"
