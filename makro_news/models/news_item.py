from django.db import models
from django.utils import timezone
from model_utils.models import TimeStampedModel

from makro_news.models.asset_type import AssetType
from makro_news.models.ticker import Tag, Ticker


class NewsItem(TimeStampedModel):
    hash = models.CharField(max_length=64, unique=True)
    title = models.TextField()
    summary = models.TextField(null=True, blank=True)
    url = models.URLField(max_length=500, blank=True)
    source = models.CharField(max_length=100, db_index=True)
    source_url = models.URLField(max_length=500, null=True, blank=True)
    published_at = models.DateTimeField(db_index=True)
    fetched_at = models.DateTimeField(default=timezone.now)
    language = models.CharField(max_length=8, default="en")
    asset_type = models.CharField(
        choices=AssetType, max_length=12, default=AssetType.OTHER, db_index=True
    )
    sentiment = models.FloatField(null=True, blank=True)
    relevance = models.FloatField(default=0.5)
    is_duplicate = models.BooleanField(default=False)

    tickers = models.ManyToManyField(Ticker, related_name="news_items", blank=True)
    tags = models.ManyToManyField(Tag, related_name="news_items", blank=True)

    class Meta:
        ordering = ("-published_at",)

    def __str__(self):
        return f"[{self.source}] {self.title[:60]}"
