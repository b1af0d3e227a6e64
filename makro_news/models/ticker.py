from django.db import models
from model_utils.models import TimeStampedModel

from makro_news.models.asset_type import AssetType


class Ticker(TimeStampedModel):
    symbol = models.CharField(max_length=12, unique=True)
    name = models.CharField(max_length=120, blank=True, default="")
    asset_type = models.CharField(
        choices=AssetType, max_length=12, default=AssetType.EQUITY
    )

    class Meta:
        ordering = ("symbol",)

    def __str__(self):
        return self.symbol


class Tag(TimeStampedModel):
    name = models.CharField(max_length=60, unique=True)

    class Meta:
        ordering = ("name",)

    def __str__(self):
        return self.name
