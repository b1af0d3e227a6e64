import django.utils.timezone
import model_utils.fields
from django.db import migrations, models

ASSET_TYPE_CHOICES = [
    ("EQUITY", "Stocks"),
    ("ETF", "ETF"),
    ("FUND", "Funds"),
    ("ADR", "ADR"),
    ("CRYPTO", "Crypto"),
    ("BOND", "Bonds"),
    ("COMMODITY", "Commodities"),
    ("FOREX", "Forex"),
    ("INDEX", "Indices"),
    ("DERIVATIVE", "Derivatives"),
    ("OTHER", "Other"),
    ("MACRO", "Macro"),
    ("POLITICS", "Politics"),
    ("GEOPOLITICS", "Geopolitics"),
]


def _timestamps():
    return [
        (
            "created",
            model_utils.fields.AutoCreatedField(
                default=django.utils.timezone.now,
                editable=False,
                verbose_name="created",
            ),
        ),
        (
            "modified",
            model_utils.fields.AutoLastModifiedField(
                default=django.utils.timezone.now,
                editable=False,
                verbose_name="modified",
            ),
        ),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Tag",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                *_timestamps(),
                ("name", models.CharField(max_length=60, unique=True)),
            ],
            options={"ordering": ("name",)},
        ),
        migrations.CreateModel(
            name="Ticker",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                *_timestamps(),
                ("symbol", models.CharField(max_length=12, unique=True)),
                ("name", models.CharField(blank=True, default="", max_length=120)),
                (
                    "asset_type",
                    models.CharField(
                        choices=ASSET_TYPE_CHOICES, default="EQUITY", max_length=12
                    ),
                ),
            ],
            options={"ordering": ("symbol",)},
        ),
        migrations.CreateModel(
            name="RssSource",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                *_timestamps(),
                ("name", models.CharField(max_length=100)),
                ("url", models.URLField(max_length=500, unique=True)),
                (
                    "asset_type",
                    models.CharField(
                        choices=ASSET_TYPE_CHOICES, default="MACRO", max_length=12
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("last_fetched", models.DateTimeField(blank=True, null=True)),
                ("fetch_count", models.PositiveIntegerField(default=0)),
            ],
            options={"abstract": False},
        ),
        migrations.CreateModel(
            name="PreprocessedCache",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("filter_hash", models.CharField(max_length=64, unique=True)),
                ("data", models.TextField()),
                ("generated_at", models.DateTimeField()),
                ("expires_at", models.DateTimeField(db_index=True)),
            ],
            options={
                "verbose_name": "Preprocessed cache entry",
                "verbose_name_plural": "Preprocessed cache entries",
            },
        ),
        migrations.CreateModel(
            name="NewsItem",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                *_timestamps(),
                ("hash", models.CharField(max_length=64, unique=True)),
                ("title", models.TextField()),
                ("summary", models.TextField(blank=True, null=True)),
                ("url", models.URLField(blank=True, max_length=500)),
                ("source", models.CharField(db_index=True, max_length=100)),
                (
                    "source_url",
                    models.URLField(blank=True, max_length=500, null=True),
                ),
                ("published_at", models.DateTimeField(db_index=True)),
                (
                    "fetched_at",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                ("language", models.CharField(default="en", max_length=8)),
                (
                    "asset_type",
                    models.CharField(
                        choices=ASSET_TYPE_CHOICES,
                        db_index=True,
                        default="OTHER",
                        max_length=12,
                    ),
                ),
                ("sentiment", models.FloatField(blank=True, null=True)),
                ("relevance", models.FloatField(default=0.5)),
                ("is_duplicate", models.BooleanField(default=False)),
                (
                    "tags",
                    models.ManyToManyField(
                        blank=True, related_name="news_items", to="makro_news.tag"
                    ),
                ),
                (
                    "tickers",
                    models.ManyToManyField(
                        blank=True, related_name="news_items", to="makro_news.ticker"
                    ),
                ),
            ],
            options={"ordering": ("-published_at",)},
        ),
    ]
