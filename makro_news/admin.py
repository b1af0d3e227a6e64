from django.contrib import admin

from makro_news.models import NewsItem, PreprocessedCache, RssSource, Tag, Ticker


@admin.register(NewsItem)
class NewsItemAdmin(admin.ModelAdmin):
    list_display = ("title", "source", "asset_type", "sentiment", "published_at", "is_duplicate")
    list_filter = ("asset_type", "source", "is_duplicate")
    search_fields = ("title", "summary")
    raw_id_fields = ("tickers", "tags")


@admin.register(RssSource)
class RssSourceAdmin(admin.ModelAdmin):
    list_display = ("name", "url", "asset_type", "is_active", "last_fetched", "fetch_count")
    list_filter = ("asset_type", "is_active")


@admin.register(PreprocessedCache)
class PreprocessedCacheAdmin(admin.ModelAdmin):
    list_display = ("filter_hash", "generated_at", "expires_at")


admin.site.register(Ticker)
admin.site.register(Tag)
