from django.contrib import admin
from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from makro_news.views import (
    RssSourceViewSet,
    filter_options,
    news_feed,
    preprocess_cache,
    trigger_ingest,
)

router = DefaultRouter()
router.register("sources", RssSourceViewSet, basename="rss-source")

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("api/news/", news_feed, name="news"),
    path("api/preprocess/", preprocess_cache, name="preprocess"),
    path("api/ingest/", trigger_ingest, name="ingest"),
    path("api/filters/", filter_options, name="filters"),
    path("api/", include(router.urls)),
]
