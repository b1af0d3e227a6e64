import logging
import time

from rest_framework.decorators import (
    api_view,
    authentication_classes,
    permission_classes,
)
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from makro_news.news.preprocessor import (
    get_cache_stats,
    preprocess_news_feed,
    purge_expired_cache,
    warm_common_filters,
)
from makro_news.serializers import PreprocessRequestSerializer
from makro_news.views.cron import cron_authorized

logger = logging.getLogger(__name__)


def _stats_payload() -> dict:
    stats = get_cache_stats()
    return {
        "total_entries": stats["total_entries"],
        "total_size_kb": round(stats["total_size_bytes"] / 1024),
        "newest_entry": stats["newest_entry"],
        "oldest_entry": stats["oldest_entry"],
    }


@api_view(["GET", "POST"])
@authentication_classes([])
@permission_classes([AllowAny])
def preprocess_cache(request):
    if request.method == "GET":
        return Response({"stats": _stats_payload()})

    if not cron_authorized(request):
        return Response({"error": "Unauthorized"}, status=401)

    serializer = PreprocessRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=400)
    mode = serializer.validated_data["mode"]

    started = time.monotonic()
    try:
        if mode == "cleanup":
            cleaned = purge_expired_cache()
            return Response(
                {
                    "success": True,
                    "cleaned": cleaned,
                    "duration": round((time.monotonic() - started) * 1000),
                }
            )
        if mode == "all":
            warm_common_filters()
        else:
            preprocess_news_feed({"time_range": "24h"}, 100)
        stats = _stats_payload()
    except Exception as exc:  # noqa: BLE001
        logger.error("Preprocessing failed: %s", exc, exc_info=True)
        return Response({"error": "Preprocessing failed"}, status=500)

    return Response(
        {
            "success": True,
            "mode": mode,
            "stats": stats,
            "duration": round((time.monotonic() - started) * 1000),
        }
    )
