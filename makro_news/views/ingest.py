import logging

from rest_framework.decorators import (
    api_view,
    authentication_classes,
    permission_classes,
)
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from makro_news.news.ingest import run_ingestion
from makro_news.views.cron import cron_authorized

logger = logging.getLogger(__name__)


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def trigger_ingest(request):
    """Cron trigger for a full ingestion run."""
    if not cron_authorized(request):
        return Response({"error": "Unauthorized"}, status=401)

    try:
        report = run_ingestion()
    except Exception as exc:  # noqa: BLE001
        logger.error("Ingestion API error: %s", exc, exc_info=True)
        return Response({"error": "Ingestion failed"}, status=500)
    return Response({"success": True, "report": report.as_dict()})
