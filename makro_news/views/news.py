import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from makro_news.news.preprocessor import preprocess_news_feed
from makro_news.serializers import NewsFilterSerializer

logger = logging.getLogger(__name__)


@api_view(["GET"])
@permission_classes([AllowAny])
def news_feed(request):
    serializer = NewsFilterSerializer(data=request.query_params)
    if not serializer.is_valid():
        logger.warning("Invalid news filter: %s", serializer.errors)
        return Response(serializer.errors, status=400)

    try:
        payload = preprocess_news_feed(
            serializer.to_filters(), serializer.validated_data["limit"]
        )
    except Exception as exc:  # noqa: BLE001
        logger.error("News feed failed: %s", exc, exc_info=True)
        return Response({"error": "Failed to fetch news"}, status=500)
    return Response(payload)
