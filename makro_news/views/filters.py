from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from makro_news.models import ASSET_TYPE_VALUES, NewsItem, Ticker

MAX_TICKERS = 100


@api_view(["GET"])
@permission_classes([AllowAny])
def filter_options(request):
    sources = (
        NewsItem.objects.order_by("source").values_list("source", flat=True).distinct()
    )
    tickers = Ticker.objects.order_by("symbol").values("symbol", "name")[:MAX_TICKERS]
    return Response(
        {
            "sources": list(sources),
            "tickers": list(tickers),
            "asset_types": ASSET_TYPE_VALUES,
        }
    )
