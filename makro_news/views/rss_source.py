from rest_framework import permissions, viewsets

from makro_news.models import RssSource
from makro_news.serializers import RssSourceSerializer


class RssSourceViewSet(viewsets.ModelViewSet):
    queryset = RssSource.objects.order_by("pk")
    serializer_class = RssSourceSerializer
    permission_classes = [permissions.IsAuthenticated]
