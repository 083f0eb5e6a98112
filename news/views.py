from django.db import transaction
from rest_framework import viewsets, permissions
from rest_framework.decorators import action
from rest_framework.response import Response

from cinevault.pagination import PageLimitPagination
from cinevault.permissions import IsOwnerOrAdmin, LockedWriteMixin
from .models import NewsArticle
from .serializers import NewsArticleSerializer

RECENT_LIMIT = 10


class NewsArticleViewSet(LockedWriteMixin, viewsets.ModelViewSet):
    """
    /api/news/
    - GET: public, newest publication first (?category=<name>)
    - POST: authenticated
    - PATCH/PUT/DELETE: author or admin

    /api/news/recent/   GET -> the 10 most recently published articles
    """

    serializer_class = NewsArticleSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsOwnerOrAdmin]
    pagination_class = PageLimitPagination
    owner_field = "author"

    def get_queryset(self):
        qs = NewsArticle.objects.select_related("author")

        category = self.request.query_params.get("category")
        if category:
            qs = qs.filter(category=category)

        return self.lock_queryset(qs.order_by("-publication_date"))

    def create(self, request, *args, **kwargs):
        with transaction.atomic():
            return super().create(request, *args, **kwargs)

    def perform_create(self, serializer):
        serializer.save(author=self.request.user)

    @action(detail=False, methods=["get"])
    def recent(self, request):
        articles = self.get_queryset()[:RECENT_LIMIT]
        return Response(self.get_serializer(articles, many=True).data)
