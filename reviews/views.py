from django.db import transaction
from rest_framework import viewsets, permissions

from cinevault.filters import id_param, uuid_param
from cinevault.pagination import PageLimitPagination
from cinevault.permissions import IsOwnerOrAdmin, LockedWriteMixin
from .models import Review
from .serializers import ReviewSerializer


class ReviewViewSet(LockedWriteMixin, viewsets.ModelViewSet):
    """
    /api/reviews/
    - GET: public (?movie=<id>, ?user=<id>)
    - POST: authenticated
    - PATCH/PUT/DELETE: author or admin

    Every write refreshes the movie's rating aggregate inside the same
    transaction (see reviews.signals).
    """

    serializer_class = ReviewSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsOwnerOrAdmin]
    pagination_class = PageLimitPagination
    owner_field = "user"

    def get_queryset(self):
        qs = Review.objects.select_related("user", "movie")

        movie_id = uuid_param(self.request.query_params, "movie")
        user_id = id_param(self.request.query_params, "user")

        if movie_id is not None:
            qs = qs.filter(movie_id=movie_id)
        if user_id is not None:
            qs = qs.filter(user_id=user_id)

        return self.lock_queryset(qs.order_by("-created_at"))

    def create(self, request, *args, **kwargs):
        with transaction.atomic():
            return super().create(request, *args, **kwargs)

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)
