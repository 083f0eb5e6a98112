from django.db import transaction
from django.db.models import F
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, permissions, status
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.response import Response

from cinevault.filters import id_param, uuid_param
from cinevault.pagination import PageLimitPagination
from cinevault.permissions import (
    IsAdmin,
    IsOwnerOrAdmin,
    LockedWriteMixin,
    can_mutate,
    is_admin,
)
from .models import Discussion, DiscussionComment
from .serializers import DiscussionSerializer, DiscussionCommentSerializer


class DiscussionViewSet(LockedWriteMixin, viewsets.ModelViewSet):
    """
    /api/discussions/
    - GET: public (?movie=<id>, ?person=<id>, ?category=<name>)
    - POST: authenticated
    - PATCH/PUT/DELETE: author or admin

    /api/discussions/<id>/comments/         POST   -> add comment
    /api/discussions/<id>/comments/<c>/     PATCH  -> edit (author or admin)
                                            DELETE -> delete (author or admin)
    /api/discussions/<id>/lock/             POST   -> lock toggle (admin)
    """

    serializer_class = DiscussionSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsOwnerOrAdmin]
    pagination_class = PageLimitPagination
    owner_field = "author"

    def get_queryset(self):
        params = self.request.query_params
        qs = Discussion.objects.select_related("author").prefetch_related(
            "comments__author"
        )

        movie_id = uuid_param(params, "movie")
        if movie_id is not None:
            qs = qs.filter(related_movie_id=movie_id)

        person_id = id_param(params, "person")
        if person_id is not None:
            qs = qs.filter(related_person_id=person_id)

        category = params.get("category")
        if category:
            qs = qs.filter(category=category)

        return self.lock_queryset(qs.order_by("-created_at"))

    def retrieve(self, request, *args, **kwargs):
        discussion = self.get_object()
        Discussion.objects.filter(pk=discussion.pk).update(views=F("views") + 1)
        discussion.refresh_from_db(fields=["views"])
        return Response(self.get_serializer(discussion).data)

    def create(self, request, *args, **kwargs):
        with transaction.atomic():
            return super().create(request, *args, **kwargs)

    def perform_create(self, serializer):
        serializer.save(author=self.request.user)

    def _ensure_open(self, discussion):
        if discussion.is_locked and not is_admin(self.request.user):
            raise ValidationError("This discussion is locked.")

    def perform_update(self, serializer):
        self._ensure_open(serializer.instance)
        serializer.save()

    @action(
        detail=True,
        methods=["post"],
        permission_classes=[permissions.IsAuthenticated],
    )
    def comments(self, request, pk=None):
        serializer = DiscussionCommentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            discussion = self.get_object()
            self._ensure_open(discussion)
            serializer.save(discussion=discussion, author=request.user)

        return Response(serializer.data, status=status.HTTP_201_CREATED)

    @action(
        detail=True,
        methods=["patch", "delete"],
        url_path=r"comments/(?P<comment_pk>[0-9a-f-]+)",
        permission_classes=[permissions.IsAuthenticated],
    )
    def comment_detail(self, request, pk=None, comment_pk=None):
        with transaction.atomic():
            discussion = self.get_object()
            comment = get_object_or_404(
                DiscussionComment.objects.select_for_update(),
                pk=comment_pk,
                discussion=discussion,
            )
            if not can_mutate(request.user, comment, "author"):
                raise PermissionDenied("Only the author or an admin can change this comment.")

            if request.method == "DELETE":
                comment.delete()
                return Response(status=status.HTTP_204_NO_CONTENT)

            self._ensure_open(discussion)
            serializer = DiscussionCommentSerializer(
                comment, data=request.data, partial=True
            )
            serializer.is_valid(raise_exception=True)
            serializer.save()

        return Response(serializer.data)

    @action(detail=True, methods=["post"], permission_classes=[IsAdmin])
    def lock(self, request, pk=None):
        with transaction.atomic():
            discussion = self.get_object()
            discussion.is_locked = not discussion.is_locked
            discussion.save(update_fields=["is_locked", "updated_at"])

        return Response({"is_locked": discussion.is_locked})
