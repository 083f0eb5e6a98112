from django.db import transaction
from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, permissions, status
from rest_framework.decorators import action
from rest_framework.response import Response

from cinevault.filters import id_param
from cinevault.membership import add_member, remove_member, toggle_member
from cinevault.pagination import PageLimitPagination
from cinevault.permissions import IsOwnerOrAdmin, LockedWriteMixin, is_admin
from movies.models import Movie
from .models import MovieList
from .serializers import MovieListSerializer, ListMovieSerializer


class MovieListViewSet(LockedWriteMixin, viewsets.ModelViewSet):
    """
    - GET    /api/lists/                      -> public lists + my own (?user=<id>)
    - POST   /api/lists/                      -> create a list
    - PATCH  /api/lists/<id>/                 -> creator or admin
    - DELETE /api/lists/<id>/                 -> creator or admin
    - POST   /api/lists/<id>/movies/          -> add a movie (idempotent)
    - DELETE /api/lists/<id>/movies/<movie>/  -> remove a movie (idempotent)
    - POST   /api/lists/<id>/follow/          -> follow / unfollow
    """

    serializer_class = MovieListSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsOwnerOrAdmin]
    pagination_class = PageLimitPagination
    owner_field = "creator"

    def get_queryset(self):
        user = self.request.user
        qs = MovieList.objects.select_related("creator").prefetch_related(
            "movies__genres"
        )

        # private lists only show up for their creator (404 for everyone else)
        if not is_admin(user):
            visible = Q(is_public=True)
            if user.is_authenticated:
                visible |= Q(creator=user)
            qs = qs.filter(visible)

        creator_id = id_param(self.request.query_params, "user")
        if creator_id is not None:
            qs = qs.filter(creator_id=creator_id)

        return self.lock_queryset(qs.order_by("-created_at"))

    def create(self, request, *args, **kwargs):
        with transaction.atomic():
            return super().create(request, *args, **kwargs)

    def perform_create(self, serializer):
        serializer.save(creator=self.request.user)

    @action(detail=True, methods=["post"], url_path="movies")
    def add_movie(self, request, pk=None):
        payload = ListMovieSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        with transaction.atomic():
            movie_list = self.get_object()
            added = add_member(movie_list.movies, payload.validated_data["movie"])

        data = self.get_serializer(movie_list).data
        return Response(
            {"added": added, "list": data},
            status=status.HTTP_201_CREATED if added else status.HTTP_200_OK,
        )

    @action(
        detail=True,
        methods=["delete"],
        url_path=r"movies/(?P<movie_pk>[0-9a-f-]+)",
    )
    def remove_movie(self, request, pk=None, movie_pk=None):
        movie = get_object_or_404(Movie, pk=movie_pk)

        with transaction.atomic():
            movie_list = self.get_object()
            removed = remove_member(movie_list.movies, movie)

        return Response({"removed": removed, "list": self.get_serializer(movie_list).data})

    @action(
        detail=True,
        methods=["post"],
        permission_classes=[permissions.IsAuthenticated],
    )
    def follow(self, request, pk=None):
        with transaction.atomic():
            movie_list = self.get_object()
            following = toggle_member(movie_list.followers, request.user)

        return Response(
            {
                "following": following,
                "follower_count": movie_list.followers.count(),
            }
        )
