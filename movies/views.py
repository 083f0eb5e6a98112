from django.db import transaction
from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.views import APIView

from cinevault.pagination import PageLimitPagination
from cinevault.permissions import (
    IsAdminOrReadOnly,
    LockedWriteMixin,
    can_mutate,
    is_admin,
)
from .models import Movie, Person, Credit, GENRE_NAMES
from .serializers import (
    MovieSerializer,
    MovieCardSerializer,
    PersonSerializer,
    CreditSerializer,
    EMBEDDED_ITEM_SERIALIZERS,
)
from .services.recommender import (
    recommend_for_user,
    similar_movies,
    trending_movies,
    top_rated_movies,
)

SORT_FIELDS = {
    "release_date",
    "-release_date",
    "title",
    "-title",
    "average_rating",
    "-average_rating",
    "total_ratings",
    "-total_ratings",
}


class MovieViewSet(LockedWriteMixin, viewsets.ModelViewSet):
    """
    Provides /api/movies/  (list, admin create)
            /api/movies/<id>/ (detail, admin update/delete)

    Supports filters:
    - ?search=term        (title or synopsis)
    - ?genre=action
    - ?year=2023
    - ?min_rating=4
    - ?language=en
    - ?country=US
    - ?content_rating=PG-13
    - ?sort=-average_rating
    """

    serializer_class = MovieSerializer
    permission_classes = [IsAdminOrReadOnly]
    pagination_class = PageLimitPagination

    def get_queryset(self):
        params = self.request.query_params

        qs = Movie.objects.all().prefetch_related("genres", "credits__person")

        if self.action != "list":
            return self.lock_queryset(qs)

        search = params.get("search")
        if search:
            qs = qs.filter(
                Q(title__icontains=search) | Q(synopsis__icontains=search)
            )

        genre = params.get("genre")
        if genre:
            qs = qs.filter(genres__name=genre.lower())

        year = params.get("year")
        if year:
            try:
                qs = qs.filter(release_date__year=int(year))
            except ValueError:
                pass

        min_rating = params.get("min_rating")
        if min_rating:
            try:
                qs = qs.filter(average_rating__gte=float(min_rating))
            except ValueError:
                pass

        language = params.get("language")
        if language:
            qs = qs.filter(language=language)

        country = params.get("country")
        if country:
            qs = qs.filter(country=country.upper())

        content_rating = params.get("content_rating")
        if content_rating:
            qs = qs.filter(content_rating=content_rating)

        sort = params.get("sort")
        if sort not in SORT_FIELDS:
            sort = "-release_date"

        return qs.distinct().order_by(sort, "title")

    @action(detail=True, methods=["get"])
    def similar(self, request, pk=None):
        movie = self.get_object()
        data = MovieCardSerializer(similar_movies(movie), many=True).data
        return Response(data)

    @action(detail=False, methods=["get"])
    def trending(self, request):
        data = MovieCardSerializer(trending_movies(), many=True).data
        return Response(data)

    @action(detail=False, methods=["get"], url_path="top-rated")
    def top_rated(self, request):
        data = MovieCardSerializer(top_rated_movies(), many=True).data
        return Response(data)

    @action(detail=False, methods=["get"], url_path=r"top/(?P<genre>[^/.]+)")
    def top_by_genre(self, request, genre=None):
        genre = genre.lower()
        if genre not in GENRE_NAMES:
            raise NotFound(f"Unknown genre: {genre}.")
        data = MovieCardSerializer(top_rated_movies(genre=genre), many=True).data
        return Response(data)


class EmbeddedItemViewSet(viewsets.ViewSet):
    """
    Keyed child operations on a movie's embedded collections:

    GET/POST           /api/movies/<movie_pk>/<collection>/
    GET/PATCH/DELETE   /api/movies/<movie_pk>/<collection>/<item_id>/

    Trivia and goofs: any authenticated user may add; the contributor or an
    admin may edit/delete. Soundtrack: admins only.
    """

    collection = None
    permission_classes = [IsAuthenticatedOrReadOnly]

    def get_movie(self, lock=False):
        qs = Movie.objects.all()
        if lock:
            qs = qs.select_for_update()
        return get_object_or_404(qs, pk=self.kwargs["movie_pk"])

    def get_item(self, movie):
        item = movie.get_item(self.collection, self.kwargs["item_id"])
        if item is None:
            raise NotFound("Item not found.")
        return item

    def check_write(self, item=None):
        user = self.request.user
        if self.collection == "soundtrack":
            if not is_admin(user):
                raise PermissionDenied("Only admins can edit the soundtrack.")
        elif item is not None and not can_mutate(user, item, "added_by"):
            raise PermissionDenied("Only the contributor or an admin can change this item.")

    def get_serializer(self, *args, **kwargs):
        return EMBEDDED_ITEM_SERIALIZERS[self.collection](*args, **kwargs)

    def list(self, request, movie_pk=None):
        movie = self.get_movie()
        return Response(getattr(movie, self.collection))

    def create(self, request, movie_pk=None):
        self.check_write()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        contributor = None if self.collection == "soundtrack" else request.user
        with transaction.atomic():
            movie = self.get_movie(lock=True)
            item = movie.add_item(
                self.collection, serializer.validated_data, contributor
            )
        return Response(item, status=status.HTTP_201_CREATED)

    def retrieve(self, request, movie_pk=None, item_id=None):
        return Response(self.get_item(self.get_movie()))

    def partial_update(self, request, movie_pk=None, item_id=None):
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            movie = self.get_movie(lock=True)
            self.check_write(self.get_item(movie))
            item = movie.update_item(
                self.collection, item_id, serializer.validated_data
            )
        return Response(item)

    def destroy(self, request, movie_pk=None, item_id=None):
        with transaction.atomic():
            movie = self.get_movie(lock=True)
            self.check_write(self.get_item(movie))
            movie.remove_item(self.collection, item_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CreditViewSet(LockedWriteMixin, viewsets.ModelViewSet):
    """
    Cast and crew of a movie, reachable only through the movie:

    GET/POST                /api/movies/<movie_pk>/<credit_type>/
    GET/PUT/PATCH/DELETE    /api/movies/<movie_pk>/<credit_type>/<pk>/
    """

    credit_type = None
    serializer_class = CreditSerializer
    permission_classes = [IsAdminOrReadOnly]

    def get_movie(self):
        return get_object_or_404(Movie, pk=self.kwargs["movie_pk"])

    def get_queryset(self):
        qs = Credit.objects.filter(
            movie_id=self.kwargs["movie_pk"],
            credit_type=self.credit_type,
        ).select_related("person")
        return self.lock_queryset(qs)

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["credit_type"] = self.credit_type
        return context

    def list(self, request, *args, **kwargs):
        self.get_movie()
        return super().list(request, *args, **kwargs)

    def perform_create(self, serializer):
        serializer.save(movie=self.get_movie(), credit_type=self.credit_type)


class PersonViewSet(viewsets.ModelViewSet):
    """
    /api/people/  - public read, admin write
    """

    queryset = Person.objects.all()
    serializer_class = PersonSerializer
    permission_classes = [IsAdminOrReadOnly]
    pagination_class = PageLimitPagination

    def get_queryset(self):
        qs = super().get_queryset()
        search = self.request.query_params.get("search")
        if search:
            qs = qs.filter(name__icontains=search)
        return qs


class RecommendationView(APIView):
    """
    GET /api/recommendations/

    Movies matching the user's taste profile (favourite genres, actors,
    directors), restricted to accepted content ratings and languages and
    excluding movies the user already rated. Auth required.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        movies = recommend_for_user(request.user)
        serializer = MovieCardSerializer(movies, many=True)
        return Response(serializer.data)
