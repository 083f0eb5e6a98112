from rest_framework import serializers

from cinevault.permissions import can_mutate
from movies.models import Movie
from movies.serializers import MovieCardSerializer
from .models import MovieList


class MovieListSerializer(serializers.ModelSerializer):
    creator = serializers.ReadOnlyField(source="creator.id")
    creator_username = serializers.ReadOnlyField(source="creator.username")
    movies = MovieCardSerializer(many=True, read_only=True)
    movie_ids = serializers.PrimaryKeyRelatedField(
        many=True,
        write_only=True,
        required=False,
        source="movies",
        queryset=Movie.objects.all(),
    )
    movie_count = serializers.SerializerMethodField()
    follower_count = serializers.SerializerMethodField()
    is_following = serializers.SerializerMethodField()
    can_edit = serializers.SerializerMethodField()

    class Meta:
        model = MovieList
        fields = [
            "id",
            "creator",
            "creator_username",
            "name",
            "description",
            "is_public",
            "movies",
            "movie_ids",
            "movie_count",
            "follower_count",
            "is_following",
            "can_edit",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def _user(self):
        request = self.context.get("request")
        return getattr(request, "user", None)

    def get_movie_count(self, obj):
        return obj.movies.count()

    def get_follower_count(self, obj):
        return obj.followers.count()

    def get_is_following(self, obj):
        user = self._user()
        if not user or not user.is_authenticated:
            return False
        return obj.followers.filter(pk=user.pk).exists()

    def get_can_edit(self, obj):
        return can_mutate(self._user(), obj, "creator")

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("List name cannot be empty.")
        return value


class ListMovieSerializer(serializers.Serializer):
    """Payload of POST /api/lists/<id>/movies/."""

    movie = serializers.PrimaryKeyRelatedField(queryset=Movie.objects.all())
