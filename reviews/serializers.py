from rest_framework import serializers
from cinevault.permissions import can_mutate
from .models import Review


class ReviewSerializer(serializers.ModelSerializer):
    # Basic user info
    user = serializers.ReadOnlyField(source="user.id")
    user_username = serializers.ReadOnlyField(source="user.username")
    movie_title = serializers.ReadOnlyField(source="movie.title")

    # Computed / frontend helper fields
    is_owner = serializers.SerializerMethodField()
    can_edit = serializers.SerializerMethodField()

    class Meta:
        model = Review
        fields = [
            "id",
            "movie",
            "movie_title",
            "user",
            "user_username",
            "rating",
            "comment",
            "created_at",
            "updated_at",
            "is_owner",
            "can_edit",
        ]
        read_only_fields = [
            "user",
            "user_username",
            "movie_title",
            "created_at",
            "updated_at",
            "is_owner",
            "can_edit",
        ]
        # uniqueness is checked in validate() with a friendlier message
        validators = []

    # ---- Computed fields ----

    def _request_user(self):
        request = self.context.get("request")
        return getattr(request, "user", None)

    def get_is_owner(self, obj):
        user = self._request_user()
        return bool(user and user.is_authenticated and obj.user_id == user.id)

    def get_can_edit(self, obj):
        return can_mutate(self._request_user(), obj, "user")

    # ---- Validation ----

    def validate_rating(self, value):
        if value < 1 or value > 5:
            raise serializers.ValidationError(
                "Rating must be between 1 and 5."
            )
        return value

    def validate_comment(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Comment cannot be empty.")
        return value

    def validate(self, attrs):
        """
        Enforce: one review per user per movie; reviews stay on their movie.
        """
        movie = attrs.get("movie")

        if self.instance is not None:
            if movie is not None and movie.pk != self.instance.movie_id:
                raise serializers.ValidationError(
                    {"movie": "A review cannot be moved to another movie."}
                )
            return attrs

        user = self._request_user()
        if user and user.is_authenticated and movie:
            if Review.objects.filter(user=user, movie=movie).exists():
                raise serializers.ValidationError(
                    "You have already reviewed this movie."
                )
        return attrs
