from rest_framework import serializers

from cinevault.permissions import can_mutate
from .models import Discussion, DiscussionComment


class DiscussionCommentSerializer(serializers.ModelSerializer):
    author = serializers.ReadOnlyField(source="author.id")
    author_username = serializers.ReadOnlyField(source="author.username")

    class Meta:
        model = DiscussionComment
        fields = [
            "id",
            "author",
            "author_username",
            "content",
            "likes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["likes", "created_at", "updated_at"]

    def validate_content(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Comment cannot be empty.")
        return value


class DiscussionSerializer(serializers.ModelSerializer):
    author = serializers.ReadOnlyField(source="author.id")
    author_username = serializers.ReadOnlyField(source="author.username")
    comments = DiscussionCommentSerializer(many=True, read_only=True)
    can_edit = serializers.SerializerMethodField()

    class Meta:
        model = Discussion
        fields = [
            "id",
            "title",
            "content",
            "author",
            "author_username",
            "category",
            "related_movie",
            "related_person",
            "tags",
            "views",
            "is_locked",
            "comments",
            "can_edit",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["views", "is_locked", "created_at", "updated_at"]

    def get_can_edit(self, obj):
        request = self.context.get("request")
        return can_mutate(getattr(request, "user", None), obj, "author")

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Title cannot be empty.")
        return value

    def validate_tags(self, value):
        if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
            raise serializers.ValidationError("Tags must be a list of strings.")
        return [t.strip().lower() for t in value if t.strip()]

    def validate(self, attrs):
        """
        Movie threads need a related movie, actor threads a related person.
        """
        category = attrs.get("category", getattr(self.instance, "category", None))
        movie = attrs.get("related_movie", getattr(self.instance, "related_movie", None))
        person = attrs.get(
            "related_person", getattr(self.instance, "related_person", None)
        )

        if category == "movie" and movie is None:
            raise serializers.ValidationError(
                {"related_movie": "Movie discussions need a related movie."}
            )
        if category == "actor" and person is None:
            raise serializers.ValidationError(
                {"related_person": "Actor discussions need a related person."}
            )
        return attrs
