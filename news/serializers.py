from rest_framework import serializers

from cinevault.permissions import can_mutate
from .models import NewsArticle


class NewsArticleSerializer(serializers.ModelSerializer):
    author = serializers.ReadOnlyField(source="author.id")
    author_username = serializers.ReadOnlyField(source="author.username")
    can_edit = serializers.SerializerMethodField()

    class Meta:
        model = NewsArticle
        fields = [
            "id",
            "title",
            "content",
            "category",
            "author",
            "author_username",
            "publication_date",
            "source",
            "can_edit",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def get_can_edit(self, obj):
        request = self.context.get("request")
        return can_mutate(getattr(request, "user", None), obj, "author")

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Title cannot be empty.")
        return value

    def validate_source(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Source cannot be empty.")
        return value
