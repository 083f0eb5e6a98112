import uuid
from django.db import models
from django.contrib.auth import get_user_model

from movies.models import Movie

User = get_user_model()


class MovieList(models.Model):
    """
    A named, creator-owned collection of movies that other users can
    follow. Public by default; private lists are visible to their
    creator (and admins) only.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    creator = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="movie_lists",
    )
    name = models.CharField(max_length=100)
    description = models.TextField(max_length=500, blank=True)
    movies = models.ManyToManyField(
        Movie,
        related_name="in_lists",
        blank=True,
    )
    is_public = models.BooleanField(default=True)
    followers = models.ManyToManyField(
        User,
        related_name="followed_lists",
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["creator", "name"], name="movielist_creator_name_idx"),
        ]
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.creator} – {self.name}"
