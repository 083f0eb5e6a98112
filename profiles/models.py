import uuid
from django.contrib.auth.models import User
from django.db import models


class UserProfile(models.Model):
    """
    Per-user data kept beside ``auth.User``: role, taste profile and the
    wishlist / watched-movie sets. Created automatically with the user.
    """

    ROLE_CHOICES = [
        ("user", "User"),
        ("admin", "Admin"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        User, on_delete=models.CASCADE, related_name="profile"
    )
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default="user")

    # taste profile
    favorite_genres = models.JSONField(default=list, blank=True)
    favorite_actors = models.JSONField(default=list, blank=True)
    favorite_directors = models.JSONField(default=list, blank=True)
    content_ratings = models.JSONField(default=list, blank=True)
    languages = models.JSONField(default=list, blank=True)

    wishlist = models.ManyToManyField(
        "movies.Movie", related_name="wishlisted_by", blank=True
    )
    watched_movies = models.ManyToManyField(
        "movies.Movie", related_name="watched_by", blank=True
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Profile<{self.user_id}>"

    @property
    def is_admin(self):
        return self.role == "admin"
