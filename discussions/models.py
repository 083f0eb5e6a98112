import uuid
from django.db import models
from django.contrib.auth import get_user_model

from movies.models import Movie, Person

User = get_user_model()


CATEGORY_CHOICES = [
    ("movie", "Movie"),
    ("actor", "Actor"),
    ("genre", "Genre"),
    ("general", "General"),
]


class Discussion(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    content = models.TextField()
    author = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="discussions",
    )
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    related_movie = models.ForeignKey(
        Movie,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="discussions",
    )
    related_person = models.ForeignKey(
        Person,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="discussions",
    )
    tags = models.JSONField(default=list, blank=True)
    views = models.PositiveIntegerField(default=0)
    is_locked = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["category", "-created_at"], name="discussion_category_idx"),
        ]

    def __str__(self):
        return self.title


class DiscussionComment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    discussion = models.ForeignKey(
        Discussion,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    author = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="discussion_comments",
    )
    content = models.TextField(max_length=2000)
    likes = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.author} on {self.discussion}"
