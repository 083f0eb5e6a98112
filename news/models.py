import uuid
from django.db import models
from django.contrib.auth import get_user_model
from django.utils import timezone

User = get_user_model()


CATEGORY_CHOICES = [
    ("movies", "Movies"),
    ("actors", "Actors"),
    ("projects", "Projects"),
    ("industry", "Industry Updates"),
]


class NewsArticle(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    content = models.TextField()
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    # kept when the author deletes their account
    author = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="news_articles",
    )
    publication_date = models.DateTimeField(default=timezone.now)
    source = models.CharField(max_length=200)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-publication_date"]
        indexes = [
            models.Index(fields=["category", "-publication_date"], name="news_category_idx"),
        ]

    def __str__(self):
        return self.title
