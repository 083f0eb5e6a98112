import uuid
from django.db import models
from django.contrib.auth.models import User
from django.core.validators import MinLengthValidator, MinValueValidator, MaxValueValidator
from movies.models import Movie


class Review(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='reviews')
    movie = models.ForeignKey(Movie, on_delete=models.CASCADE, related_name='reviews')
    rating = models.PositiveSmallIntegerField(
        validators=[
            MinValueValidator(1),
            MaxValueValidator(5)
        ]
    )
    comment = models.TextField(
        max_length=1000,
        validators=[MinLengthValidator(1)],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            # one review per user per movie
            models.UniqueConstraint(
                fields=['user', 'movie'],
                name='unique_review_per_user_and_movie',
            )
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user.username}'s review of {self.movie.title}"
