from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Review
from .services.ratings import refresh_movie_rating


@receiver(post_save, sender=Review)
def refresh_rating_on_save(sender, instance, **kwargs):
    refresh_movie_rating(instance.movie_id)


@receiver(post_delete, sender=Review)
def refresh_rating_on_delete(sender, instance, **kwargs):
    # also fires for reviews removed by a user/movie cascade
    refresh_movie_rating(instance.movie_id)
