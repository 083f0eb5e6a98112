"""
Catalog discovery services: preference-based recommendations for a user,
similar titles for a movie, trending and top-rated listings.

Recommendations are a pure filter over the catalog driven by the user's
taste profile; no scores are computed.
"""

import logging
from datetime import timedelta
from typing import List, Optional

from django.conf import settings
from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from movies.models import Movie
from reviews.models import Review

logger = logging.getLogger(__name__)

RATING_ORDER = ("-average_rating", "-total_ratings", "title")


def _taste_filter(profile) -> Optional[Q]:
    """
    OR of the taste predicates: favourite genre, favourite actor in the
    cast, favourite director in the crew. None when the profile has no
    favourites at all.
    """
    taste = Q()
    matched = False

    if profile.favorite_genres:
        taste |= Q(genres__name__in=profile.favorite_genres)
        matched = True
    if profile.favorite_actors:
        taste |= Q(
            credits__credit_type="cast",
            credits__person__name__in=profile.favorite_actors,
        )
        matched = True
    if profile.favorite_directors:
        taste |= Q(
            credits__credit_type="crew",
            credits__job="director",
            credits__person__name__in=profile.favorite_directors,
        )
        matched = True

    return taste if matched else None


def recommend_for_user(user, limit: Optional[int] = None) -> List[Movie]:
    """
    Movies matching the user's taste profile, restricted to accepted
    content ratings and languages (each restriction skipped when its list
    is empty), excluding titles the user already rated or watched.

    Args:
        user: the authenticated principal (must have a profile)
        limit: maximum number of movies (defaults to RECOMMENDATION_LIMIT)

    Returns:
        List of movies ordered by average rating, then rating count.
    """
    if limit is None:
        limit = settings.RECOMMENDATION_LIMIT

    profile = user.profile
    taste = _taste_filter(profile)
    if taste is None:
        logger.info("No taste profile for user %s; no recommendations", user.pk)
        return []

    candidates = Movie.objects.filter(taste)

    if profile.content_ratings:
        candidates = candidates.filter(content_rating__in=profile.content_ratings)
    if profile.languages:
        candidates = candidates.filter(language__in=profile.languages)

    rated_ids = Review.objects.filter(user=user).values_list("movie_id", flat=True)
    watched_ids = profile.watched_movies.values_list("id", flat=True)
    candidates = candidates.exclude(id__in=rated_ids).exclude(id__in=watched_ids)

    # joins on genres/credits can repeat a movie; dedupe on ids first
    ids = candidates.values_list("id", flat=True).distinct()
    movies = list(
        Movie.objects.filter(id__in=ids)
        .prefetch_related("genres")
        .order_by(*RATING_ORDER)[:limit]
    )

    logger.info(
        "Generated %d recommendations for user %s", len(movies), user.pk
    )
    return movies


def similar_movies(movie: Movie, limit: int = 5) -> QuerySet:
    """Movies sharing a genre or a director with ``movie``."""
    genre_ids = list(movie.genres.values_list("id", flat=True))
    director_ids = list(
        movie.credits.filter(credit_type="crew", job="director")
        .values_list("person_id", flat=True)
    )

    match = Q()
    if genre_ids:
        match |= Q(genres__id__in=genre_ids)
    if director_ids:
        match |= Q(
            credits__credit_type="crew",
            credits__job="director",
            credits__person_id__in=director_ids,
        )
    if not match:
        return Movie.objects.none()

    ids = (
        Movie.objects.filter(match)
        .exclude(id=movie.id)
        .values_list("id", flat=True)
        .distinct()
    )
    return (
        Movie.objects.filter(id__in=ids)
        .prefetch_related("genres")
        .order_by(*RATING_ORDER)[:limit]
    )


def trending_movies(limit: int = 10, days: Optional[int] = None) -> QuerySet:
    """Movies with the most reviews written in the trailing window."""
    if days is None:
        days = settings.TRENDING_WINDOW_DAYS
    since = timezone.now() - timedelta(days=days)

    return (
        Movie.objects.annotate(
            recent_reviews=Count(
                "reviews", filter=Q(reviews__created_at__gte=since)
            )
        )
        .filter(recent_reviews__gt=0)
        .prefetch_related("genres")
        .order_by("-recent_reviews", *RATING_ORDER)[:limit]
    )


def top_rated_movies(genre: Optional[str] = None, limit: int = 10) -> QuerySet:
    qs = Movie.objects.all()
    if genre:
        qs = qs.filter(genres__name=genre)
    return qs.prefetch_related("genres").order_by(*RATING_ORDER)[:limit]
