"""
Rating aggregator: keeps ``Movie.average_rating`` / ``Movie.total_ratings``
equal to the mean and count of the movie's current reviews.

Always recomputes from the full review set so concurrent writes for the
same movie converge once the last one commits.
"""

import logging

from django.db.models import Avg, Count

from movies.models import Movie
from reviews.models import Review

logger = logging.getLogger(__name__)


def refresh_movie_rating(movie_id):
    """
    Recompute and persist the rating aggregate of one movie.

    Returns:
        (average, count), or None when the movie no longer exists. Store
        errors propagate so the caller's transaction rolls back.
    """
    stats = Review.objects.filter(movie_id=movie_id).aggregate(
        average=Avg("rating"),
        count=Count("id"),
    )
    count = stats["count"]
    average = float(stats["average"]) if count else 0.0

    updated = Movie.objects.filter(pk=movie_id).update(
        average_rating=average,
        total_ratings=count,
    )
    if not updated:
        logger.warning("Rating refresh skipped: movie %s not found", movie_id)
        return None

    logger.debug("Movie %s rating now %.3f over %d reviews", movie_id, average, count)
    return average, count
