# reviews/tests.py

from datetime import date
from unittest import mock

from django.urls import reverse
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase
from rest_framework.test import APITestCase
from rest_framework import status

from movies.models import Movie
from .models import Review
from .services.ratings import refresh_movie_rating

User = get_user_model()


def make_movie(title="Review Movie", **kwargs):
    kwargs.setdefault("synopsis", "A movie worth reviewing.")
    kwargs.setdefault("release_date", date(2024, 1, 1))
    kwargs.setdefault("runtime", 100)
    return Movie.objects.create(title=title, **kwargs)


class ReviewAPITests(APITestCase):
    def setUp(self):
        # users
        self.user = User.objects.create_user(
            username="testuser",
            email="test@example.com",
            password="testpass123",
        )
        self.other = User.objects.create_user(
            username="otheruser",
            email="other@example.com",
            password="otherpass123",
        )

        # movie
        self.movie = make_movie()

        self.review_list_url = reverse("review-list")  # from router

    def post_review(self, user, rating, comment="Solid.", movie=None):
        self.client.force_authenticate(user=user)
        payload = {
            "movie": str((movie or self.movie).id),
            "rating": rating,
            "comment": comment,
        }
        return self.client.post(self.review_list_url, payload, format="json")

    def test_anonymous_cannot_create_review(self):
        payload = {
            "movie": str(self.movie.id),
            "rating": 4,
            "comment": "Great movie!",
        }
        response = self.client.post(self.review_list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(Review.objects.count(), 0)

    def test_authenticated_user_can_create_review(self):
        response = self.post_review(self.user, 5, "Loved it!")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Review.objects.count(), 1)

        review = Review.objects.first()
        self.assertEqual(review.user, self.user)
        self.assertEqual(review.movie, self.movie)
        self.assertEqual(review.rating, 5)
        self.assertTrue(response.data["is_owner"])

    def test_user_cannot_review_same_movie_twice(self):
        first = self.post_review(self.user, 4, "First review")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED)

        # try again for same movie
        second = self.post_review(self.user, 1, "Second review")
        self.assertEqual(second.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Review.objects.count(), 1)
        self.assertEqual(Review.objects.get().rating, 4)

    def test_rating_must_be_between_one_and_five(self):
        for rating in (0, 6):
            response = self.post_review(self.user, rating)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Review.objects.count(), 0)

    def test_blank_comment_is_rejected(self):
        response = self.post_review(self.user, 3, "   ")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_rating_aggregate_follows_review_writes(self):
        self.assertEqual(self.movie.average_rating, 0)
        self.assertEqual(self.movie.total_ratings, 0)

        first = self.post_review(self.user, 5)
        self.movie.refresh_from_db()
        self.assertEqual((self.movie.average_rating, self.movie.total_ratings), (5.0, 1))

        self.post_review(self.other, 3)
        self.movie.refresh_from_db()
        self.assertEqual((self.movie.average_rating, self.movie.total_ratings), (4.0, 2))

        self.client.force_authenticate(user=self.user)
        url = reverse("review-detail", args=[first.data["id"]])
        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        self.movie.refresh_from_db()
        self.assertEqual((self.movie.average_rating, self.movie.total_ratings), (3.0, 1))

    def test_update_refreshes_aggregate(self):
        created = self.post_review(self.user, 2)
        url = reverse("review-detail", args=[created.data["id"]])

        response = self.client.patch(url, {"rating": 4}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.movie.refresh_from_db()
        self.assertEqual(self.movie.average_rating, 4.0)
        self.assertEqual(self.movie.total_ratings, 1)

    def test_other_user_cannot_edit_or_delete_review(self):
        created = self.post_review(self.user, 5, "Mine")
        url = reverse("review-detail", args=[created.data["id"]])

        self.client.force_authenticate(user=self.other)
        patch = self.client.patch(url, {"rating": 1}, format="json")
        delete = self.client.delete(url)

        self.assertEqual(patch.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(delete.status_code, status.HTTP_403_FORBIDDEN)
        review = Review.objects.get()
        self.assertEqual(review.rating, 5)
        self.assertEqual(review.comment, "Mine")

    def test_admin_can_delete_any_review(self):
        created = self.post_review(self.user, 5)
        self.other.profile.role = "admin"
        self.other.profile.save()

        self.client.force_authenticate(user=self.other)
        url = reverse("review-detail", args=[created.data["id"]])
        response = self.client.delete(url)

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.movie.refresh_from_db()
        self.assertEqual((self.movie.average_rating, self.movie.total_ratings), (0.0, 0))

    def test_review_cannot_move_to_another_movie(self):
        created = self.post_review(self.user, 5)
        other_movie = make_movie("Another Movie")
        url = reverse("review-detail", args=[created.data["id"]])

        response = self.client.patch(
            url, {"movie": str(other_movie.id)}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Review.objects.get().movie, self.movie)

    def test_deleting_user_refreshes_aggregate(self):
        self.post_review(self.user, 5)
        self.post_review(self.other, 1)

        self.other.delete()

        self.movie.refresh_from_db()
        self.assertEqual((self.movie.average_rating, self.movie.total_ratings), (5.0, 1))

    def test_list_filters_by_movie_and_user(self):
        other_movie = make_movie("Another Movie")
        self.post_review(self.user, 5)
        self.post_review(self.user, 2, movie=other_movie)
        self.post_review(self.other, 3)
        self.client.force_authenticate(user=None)

        by_movie = self.client.get(self.review_list_url, {"movie": str(self.movie.id)})
        by_user = self.client.get(self.review_list_url, {"user": self.user.id})

        self.assertEqual(by_movie.status_code, status.HTTP_200_OK)
        self.assertEqual(by_movie.data["pagination"]["total"], 2)
        self.assertEqual(by_user.data["pagination"]["total"], 2)
        self.assertEqual(
            {r["movie_title"] for r in by_user.data["results"]},
            {"Review Movie", "Another Movie"},
        )

    def test_malformed_id_filters_are_400(self):
        bad_user = self.client.get(self.review_list_url, {"user": "abc"})
        bad_movie = self.client.get(self.review_list_url, {"movie": "not-a-uuid"})

        self.assertEqual(bad_user.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("user", bad_user.data)
        self.assertEqual(bad_movie.status_code, status.HTTP_400_BAD_REQUEST)

    def test_store_failure_rolls_back_review(self):
        with mock.patch(
            "reviews.signals.refresh_movie_rating",
            side_effect=DatabaseError("disk full"),
        ):
            response = self.post_review(self.user, 5)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(Review.objects.count(), 0)


class RefreshMovieRatingTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="rater", password="testpass123")
        self.movie = make_movie()

    def test_recomputes_from_all_reviews(self):
        Review.objects.create(user=self.user, movie=self.movie, rating=4, comment="ok")
        # bypass the signal to leave the aggregate stale
        Movie.objects.filter(pk=self.movie.pk).update(average_rating=1, total_ratings=9)

        self.assertEqual(refresh_movie_rating(self.movie.pk), (4.0, 1))
        self.movie.refresh_from_db()
        self.assertEqual(self.movie.total_ratings, 1)

    def test_missing_movie_is_a_no_op(self):
        movie_id = self.movie.pk
        self.movie.delete()

        with self.assertLogs("reviews.services.ratings", level="WARNING"):
            self.assertIsNone(refresh_movie_rating(movie_id))
