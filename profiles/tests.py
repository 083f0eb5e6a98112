from datetime import date

from django.urls import reverse
from rest_framework.test import APITestCase
from rest_framework import status
from django.contrib.auth import get_user_model

from movies.models import Movie
from reviews.models import Review
from .models import UserProfile

User = get_user_model()


class UserProfileSignalTests(APITestCase):
    """Tests for automatic profile creation via signals."""

    def test_profile_created_on_user_registration(self):
        """Profile should be automatically created when user is created."""
        user = User.objects.create_user(
            username="newuser",
            email="newuser@example.com",
            password="testpass123",
        )

        # Profile should exist
        self.assertTrue(hasattr(user, "profile"))
        self.assertIsInstance(user.profile, UserProfile)
        self.assertEqual(user.profile.user, user)
        self.assertEqual(user.profile.role, "user")

    def test_profile_has_empty_taste_profile(self):
        user = User.objects.create_user(
            username="testuser",
            email="test@example.com",
            password="testpass123",
        )

        self.assertEqual(user.profile.favorite_genres, [])
        self.assertEqual(user.profile.favorite_actors, [])
        self.assertEqual(user.profile.languages, [])


class AuthViewTests(APITestCase):
    """Tests for /api/auth/register/, /api/auth/login/ and /api/auth/refresh/."""

    def setUp(self):
        self.register_url = reverse("register")
        self.login_url = reverse("login")

    def register(self, **overrides):
        payload = {
            "username": "cinephile",
            "email": "Cinephile@Example.com",
            "password": "testpass123",
        }
        payload.update(overrides)
        return self.client.post(self.register_url, payload, format="json")

    def test_register_returns_tokens(self):
        response = self.register()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)

        user = User.objects.get(username="cinephile")
        self.assertEqual(user.email, "cinephile@example.com")
        self.assertEqual(user.profile.role, "user")

    def test_register_ignores_requested_role(self):
        self.register(role="admin")
        self.assertEqual(User.objects.get().profile.role, "user")

    def test_register_rejects_duplicate_email(self):
        self.register()
        response = self.register(username="someoneelse", email="cinephile@example.com")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(User.objects.count(), 1)

    def test_register_rejects_short_password(self):
        response = self.register(password="abc")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_login_with_email_and_password(self):
        self.register()
        response = self.client.post(
            self.login_url,
            {"email": "cinephile@example.com", "password": "testpass123"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)

    def test_login_with_wrong_password_is_401(self):
        self.register()
        response = self.client.post(
            self.login_url,
            {"email": "cinephile@example.com", "password": "wrongpass"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_login_without_email_is_400(self):
        self.register()
        response = self.client.post(
            self.login_url, {"password": "testpass123"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data)

    def test_access_token_authenticates_requests(self):
        tokens = self.register().data
        url = reverse("my-profile")

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["username"], "cinephile")

        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh_issues_new_access_token(self):
        tokens = self.register().data
        response = self.client.post(
            reverse("token-refresh"), {"refresh": tokens["refresh"]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)


class MyProfileViewTests(APITestCase):
    """Tests for the /api/profiles/me/ endpoint."""

    def setUp(self):
        self.user = User.objects.create_user(
            username="testuser",
            email="test@example.com",
            password="testpass123",
        )
        self.url = reverse("my-profile")

    def test_retrieve_profile_requires_authentication(self):
        """Unauthenticated users should get 401."""
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_retrieve_own_profile(self):
        """Authenticated user should be able to retrieve their profile."""
        self.client.force_authenticate(user=self.user)
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], str(self.user.profile.id))
        self.assertEqual(response.data["preferences"]["favorite_genres"], [])
        self.assertIn("created_at", response.data)
        self.assertIn("updated_at", response.data)

    def test_update_profile_requires_authentication(self):
        """Unauthenticated users should not be able to update profile."""
        response = self.client.patch(
            self.url,
            {"preferences": {"favorite_genres": ["action"]}},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_update_username_and_preferences(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.patch(
            self.url,
            {
                "username": "renamed",
                "preferences": {"favorite_genres": ["action", "drama"]},
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.user.profile.refresh_from_db()
        self.assertEqual(self.user.username, "renamed")
        self.assertEqual(self.user.profile.favorite_genres, ["action", "drama"])

    def test_role_is_read_only(self):
        self.client.force_authenticate(user=self.user)
        self.client.patch(self.url, {"role": "admin"}, format="json")

        self.user.profile.refresh_from_db()
        self.assertEqual(self.user.profile.role, "user")

    def test_delete_account_cascades_reviews(self):
        movie = Movie.objects.create(
            title="Doomed Review",
            synopsis="x",
            release_date=date(2020, 1, 1),
            runtime=90,
        )
        Review.objects.create(user=self.user, movie=movie, rating=2, comment="meh")

        self.client.force_authenticate(user=self.user)
        response = self.client.delete(self.url)

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=self.user.pk).exists())
        movie.refresh_from_db()
        self.assertEqual(movie.total_ratings, 0)


class PreferencesViewTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="prefs", password="testpass123")
        self.url = reverse("my-preferences")
        self.client.force_authenticate(user=self.user)

    def test_put_replaces_preferences(self):
        response = self.client.put(
            self.url,
            {
                "favorite_genres": ["sci-fi"],
                "favorite_actors": [" Keanu Reeves ", "Keanu Reeves"],
                "content_ratings": ["PG-13"],
                "languages": ["en"],
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        profile = UserProfile.objects.get(user=self.user)
        self.assertEqual(profile.favorite_genres, ["sci-fi"])
        self.assertEqual(profile.favorite_actors, ["Keanu Reeves"])
        self.assertEqual(profile.content_ratings, ["PG-13"])

    def test_unknown_genre_or_rating_is_rejected(self):
        response = self.client.put(
            self.url,
            {"favorite_genres": ["western"], "content_ratings": ["X"]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("favorite_genres", response.data)
        self.assertIn("content_ratings", response.data)


class MovieSetViewTests(APITestCase):
    """Wishlist and watched-movie membership."""

    def setUp(self):
        self.user = User.objects.create_user(username="wisher", password="testpass123")
        self.movie = Movie.objects.create(
            title="Wish Upon",
            synopsis="x",
            release_date=date(2017, 7, 14),
            runtime=90,
        )
        self.client.force_authenticate(user=self.user)

    def test_wishlist_add_is_idempotent(self):
        url = reverse("my-wishlist-movie", args=[self.movie.id])

        first = self.client.post(url)
        second = self.client.post(url)

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertTrue(first.data["added"])
        self.assertEqual(second.status_code, status.HTTP_200_OK)
        self.assertFalse(second.data["added"])
        self.assertEqual(self.user.profile.wishlist.count(), 1)

        listing = self.client.get(reverse("my-wishlist"))
        self.assertEqual([m["title"] for m in listing.data], ["Wish Upon"])

    def test_wishlist_remove_absent_movie_is_a_no_op(self):
        other = Movie.objects.create(
            title="Kept", synopsis="x", release_date=date(2000, 1, 1), runtime=80
        )
        self.user.profile.wishlist.add(other)

        response = self.client.delete(reverse("my-wishlist-movie", args=[self.movie.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["removed"])
        self.assertEqual(list(self.user.profile.wishlist.all()), [other])

    def test_watched_add_and_remove(self):
        url = reverse("my-watched-movie", args=[self.movie.id])

        self.client.post(url)
        self.assertTrue(self.user.profile.watched_movies.filter(pk=self.movie.pk).exists())

        response = self.client.delete(url)
        self.assertTrue(response.data["removed"])
        self.assertEqual(self.user.profile.watched_movies.count(), 0)

    def test_unknown_movie_is_404(self):
        other = Movie(title="Unsaved")
        response = self.client.post(reverse("my-wishlist-movie", args=[other.id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
