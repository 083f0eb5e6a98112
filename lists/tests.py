# lists/tests.py

from datetime import date

from django.urls import reverse
from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase
from rest_framework import status

from movies.models import Movie
from .models import MovieList

User = get_user_model()


class MovieListAPITests(APITestCase):
    def setUp(self):
        # users
        self.user = User.objects.create_user(
            username="listmaker",
            email="list@example.com",
            password="testpass123",
        )
        self.other = User.objects.create_user(
            username="otherlist",
            email="otherlist@example.com",
            password="otherpass123",
        )

        # movies
        self.movie = Movie.objects.create(
            title="List Movie",
            synopsis="x",
            release_date=date(2024, 1, 1),
            runtime=100,
        )
        self.other_movie = Movie.objects.create(
            title="Other List Movie",
            synopsis="y",
            release_date=date(2023, 1, 1),
            runtime=110,
        )

        # from router: basename="movielist"
        self.list_url = reverse("movielist-list")

    def make_list(self, creator=None, **kwargs):
        kwargs.setdefault("name", "Halloween Picks")
        return MovieList.objects.create(creator=creator or self.user, **kwargs)

    def test_anonymous_cannot_create_list(self):
        response = self.client.post(self.list_url, {"name": "Nope"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(MovieList.objects.count(), 0)

    def test_authenticated_user_can_create_list(self):
        self.client.force_authenticate(user=self.user)

        payload = {
            "name": "Favourites",
            "description": "Best of the best",
            "movie_ids": [str(self.movie.id)],
        }
        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        movie_list = MovieList.objects.get()
        self.assertEqual(movie_list.creator, self.user)
        self.assertTrue(movie_list.is_public)
        self.assertEqual(list(movie_list.movies.all()), [self.movie])
        self.assertEqual(response.data["movies"][0]["title"], "List Movie")

    def test_private_lists_are_hidden_from_others(self):
        private = self.make_list(name="Secret", is_public=False)
        self.make_list(name="Open")

        self.client.force_authenticate(user=self.other)
        listing = self.client.get(self.list_url)
        detail = self.client.get(reverse("movielist-detail", args=[private.id]))

        self.assertEqual(
            [item["name"] for item in listing.data["results"]], ["Open"]
        )
        self.assertEqual(detail.status_code, status.HTTP_404_NOT_FOUND)

        self.client.force_authenticate(user=self.user)
        listing = self.client.get(self.list_url, {"user": self.user.id})
        self.assertEqual(listing.data["pagination"]["total"], 2)

    def test_only_creator_can_edit_or_delete(self):
        movie_list = self.make_list()
        url = reverse("movielist-detail", args=[movie_list.id])

        self.client.force_authenticate(user=self.other)
        self.assertEqual(
            self.client.patch(url, {"name": "Mine now"}, format="json").status_code,
            status.HTTP_403_FORBIDDEN,
        )
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.user)
        response = self.client.patch(url, {"name": "Renamed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        movie_list.refresh_from_db()
        self.assertEqual(movie_list.name, "Renamed")

    def test_add_movie_is_idempotent(self):
        movie_list = self.make_list()
        url = reverse("movielist-add-movie", args=[movie_list.id])
        self.client.force_authenticate(user=self.user)

        first = self.client.post(url, {"movie": str(self.movie.id)}, format="json")
        second = self.client.post(url, {"movie": str(self.movie.id)}, format="json")

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertTrue(first.data["added"])
        self.assertEqual(second.status_code, status.HTTP_200_OK)
        self.assertFalse(second.data["added"])
        self.assertEqual(movie_list.movies.count(), 1)
        self.assertEqual(second.data["list"]["movie_count"], 1)

    def test_remove_movie_only_touches_that_movie(self):
        movie_list = self.make_list()
        movie_list.movies.add(self.movie, self.other_movie)
        self.client.force_authenticate(user=self.user)

        url = reverse("movielist-remove-movie", args=[movie_list.id, self.movie.id])
        first = self.client.delete(url)
        second = self.client.delete(url)

        self.assertTrue(first.data["removed"])
        self.assertFalse(second.data["removed"])
        self.assertEqual(list(movie_list.movies.all()), [self.other_movie])

    def test_non_creator_cannot_change_membership(self):
        movie_list = self.make_list()
        self.client.force_authenticate(user=self.other)

        response = self.client.post(
            reverse("movielist-add-movie", args=[movie_list.id]),
            {"movie": str(self.movie.id)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(movie_list.movies.count(), 0)

    def test_follow_toggles(self):
        movie_list = self.make_list()
        url = reverse("movielist-follow", args=[movie_list.id])
        self.client.force_authenticate(user=self.other)

        followed = self.client.post(url)
        self.assertEqual(followed.status_code, status.HTTP_200_OK)
        self.assertTrue(followed.data["following"])
        self.assertEqual(followed.data["follower_count"], 1)

        unfollowed = self.client.post(url)
        self.assertFalse(unfollowed.data["following"])
        self.assertEqual(movie_list.followers.count(), 0)

    def test_follow_requires_authentication(self):
        movie_list = self.make_list()
        response = self.client.post(reverse("movielist-follow", args=[movie_list.id]))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_filter_by_creator(self):
        self.make_list(name="Mine")
        self.make_list(creator=self.other, name="Theirs")

        response = self.client.get(self.list_url, {"user": self.other.id})
        self.assertEqual([ml["name"] for ml in response.data["results"]], ["Theirs"])

    def test_malformed_user_filter_is_400(self):
        response = self.client.get(self.list_url, {"user": "abc"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("user", response.data)
