from datetime import date
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.urls import reverse
from django.test import TestCase
from rest_framework.test import APITestCase
from rest_framework import status
from django.contrib.auth import get_user_model

from reviews.models import Review
from .models import Movie, Genre, Person, Credit
from .services.recommender import recommend_for_user, similar_movies

User = get_user_model()


def make_movie(title, genres=(), **kwargs):
    kwargs.setdefault("synopsis", f"{title} synopsis.")
    kwargs.setdefault("release_date", date(2020, 1, 1))
    kwargs.setdefault("runtime", 110)
    movie = Movie.objects.create(title=title, **kwargs)
    if genres:
        movie.genres.set(
            [Genre.objects.get_or_create(name=name)[0] for name in genres]
        )
    return movie


def make_admin(username="admin"):
    user = User.objects.create_user(username=username, password="adminpass123")
    user.profile.role = "admin"
    user.profile.save()
    return user


class MovieAPITests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username="viewer",
            email="viewer@example.com",
            password="testpass123",
        )
        self.admin = make_admin()

        self.matrix = make_movie(
            "The Matrix",
            genres=["action", "sci-fi"],
            release_date=date(1999, 3, 31),
            language="en",
            country="US",
            content_rating="R",
            average_rating=4.5,
            total_ratings=10,
        )
        self.amelie = make_movie(
            "Amélie",
            genres=["comedy", "romance"],
            release_date=date(2001, 4, 25),
            language="fr",
            country="FR",
            content_rating="R",
            average_rating=4.0,
            total_ratings=5,
        )
        self.list_url = reverse("movie-list")

    def test_list_movies_is_paginated(self):
        response = self.client.get(self.list_url, {"limit": 1})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["results"]), 1)
        self.assertEqual(
            response.data["pagination"],
            {"current": 1, "pages": 2, "total": 2, "limit": 1},
        )

    def test_list_filters(self):
        def titles(params):
            response = self.client.get(self.list_url, params)
            return [m["title"] for m in response.data["results"]]

        self.assertEqual(titles({"genre": "sci-fi"}), ["The Matrix"])
        self.assertEqual(titles({"year": 2001}), ["Amélie"])
        self.assertEqual(titles({"language": "fr"}), ["Amélie"])
        self.assertEqual(titles({"country": "fr"}), ["Amélie"])
        self.assertEqual(titles({"min_rating": 4.2}), ["The Matrix"])
        self.assertEqual(titles({"search": "matrix"}), ["The Matrix"])
        self.assertEqual(
            titles({"sort": "-average_rating"}), ["The Matrix", "Amélie"]
        )

    def test_retrieve_single_movie_with_credits(self):
        keanu = Person.objects.create(name="Keanu Reeves")
        Credit.objects.create(
            movie=self.matrix,
            person=keanu,
            credit_type="cast",
            character_name="Neo",
        )

        url = reverse("movie-detail", args=[self.matrix.id])
        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["title"], "The Matrix")
        self.assertEqual(sorted(response.data["genres"]), ["action", "sci-fi"])
        self.assertEqual(response.data["cast"][0]["person_name"], "Keanu Reeves")
        self.assertEqual(response.data["crew"], [])

    def test_only_admin_can_create_movie(self):
        payload = {
            "title": "Dune",
            "synopsis": "Spice.",
            "release_date": "2021-10-22",
            "runtime": 155,
            "genres": ["sci-fi", "adventure"],
            "content_rating": "PG-13",
        }

        self.client.force_authenticate(user=self.user)
        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(
            set(Movie.objects.get(title="Dune").genres.values_list("name", flat=True)),
            {"sci-fi", "adventure"},
        )

    def test_create_rejects_unknown_genre_and_zero_runtime(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            self.list_url,
            {
                "title": "Bad",
                "synopsis": "x",
                "release_date": "2021-01-01",
                "runtime": 0,
                "genres": ["western"],
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("runtime", response.data)
        self.assertIn("genres", response.data)

    def test_derived_rating_fields_are_read_only(self):
        self.client.force_authenticate(user=self.admin)
        url = reverse("movie-detail", args=[self.amelie.id])
        response = self.client.patch(
            url, {"average_rating": 1, "total_ratings": 99}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.amelie.refresh_from_db()
        self.assertEqual(self.amelie.average_rating, 4.0)
        self.assertEqual(self.amelie.total_ratings, 5)

    def test_admin_can_delete_movie(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(reverse("movie-detail", args=[self.amelie.id]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Movie.objects.filter(pk=self.amelie.pk).exists())

    def test_unknown_movie_is_404(self):
        response = self.client.get(
            reverse("movie-detail", args=["00000000-0000-0000-0000-000000000000"])
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class EmbeddedItemAPITests(APITestCase):
    def setUp(self):
        self.contributor = User.objects.create_user(username="fan", password="testpass123")
        self.stranger = User.objects.create_user(username="stranger", password="testpass123")
        self.admin = make_admin()
        self.movie = make_movie("Alien")
        self.trivia_url = reverse("movie-trivia", args=[self.movie.id])

    def add_trivia(self, fact="The chestburster scene was shot in one take."):
        self.client.force_authenticate(user=self.contributor)
        return self.client.post(self.trivia_url, {"fact": fact}, format="json")

    def test_anonymous_can_read_but_not_add(self):
        self.assertEqual(self.client.get(self.trivia_url).data, [])

        response = self.client.post(self.trivia_url, {"fact": "x"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_user_adds_trivia_tagged_with_contributor(self):
        response = self.add_trivia()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["added_by"], self.contributor.pk)
        self.assertIn("added_at", response.data)

        self.movie.refresh_from_db()
        self.assertEqual(len(self.movie.trivia), 1)
        self.assertEqual(self.movie.trivia[0]["id"], response.data["id"])

    def test_only_contributor_or_admin_can_edit_or_delete(self):
        item_id = self.add_trivia().data["id"]
        url = reverse("movie-trivia-detail", args=[self.movie.id, item_id])

        self.client.force_authenticate(user=self.stranger)
        self.assertEqual(
            self.client.patch(url, {"fact": "hijacked"}, format="json").status_code,
            status.HTTP_403_FORBIDDEN,
        )
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.contributor)
        response = self.client.patch(url, {"fact": "Edited."}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["fact"], "Edited.")
        self.assertEqual(response.data["added_by"], self.contributor.pk)

        self.client.force_authenticate(user=self.admin)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)
        self.movie.refresh_from_db()
        self.assertEqual(self.movie.trivia, [])

    def test_unknown_item_is_404(self):
        self.add_trivia()
        url = reverse("movie-trivia-detail", args=[self.movie.id, "missing"])
        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)

    def test_goof_category_is_validated(self):
        self.client.force_authenticate(user=self.contributor)
        url = reverse("movie-goofs", args=[self.movie.id])

        bad = self.client.post(url, {"description": "x", "category": "nope"}, format="json")
        good = self.client.post(
            url, {"description": "Boom mic visible.", "category": "revealing"}, format="json"
        )

        self.assertEqual(bad.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(good.status_code, status.HTTP_201_CREATED)

    def test_soundtrack_is_admin_only(self):
        url = reverse("movie-soundtrack", args=[self.movie.id])
        payload = {"title": "Main Title", "composer": "Jerry Goldsmith"}

        self.client.force_authenticate(user=self.contributor)
        self.assertEqual(
            self.client.post(url, payload, format="json").status_code,
            status.HTTP_403_FORBIDDEN,
        )

        self.client.force_authenticate(user=self.admin)
        response = self.client.post(url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertNotIn("added_by", response.data)


class CreditAPITests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="viewer", password="testpass123")
        self.admin = make_admin()
        self.movie = make_movie("Inception")
        self.person = Person.objects.create(name="Christopher Nolan")
        self.crew_url = reverse("movie-crew", args=[self.movie.id])

    def test_admin_adds_crew_credit(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            self.crew_url,
            {"person": self.person.id, "job": "director", "department": "directing"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        credit = Credit.objects.get()
        self.assertEqual(credit.credit_type, "crew")
        self.assertEqual(credit.movie, self.movie)

    def test_crew_credit_needs_job_and_cast_needs_character(self):
        self.client.force_authenticate(user=self.admin)

        crew = self.client.post(self.crew_url, {"person": self.person.id}, format="json")
        cast = self.client.post(
            reverse("movie-cast", args=[self.movie.id]),
            {"person": self.person.id},
            format="json",
        )

        self.assertEqual(crew.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(cast.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Credit.objects.count(), 0)

    def test_non_admin_cannot_change_credits(self):
        credit = Credit.objects.create(
            movie=self.movie, person=self.person, credit_type="crew",
            job="director", department="directing",
        )
        self.client.force_authenticate(user=self.user)

        response = self.client.delete(
            reverse("movie-crew-detail", args=[self.movie.id, credit.id])
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Credit.objects.filter(pk=credit.pk).exists())

    def test_credit_is_only_reachable_through_its_movie(self):
        credit = Credit.objects.create(
            movie=self.movie, person=self.person, credit_type="crew",
            job="director", department="directing",
        )
        other = make_movie("Memento")

        ok = self.client.get(reverse("movie-crew-detail", args=[self.movie.id, credit.id]))
        wrong_movie = self.client.get(reverse("movie-crew-detail", args=[other.id, credit.id]))
        wrong_type = self.client.get(reverse("movie-cast-detail", args=[self.movie.id, credit.id]))

        self.assertEqual(ok.status_code, status.HTTP_200_OK)
        self.assertEqual(wrong_movie.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(wrong_type.status_code, status.HTTP_404_NOT_FOUND)


class RecommenderTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="taster", password="testpass123")
        self.profile = self.user.profile

    def test_empty_taste_profile_returns_nothing(self):
        make_movie("Anything", genres=["action"], average_rating=5)
        self.assertEqual(recommend_for_user(self.user), [])

    def test_genre_taste_excludes_rated_movies(self):
        rated = make_movie("Rated Action", genres=["action"], average_rating=5)
        fresh = make_movie("Fresh Action", genres=["action"], average_rating=3)
        make_movie("A Comedy", genres=["comedy"], average_rating=5)
        Review.objects.create(user=self.user, movie=rated, rating=5, comment="seen")

        self.profile.favorite_genres = ["action"]
        self.profile.save()

        self.assertEqual(recommend_for_user(self.user), [fresh])

    def test_excludes_watched_movies(self):
        watched = make_movie("Watched", genres=["drama"])
        self.profile.favorite_genres = ["drama"]
        self.profile.save()
        self.profile.watched_movies.add(watched)

        self.assertEqual(recommend_for_user(self.user), [])

    def test_at_most_ten_ordered_by_rating(self):
        for i in range(12):
            make_movie(
                f"Action {i:02d}",
                genres=["action", "thriller"],
                average_rating=i / 3,
                total_ratings=i,
            )
        self.profile.favorite_genres = ["action", "thriller"]
        self.profile.save()

        movies = recommend_for_user(self.user)

        self.assertEqual(len(movies), 10)
        self.assertEqual(len({m.pk for m in movies}), 10)
        self.assertEqual(movies[0].title, "Action 11")
        ratings = [m.average_rating for m in movies]
        self.assertEqual(ratings, sorted(ratings, reverse=True))

    def test_ties_broken_by_rating_count_then_title(self):
        b = make_movie("B", genres=["horror"], average_rating=4, total_ratings=2)
        a = make_movie("A", genres=["horror"], average_rating=4, total_ratings=2)
        c = make_movie("C", genres=["horror"], average_rating=4, total_ratings=9)
        self.profile.favorite_genres = ["horror"]
        self.profile.save()

        self.assertEqual(recommend_for_user(self.user), [c, a, b])

    def test_actor_and_director_taste(self):
        keanu = Person.objects.create(name="Keanu Reeves")
        nolan = Person.objects.create(name="Christopher Nolan")
        john_wick = make_movie("John Wick")
        tenet = make_movie("Tenet")
        make_movie("Unrelated")
        Credit.objects.create(
            movie=john_wick, person=keanu, credit_type="cast", character_name="John"
        )
        Credit.objects.create(
            movie=tenet, person=nolan, credit_type="crew",
            job="director", department="directing",
        )
        # a producer credit is not a director match
        Credit.objects.create(
            movie=john_wick, person=nolan, credit_type="crew",
            job="producer", department="production",
        )

        self.profile.favorite_actors = ["Keanu Reeves"]
        self.profile.save()
        self.assertEqual(recommend_for_user(self.user), [john_wick])

        self.profile.favorite_actors = []
        self.profile.favorite_directors = ["Christopher Nolan"]
        self.profile.save()
        self.assertEqual(recommend_for_user(self.user), [tenet])

    def test_content_rating_and_language_restrictions(self):
        make_movie("Kids EN", genres=["animation"], content_rating="G", language="en")
        make_movie("Adult EN", genres=["animation"], content_rating="R", language="en")
        make_movie("Kids FR", genres=["animation"], content_rating="G", language="fr")

        self.profile.favorite_genres = ["animation"]
        self.profile.content_ratings = ["G", "PG"]
        self.profile.save()
        titles = {m.title for m in recommend_for_user(self.user)}
        self.assertEqual(titles, {"Kids EN", "Kids FR"})

        self.profile.languages = ["en"]
        self.profile.save()
        titles = [m.title for m in recommend_for_user(self.user)]
        self.assertEqual(titles, ["Kids EN"])

    def test_similar_movies_share_genre_or_director(self):
        nolan = Person.objects.create(name="Christopher Nolan")
        inception = make_movie("Inception", genres=["sci-fi"])
        interstellar = make_movie("Interstellar", genres=["sci-fi"])
        dunkirk = make_movie("Dunkirk", genres=["drama"])
        make_movie("Notting Hill", genres=["romance"])
        for movie in (inception, dunkirk):
            Credit.objects.create(
                movie=movie, person=nolan, credit_type="crew",
                job="director", department="directing",
            )

        similar = {m.title for m in similar_movies(inception)}
        self.assertEqual(similar, {"Interstellar", "Dunkirk"})


class DiscoveryAPITests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="critic", password="testpass123")
        self.hot = make_movie("Hot", genres=["action"], average_rating=3, total_ratings=1)
        self.best = make_movie("Best", genres=["drama"], average_rating=5, total_ratings=3)
        self.meh = make_movie("Meh", genres=["action"], average_rating=2, total_ratings=1)
        Review.objects.create(user=self.user, movie=self.hot, rating=3, comment="fun")

    def test_top_rated(self):
        response = self.client.get(reverse("movie-top-rated"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]["title"], "Best")

    def test_top_by_genre(self):
        response = self.client.get(reverse("movie-top-by-genre", args=["action"]))
        self.assertEqual([m["title"] for m in response.data], ["Hot", "Meh"])

        unknown = self.client.get(reverse("movie-top-by-genre", args=["western"]))
        self.assertEqual(unknown.status_code, status.HTTP_404_NOT_FOUND)

    def test_trending_counts_recent_reviews(self):
        response = self.client.get(reverse("movie-trending"))
        self.assertEqual([m["title"] for m in response.data], ["Hot"])

    def test_recommendations_require_authentication(self):
        url = reverse("recommendations")
        self.assertEqual(self.client.get(url).status_code, status.HTTP_401_UNAUTHORIZED)

        self.user.profile.favorite_genres = ["action"]
        self.user.profile.save()
        self.client.force_authenticate(user=self.user)
        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([m["title"] for m in response.data], ["Meh"])


class ImportTmdbMoviesCommandTests(TestCase):
    DETAILS = {
        "id": 603,
        "title": "The Matrix",
        "original_title": "The Matrix",
        "overview": "A hacker learns the truth.",
        "release_date": "1999-03-31",
        "runtime": 136,
        "original_language": "en",
        "budget": 63000000,
        "revenue": 463517383,
        "genres": [{"id": 28, "name": "Action"}, {"id": 37, "name": "Western"}],
        "production_companies": [{"name": "Village Roadshow Pictures"}],
        "production_countries": [{"iso_3166_1": "US", "name": "United States of America"}],
        "release_dates": {
            "results": [
                {"iso_3166_1": "US", "release_dates": [{"certification": "R"}]}
            ]
        },
        "credits": {
            "cast": [{"id": 6384, "name": "Keanu Reeves", "character": "Neo", "order": 0}],
            "crew": [
                {"id": 9340, "name": "Lana Wachowski", "job": "Director"},
                {"id": 1, "name": "Someone", "job": "Gaffer"},
            ],
        },
    }

    @mock.patch("movies.management.commands.import_tmdb_movies.fetch_movie")
    @mock.patch("movies.management.commands.import_tmdb_movies.fetch_popular_movies")
    def test_imports_movie_with_genres_and_credits(self, popular, details):
        popular.return_value = {"results": [{"id": 603, "vote_count": 1000}]}
        details.return_value = self.DETAILS

        out = StringIO()
        call_command("import_tmdb_movies", pages=1, stdout=out)
        # a second run updates instead of duplicating
        call_command("import_tmdb_movies", pages=1, stdout=out)

        movie = Movie.objects.get(tmdb_id=603)
        self.assertEqual(Movie.objects.count(), 1)
        self.assertEqual(movie.content_rating, "R")
        self.assertEqual(movie.country, "US")
        self.assertEqual(list(movie.genres.values_list("name", flat=True)), ["action"])
        self.assertEqual(movie.credits.filter(credit_type="cast").get().character_name, "Neo")
        self.assertEqual(movie.credits.filter(credit_type="crew").get().job, "director")
        self.assertIn("Created 0, updated 1", out.getvalue())
