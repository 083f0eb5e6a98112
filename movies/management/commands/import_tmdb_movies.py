from datetime import date

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from requests import RequestException

from movies.models import Movie, Genre, Person, Credit, CONTENT_RATINGS
from movies.tmdb import (
    fetch_discover_movies,
    fetch_popular_movies,
    fetch_movie,
    us_certification,
)

# TMDB genre id -> local genre name (unmapped TMDB genres are skipped)
TMDB_GENRES = {
    28: "action",
    12: "adventure",
    16: "animation",
    35: "comedy",
    80: "crime",
    99: "documentary",
    18: "drama",
    14: "fantasy",
    27: "horror",
    9648: "mystery",
    10749: "romance",
    878: "sci-fi",
    53: "thriller",
}

# TMDB crew job -> (job, department)
TMDB_CREW_JOBS = {
    "Director": ("director", "directing"),
    "Producer": ("producer", "production"),
    "Screenplay": ("writer", "writing"),
    "Writer": ("writer", "writing"),
    "Director of Photography": ("cinematographer", "camera"),
    "Original Music Composer": ("composer", "sound"),
    "Editor": ("editor", "editing"),
    "Production Design": ("production_designer", "art"),
    "Costume Design": ("costume_designer", "costume"),
}

CAST_LIMIT = 10


class Command(BaseCommand):
    help = "Import movies (with genres, cast and crew) from TMDB."

    def add_arguments(self, parser):
        parser.add_argument(
            "--pages",
            type=int,
            default=5,
            help="How many result pages to fetch (20 movies per page).",
        )
        parser.add_argument(
            "--genre",
            choices=sorted(TMDB_GENRES.values()),
            help="Only discover movies of this genre.",
        )
        parser.add_argument(
            "--min-vote-count",
            type=int,
            default=50,
            help="Skip movies with fewer TMDB votes than this.",
        )

    def handle(self, *args, **options):
        pages = options["pages"]
        genre = options["genre"]
        min_vote_count = options["min_vote_count"]

        created_count = 0
        updated_count = 0
        skipped_count = 0

        for page in range(1, pages + 1):
            self.stdout.write(f"Fetching page {page}...")
            try:
                if genre:
                    tmdb_genre_id = next(
                        gid for gid, name in TMDB_GENRES.items() if name == genre
                    )
                    data = fetch_discover_movies(
                        page=page,
                        with_genres=tmdb_genre_id,
                        sort_by="vote_count.desc",
                    )
                else:
                    data = fetch_popular_movies(page=page)
            except RequestException as exc:
                raise CommandError(f"TMDB request failed: {exc}") from exc

            results = data.get("results", [])
            if not results:
                break

            for teaser in results:
                tmdb_id = teaser.get("id")
                if not tmdb_id or (teaser.get("vote_count") or 0) < min_vote_count:
                    skipped_count += 1
                    continue

                try:
                    details = fetch_movie(tmdb_id)
                except RequestException as exc:
                    self.stderr.write(f"Skipping {tmdb_id}: {exc}")
                    skipped_count += 1
                    continue

                result = self.upsert_movie(details)
                if result is None:
                    skipped_count += 1
                elif result:
                    created_count += 1
                else:
                    updated_count += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Done. Created {created_count}, updated {updated_count}, "
                f"skipped {skipped_count}."
            )
        )

    @transaction.atomic
    def upsert_movie(self, details):
        """
        Create or refresh one movie from a TMDB details payload.

        Returns True when created, False when updated, None when skipped
        (no release date or runtime).
        """
        release_date = details.get("release_date") or ""
        runtime = details.get("runtime") or 0
        if not release_date or runtime < 1:
            return None

        certification = us_certification(details.get("release_dates", {}))

        movie, created = Movie.objects.update_or_create(
            tmdb_id=details["id"],
            defaults={
                "title": details.get("title") or "Untitled",
                "original_title": details.get("original_title") or "",
                "tagline": details.get("tagline") or "",
                "synopsis": details.get("overview") or "",
                "release_date": date.fromisoformat(release_date),
                "runtime": runtime,
                "language": details.get("original_language") or "",
                "country": _production_country(details),
                "content_rating": certification if certification in CONTENT_RATINGS else "",
                "budget": {"amount": details.get("budget") or 0, "currency": "USD"},
                "box_office": {
                    "worldwide": details.get("revenue") or 0,
                    "currency": "USD",
                },
                "production_companies": [
                    c["name"] for c in details.get("production_companies", [])
                ],
                "media": {
                    "posters": [details["poster_path"]] if details.get("poster_path") else [],
                },
            },
        )

        action = "Created" if created else "Updated"
        self.stdout.write(f"{action} movie: {movie.title} ({details['id']})")

        # ---------- Genres ----------
        genres = []
        for g in details.get("genres", []):
            name = TMDB_GENRES.get(g["id"])
            if not name:
                continue
            genre, _ = Genre.objects.get_or_create(
                name=name, defaults={"tmdb_id": g["id"]}
            )
            genres.append(genre)
        movie.genres.set(genres)

        # ---------- Credits ----------
        credits = details.get("credits", {})
        movie.credits.all().delete()

        for cast_member in credits.get("cast", [])[:CAST_LIMIT]:
            person = self._person(cast_member)
            order = cast_member.get("order") or 0
            Credit.objects.create(
                movie=movie,
                person=person,
                credit_type="cast",
                character_name=cast_member.get("character") or "Unknown",
                is_main_character=order < 3,
                billing_order=order,
            )

        for crew_member in credits.get("crew", []):
            mapped = TMDB_CREW_JOBS.get(crew_member.get("job"))
            if not mapped:
                continue
            job, department = mapped
            Credit.objects.create(
                movie=movie,
                person=self._person(crew_member),
                credit_type="crew",
                job=job,
                department=department,
            )

        return created

    def _person(self, payload):
        person, _ = Person.objects.get_or_create(
            tmdb_id=payload["id"],
            defaults={
                "name": payload.get("name") or "Unknown",
                "photo": payload.get("profile_path") or "",
            },
        )
        return person


def _production_country(details):
    countries = details.get("production_countries") or []
    if not countries:
        return ""
    return (countries[0].get("iso_3166_1") or "").upper()[:2]
