import requests
from django.conf import settings

TMDB_BASE_URL = "https://api.themoviedb.org/3"
TIMEOUT_SECONDS = 10


def tmdb_get(path, params=None):
    if params is None:
        params = {}
    params["api_key"] = settings.TMDB_API_KEY
    response = requests.get(
        f"{TMDB_BASE_URL}{path}", params=params, timeout=TIMEOUT_SECONDS
    )
    response.raise_for_status()
    return response.json()


def fetch_popular_movies(page=1):
    return tmdb_get("/movie/popular", {"page": page})


def fetch_discover_movies(page=1, **params):
    """
    /discover/movie with arbitrary filters (release ranges, genres, sort).
    """
    params["page"] = page
    return tmdb_get("/discover/movie", params)


def fetch_movie(tmdb_id):
    """
    Movie details with credits and release dates in a single request.
    """
    return tmdb_get(
        f"/movie/{tmdb_id}",
        {"append_to_response": "credits,release_dates"},
    )


def us_certification(release_dates):
    """
    Pick the US theatrical certification (G, PG, ...) from a
    ``release_dates`` payload, or "" when TMDB has none.
    """
    for country in release_dates.get("results", []):
        if country.get("iso_3166_1") != "US":
            continue
        for release in country.get("release_dates", []):
            certification = (release.get("certification") or "").strip()
            if certification:
                return certification
    return ""
