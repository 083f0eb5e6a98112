import uuid
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone


GENRE_CHOICES = [
    ("action", "Action"),
    ("comedy", "Comedy"),
    ("drama", "Drama"),
    ("horror", "Horror"),
    ("romance", "Romance"),
    ("sci-fi", "Sci-Fi"),
    ("thriller", "Thriller"),
    ("documentary", "Documentary"),
    ("animation", "Animation"),
    ("adventure", "Adventure"),
    ("fantasy", "Fantasy"),
    ("crime", "Crime"),
    ("mystery", "Mystery"),
]
GENRE_NAMES = [value for value, _ in GENRE_CHOICES]

CONTENT_RATING_CHOICES = [
    ("G", "G"),
    ("PG", "PG"),
    ("PG-13", "PG-13"),
    ("R", "R"),
    ("NC-17", "NC-17"),
]
CONTENT_RATINGS = [value for value, _ in CONTENT_RATING_CHOICES]


class Genre(models.Model):
    name = models.CharField(max_length=30, unique=True, choices=GENRE_CHOICES)
    tmdb_id = models.IntegerField(unique=True, null=True, blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class Person(models.Model):
    name = models.CharField(max_length=200)
    biography = models.TextField(blank=True)
    birth_date = models.DateField(null=True, blank=True)
    birth_place = models.CharField(max_length=200, blank=True)
    nationality = models.CharField(max_length=100, blank=True)
    photo = models.CharField(max_length=500, blank=True)
    # [{"name", "year", "category"}]
    awards = models.JSONField(default=list, blank=True)
    # [{"title", "year", "role"}]
    filmography = models.JSONField(default=list, blank=True)
    tmdb_id = models.IntegerField(unique=True, null=True, blank=True)

    class Meta:
        ordering = ["name"]
        indexes = [models.Index(fields=["name"], name="person_name_idx")]

    def __str__(self):
        return self.name


class Movie(models.Model):
    """
    Owning aggregate for a title. Trivia, goofs and soundtrack entries are
    embedded JSON items addressed by their own ``id`` through the
    ``*_item`` methods below; cast and crew live in ``Credit`` rows.
    """

    EMBEDDED_COLLECTIONS = ("trivia", "goofs", "soundtrack")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tmdb_id = models.IntegerField(unique=True, null=True, blank=True)
    title = models.CharField(max_length=255)
    original_title = models.CharField(max_length=255, blank=True)
    tagline = models.CharField(max_length=255, blank=True)
    synopsis = models.TextField()
    release_date = models.DateField()
    runtime = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    language = models.CharField(max_length=50, blank=True)
    # ISO 3166-1 code of the main production country
    country = models.CharField(max_length=2, blank=True)

    genres = models.ManyToManyField(Genre, related_name="movies", blank=True)
    people = models.ManyToManyField(
        Person,
        through="Credit",
        related_name="movies",
        blank=True,
    )

    content_rating = models.CharField(
        max_length=10, choices=CONTENT_RATING_CHOICES, blank=True
    )
    content_rating_reason = models.CharField(max_length=255, blank=True)
    # {"violence": {"level", "description"}, "language": ..., ...}
    parental_guidance = models.JSONField(default=dict, blank=True)

    # {"cover_photo", "photos", "posters", "trailer"}
    media = models.JSONField(default=dict, blank=True)
    # {"aspect_ratio", "sound_mix", "color", "languages"}
    technical_specs = models.JSONField(default=dict, blank=True)
    # {"amount", "currency"}
    budget = models.JSONField(default=dict, blank=True)
    # {"domestic", "international", "worldwide", "currency"}
    box_office = models.JSONField(default=dict, blank=True)
    production_companies = models.JSONField(default=list, blank=True)
    distributors = models.JSONField(default=list, blank=True)
    filming_locations = models.JSONField(default=list, blank=True)

    trivia = models.JSONField(default=list, blank=True)
    goofs = models.JSONField(default=list, blank=True)
    soundtrack = models.JSONField(default=list, blank=True)

    # derived from reviews; written only by reviews.services.ratings
    average_rating = models.FloatField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(5)],
    )
    total_ratings = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-release_date", "title"]
        indexes = [
            models.Index(fields=["release_date"], name="movie_release_date_idx"),
            models.Index(
                fields=["average_rating", "total_ratings"], name="movie_rating_idx"
            ),
            models.Index(fields=["language"], name="movie_language_idx"),
            models.Index(fields=["content_rating"], name="movie_content_rating_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.release_date.year})"

    # ---- Embedded collections ----

    def _items(self, collection):
        if collection not in self.EMBEDDED_COLLECTIONS:
            raise ValueError(f"Unknown embedded collection: {collection}")
        return getattr(self, collection)

    def get_item(self, collection, item_id):
        for item in self._items(collection):
            if item.get("id") == str(item_id):
                return item
        return None

    def add_item(self, collection, data, contributor=None):
        item = {"id": str(uuid.uuid4()), **data}
        if contributor is not None:
            item["added_by"] = contributor.pk
            item["added_at"] = timezone.now().isoformat()
        self._items(collection).append(item)
        self.save(update_fields=[collection, "updated_at"])
        return item

    def update_item(self, collection, item_id, data):
        item = self.get_item(collection, item_id)
        if item is None:
            return None
        # id and contributor tags are not editable
        for key, value in data.items():
            if key not in ("id", "added_by", "added_at"):
                item[key] = value
        self.save(update_fields=[collection, "updated_at"])
        return item

    def remove_item(self, collection, item_id):
        item = self.get_item(collection, item_id)
        if item is None:
            return None
        setattr(
            self,
            collection,
            [i for i in self._items(collection) if i.get("id") != str(item_id)],
        )
        self.save(update_fields=[collection, "updated_at"])
        return item


class Credit(models.Model):
    CREDIT_TYPE_CHOICES = [
        ("cast", "Cast"),
        ("crew", "Crew"),
    ]
    JOB_CHOICES = [
        ("director", "Director"),
        ("producer", "Producer"),
        ("writer", "Writer"),
        ("cinematographer", "Cinematographer"),
        ("composer", "Composer"),
        ("editor", "Editor"),
        ("production_designer", "Production Designer"),
        ("costume_designer", "Costume Designer"),
    ]
    DEPARTMENT_CHOICES = [
        ("directing", "Directing"),
        ("production", "Production"),
        ("writing", "Writing"),
        ("camera", "Camera"),
        ("sound", "Sound"),
        ("editing", "Editing"),
        ("art", "Art"),
        ("costume", "Costume"),
    ]

    movie = models.ForeignKey(
        Movie, on_delete=models.CASCADE, related_name="credits"
    )
    person = models.ForeignKey(
        Person, on_delete=models.CASCADE, related_name="credits"
    )
    credit_type = models.CharField(max_length=10, choices=CREDIT_TYPE_CHOICES)

    # cast
    character_name = models.CharField(max_length=200, blank=True)
    character_description = models.TextField(blank=True)
    is_main_character = models.BooleanField(default=False)

    # crew
    job = models.CharField(max_length=30, choices=JOB_CHOICES, blank=True)
    department = models.CharField(
        max_length=30, choices=DEPARTMENT_CHOICES, blank=True
    )

    billing_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["credit_type", "billing_order", "id"]
        indexes = [
            models.Index(fields=["person", "credit_type"], name="credit_person_type_idx"),
            models.Index(fields=["movie", "credit_type"], name="credit_movie_type_idx"),
        ]

    def __str__(self):
        label = self.character_name if self.credit_type == "cast" else self.job
        return f"{self.person} ({label}) – {self.movie}"
