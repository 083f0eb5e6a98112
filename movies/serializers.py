from rest_framework import serializers
from .models import Movie, Genre, Person, Credit, GENRE_NAMES


class GenreField(serializers.SlugRelatedField):
    """Genres are addressed by name; known names are created on first use."""

    def __init__(self, **kwargs):
        kwargs.setdefault("slug_field", "name")
        kwargs.setdefault("queryset", Genre.objects.all())
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        name = str(data).strip().lower()
        if name not in GENRE_NAMES:
            raise serializers.ValidationError(f"Unknown genre: {data}.")
        genre, _ = Genre.objects.get_or_create(name=name)
        return genre


class PersonSerializer(serializers.ModelSerializer):
    class Meta:
        model = Person
        fields = [
            "id",
            "name",
            "biography",
            "birth_date",
            "birth_place",
            "nationality",
            "photo",
            "awards",
            "filmography",
            "tmdb_id",
        ]


class CreditSerializer(serializers.ModelSerializer):
    person = serializers.PrimaryKeyRelatedField(queryset=Person.objects.all())
    person_name = serializers.ReadOnlyField(source="person.name")

    class Meta:
        model = Credit
        fields = [
            "id",
            "person",
            "person_name",
            "credit_type",
            "character_name",
            "character_description",
            "is_main_character",
            "job",
            "department",
            "billing_order",
        ]
        read_only_fields = ["credit_type"]

    def validate(self, attrs):
        credit_type = self.context.get("credit_type") or getattr(
            self.instance, "credit_type", None
        )

        def current(field):
            if field in attrs:
                return attrs[field]
            return getattr(self.instance, field, "")

        if credit_type == "cast" and not current("character_name"):
            raise serializers.ValidationError(
                {"character_name": "Cast credits need a character name."}
            )
        if credit_type == "crew":
            if not current("job"):
                raise serializers.ValidationError(
                    {"job": "Crew credits need a job."}
                )
            if not current("department"):
                raise serializers.ValidationError(
                    {"department": "Crew credits need a department."}
                )
        return attrs


class MovieSerializer(serializers.ModelSerializer):
    genres = GenreField(many=True, required=False)
    cast = serializers.SerializerMethodField()
    crew = serializers.SerializerMethodField()

    class Meta:
        model = Movie
        fields = [
            "id",
            "tmdb_id",
            "title",
            "original_title",
            "tagline",
            "synopsis",
            "release_date",
            "runtime",
            "language",
            "country",
            "genres",
            "cast",
            "crew",
            "content_rating",
            "content_rating_reason",
            "parental_guidance",
            "media",
            "technical_specs",
            "budget",
            "box_office",
            "production_companies",
            "distributors",
            "filming_locations",
            "trivia",
            "goofs",
            "soundtrack",
            "average_rating",
            "total_ratings",
            "created_at",
            "updated_at",
        ]
        # derived fields and embedded collections have their own writers
        read_only_fields = [
            "average_rating",
            "total_ratings",
            "trivia",
            "goofs",
            "soundtrack",
            "created_at",
            "updated_at",
        ]

    def _credits(self, obj, credit_type):
        credits = [c for c in obj.credits.all() if c.credit_type == credit_type]
        return CreditSerializer(credits, many=True).data

    def get_cast(self, obj):
        return self._credits(obj, "cast")

    def get_crew(self, obj):
        return self._credits(obj, "crew")


class MovieCardSerializer(serializers.ModelSerializer):
    """Lightweight movie card for lists, wishlists and recommendations."""
    genres = serializers.SlugRelatedField(
        many=True, read_only=True, slug_field="name"
    )

    class Meta:
        model = Movie
        fields = [
            "id",
            "title",
            "release_date",
            "runtime",
            "language",
            "country",
            "content_rating",
            "genres",
            "average_rating",
            "total_ratings",
        ]


# ---- Embedded collection items ----

class TriviaItemSerializer(serializers.Serializer):
    fact = serializers.CharField(max_length=2000)


class GoofItemSerializer(serializers.Serializer):
    CATEGORY_CHOICES = ["continuity", "factual", "revealing", "plot", "technical"]

    description = serializers.CharField(max_length=2000)
    category = serializers.ChoiceField(choices=CATEGORY_CHOICES)


class SoundtrackItemSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    artist = serializers.CharField(max_length=255, required=False, allow_blank=True)
    composer = serializers.CharField(max_length=255, required=False, allow_blank=True)
    duration = serializers.CharField(max_length=20, required=False, allow_blank=True)
    scene = serializers.CharField(max_length=500, required=False, allow_blank=True)


EMBEDDED_ITEM_SERIALIZERS = {
    "trivia": TriviaItemSerializer,
    "goofs": GoofItemSerializer,
    "soundtrack": SoundtrackItemSerializer,
}
