import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Genre",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(choices=[("action", "Action"), ("comedy", "Comedy"), ("drama", "Drama"), ("horror", "Horror"), ("romance", "Romance"), ("sci-fi", "Sci-Fi"), ("thriller", "Thriller"), ("documentary", "Documentary"), ("animation", "Animation"), ("adventure", "Adventure"), ("fantasy", "Fantasy"), ("crime", "Crime"), ("mystery", "Mystery")], max_length=30, unique=True)),
                ("tmdb_id", models.IntegerField(blank=True, null=True, unique=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Person",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("biography", models.TextField(blank=True)),
                ("birth_date", models.DateField(blank=True, null=True)),
                ("birth_place", models.CharField(blank=True, max_length=200)),
                ("nationality", models.CharField(blank=True, max_length=100)),
                ("photo", models.CharField(blank=True, max_length=500)),
                ("awards", models.JSONField(blank=True, default=list)),
                ("filmography", models.JSONField(blank=True, default=list)),
                ("tmdb_id", models.IntegerField(blank=True, null=True, unique=True)),
            ],
            options={
                "ordering": ["name"],
                "indexes": [models.Index(fields=["name"], name="person_name_idx")],
            },
        ),
        migrations.CreateModel(
            name="Movie",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("tmdb_id", models.IntegerField(blank=True, null=True, unique=True)),
                ("title", models.CharField(max_length=255)),
                ("original_title", models.CharField(blank=True, max_length=255)),
                ("tagline", models.CharField(blank=True, max_length=255)),
                ("synopsis", models.TextField()),
                ("release_date", models.DateField()),
                ("runtime", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("language", models.CharField(blank=True, max_length=50)),
                ("content_rating", models.CharField(blank=True, choices=[("G", "G"), ("PG", "PG"), ("PG-13", "PG-13"), ("R", "R"), ("NC-17", "NC-17")], max_length=10)),
                ("content_rating_reason", models.CharField(blank=True, max_length=255)),
                ("parental_guidance", models.JSONField(blank=True, default=dict)),
                ("media", models.JSONField(blank=True, default=dict)),
                ("technical_specs", models.JSONField(blank=True, default=dict)),
                ("budget", models.JSONField(blank=True, default=dict)),
                ("box_office", models.JSONField(blank=True, default=dict)),
                ("production_companies", models.JSONField(blank=True, default=list)),
                ("distributors", models.JSONField(blank=True, default=list)),
                ("filming_locations", models.JSONField(blank=True, default=list)),
                ("trivia", models.JSONField(blank=True, default=list)),
                ("goofs", models.JSONField(blank=True, default=list)),
                ("soundtrack", models.JSONField(blank=True, default=list)),
                ("average_rating", models.FloatField(default=0, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(5)])),
                ("total_ratings", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("genres", models.ManyToManyField(blank=True, related_name="movies", to="movies.genre")),
            ],
            options={
                "ordering": ["-release_date", "title"],
            },
        ),
        migrations.CreateModel(
            name="Credit",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("credit_type", models.CharField(choices=[("cast", "Cast"), ("crew", "Crew")], max_length=10)),
                ("character_name", models.CharField(blank=True, max_length=200)),
                ("character_description", models.TextField(blank=True)),
                ("is_main_character", models.BooleanField(default=False)),
                ("job", models.CharField(blank=True, choices=[("director", "Director"), ("producer", "Producer"), ("writer", "Writer"), ("cinematographer", "Cinematographer"), ("composer", "Composer"), ("editor", "Editor"), ("production_designer", "Production Designer"), ("costume_designer", "Costume Designer")], max_length=30)),
                ("department", models.CharField(blank=True, choices=[("directing", "Directing"), ("production", "Production"), ("writing", "Writing"), ("camera", "Camera"), ("sound", "Sound"), ("editing", "Editing"), ("art", "Art"), ("costume", "Costume")], max_length=30)),
                ("billing_order", models.PositiveIntegerField(default=0)),
                ("movie", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="credits", to="movies.movie")),
                ("person", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="credits", to="movies.person")),
            ],
            options={
                "ordering": ["credit_type", "billing_order", "id"],
                "indexes": [
                    models.Index(fields=["person", "credit_type"], name="credit_person_type_idx"),
                    models.Index(fields=["movie", "credit_type"], name="credit_movie_type_idx"),
                ],
            },
        ),
        migrations.AddField(
            model_name="movie",
            name="people",
            field=models.ManyToManyField(blank=True, related_name="movies", through="movies.Credit", to="movies.person"),
        ),
        migrations.AddIndex(
            model_name="movie",
            index=models.Index(fields=["release_date"], name="movie_release_date_idx"),
        ),
        migrations.AddIndex(
            model_name="movie",
            index=models.Index(fields=["average_rating", "total_ratings"], name="movie_rating_idx"),
        ),
        migrations.AddIndex(
            model_name="movie",
            index=models.Index(fields=["language"], name="movie_language_idx"),
        ),
        migrations.AddIndex(
            model_name="movie",
            index=models.Index(fields=["content_rating"], name="movie_content_rating_idx"),
        ),
    ]
