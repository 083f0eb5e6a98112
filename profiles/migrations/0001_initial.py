import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("movies", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="UserProfile",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("role", models.CharField(choices=[("user", "User"), ("admin", "Admin")], default="user", max_length=10)),
                ("favorite_genres", models.JSONField(blank=True, default=list)),
                ("favorite_actors", models.JSONField(blank=True, default=list)),
                ("favorite_directors", models.JSONField(blank=True, default=list)),
                ("content_ratings", models.JSONField(blank=True, default=list)),
                ("languages", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="profile", to=settings.AUTH_USER_MODEL)),
                ("wishlist", models.ManyToManyField(blank=True, related_name="wishlisted_by", to="movies.movie")),
                ("watched_movies", models.ManyToManyField(blank=True, related_name="watched_by", to="movies.movie")),
            ],
        ),
    ]
