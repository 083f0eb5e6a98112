import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="NewsArticle",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=200)),
                ("content", models.TextField()),
                ("category", models.CharField(choices=[("movies", "Movies"), ("actors", "Actors"), ("projects", "Projects"), ("industry", "Industry Updates")], max_length=20)),
                ("publication_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("source", models.CharField(max_length=200)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("author", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="news_articles", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-publication_date"],
                "indexes": [
                    models.Index(fields=["category", "-publication_date"], name="news_category_idx"),
                ],
            },
        ),
    ]
