from django.contrib import admin
from .models import MovieList


@admin.register(MovieList)
class MovieListAdmin(admin.ModelAdmin):
    list_display = ("name", "creator", "is_public", "created_at")
    search_fields = ("creator__username", "name", "description")
    list_filter = ("is_public",)
    filter_horizontal = ("movies", "followers")
