from django.contrib import admin
from .models import Movie, Genre, Person, Credit


class CreditInline(admin.TabularInline):
    model = Credit
    extra = 0
    autocomplete_fields = ("person",)


@admin.register(Movie)
class MovieAdmin(admin.ModelAdmin):
    list_display = ("title", "release_date", "content_rating", "average_rating", "total_ratings")
    list_filter = ("genres", "content_rating", "language")
    search_fields = ("title", "original_title")
    readonly_fields = ("average_rating", "total_ratings")
    inlines = [CreditInline]


@admin.register(Genre)
class GenreAdmin(admin.ModelAdmin):
    list_display = ("name", "tmdb_id")


@admin.register(Person)
class PersonAdmin(admin.ModelAdmin):
    list_display = ("name", "nationality", "birth_date")
    search_fields = ("name",)
