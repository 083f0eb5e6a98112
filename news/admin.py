from django.contrib import admin
from .models import NewsArticle


@admin.register(NewsArticle)
class NewsArticleAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "author", "source", "publication_date")
    list_filter = ("category",)
    search_fields = ("title", "content", "source")
