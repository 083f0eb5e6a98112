from django.contrib import admin
from .models import Discussion, DiscussionComment


class DiscussionCommentInline(admin.TabularInline):
    model = DiscussionComment
    extra = 0
    fields = ("author", "content", "likes", "created_at")
    readonly_fields = ("created_at",)


@admin.register(Discussion)
class DiscussionAdmin(admin.ModelAdmin):
    list_display = ("title", "author", "category", "views", "is_locked", "created_at")
    list_filter = ("category", "is_locked")
    search_fields = ("title", "content", "author__username")
    inlines = [DiscussionCommentInline]
