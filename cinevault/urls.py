from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("profiles.urls")),
    path("api/", include("movies.urls")),
    path("api/", include("reviews.urls")),
    path("api/", include("lists.urls")),
    path("api/", include("discussions.urls")),
    path("api/", include("news.urls")),
]
