from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .models import Movie
from .views import (
    MovieViewSet,
    PersonViewSet,
    EmbeddedItemViewSet,
    CreditViewSet,
    RecommendationView,
)

router = DefaultRouter()
router.register(r"movies", MovieViewSet, basename="movie")
router.register(r"people", PersonViewSet, basename="person")

urlpatterns = [
    path("recommendations/", RecommendationView.as_view(), name="recommendations"),
]

for collection in Movie.EMBEDDED_COLLECTIONS:
    urlpatterns += [
        path(
            f"movies/<uuid:movie_pk>/{collection}/",
            EmbeddedItemViewSet.as_view(
                {"get": "list", "post": "create"}, collection=collection
            ),
            name=f"movie-{collection}",
        ),
        path(
            f"movies/<uuid:movie_pk>/{collection}/<str:item_id>/",
            EmbeddedItemViewSet.as_view(
                {"get": "retrieve", "patch": "partial_update", "delete": "destroy"},
                collection=collection,
            ),
            name=f"movie-{collection}-detail",
        ),
    ]

for credit_type in ("cast", "crew"):
    urlpatterns += [
        path(
            f"movies/<uuid:movie_pk>/{credit_type}/",
            CreditViewSet.as_view(
                {"get": "list", "post": "create"}, credit_type=credit_type
            ),
            name=f"movie-{credit_type}",
        ),
        path(
            f"movies/<uuid:movie_pk>/{credit_type}/<int:pk>/",
            CreditViewSet.as_view(
                {
                    "get": "retrieve",
                    "put": "update",
                    "patch": "partial_update",
                    "delete": "destroy",
                },
                credit_type=credit_type,
            ),
            name=f"movie-{credit_type}-detail",
        ),
    ]

urlpatterns += [
    path("", include(router.urls)),
]
