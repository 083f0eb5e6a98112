from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import MovieListViewSet

router = DefaultRouter()
router.register(r"lists", MovieListViewSet, basename="movielist")

urlpatterns = [
    path("", include(router.urls)),
]
