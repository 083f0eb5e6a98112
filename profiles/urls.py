from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import (
    LoginView,
    MovieSetView,
    MyProfileView,
    PreferencesView,
    RegisterView,
)

urlpatterns = [
    path("auth/register/", RegisterView.as_view(), name="register"),
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("profiles/me/", MyProfileView.as_view(), name="my-profile"),
    path(
        "profiles/me/preferences/",
        PreferencesView.as_view(),
        name="my-preferences",
    ),
]

for relation, prefix in (("wishlist", "wishlist"), ("watched_movies", "watched")):
    view = MovieSetView.as_view(relation=relation)
    urlpatterns += [
        path(f"profiles/me/{prefix}/", view, name=f"my-{prefix}"),
        path(
            f"profiles/me/{prefix}/<uuid:movie_pk>/",
            view,
            name=f"my-{prefix}-movie",
        ),
    ]
