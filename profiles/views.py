import logging

from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from cinevault.membership import add_member, remove_member
from movies.models import Movie
from movies.serializers import MovieCardSerializer
from .serializers import (
    LoginSerializer,
    PreferencesSerializer,
    RegisterSerializer,
    UserProfileSerializer,
    issue_tokens,
)

logger = logging.getLogger(__name__)


class RegisterView(APIView):
    """
    POST /api/auth/register/  {username, email, password}

    Creates the account (the profile follows via signal) and returns a
    token pair. New accounts always get the ``user`` role.
    """

    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            user = serializer.save()
        logger.info("Registered user %s (%s)", user.pk, user.username)
        return Response(issue_tokens(user), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    POST /api/auth/login/  {email, password}
    """

    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = LoginSerializer(
            data=request.data, context={"request": request}
        )
        serializer.is_valid(raise_exception=True)
        return Response(issue_tokens(serializer.validated_data["user"]))


class MyProfileView(generics.RetrieveUpdateDestroyAPIView):
    """
    GET/PUT/PATCH /api/profiles/me/   -> own profile
    DELETE        /api/profiles/me/   -> delete the account
    """

    serializer_class = UserProfileSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user.profile

    def update(self, request, *args, **kwargs):
        with transaction.atomic():
            return super().update(request, *args, **kwargs)

    def perform_destroy(self, instance):
        # cascades to reviews (and their rating refresh), lists, threads
        with transaction.atomic():
            user_id = instance.user_id
            instance.user.delete()
        logger.info("Deleted account %s", user_id)


class PreferencesView(generics.RetrieveUpdateAPIView):
    """
    GET/PUT/PATCH /api/profiles/me/preferences/
    """

    serializer_class = PreferencesSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user.profile


class MovieSetView(APIView):
    """
    A set of movie references on the caller's profile.

    GET    /api/profiles/me/<relation>/
    POST   /api/profiles/me/<relation>/<movie_pk>/   -> add (idempotent)
    DELETE /api/profiles/me/<relation>/<movie_pk>/   -> remove (idempotent)
    """

    relation = None
    permission_classes = [permissions.IsAuthenticated]

    def get_relation(self):
        return getattr(self.request.user.profile, self.relation)

    def get(self, request, movie_pk=None):
        movies = self.get_relation().prefetch_related("genres")
        return Response(MovieCardSerializer(movies, many=True).data)

    def post(self, request, movie_pk=None):
        movie = get_object_or_404(Movie, pk=movie_pk)
        with transaction.atomic():
            added = add_member(self.get_relation(), movie)
        return Response(
            {"added": added, "movie": MovieCardSerializer(movie).data},
            status=status.HTTP_201_CREATED if added else status.HTTP_200_OK,
        )

    def delete(self, request, movie_pk=None):
        movie = get_object_or_404(Movie, pk=movie_pk)
        with transaction.atomic():
            removed = remove_member(self.get_relation(), movie)
        return Response({"removed": removed})
