from django.contrib.auth import authenticate
from django.contrib.auth.models import User
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.tokens import RefreshToken

from movies.models import GENRE_NAMES, CONTENT_RATINGS
from .models import UserProfile


def _clean_names(values):
    """Strip whitespace, drop empties and duplicates, keep order."""
    cleaned = []
    for value in values:
        value = value.strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


class PreferencesSerializer(serializers.ModelSerializer):
    favorite_genres = serializers.ListField(
        child=serializers.ChoiceField(choices=GENRE_NAMES), required=False
    )
    favorite_actors = serializers.ListField(
        child=serializers.CharField(max_length=200), required=False
    )
    favorite_directors = serializers.ListField(
        child=serializers.CharField(max_length=200), required=False
    )
    content_ratings = serializers.ListField(
        child=serializers.ChoiceField(choices=CONTENT_RATINGS), required=False
    )
    languages = serializers.ListField(
        child=serializers.CharField(max_length=50), required=False
    )

    class Meta:
        model = UserProfile
        fields = [
            "favorite_genres",
            "favorite_actors",
            "favorite_directors",
            "content_ratings",
            "languages",
        ]

    def validate(self, attrs):
        return {key: _clean_names(values) for key, values in attrs.items()}


class UserProfileSerializer(serializers.ModelSerializer):
    username = serializers.CharField(
        source="user.username", min_length=3, max_length=150, required=False
    )
    email = serializers.EmailField(source="user.email", required=False)
    preferences = PreferencesSerializer(source="*", required=False)

    class Meta:
        model = UserProfile
        fields = [
            "id",
            "username",
            "email",
            "role",
            "preferences",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "role", "created_at", "updated_at"]

    def validate_username(self, value):
        value = value.strip()
        others = User.objects.exclude(pk=self.instance.user_id)
        if others.filter(username__iexact=value).exists():
            raise serializers.ValidationError("This username is already taken.")
        return value

    def validate_email(self, value):
        value = value.strip().lower()
        others = User.objects.exclude(pk=self.instance.user_id)
        if others.filter(email__iexact=value).exists():
            raise serializers.ValidationError("This email is already registered.")
        return value

    def update(self, instance, validated_data):
        user_data = validated_data.pop("user", {})
        if user_data:
            for field, value in user_data.items():
                setattr(instance.user, field, value)
            instance.user.save(update_fields=list(user_data))
        return super().update(instance, validated_data)


def issue_tokens(user):
    refresh = RefreshToken.for_user(user)
    return {
        "refresh": str(refresh),
        "access": str(refresh.access_token),
        "user_id": user.id,
    }


class RegisterSerializer(serializers.Serializer):
    username = serializers.CharField(min_length=3, max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)

    def validate_username(self, value):
        value = value.strip()
        if User.objects.filter(username__iexact=value).exists():
            raise serializers.ValidationError("Username or email already exists.")
        return value

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Username or email already exists.")
        return value

    def validate_password(self, value):
        validate_password(value)
        return value

    def create(self, validated_data):
        return User.objects.create_user(
            username=validated_data["username"],
            email=validated_data["email"],
            password=validated_data["password"],
        )


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        user = User.objects.filter(email__iexact=attrs["email"].strip()).first()
        if user is not None:
            user = authenticate(
                request=self.context.get("request"),
                username=user.username,
                password=attrs["password"],
            )
        if user is None:
            raise AuthenticationFailed("Invalid email or password.")
        attrs["user"] = user
        return attrs
