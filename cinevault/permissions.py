from collections.abc import Mapping

from django.db import transaction
from rest_framework import permissions


def is_admin(user):
    """Superusers and profiles with the ``admin`` role."""
    if not user or not user.is_authenticated:
        return False
    if user.is_superuser:
        return True
    profile = getattr(user, "profile", None)
    return bool(profile and profile.role == "admin")


def owner_id_of(resource, owner_field):
    # embedded items (trivia, goofs) are plain dicts
    if isinstance(resource, Mapping):
        return resource.get(owner_field)
    return getattr(resource, f"{owner_field}_id", None)


def can_mutate(principal, resource, owner_field="user"):
    """
    True iff the principal is an admin or owns ``resource`` through
    ``owner_field``.
    """
    if not principal or not principal.is_authenticated:
        return False
    if is_admin(principal):
        return True
    owner_id = owner_id_of(resource, owner_field)
    return owner_id is not None and str(owner_id) == str(principal.pk)


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Read: everyone
    Write: admins only
    """

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_admin(request.user)


class IsAdmin(permissions.BasePermission):
    def has_permission(self, request, view):
        return is_admin(request.user)


class IsOwnerOrAdmin(permissions.BasePermission):
    """
    Read: everyone
    Write: the owner (``view.owner_field``) or an admin
    """

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        return can_mutate(request.user, obj, getattr(view, "owner_field", "user"))


class LockedWriteMixin:
    """
    Runs update/destroy inside a transaction and re-fetches the target row
    with a row lock, so the ownership check in ``get_object`` and the write
    that follows act on the same locked version of the row.
    """

    def lock_queryset(self, queryset):
        if self.request.method in permissions.SAFE_METHODS:
            return queryset
        return queryset.select_for_update(of=("self",))

    def update(self, request, *args, **kwargs):
        with transaction.atomic():
            return super().update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        with transaction.atomic():
            return super().destroy(request, *args, **kwargs)
