"""
Idempotent set-membership helpers for many-to-many references
(wishlist, watched movies, list movies, list followers).

``relation`` is a related manager such as ``profile.wishlist``.
"""


def is_member(relation, obj):
    return relation.filter(pk=obj.pk).exists()


def add_member(relation, obj):
    """Add ``obj`` unless already present. Returns True if it was added."""
    if is_member(relation, obj):
        return False
    relation.add(obj)
    return True


def remove_member(relation, obj):
    """Remove ``obj`` if present. Returns True if it was removed."""
    if not is_member(relation, obj):
        return False
    relation.remove(obj)
    return True


def toggle_member(relation, obj):
    """Flip membership of ``obj``. Returns the resulting state."""
    if remove_member(relation, obj):
        return False
    relation.add(obj)
    return True
