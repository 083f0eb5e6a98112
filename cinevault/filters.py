import uuid

from rest_framework.exceptions import ValidationError


def id_param(params, name, cast=int):
    """
    Value of an id query filter (``?user=3``, ``?movie=<uuid>``), or None
    when the parameter is absent. Malformed ids are a 400, not a 500.
    """
    value = params.get(name)
    if not value:
        return None
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ValidationError({name: f"'{value}' is not a valid id."})


def uuid_param(params, name):
    return id_param(params, name, cast=uuid.UUID)
