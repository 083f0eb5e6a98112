import logging

from django.core.exceptions import ObjectDoesNotExist, ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class StoreError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Unexpected storage failure."
    default_code = "store_error"


def api_exception_handler(exc, context):
    """
    Translate Django/database errors into the API's error taxonomy
    before handing over to DRF:

    - ObjectDoesNotExist        -> 404
    - IntegrityError / Django ValidationError -> 400
    - any other DatabaseError   -> 500 (StoreError)
    """
    if isinstance(exc, ObjectDoesNotExist):
        exc = NotFound()
    elif isinstance(exc, DjangoValidationError):
        exc = ValidationError(
            exc.message_dict if hasattr(exc, "error_dict") else exc.messages
        )
    elif isinstance(exc, IntegrityError):
        # unique constraints that slipped past serializer validation
        exc = ValidationError({"detail": "This record conflicts with an existing one."})
    elif isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.exception(
            "Store failure in %s", view.__class__.__name__ if view else "unknown view"
        )
        exc = StoreError()

    return exception_handler(exc, context)
