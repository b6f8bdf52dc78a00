"""Orders domain errors.

All of them are DRF ``APIException`` subclasses, so views can let them
propagate and DRF renders the matching status code.
"""

from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, PermissionDenied


class OrderNotFound(NotFound):
    default_detail = "Order not found."
    default_code = "order_not_found"


class InvalidTransition(APIException):
    """The requested status is not reachable from the current one."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid status transition."
    default_code = "invalid_transition"


class TransitionPermissionDenied(PermissionDenied):
    """The transition is legal, but not for this caller."""

    default_detail = "You don't have permission to update this order."
    default_code = "permission_denied"


class AssignmentConflict(APIException):
    """The order changed between read and write; re-fetch before retrying."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "The order was updated concurrently. Re-fetch it and try again."
    default_code = "assignment_conflict"


class StoreUnavailable(APIException):
    """Transient persistence failure; the whole request is safe to retry."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Order storage is temporarily unavailable."
    default_code = "store_unavailable"
