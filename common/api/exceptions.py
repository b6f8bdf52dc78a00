"""Project-wide DRF exception handler.

Wraps DRF's default handler so that every error body carries a machine
readable ``code`` next to ``detail``, database failures that escaped the
order store still come back as 503 instead of a bare 500, and handled errors
are logged once.
"""

import logging

from django.db import DatabaseError
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

from orders.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


def _view_name(context) -> str:
    view = context.get("view")
    return view.__class__.__name__ if view is not None else "?"


def api_exception_handler(exc, context):
    if isinstance(exc, DatabaseError):
        logger.exception("Database error in %s", _view_name(context))
        exc = StoreUnavailable()

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, APIException) and isinstance(response.data, dict) and "detail" in response.data:
        codes = exc.get_codes()
        if isinstance(codes, str):
            response.data["code"] = codes

    if response.status_code >= 500:
        logger.error("%s -> %s: %s", _view_name(context), response.status_code, exc)
    else:
        logger.info("%s -> %s: %s", _view_name(context), response.status_code, exc)
    return response
