from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """Render every rejected request as ``{"success": false, "message": ...}``."""
    if isinstance(exc, ValidationError):
        message = "; ".join(exc.messages)
        view = context.get("view")
        logger.warning("items.rejected view=%s message=%s", type(view).__name__, message)
        return Response(
            {"success": False, "message": message}, status=status.HTTP_400_BAD_REQUEST
        )

    response = exception_handler(exc, context)
    if response is None:
        return None
    detail = response.data.get("detail") if isinstance(response.data, dict) else None
    response.data = {"success": False, "message": str(detail or response.data)}
    return response
