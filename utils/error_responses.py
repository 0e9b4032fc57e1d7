"""JSON error envelope shared by the error handlers and the auth gate."""

from __future__ import annotations

import uuid

from flask import Response, g, jsonify
from werkzeug.exceptions import HTTPException


def build_error_response(error: HTTPException) -> Response:
    """Render an HTTP error as ``{"error", "detail", "request_id"}``."""

    request_id = g.get("request_id") or str(uuid.uuid4())
    response = jsonify(
        {
            "error": getattr(error, "name", "Error"),
            "detail": error.description,
            "request_id": request_id,
        }
    )
    response.status_code = error.code or 500
    response.headers.setdefault("X-Request-ID", request_id)
    return response
