from __future__ import annotations

from functools import wraps

from flask import current_app, jsonify, request

from ..core.exceptions import DomainError

GENERIC_FAILURE = "Internal server error"


def error_response(exc: DomainError):
    return jsonify({"success": False, "message": exc.message}), exc.status_code


def json_api(view):
    """Map domain errors to JSON responses; unexpected errors become a logged 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            if e.status_code >= 500:
                current_app.logger.error("%s %s failed: %s", request.method, request.path, e)
            return error_response(e)
        except Exception:
            current_app.logger.exception("%s %s crashed", request.method, request.path)
            return jsonify({"success": False, "message": GENERIC_FAILURE}), 500

    return wrapper


def json_body() -> dict:
    return request.get_json(silent=True) or {}
