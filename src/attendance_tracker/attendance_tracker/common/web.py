from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    FlowBusyError,
    InvalidTransitionError,
    NotFoundError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# First match wins, so subclasses go before their bases.
_STATUS_BY_ERROR = (
    (FlowBusyError, 409),
    (InvalidTransitionError, 400),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (StoreError, 502),
)


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def request_payload() -> dict:
    """JSON object body, or form fields when the request has no JSON."""

    data = request.get_json(silent=True)
    if data is None:
        return request.form.to_dict()
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def current_user_id() -> int:
    return int(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def json_errors(view):
    """Turn domain errors raised by a view into JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            for error_cls, status in _STATUS_BY_ERROR:
                if isinstance(e, error_cls):
                    return error_response(str(e), status)
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return error_response("Internal server error", 500)

    return wrapper
