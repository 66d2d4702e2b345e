"""Error responses with OpenTelemetry trace context."""

import logging

from flask import Flask, jsonify
from marshmallow import ValidationError
from opentelemetry import trace


logger = logging.getLogger(__name__)


def error_response(message: str, status_code: int, **extra) -> tuple:
    """Create error response with trace context.

    Use this function in routes instead of returning jsonify directly.

    Args:
        message: Human-readable error message.
        status_code: HTTP status code.
        **extra: Additional keys merged into the JSON body.

    Returns:
        Tuple of (response, status_code).
    """
    response = {"error": message, **extra}
    _add_trace_id(response)
    return jsonify(response), status_code


def validation_error_response(err: ValidationError) -> tuple:
    """Turn a marshmallow ValidationError into a 400 response.

    The first field message becomes ``error``; every message is kept under
    ``fields``.
    """
    return error_response(_first_message(err.messages), 400, fields=err.messages)


def _first_message(messages) -> str:
    if isinstance(messages, str):
        return messages
    if isinstance(messages, dict):
        values = list(messages.values())
    else:
        values = list(messages)
    for value in values:
        message = _first_message(value)
        if message:
            return message
    return "Invalid request"


def _add_trace_id(response: dict) -> None:
    span = trace.get_current_span()
    span_context = span.get_span_context()
    if span_context.is_valid:
        response["trace_id"] = format(span_context.trace_id, "032x")


def register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers on the Flask app."""

    @app.errorhandler(400)
    def bad_request(error):
        return _make_error_response("Bad request", 400)

    @app.errorhandler(404)
    def not_found(error):
        return _make_error_response("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return _make_error_response("Method not allowed", 405)

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Unhandled error: {error}")
        return _make_error_response("Internal server error", 500)


def _make_error_response(message: str, status_code: int) -> tuple:
    response = {
        "error": message,
        "status": status_code,
    }
    _add_trace_id(response)
    return jsonify(response), status_code
