from flask import jsonify
from werkzeug.exceptions import HTTPException
import logging
from app.libs.errors import APIError

logger = logging.getLogger(__name__)


def handle_error(e):
    if isinstance(e, APIError):
        if e.status_code >= 500:
            logger.error(f"API Error: {e.message}")
        else:
            logger.warning(f"API Error ({e.status_code}): {e.message}")
        return jsonify(e.to_dict()), e.status_code
    elif isinstance(e, HTTPException):
        logger.error(f"HTTP Error: {e.description}")
        return jsonify({"error": e.description}), e.code
    else:
        logger.exception("Unhandled exception")
        return jsonify({"error": "Internal server error"}), 500


def http_error_body(error):
    """Render a werkzeug/flask-smorest HTTP error as ``{"error": ...}``"""
    data = getattr(error, "data", None) or {}
    body = {"error": data.get("message") or error.description or error.name}
    if data.get("messages"):
        body["errors"] = data["messages"]
    elif data.get("errors"):
        body["errors"] = data["errors"]
    return body
