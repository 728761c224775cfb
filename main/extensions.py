from flask import jsonify
from flask_smorest import Api

from main.errors import http_error_body


class StoreApi(Api):
    """flask-smorest Api rendering every HTTP error as ``{"error": ...}``"""

    def handle_http_exception(self, error):
        data = getattr(error, "data", None) or {}
        headers = data.get("headers") or {}
        return jsonify(http_error_body(error)), error.code, headers
