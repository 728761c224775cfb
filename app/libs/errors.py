class APIError(Exception):
    """Base API error with status code and message"""

    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv["error"] = self.message
        return rv


class ValidationError(APIError):
    """Request data failed a business rule"""

    def __init__(self, message, errors=None, status_code=400):
        super().__init__(message, status_code, {"errors": errors} if errors else None)
        self.errors = errors


class AuthError(APIError):
    """Authentication/authorization errors"""

    def __init__(self, message="Authentication required", status_code=401):
        super().__init__(message, status_code)


class ForbiddenError(APIError):
    def __init__(self, message="Forbidden", status_code=403):
        super().__init__(message, status_code)


class NotFoundError(APIError):
    """Resource not found errors"""

    def __init__(self, message="Resource not found", status_code=404):
        super().__init__(message, status_code)


class ConflictError(APIError):
    def __init__(self, message="Resource already exists", status_code=409):
        super().__init__(message, status_code)


class RateLimitError(APIError):
    def __init__(self, message="Too many requests. Please try again later."):
        super().__init__(message, 429)


class StoreError(APIError):
    """The product store failed; the message never carries driver details"""

    def __init__(self, message="Database error"):
        super().__init__(message, 500)


class UploadError(APIError):
    def __init__(self, message, status_code=400):
        super().__init__(message, status_code)
