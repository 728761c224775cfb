import logging
import time

logger = logging.getLogger(__name__)


class RequestLogMiddleware:
    """Logs each request line and, once answered, its status and duration"""

    def __init__(self, app):
        self.app = app

    def __call__(self, environ, start_response):
        method, path = environ["REQUEST_METHOD"], environ["PATH_INFO"]
        logger.info(f"Incoming request: {method} {path}")
        started = time.perf_counter()

        def logging_start_response(status, headers, exc_info=None):
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"{method} {path} -> {status} ({elapsed_ms:.1f}ms)")
            return start_response(status, headers, exc_info)

        return self.app(environ, logging_start_response)
