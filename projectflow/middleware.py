"""
Request logging middleware.
"""
import logging
import time

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """
    Logs one line per API request: method, path, status, caller and duration.
    Requests outside ``/api/`` (admin, static, docs assets) are not logged.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not request.path.startswith('/api/'):
            return self.get_response(request)

        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000

        # DRF copies the JWT user onto the underlying request once it authenticates
        user = getattr(request, 'user', None)
        user_id = user.pk if user is not None and user.is_authenticated else None
        logger.info(
            f"{request.method} {request.path} -> {response.status_code} "
            f"user_id={user_id} {elapsed_ms:.1f}ms"
        )
        return response
