"""
Request logging middleware for the API.
"""
import logging
import time

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """
    Logs one line per API request with the resolved user and timing.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not request.path.startswith('/api/'):
            return self.get_response(request)

        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000

        # DRF authenticates inside the view, so the user is read back from the
        # request after the response has been produced.
        user = getattr(request, 'user', None)
        user_id = getattr(user, 'id', None) if user is not None and user.is_authenticated else None

        logger.info(
            f"{request.method} {request.path} -> {response.status_code} "
            f"user_id={user_id} "
            f"duration_ms={elapsed_ms:.1f}"
        )
        return response
