"""
Common middleware for the Marketplace API
Request tracing for logs and audit events.
"""

import logging
import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = 'X-Request-ID'

# ===============================================================================
# REQUEST ID MIDDLEWARE
# ===============================================================================

class RequestIDMiddleware:
    """Add unique request ID for tracing and audit logs"""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        # Reuse an upstream request ID when the proxy already assigned one
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.META['REQUEST_ID'] = request_id

        response = self.get_response(request)
        response[REQUEST_ID_HEADER] = request_id

        logger.debug(f"🔎 [Request] {request.method} {request.path} -> {response.status_code} ({request_id})")
        return response
