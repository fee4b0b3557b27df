import logging

from django.conf import settings
from django.http import HttpResponse

logger = logging.getLogger(__name__)


class CorsMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        origin = getattr(settings, "CORS_ALLOWED_ORIGIN", "*")

        # Handle preflight requests
        if request.method == 'OPTIONS':
            response = HttpResponse()
            response['Access-Control-Allow-Origin'] = origin
            response['Access-Control-Allow-Methods'] = 'GET, POST, PUT, PATCH, DELETE, OPTIONS'
            response['Access-Control-Allow-Headers'] = 'Authorization, Content-Type, Accept, Accept-Encoding, X-Requested-With'
            response['Access-Control-Max-Age'] = '86400'
            logger.debug("CORS preflight for %s", request.path)
            return response

        response = self.get_response(request)
        response['Access-Control-Allow-Origin'] = origin
        return response
