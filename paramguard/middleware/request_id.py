"""
Request ID middleware so rejections can be traced in the logs
"""
from flask import has_request_context, request
import uuid

REQUEST_ID_HEADER = 'X-Request-ID'
ENVIRON_KEY = 'paramguard.request_id'


class RequestIdMiddleware:
    """
    WSGI middleware assigning an ID to each request

    An incoming X-Request-ID header is reused, otherwise a UUID4 is
    generated. The ID is echoed back in the response headers.
    """

    def __init__(self, app):
        self.app = app

    def __call__(self, environ, start_response):
        request_id = environ.get('HTTP_X_REQUEST_ID') or str(uuid.uuid4())
        environ[ENVIRON_KEY] = request_id

        def custom_start_response(status, headers, exc_info=None):
            headers.append((REQUEST_ID_HEADER, request_id))
            return start_response(status, headers, exc_info)

        return self.app(environ, custom_start_response)


def get_request_id():
    """
    Helper function to get the ID of the current request

    Returns:
        str: Request ID, or None outside a request or without the middleware
    """
    if not has_request_context():
        return None
    return request.environ.get(ENVIRON_KEY)
