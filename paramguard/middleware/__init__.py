"""Middleware package"""
from .binding import bind_arguments
from .request_id import RequestIdMiddleware, get_request_id
from .validation import (
    ParamGuard,
    check_request,
    rejection_response,
    skip_validation,
    validate_arguments,
)

__all__ = [
    'ParamGuard',
    'RequestIdMiddleware',
    'bind_arguments',
    'check_request',
    'get_request_id',
    'rejection_response',
    'skip_validation',
    'validate_arguments',
]
