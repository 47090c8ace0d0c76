"""
Parameter validation for Flask views

Runs the argument interceptor before a view executes and short-circuits the
request with a fixed 400 response when binding failed or any argument holds
an invalid value. Validation can be applied to the whole application via
the ``ParamGuard`` extension or to single views with ``validate_arguments``.
"""
from functools import wraps
import logging

from flask import Response, current_app, request

from paramguard.interceptor import (
    REJECTION_MESSAGE,
    REJECTION_MIMETYPE,
    REJECTION_STATUS,
    ArgumentInterceptor,
)
from paramguard.middleware.binding import bind_arguments
from paramguard.middleware.request_id import get_request_id
from paramguard.validator import StructuralValidator

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'paramguard'


def rejection_response():
    """The response returned for every rejected request"""
    return Response(REJECTION_MESSAGE, status=REJECTION_STATUS, mimetype=REJECTION_MIMETYPE)


def get_interceptor():
    """
    Interceptor for the current application

    Falls back to one built from the app config when the extension was not
    initialized, so ``validate_arguments`` works on its own.
    """
    interceptor = current_app.extensions.get(EXTENSION_KEY)
    if interceptor is None:
        interceptor = ArgumentInterceptor(StructuralValidator.from_config(current_app.config))
    return interceptor


def _log_rejection(decision):
    if decision.model_state_errors:
        logger.warning(
            'Rejected %s %s (request %s): %s',
            request.method, request.path, get_request_id(),
            '; '.join(decision.model_state_errors),
        )
    else:
        logger.warning(
            'Rejected %s %s (request %s): argument %r invalid at %s (%s)',
            request.method, request.path, get_request_id(),
            decision.argument, decision.report.location, decision.report.reason,
        )


def check_request(view_args=None):
    """
    Validate the arguments of the current request

    Args:
        view_args (dict): Route parameters; defaults to ``request.view_args``

    Returns:
        Response: The rejection response, or None if the request may proceed
    """
    arguments, errors = bind_arguments(
        request,
        view_args=view_args,
        body_argument=current_app.config.get('PARAM_VALIDATION_BODY_ARGUMENT', 'body'),
    )
    decision = get_interceptor().check(
        arguments, model_state_valid=not errors, model_state_errors=errors
    )
    if decision:
        return None

    _log_rejection(decision)
    return rejection_response()


def validate_arguments(f):
    """
    Decorator validating the arguments of a single view

    Applies regardless of PARAM_VALIDATION_ENABLED.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        rejection = check_request(view_args=kwargs)
        if rejection is not None:
            return rejection
        return f(*args, **kwargs)

    decorated_function.paramguard_validated = True
    return decorated_function


def skip_validation(f):
    """Decorator exempting a view from the application-wide check"""
    f.paramguard_skip = True
    return f


class ParamGuard:
    """
    Flask extension validating every request before its view runs

    Usage:
        guard = ParamGuard(app)

    or with an application factory:
        guard = ParamGuard()
        guard.init_app(app)
    """

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.config.setdefault('PARAM_VALIDATION_ENABLED', True)
        app.config.setdefault('PARAM_VALIDATION_EXEMPT', ())
        app.config.setdefault('PARAM_VALIDATION_BODY_ARGUMENT', 'body')

        validator = StructuralValidator.from_config(app.config)
        app.extensions[EXTENSION_KEY] = ArgumentInterceptor(validator)
        app.before_request(self._validate_request)

        logger.info(
            'Parameter validation initialized (max depth %d, forbidden %r)',
            validator.max_depth, ''.join(sorted(validator.forbidden_chars)),
        )

    def _is_exempt(self):
        endpoint = request.endpoint
        if endpoint is None or endpoint == 'static' or endpoint.endswith('.static'):
            return True

        exempt = current_app.config['PARAM_VALIDATION_EXEMPT']
        if endpoint in exempt or (request.blueprint and request.blueprint in exempt):
            return True

        view = current_app.view_functions.get(endpoint)
        if view is None:
            return True

        # Views carrying validate_arguments check themselves
        return getattr(view, 'paramguard_skip', False) or getattr(view, 'paramguard_validated', False)

    def _validate_request(self):
        if not current_app.config['PARAM_VALIDATION_ENABLED']:
            return None
        if self._is_exempt():
            return None
        return check_request()
