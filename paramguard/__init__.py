from flask import Flask
from flask_cors import CORS
import logging
import os

from paramguard.interceptor import REJECTION_MESSAGE, ArgumentInterceptor, Decision
from paramguard.middleware import ParamGuard, RequestIdMiddleware, skip_validation, validate_arguments
from paramguard.validator import StructuralValidator, ValidationReport, Verdict, validate
from paramguard.values import Value, ValueKind

guard = ParamGuard()


def create_app(config_name=None):
    """Flask application factory"""
    app = Flask(__name__)

    # Load configuration
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    from paramguard.config import config
    app.config.from_object(config.get(config_name, config['default']))

    logging.getLogger('paramguard').setLevel(app.config['LOG_LEVEL'].upper())

    # Initialize extensions
    CORS(app, origins=app.config['CORS_ORIGINS'])
    guard.init_app(app)
    app.wsgi_app = RequestIdMiddleware(app.wsgi_app)

    # Health check endpoint
    @app.route('/health')
    def health():
        return {'status': 'healthy', 'service': 'paramguard'}, 200

    return app


__all__ = [
    'REJECTION_MESSAGE',
    'ArgumentInterceptor',
    'Decision',
    'ParamGuard',
    'StructuralValidator',
    'ValidationReport',
    'Value',
    'ValueKind',
    'Verdict',
    'create_app',
    'guard',
    'skip_validation',
    'validate',
    'validate_arguments',
]
