"""
Testing configuration for paramguard
"""
from paramguard.config.settings import Config


class TestingConfig(Config):
    """Testing configuration with fixed validation defaults"""

    TESTING = True
    DEBUG = False

    # Ignore environment overrides so tests see the stock rules
    PARAM_VALIDATION_ENABLED = True
    PARAM_VALIDATION_MAX_DEPTH = 64
    PARAM_VALIDATION_FORBIDDEN_CHARS = '<>;'

    # Logging
    LOG_LEVEL = 'WARNING'

    # CORS - allow local frontends in tests
    CORS_ORIGINS = ['http://localhost:5173', 'http://localhost:3000']
