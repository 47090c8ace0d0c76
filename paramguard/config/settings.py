"""
Configuration settings for different environments
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ['true', 'on', '1']


class Config:
    """Base configuration"""

    # CORS
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

    # Parameter validation
    PARAM_VALIDATION_ENABLED = _env_flag('PARAM_VALIDATION_ENABLED', True)
    PARAM_VALIDATION_MAX_DEPTH = int(os.environ.get('PARAM_VALIDATION_MAX_DEPTH', 64))
    PARAM_VALIDATION_FORBIDDEN_CHARS = os.environ.get('PARAM_VALIDATION_FORBIDDEN_CHARS', '<>;')
    PARAM_VALIDATION_BODY_ARGUMENT = 'body'
    PARAM_VALIDATION_EXEMPT = ('health',)

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
