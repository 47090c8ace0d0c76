"""
Pytest configuration and fixtures for paramguard tests
"""
import pytest
import os
from flask import jsonify, request
from paramguard import create_app, skip_validation, validate_arguments


def register_sample_routes(app):
    """Routes standing in for real API handlers"""

    @app.route('/api/profiles', methods=['POST'])
    def create_profile():
        return jsonify({'received': request.get_json(silent=True)}), 200

    @app.route('/api/items/<int:item_id>', methods=['GET'])
    def get_item(item_id):
        return jsonify({'item_id': item_id, 'q': request.args.get('q')}), 200

    @app.route('/api/comments', methods=['POST'])
    @validate_arguments
    def create_comment():
        return jsonify({'status': 'created'}), 201

    @app.route('/api/raw', methods=['POST'])
    @skip_validation
    def raw_upload():
        return jsonify({'status': 'stored'}), 200


@pytest.fixture(scope='session')
def app():
    """Create application instance for testing"""
    os.environ['FLASK_ENV'] = 'testing'
    app = create_app('testing')
    register_sample_routes(app)

    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def disabled_app():
    """Application with the application-wide check switched off"""
    app = create_app('testing')
    app.config['PARAM_VALIDATION_ENABLED'] = False
    register_sample_routes(app)
    return app
