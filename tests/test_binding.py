"""
Tests for building argument sets from Flask requests
"""
from flask import request

from paramguard.middleware.binding import bind_arguments


class TestQueryAndForm:
    """Test query string and form binding"""

    def test_query_arguments(self, app):
        """Test each query key becomes an argument"""
        with app.test_request_context('/nowhere', query_string={'q': 'junk', 'page': '2'}):
            arguments, errors = bind_arguments(request)

        assert arguments == {'q': 'junk', 'page': '2'}
        assert errors == []

    def test_repeated_query_key_becomes_sequence(self, app):
        """Test repeated keys are bound as a list"""
        with app.test_request_context('/nowhere?tag=a&tag=b&q=x'):
            arguments, _ = bind_arguments(request)

        assert arguments == {'tag': ['a', 'b'], 'q': 'x'}

    def test_form_arguments(self, app):
        """Test url-encoded form fields"""
        with app.test_request_context('/nowhere', method='POST', data={'name': 'Alice'}):
            arguments, errors = bind_arguments(request)

        assert arguments == {'name': 'Alice'}
        assert errors == []

    def test_broken_multipart_binds_nothing(self, app):
        """Test a multipart body without a boundary binds no fields"""
        with app.test_request_context(
            '/nowhere', method='POST', data='name=Alice', content_type='multipart/form-data'
        ):
            arguments, errors = bind_arguments(request)

        assert arguments == {}
        assert errors == []


class TestViewArgs:
    """Test route parameter binding"""

    def test_explicit_view_args(self, app):
        """Test route parameters keep their converted type"""
        with app.test_request_context('/nowhere'):
            arguments, _ = bind_arguments(request, view_args={'item_id': 5})

        assert arguments == {'item_id': 5}

    def test_matched_view_args(self, app):
        """Test route parameters are read from the matched rule"""
        with app.test_request_context('/api/items/7'):
            arguments, _ = bind_arguments(request)

        assert arguments == {'item_id': 7}

    def test_name_clash_keeps_both_values(self, app):
        """Test a later source is stored under a prefixed name"""
        with app.test_request_context('/nowhere', query_string={'item_id': '<x>'}):
            arguments, _ = bind_arguments(request, view_args={'item_id': 5})

        assert arguments == {'item_id': 5, 'query.item_id': '<x>'}


class TestJsonBody:
    """Test JSON body binding"""

    def test_body_is_one_argument(self, app):
        """Test the decoded body is bound under its own name"""
        with app.test_request_context('/nowhere', method='POST', json={'name': 'Alice', 'age': 30}):
            arguments, errors = bind_arguments(request)

        assert arguments == {'body': {'name': 'Alice', 'age': 30}}
        assert errors == []

    def test_custom_body_name(self, app):
        """Test the body argument name can be changed"""
        with app.test_request_context('/nowhere', method='POST', json=['a', 'b']):
            arguments, _ = bind_arguments(request, body_argument='payload')

        assert arguments == {'payload': ['a', 'b']}

    def test_json_null_body(self, app):
        """Test a literal null body is bound as None"""
        with app.test_request_context(
            '/nowhere', method='POST', data='null', content_type='application/json'
        ):
            arguments, errors = bind_arguments(request)

        assert arguments == {'body': None}
        assert errors == []

    def test_empty_json_body(self, app):
        """Test an empty body with a JSON content type binds nothing"""
        with app.test_request_context(
            '/nowhere', method='POST', data='', content_type='application/json'
        ):
            arguments, errors = bind_arguments(request)

        assert arguments == {}
        assert errors == []

    def test_malformed_json_is_a_model_state_error(self, app):
        """Test undecodable JSON marks the binding as failed"""
        with app.test_request_context(
            '/nowhere', method='POST', data='{"name": ', content_type='application/json'
        ):
            arguments, errors = bind_arguments(request)

        assert 'body' not in arguments
        assert len(errors) == 1
        assert errors[0].startswith('Malformed JSON body')
