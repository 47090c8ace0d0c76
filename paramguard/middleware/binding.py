"""
Model binding: collect the named arguments of a Flask request
"""
from werkzeug.exceptions import BadRequest

# Sources in precedence order; a later source clashing with an earlier
# name is stored as "<source>.<name>"
VIEW_ARGS = 'view'
QUERY = 'query'
FORM = 'form'
BODY = 'body'


def _flatten(multidict):
    """Single values stay scalar, repeated keys become a list"""
    bound = {}
    for key in multidict.keys():
        values = multidict.getlist(key)
        bound[key] = values[0] if len(values) == 1 else values
    return bound


def _add(arguments, source, name, value):
    if name in arguments:
        name = f'{source}.{name}'
    arguments[name] = value


def bind_arguments(request, view_args=None, body_argument='body'):
    """
    Build the argument set for a request

    Args:
        request: Flask/Werkzeug request
        view_args (dict): Route parameters; defaults to ``request.view_args``
        body_argument (str): Name the decoded JSON body is bound to

    Returns:
        tuple: (arguments dict, list of model state errors)
    """
    arguments = {}
    errors = []

    if view_args is None:
        view_args = request.view_args or {}
    for name, value in view_args.items():
        _add(arguments, VIEW_ARGS, name, value)

    for name, value in _flatten(request.args).items():
        _add(arguments, QUERY, name, value)

    for name, value in _flatten(request.form).items():
        _add(arguments, FORM, name, value)

    if request.is_json and request.get_data(cache=True).strip():
        try:
            payload = request.get_json()
        except BadRequest as exc:
            errors.append(f'Malformed JSON body: {exc.description}')
        else:
            _add(arguments, BODY, body_argument, payload)

    return arguments, errors
