"""
Accept/reject decision for one API call

The interceptor knows nothing about the web framework. It receives the bound
arguments of a call and whether binding itself succeeded, and answers with a
Decision the framework layer turns into a response.
"""
from http import HTTPStatus

from paramguard.validator import default_validator

REJECTION_STATUS = HTTPStatus.BAD_REQUEST
REJECTION_MESSAGE = 'One or more parameter values are invalid'
REJECTION_MIMETYPE = 'text/plain'


class Decision:
    """
    Result of checking an argument set

    Attributes:
        accepted (bool): True if the call may proceed
        argument (str): Name of the first rejected argument, if any
        report (ValidationReport): Report for the rejected argument, if any
        model_state_errors (list): Binding errors that caused a rejection
    """

    __slots__ = ('accepted', 'argument', 'report', 'model_state_errors')

    def __init__(self, accepted, argument=None, report=None, model_state_errors=None):
        self.accepted = accepted
        self.argument = argument
        self.report = report
        self.model_state_errors = list(model_state_errors or [])

    @property
    def status(self):
        return None if self.accepted else REJECTION_STATUS

    @property
    def message(self):
        return None if self.accepted else REJECTION_MESSAGE

    def __bool__(self):
        return self.accepted

    def __repr__(self):
        if self.accepted:
            return '<Decision accepted>'
        if self.model_state_errors:
            return f'<Decision rejected: model state {self.model_state_errors!r}>'
        return f'<Decision rejected: {self.argument} {self.report!r}>'


ACCEPTED = Decision(True)


class ArgumentInterceptor:
    """
    Validates every argument of a call before its handler runs

    Args:
        validator (StructuralValidator): Validator applied to each argument
    """

    def __init__(self, validator=None):
        self.validator = validator or default_validator

    def check(self, arguments, model_state_valid=True, model_state_errors=None):
        """
        Decide whether a call may proceed

        Args:
            arguments (Mapping): Parameter name -> bound value
            model_state_valid (bool): False if binding already failed
            model_state_errors (list): Binding error descriptions, for logging

        Returns:
            Decision: ``ACCEPTED`` or a rejection
        """
        if not model_state_valid:
            return Decision(False, model_state_errors=model_state_errors or ['model state invalid'])

        for name, value in arguments.items():
            # Query and form keys are client supplied names
            report = self.validator.inspect_name(name, (name,))
            if report:
                report = self.validator.inspect(value, 0, (name,))
            if not report:
                return Decision(False, argument=name, report=report)

        return ACCEPTED
