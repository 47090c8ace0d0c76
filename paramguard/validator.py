"""
Structural validation of request argument values

Walks a value of unknown shape and decides whether every leaf is acceptable:
numbers must survive a round trip through their text form and strings must
not carry characters used for markup or statement injection.
"""
import enum
import logging

from paramguard.values import Value, ValueKind

logger = logging.getLogger(__name__)

DEFAULT_FORBIDDEN_CHARS = '<>;'
DEFAULT_MAX_DEPTH = 64

# Failure reasons recorded on a ValidationReport
FORBIDDEN_CHARACTER = 'forbidden_character'
UNPARSEABLE_NUMBER = 'unparseable_number'
DEPTH_EXCEEDED = 'depth_exceeded'
INSPECTION_ERROR = 'inspection_error'


class Verdict(enum.Enum):
    """Outcome of validating one value"""
    VALID = 'valid'
    INVALID = 'invalid'

    def __bool__(self):
        return self is Verdict.VALID


def format_path(path):
    """
    Render a member path for log output

    Examples:
        ('body', 'tags', 1) -> body.tags[1]
        () -> <root>
    """
    if not path:
        return '<root>'

    parts = []
    for key in path:
        if isinstance(key, int):
            parts.append(f'[{key}]')
        elif parts:
            parts.append(f'.{key}')
        else:
            parts.append(str(key))
    return ''.join(parts)


class ValidationReport:
    """
    Verdict plus the location of the first failure

    Truthiness follows the verdict, so a report can be used wherever a
    plain valid/invalid answer is expected.
    """

    __slots__ = ('verdict', 'path', 'reason')

    def __init__(self, verdict, path=(), reason=None):
        self.verdict = verdict
        self.path = tuple(path)
        self.reason = reason

    @classmethod
    def invalid(cls, path, reason):
        return cls(Verdict.INVALID, path, reason)

    @property
    def location(self):
        return format_path(self.path)

    def __bool__(self):
        return bool(self.verdict)

    def __repr__(self):
        if self.verdict is Verdict.VALID:
            return '<ValidationReport valid>'
        return f'<ValidationReport invalid at {self.location}: {self.reason}>'


VALID = ValidationReport(Verdict.VALID)


def _round_trips(value, parse):
    """Check that the text form of a value parses back with ``parse``"""
    try:
        parse(value.text())
    except (TypeError, ValueError, OverflowError):
        return False
    return True


class StructuralValidator:
    """
    Recursive validator over argument values

    The validator keeps no state between calls and can be shared across
    threads and requests.

    Args:
        forbidden_chars (str): Characters a string value may not contain
        max_depth (int): Deepest nesting level inspected; anything below it
            is rejected
    """

    def __init__(self, forbidden_chars=DEFAULT_FORBIDDEN_CHARS, max_depth=DEFAULT_MAX_DEPTH):
        if not isinstance(forbidden_chars, str):
            raise ValueError('forbidden_chars must be a string of characters')
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
            raise ValueError(f'max_depth must be a positive integer, got {max_depth!r}')

        self.forbidden_chars = frozenset(forbidden_chars)
        self.max_depth = max_depth

    @classmethod
    def from_config(cls, config):
        """Build a validator from a Flask config mapping"""
        return cls(
            forbidden_chars=config.get('PARAM_VALIDATION_FORBIDDEN_CHARS', DEFAULT_FORBIDDEN_CHARS),
            max_depth=config.get('PARAM_VALIDATION_MAX_DEPTH', DEFAULT_MAX_DEPTH),
        )

    def validate(self, value, depth=0):
        """
        Validate a value

        Args:
            value: Raw value or ``Value``
            depth (int): Nesting level of ``value``; 0 for a top-level argument

        Returns:
            Verdict: VALID or INVALID, never raises
        """
        return self.inspect(value, depth).verdict

    def inspect(self, value, depth=0, path=()):
        """
        Validate a value and report where it first failed

        Args:
            value: Raw value or ``Value``
            depth (int): Nesting level of ``value``
            path (tuple): Member path leading to ``value``

        Returns:
            ValidationReport: Report for the first failing member, or ``VALID``
        """
        try:
            path = tuple(path)
        except TypeError:
            path = (path,)

        try:
            return self._inspect(value, depth, path)
        except Exception:
            logger.debug('Value at %s could not be inspected', format_path(path), exc_info=True)
            return ValidationReport.invalid(path, INSPECTION_ERROR)

    def inspect_name(self, name, path=()):
        """
        Check a field or parameter name supplied by the client

        Mapping keys and query/form keys come from request data, so they
        are scanned like string values. Non-string names pass.

        Returns:
            ValidationReport: ``VALID`` or a forbidden character report
        """
        if isinstance(name, str) and not self.forbidden_chars.isdisjoint(name):
            return ValidationReport.invalid(path, FORBIDDEN_CHARACTER)
        return VALID

    def _inspect(self, value, depth, path):
        if depth > self.max_depth:
            logger.warning(
                'Argument nesting exceeds depth %d at %s', self.max_depth, format_path(path)
            )
            return ValidationReport.invalid(path, DEPTH_EXCEEDED)

        value = Value.of(value)
        kind = value.kind

        if kind is ValueKind.INTEGER:
            if _round_trips(value, int):
                return VALID
            return ValidationReport.invalid(path, UNPARSEABLE_NUMBER)

        elif kind is ValueKind.FLOAT:
            if _round_trips(value, float):
                return VALID
            return ValidationReport.invalid(path, UNPARSEABLE_NUMBER)

        elif kind is ValueKind.STRING:
            if self.forbidden_chars.isdisjoint(value.raw):
                return VALID
            return ValidationReport.invalid(path, FORBIDDEN_CHARACTER)

        elif kind is ValueKind.SEQUENCE:
            return self._inspect_members(value.elements(), depth, path)

        elif kind is ValueKind.COMPOSITE:
            return self._inspect_members(value.fields(), depth, path, check_names=True)

        # NULL and OTHER pass through
        return VALID

    def _inspect_members(self, members, depth, path, check_names=False):
        for key, member in members:
            member_path = path + (key,)
            if check_names:
                report = self.inspect_name(key, member_path)
                if not report:
                    return report

            report = self.inspect(member, depth + 1, member_path)
            if not report:
                return report
        return VALID


default_validator = StructuralValidator()


def validate(value, depth=0):
    """Validate a value with the default forbidden characters and depth ceiling"""
    return default_validator.validate(value, depth)
