"""
Kind tagging for request argument values

Deserialized request data arrives as plain Python objects. ``Value.of``
wraps one of them together with its kind so the validator can branch over a
closed set of kinds instead of probing types itself. Members of sequences
and composites are wrapped lazily, which keeps self-referencing structures
from being walked here.
"""
import dataclasses
import enum
from collections.abc import Mapping, Sequence, Set
from datetime import date, time, timedelta
from decimal import Decimal


class ValueKind(enum.Enum):
    """The kinds of value the validator knows about"""
    NULL = 'null'
    INTEGER = 'integer'
    FLOAT = 'float'
    STRING = 'string'
    SEQUENCE = 'sequence'
    COMPOSITE = 'composite'
    OTHER = 'other'


# Types with an instance __dict__ that are still treated as leaves
_OPAQUE_TYPES = (type, date, time, timedelta, BaseException)


def kind_of(raw):
    """
    Determine the kind of a raw Python value

    Args:
        raw: Any deserialized value

    Returns:
        ValueKind: The kind the value is validated as
    """
    if raw is None:
        return ValueKind.NULL

    # bool and IntEnum subclass int but are not numbers to check
    if isinstance(raw, (bool, enum.Enum)):
        return ValueKind.OTHER

    if isinstance(raw, int):
        return ValueKind.INTEGER

    if isinstance(raw, (float, Decimal)):
        return ValueKind.FLOAT

    if isinstance(raw, str):
        return ValueKind.STRING

    if isinstance(raw, (bytes, bytearray, memoryview)):
        return ValueKind.OTHER

    if isinstance(raw, Mapping):
        return ValueKind.COMPOSITE

    if isinstance(raw, (Sequence, Set)):
        return ValueKind.SEQUENCE

    if isinstance(raw, _OPAQUE_TYPES):
        return ValueKind.OTHER

    if dataclasses.is_dataclass(raw):
        return ValueKind.COMPOSITE

    if hasattr(raw, '__dict__'):
        return ValueKind.COMPOSITE

    return ValueKind.OTHER


class Value:
    """
    A raw value paired with its kind

    Instances are read-only views; the wrapped object is never modified.
    """

    __slots__ = ('raw', 'kind')

    def __init__(self, raw, kind):
        self.raw = raw
        self.kind = kind

    @classmethod
    def of(cls, raw):
        """Wrap a raw value, tagging it with its kind"""
        if isinstance(raw, Value):
            return raw
        return cls(raw, kind_of(raw))

    def text(self):
        """Textual representation used for numeric round-trip checks"""
        return str(self.raw)

    def elements(self):
        """
        Iterate over the elements of a sequence value

        Yields:
            tuple: (index, Value) pairs in iteration order
        """
        if self.kind is not ValueKind.SEQUENCE:
            raise TypeError(f'{self.kind.value} value has no elements')

        for index, item in enumerate(self.raw):
            yield index, Value.of(item)

    def fields(self):
        """
        Iterate over the named fields of a composite value

        Mappings yield their items, dataclasses their fields in declaration
        order, other objects their instance attributes in insertion order.

        Yields:
            tuple: (name, Value) pairs
        """
        if self.kind is not ValueKind.COMPOSITE:
            raise TypeError(f'{self.kind.value} value has no fields')

        raw = self.raw
        if isinstance(raw, Mapping):
            for name, item in raw.items():
                yield name, Value.of(item)
        elif dataclasses.is_dataclass(raw):
            for field in dataclasses.fields(raw):
                yield field.name, Value.of(getattr(raw, field.name))
        else:
            for name, item in vars(raw).items():
                yield name, Value.of(item)

    def __repr__(self):
        return f'<Value {self.kind.value}: {self.raw!r}>'
