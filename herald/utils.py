"""
Herald utilities shared by every layer.

- Unset: the "not provided" sentinel. Parameters use it for "no default", so
  None stays a legitimate default value.
- coalesce(value, default): resolve Unset, keep every other value (None, 0 and
  "" included).
- named(name): decorator giving a generated callable a stable __name__ and
  __qualname__ so tracebacks and reprs stay readable.
- mirror(name): read-only property over a private "_name" attribute; container
  values are handed out as immutable views.
- ordinal(position): "first" … "tenth", then "11th", "22nd", "103rd" for
  diagnostics ("at second position").

    >>> coalesce(Unset, 3), coalesce(None, 3)
    (3, None)
    >>> ordinal(2), ordinal(12), ordinal(23)
    ('second', '12th', '23rd')
"""
import functools
import operator
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType
from typing import final

_WORDS = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")


@final
class UnsetType:
    """
    Type of the Unset sentinel; there is exactly one instance.

    Unset is falsy, prints as "Unset", survives copy/deepcopy/pickle as itself,
    and combines with types for isinstance checks: isinstance(x, str | Unset).
    """

    __slots__ = ()
    _instance = None

    def __new__(cls):
        if UnsetType._instance is None:
            UnsetType._instance = object.__new__(cls)
        return UnsetType._instance

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")

    def __or__(self, other, /):
        try:
            return UnsetType | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | UnsetType
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self


Unset = UnsetType()


def coalesce(value, default=None, /):
    """
    `default` when value is Unset, otherwise value itself.
    """
    return default if value is Unset else value


def named(name, /):
    """
    decorator setting __name__ and __qualname__ on the decorated callable.
    """
    if not isinstance(name, str):
        raise TypeError("named() argument must be a string")

    def decorator(function):
        if not callable(function):
            raise TypeError("@named() must decorate a callable")
        function.__name__ = function.__qualname__ = name
        return function

    decorator.__name__ = decorator.__qualname__ = "named"
    return decorator


def _readonly(value):
    match value:
        case str() | bytes() | bytearray():
            return value
        case Mapping():
            return MappingProxyType(value)
        case Set():
            return frozenset(value)
        case Sequence():
            return tuple(value)
        case _:
            return value


def mirror(name, /):
    """
    read-only property returning a frozen view of `self._<name>`.

    lists come back as tuples, dicts as MappingProxyType, sets as frozensets.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    attribute = operator.attrgetter("_" + name)

    @named(name)
    def getter(self):
        return _readonly(attribute(self))

    return property(getter, doc=f"read-only view of {name!r}")


@functools.cache
def ordinal(position, /):
    """
    english ordinal label of a 1-based position.
    """
    if 1 <= position <= len(_WORDS):
        return _WORDS[position - 1]
    match position % 100, position % 10:
        case (11 | 12 | 13, _):
            suffix = "th"
        case (_, 1):
            suffix = "st"
        case (_, 2):
            suffix = "nd"
        case (_, 3):
            suffix = "rd"
        case _:
            suffix = "th"
    return f"{position}{suffix}"


__all__ = (
    "coalesce",
    "named",
    "mirror",
    "ordinal",
    "UnsetType",
    "Unset",
)
