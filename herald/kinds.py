"""
Herald parameter kinds: what a command parameter declares it wants.

A parameter kind is one of
- a scalar builtin: str, int, float, bool;
- a Lookup: a domain-entity reference resolved by identifier or partial name
  (e.g. "Player");
- Array(kind): a trailing "rest" parameter that consumes every remaining token,
  each converted as `kind`;
- Maybe(kind): a nullable wrapper (typically with a None default), converted
  exactly like the wrapped kind.

The converters pick the conversion rule from the kind; the registry renders
the kind's friendly name in hint strings (see converters.typename).
"""
import operator

from .utils import *

SCALARS = (str, int, float, bool)


class Lookup:
    """
    Domain-entity reference kind.

    parameters
    - name: str
      friendly type name used in hints and diagnostics (e.g. "Player").
    - entities: Callable[[], Iterable[T]]
      returns the live entities at conversion time.
    - label: Callable[[T], str]
      display name of an entity (defaults to the 'name' attribute).
    - identify: Callable[[T], int]
      unique numeric identifier of an entity (defaults to the 'id' attribute).
    """

    __slots__ = ("_name", "_entities", "_label", "_identify")

    def __init__(self, name, entities, /, *, label=operator.attrgetter("name"), identify=operator.attrgetter("id")):
        if not isinstance(name, str):
            raise TypeError("lookup 'name' must be a string")
        if not (name := name.strip()):
            raise ValueError("lookup 'name' cannot be empty")
        for field, value in (("entities", entities), ("label", label), ("identify", identify)):
            if not callable(value):
                raise TypeError(f"lookup {field!r} must be callable")
        self._name = name
        self._entities = entities
        self._label = label
        self._identify = identify

    name = mirror("name")

    def entities(self):
        return list(self._entities())

    def label(self, entity, /):
        return self._label(entity)

    def identify(self, entity, /):
        return self._identify(entity)

    def __repr__(self):
        return f"lookup({self._name!r})"


class Array:
    """
    Trailing parameter kind that consumes all remaining tokens.
    """

    __slots__ = ("_kind",)

    def __init__(self, kind, /):
        if isinstance(kind, (Array, Maybe)):
            raise TypeError("array kind must wrap a scalar or a lookup")
        self._kind = sanitize(kind)

    kind = mirror("kind")

    def __eq__(self, other, /):
        if not isinstance(other, Array):
            return NotImplemented
        return self._kind == other._kind

    def __hash__(self):
        return hash((Array, self._kind))

    def __repr__(self):
        return f"array({self._kind!r})"


class Maybe:
    """
    Nullable wrapper; unwrapped before conversion.
    """

    __slots__ = ("_kind",)

    def __init__(self, kind, /):
        if isinstance(kind, (Array, Maybe)):
            raise TypeError("maybe kind must wrap a scalar or a lookup")
        self._kind = sanitize(kind)

    kind = mirror("kind")

    def __eq__(self, other, /):
        if not isinstance(other, Maybe):
            return NotImplemented
        return self._kind == other._kind

    def __hash__(self):
        return hash((Maybe, self._kind))

    def __repr__(self):
        return f"maybe({self._kind!r})"


def sanitize(kind, /):
    """
    validate a declared kind and return it unchanged.

    raises
    - TypeError when the kind is not a scalar builtin, Lookup, Array or Maybe.
    """
    if kind in SCALARS or isinstance(kind, (Lookup, Array, Maybe)):
        return kind
    raise TypeError(f"unsupported parameter kind {kind!r} (expected str, int, float, bool, Lookup, Array or Maybe)")


def unwrap(kind, /):
    """
    strip a Maybe wrapper, if any.
    """
    return kind.kind if isinstance(kind, Maybe) else kind


__all__ = (
    "SCALARS",
    "Lookup",
    "Array",
    "Maybe",
    "sanitize",
    "unwrap",
)
