"""
Herald converters: turn text tokens into typed values.

What this module provides
- Reason: why a conversion failed (NO_MATCH, TOO_MANY_MATCHES, FORMAT_ERROR).
  The numeric values are the matching FaultCode values.
- Conversion: the result of one conversion, either a value or a failure
  reason plus the offending token. Failures are values, never exceptions, and
  are never coerced to a default.
- Converter: converts a token (or the rest of the tokens, for arrays) for a
  declared parameter kind, using the truthy literals from Settings.
- partial(candidates, text): the generic "best partial name" lookup used for
  domains like prefab or resource names.
- typename(kind): the friendly type name used in hint strings and messages.

Conversion rules
- str    → the token unchanged.
- int    → base-10 integer with optional sign ("07" → 7); anything else is FORMAT_ERROR.
- float  → decimal number ("1.5", "-2", ".5", "1e3"); anything else is FORMAT_ERROR.
- bool   → True when the lowercased token is a truthy literal, else False (never fails).
- Lookup → integer tokens are identifiers; otherwise case-insensitive prefix
           match on simplified display names with an exact-match tie-break.
- Maybe(k) is converted exactly like k; Array(k) converts every remaining token as k.
"""
import re
from enum import IntEnum

from .faults import FaultCode
from .kinds import Lookup, Array, Maybe, unwrap
from .settings import Settings
from .tokens import simplify
from .utils import *

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _integer(text, /):
    """
    int value of a decimal integer token, or None when it is not one.

    int() refuses strings past the interpreter's digit limit with a
    ValueError; such tokens are reported like any other malformed number.
    """
    if not _INTEGER.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        return None


class Reason(IntEnum):
    """
    conversion failure reasons, valued after their fault codes.
    """
    NO_MATCH         = FaultCode.CONVERSION_NO_MATCH
    TOO_MANY_MATCHES = FaultCode.CONVERSION_TOO_MANY_MATCHES
    FORMAT_ERROR     = FaultCode.CONVERSION_FORMAT_ERROR

    @property
    def code(self):
        return FaultCode(self.value)


class Conversion:
    """
    Outcome of converting one token (or one array of tokens).

    attributes
    - value: the converted value (Unset on failure).
    - reason: Reason on failure, Unset on success.
    - token: the offending token on failure, Unset on success.

    truthiness mirrors success, so `if conversion:` reads naturally.
    """

    __slots__ = ("value", "reason", "token")

    def __init__(self, value=Unset, /, *, reason=Unset, token=Unset):
        if not isinstance(reason, Reason | Unset):
            raise TypeError("conversion 'reason' must be a reason")
        if (value is Unset) == (reason is Unset):
            raise TypeError("conversion takes either a value or a failure reason")
        self.value = value
        self.reason = reason
        self.token = token

    @classmethod
    def failure(cls, reason, token, /):
        return cls(reason=reason, token=token)

    @property
    def ok(self):
        return self.reason is Unset

    def __bool__(self):
        return self.ok

    def __eq__(self, other, /):
        if not isinstance(other, Conversion):
            return NotImplemented
        return (self.value, self.reason, self.token) == (other.value, other.reason, other.token)

    __hash__ = None

    def __repr__(self):
        if self.ok:
            return f"conversion({self.value!r})"
        return f"conversion(reason={self.reason.name}, token={self.token!r})"


def partial(candidates, text, /):
    """
    find the candidate string that best matches a partial text.

    algorithm
    - keep candidates that start with `text` (case-insensitive), shortest first;
    - none → NO_MATCH;
    - a candidate equal to `text` (case-insensitive) wins the tie-break;
    - otherwise a single prefix match is accepted;
    - otherwise TOO_MANY_MATCHES.

    returns
    - Conversion holding the original (non-lowercased) candidate.

    examples
    - partial({"torch", "torch_unlit", "hammer"}, "torch") → "torch"
    - partial({"torch_unlit", "hammer"}, "torch")          → "torch_unlit"
    - partial({"torch_unlit", "torch_wall"}, "torch")      → TOO_MANY_MATCHES
    """
    if not isinstance(text, str):
        raise TypeError("partial() second argument must be a string")

    query = text.casefold()
    matches = sorted((candidate for candidate in candidates if candidate.casefold().startswith(query)), key=len)

    if not matches:
        return Conversion.failure(Reason.NO_MATCH, text)

    for match in matches:
        if match.casefold() == query:
            return Conversion(match)

    if len(matches) == 1:
        return Conversion(matches[0])

    return Conversion.failure(Reason.TOO_MANY_MATCHES, text)


def typename(kind, /):
    """
    friendly name of a parameter kind for hints and diagnostics.

    - str → "String", int → "Number", float → "Decimal", bool → "Boolean"
    - Lookup → its declared name (e.g. "Player")
    - Array(k) → typename(k) + "[]"
    - Maybe(k) → typename(k)
    """
    if isinstance(kind, Maybe):
        return typename(kind.kind)
    if isinstance(kind, Array):
        return typename(kind.kind) + "[]"
    if isinstance(kind, Lookup):
        return kind.name
    try:
        return {
            str: "String",
            int: "Number",
            float: "Decimal",
            bool: "Boolean",
        }[kind]
    except (KeyError, TypeError):
        raise TypeError(f"unsupported parameter kind {kind!r}") from None


class Converter:
    """
    Converts raw tokens to typed values for declared parameter kinds.

    parameters
    - settings: Settings | Unset
      only `truthy` is consulted; defaults to Settings().
    """

    def __init__(self, settings=Unset, /):
        if not isinstance(settings, Settings | Unset):
            raise TypeError("converter 'settings' must be a settings object")
        self.settings = coalesce(settings, Settings())

    def convert(self, text, kind, /):
        """
        convert a single token for a non-array kind.

        raises
        - TypeError for array kinds (use convert_all) or unsupported kinds;
          these are programming errors, not user input errors.
        """
        if not isinstance(text, str):
            raise TypeError("convert() first argument must be a string")

        kind = unwrap(kind)

        if isinstance(kind, Array):
            raise TypeError("convert() cannot convert an array kind, use convert_all()")
        if isinstance(kind, Lookup):
            return self._lookup(text, kind)

        if kind is str:
            return Conversion(text)
        if kind is bool:
            return Conversion(text.strip().lower() in self.settings.truthy)
        if kind is int:
            if (number := _integer(text)) is None:
                return Conversion.failure(Reason.FORMAT_ERROR, text)
            return Conversion(number)
        if kind is float:
            if _DECIMAL.fullmatch(text):
                return Conversion(float(text))
            return Conversion.failure(Reason.FORMAT_ERROR, text)

        raise TypeError(f"unsupported parameter kind {kind!r}")

    def convert_all(self, tokens, kind, /):
        """
        convert every token with the element kind of an array.

        the first failing token fails the whole array with its reason.
        """
        element = kind.kind if isinstance(kind, Array) else kind
        values = []
        for token in tokens:
            if not (conversion := self.convert(token, element)):
                return conversion
            values.append(conversion.value)
        return Conversion(values)

    def _lookup(self, text, lookup, /):
        entities = lookup.entities()

        if _INTEGER.fullmatch(text):
            # too many digits for int(): no entity carries that id
            if (identifier := _integer(text)) is None:
                return Conversion.failure(Reason.NO_MATCH, text)
            for entity in entities:
                if lookup.identify(entity) == identifier:
                    return Conversion(entity)
            return Conversion.failure(Reason.NO_MATCH, text)

        query = simplify(text).casefold()
        labels = []
        for entity in entities:
            # entities without a textual label cannot be matched by name
            if isinstance(label := lookup.label(entity), str):
                labels.append((simplify(label).casefold(), entity))
        matches = [(label, entity) for label, entity in labels if label.startswith(query)]

        if not matches:
            return Conversion.failure(Reason.NO_MATCH, text)
        if len(matches) == 1:
            return Conversion(matches[0][1])

        # several players named "Ben" and "Benjamin": only an exact name is unambiguous
        for label, entity in matches:
            if label == query:
                return Conversion(entity)

        return Conversion.failure(Reason.TOO_MANY_MATCHES, text)


__all__ = (
    "Reason",
    "Conversion",
    "Converter",
    "partial",
    "typename",
)
