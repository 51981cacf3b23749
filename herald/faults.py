"""
Herald faults (diagnostics) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing
  dispatch failure. Codes are grouped by domain to keep copy consistent and
  make logs/searches predictable.
- Diagnostic: the structured value the dispatcher returns instead of raising
  ({code, message, token?, hint, keyword?}). It knows how to render itself in
  a friendly, lowercased and actionable way through rich.
- One Diagnostic subclass per fault kind so callers can branch with
  isinstance (e.g. "couldn't find X" vs "found more than one X").

UX goals
- Position-first messages: conversion messages include the ordinal position
  of the offending token ("at second position").
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- Dispatcher.run returns a Diagnostic (or None); it never raises for bad input.
- The host decides where to print: rich.Console.print(diagnostic) renders it,
  str(diagnostic) gives the plain one-line message.
"""
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .settings import Settings


class FaultCode(IntEnum):
    """
    canonical fault codes used across the interpreter (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_COMMAND
    - arity (1112x)
      • MISSING_ARGUMENTS
    - conversion (1115x)
      • CONVERSION_NO_MATCH, CONVERSION_TOO_MANY_MATCHES, CONVERSION_FORMAT_ERROR
    - delegated (1113x)
      • HANDLER_EXECUTION_FAILURE

    codes are discoverable (searchable in logs) and normalized to a string via
    normalize().
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND             = 11101

    # --- arity errors (11xxx) ---
    MISSING_ARGUMENTS           = 11125

    # --- delegated errors (11xxx) ---
    HANDLER_EXECUTION_FAILURE   = 11131

    # --- conversion errors (11xxx) ---
    CONVERSION_NO_MATCH         = 11151
    CONVERSION_TOO_MANY_MATCHES = 11152
    CONVERSION_FORMAT_ERROR     = 11153

    def normalize(self):
        """
        return the stable string form of this code.
        """
        return str(self.value)


class Diagnostic:
    """
    Structured, renderable report of one dispatch failure.

    attributes
    - message: str
      one-line, human-readable, lowercased description.
    - options: Mapping[str, Any]
      read-only context; recognized keys are code, title, hint, token, index,
      keyword, settings and (for handler failures) exception.
    """

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def title(self):
        return self.options.get("title", "")

    @property
    def hint(self):
        return self.options.get("hint", "")

    @property
    def token(self):
        return self.options.get("token")

    @property
    def keyword(self):
        return self.options.get("keyword")

    def __str__(self):
        return self.message

    def __repr__(self):
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"

    def __eq__(self, other, /):
        if not isinstance(other, Diagnostic):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message and self.options == other.options

    __hash__ = None

    def __rich__(self):
        settings = self.options.get("settings") or Settings()
        paint = settings.paint
        match self.code:
            case FaultCode():
                code = self.code.normalize()
            case None:
                code = "?"
            case _:
                code = str(self.code)

        header = Text.assemble(
            "[ ", paint(settings.title, "prog-name"),
            " — ", paint(code, "code"),
            " | ", paint(self.title.title(), "error-title"),
            " ]"
        )
        body = [paint(self.message, "error-message")]
        if self.hint:
            body.append(Text.assemble(paint(" → ", "hint-arrow"), paint(self.hint, "hint")))

        if settings.fancy:
            return Panel(Group(*body), title=header, title_align="left")
        return Group(header, *body)

    def __replace__(self, /, **overrides):
        return type(self)(self.message, **self.options | overrides)


class UnknownCommand(Diagnostic): ...
class MissingArguments(Diagnostic): ...
class ConversionFailure(Diagnostic): ...
class NoMatch(ConversionFailure): ...
class TooManyMatches(ConversionFailure): ...
class FormatError(ConversionFailure): ...
class ExecutionFailure(Diagnostic): ...


__all__ = (
    "FaultCode",
    "Diagnostic",
    "UnknownCommand",
    "MissingArguments",
    "ConversionFailure",
    "NoMatch",
    "TooManyMatches",
    "FormatError",
    "ExecutionFailure",
)
