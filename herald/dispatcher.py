"""
Herald dispatcher: run one submitted line against the registry.

Pipeline (Dispatcher.run)
1) simplify the line; blank lines are a no-op;
2) expand an alias on the first word (single hop);
3) tokenize; the first token is the keyword;
4) resolve the command (prefix optional) → UnknownCommand;
5) check the required argument count → MissingArguments;
6) convert every declared parameter in order, a trailing array taking the
   rest → NoMatch / TooManyMatches / FormatError; missing optional parameters
   take their default; extra tokens are ignored;
7) call the handler positionally.

An exception escaping the handler, or a Lookup's host callables during step 6,
is logged with its traceback and reported as ExecutionFailure.

Every failure is returned as a Diagnostic value; nothing is raised to the
caller for bad input, and the handler is never invoked unless every argument
converted.

Chaining (Dispatcher.submit)
- the line is split on the configured separator (quotes and '\\;' protect it);
- when a segment starts with an alias, the alias line is split again so an
  alias can stand for a whole chain, and the words typed after the alias are
  appended to its last piece without being split a second time;
- every piece is dispatched in order without further alias expansion.
"""
import difflib
import logging

from .aliases import Aliases
from .converters import Converter, Reason, typename
from .faults import *
from .kinds import Lookup, unwrap
from .registry import Registry
from .settings import Settings
from .tokens import simplify, split, tokenize
from .utils import *


class Dispatcher:
    """
    Stateless-per-call command runner.

    parameters
    - registry: Registry
    - aliases: Aliases | None
      consulted before dispatch; no expansion when None.
    - converter: Converter | None
      defaults to Converter(settings).
    - settings: Settings | None
      defaults to the registry settings.
    - logger: logging.Logger | None
      receives debug traces and handler tracebacks; defaults to this module's logger.
    """

    def __init__(self, registry, /, aliases=None, converter=None, settings=None, logger=None):
        if not isinstance(registry, Registry):
            raise TypeError("dispatcher 'registry' must be a registry")
        if aliases is not None and not isinstance(aliases, Aliases):
            raise TypeError("dispatcher 'aliases' must be an alias table")
        if converter is not None and not isinstance(converter, Converter):
            raise TypeError("dispatcher 'converter' must be a converter")
        if settings is not None and not isinstance(settings, Settings):
            raise TypeError("dispatcher 'settings' must be a settings object")
        if logger is not None and not isinstance(logger, logging.Logger | logging.LoggerAdapter):
            raise TypeError("dispatcher 'logger' must be a logger")

        self.registry = registry
        self.aliases = aliases
        self.settings = settings if settings is not None else registry.settings
        self.converter = converter if converter is not None else Converter(self.settings)
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def run(self, line, /):
        """
        dispatch one line; returns None on success (or for a blank line),
        otherwise the Diagnostic describing why nothing ran.
        """
        if not isinstance(line, str):
            raise TypeError("run() argument must be a string")
        if not (line := simplify(line)):
            return None
        if self.aliases is not None:
            line = self.aliases.expand(line)
        return self._dispatch(line)

    def submit(self, line, /):
        """
        dispatch a possibly chained line; returns every diagnostic, in order.
        """
        if not isinstance(line, str):
            raise TypeError("submit() argument must be a string")

        diagnostics = []
        for segment in self._split(line):
            for piece in self._expand(segment):
                if (diagnostic := self._dispatch(simplify(piece))) is not None:
                    diagnostics.append(diagnostic)
        return diagnostics

    def _split(self, line, /):
        return split(line, self.settings.separator, keep=self.settings.keep)

    def _expand(self, segment, /):
        """
        pieces of one chained segment once its alias (if any) is expanded.

        only the alias line is split again; the words typed after the alias
        were already split and unescaped, so they join the last piece as is.
        """
        if self.aliases is None:
            return [segment]
        head, separator, rest = simplify(segment).partition(" ")
        if (replacement := self.aliases.get(head)) is None:
            return [segment]
        pieces = self._split(replacement) or [""]
        pieces[-1] += separator + rest
        return pieces

    def _dispatch(self, line, /):
        if not (tokens := tokenize(line)):
            return None

        keyword, arguments = tokens[0], tokens[1:]

        if (command := self.registry.get(keyword)) is None:
            return self._unknown(keyword)

        if len(arguments) < command.required:
            return MissingArguments(
                "missing required arguments for %r (expected %d, got %d)" % (
                    command.keyword,
                    command.required,
                    len(arguments)
                ),
                title="missing arguments",
                code=FaultCode.MISSING_ARGUMENTS,
                hint="usage: %s" % command.usage,
                keyword=command.keyword,
                settings=self.settings
            )

        # lookups call into host code (entity lists, labels, ids)
        try:
            values, diagnostic = self._convert(command, arguments)
        except Exception as exception:
            self.logger.exception("something happened while reading the arguments of %s", command.keyword)
            return self._crashed(command, exception, "reading the arguments of")

        if diagnostic is not None:
            return diagnostic

        self.logger.debug("running %s with %d argument(s)", command.keyword, len(values))

        try:
            command.handler(*values)
        except Exception as exception:
            self.logger.exception("something happened while running %s", command.keyword)
            return self._crashed(command, exception, "running")

        return None

    def _convert(self, command, arguments, /):
        """
        (values, None) when every argument converted, else (None, diagnostic).
        """
        values = []
        for index, parameter in enumerate(command.parameters):
            if parameter.rest:
                if not (rest := arguments[index:]):
                    values.append(parameter.default)
                    continue
                conversion = self.converter.convert_all(rest, parameter.kind)
                position = index if conversion else index + rest.index(conversion.token)
            elif index < len(arguments):
                conversion = self.converter.convert(arguments[index], parameter.kind)
                position = index
            else:
                values.append(parameter.default)
                continue

            if not conversion:
                return None, self._failure(command, parameter, conversion, position + 1)
            values.append(conversion.value)

        return values, None

    def _crashed(self, command, exception, doing, /):
        return ExecutionFailure(
            "something happened while %s %r" % (doing, command.keyword),
            title="command failed",
            code=FaultCode.HANDLER_EXECUTION_FAILURE,
            hint="check the log for more details",
            keyword=command.keyword,
            exception=exception,
            settings=self.settings
        )

    def _unknown(self, keyword, /):
        prefix = self.settings.prefix
        candidate = keyword if keyword.startswith(prefix) else prefix + keyword
        suggestions = difflib.get_close_matches(candidate, self.registry.keywords, 5)
        listing = "run '%shelp' to list commands" % prefix if "help" in self.registry else ""

        try:
            hint = "did you mean %r?" % suggestions[0] + (" you can also %s" % listing if listing else "")
        except IndexError:
            hint = listing or "check the spelling of the command"

        return UnknownCommand(
            "unknown command %r" % keyword,
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            hint=hint,
            token=keyword,
            index=0,
            keyword=keyword,
            suggestions=tuple(suggestions),
            settings=self.settings
        )

    def _failure(self, command, parameter, conversion, index, /):
        name = typename(unwrap(parameter.kind))
        # for arrays the message names the element type
        element = name.removesuffix("[]")
        where = ordinal(index + 1)
        options = {
            "token": conversion.token,
            "index": index,
            "keyword": command.keyword,
            "parameter": parameter.name,
            "settings": self.settings,
        }

        match conversion.reason:
            case Reason.NO_MATCH:
                return NoMatch(
                    "couldn't find a %s with the text %r at %s position" % (element, conversion.token, where),
                    title="no match",
                    code=FaultCode.CONVERSION_NO_MATCH,
                    hint=self._lookup_hint(parameter),
                    **options
                )
            case Reason.TOO_MANY_MATCHES:
                return TooManyMatches(
                    "found more than one %s matching %r at %s position" % (element, conversion.token, where),
                    title="too many matches",
                    code=FaultCode.CONVERSION_TOO_MANY_MATCHES,
                    hint="be more specific, or use the numeric id",
                    **options
                )
            case _:
                return FormatError(
                    "cannot read %r as a %s at %s position" % (conversion.token, element, where),
                    title="invalid value",
                    code=FaultCode.CONVERSION_FORMAT_ERROR,
                    hint="usage: %s" % command.usage,
                    **options
                )

    @staticmethod
    def _lookup_hint(parameter, /):
        kind = unwrap(parameter.kind)
        if isinstance(getattr(kind, "kind", kind), Lookup):
            return "check the name, or use the numeric id"
        return "check the spelling and try again"


__all__ = (
    "Dispatcher",
)
