"""
Herald command layer: declare, collect and look up commands.

What this module provides
- Parameter: one declared argument (kind, name, optional default).
- Command: an immutable command descriptor (name, description, handler,
  parameters, optional autocomplete provider) with the derived `required`
  count and `hint` string.
- Table: a builder that collects Command definitions through a decorator, the
  explicit replacement for scanning methods by annotation.
- Registry: the build-once keyword → Command mapping used by the dispatcher.

Quick start
    from herald import Table, Parameter, Registry

    table = Table()

    @table.command("setlevel", "Set the current level.",
                   Parameter(int, "level"), Parameter(str, "mode", default="normal"))
    def setlevel(level, mode):
        ...

    registry = Registry(table)
    registry.get("setlevel").hint   # '<Number level> [String mode=normal]'

Build-time rules (violations raise immediately; they are programming errors)
- required parameters precede optional ones (TypeError);
- an Array parameter, if any, is the last one (TypeError);
- parameter names are unique within a command (ValueError);
- keywords are unique within a registry (ValueError).
"""
import copy
import inspect
import logging
from collections.abc import Iterable

from .converters import typename
from .kinds import Array, sanitize
from .settings import Settings
from .utils import *

logger = logging.getLogger(__name__)


def _sanitize_name(cls, name, /):
    if not isinstance(name, str):
        raise TypeError(f"{cls.__name__.lower()} name must be a string")
    if not (name := name.strip()):
        raise ValueError(f"{cls.__name__.lower()} name cannot be empty")
    if any(char.isspace() or char == '"' for char in name):
        raise ValueError(f"{cls.__name__.lower()} name {name!r} cannot contain whitespace or quotes")
    return name


def _render_default(value, /):
    """
    textual form of a default value inside a hint string.
    """
    if value is None:
        return "none"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return " ".join(map(_render_default, value))
    return str(value)


class Parameter:
    """
    Declared argument of a command.

    parameters
    - kind: str | int | float | bool | Lookup | Array | Maybe
      what the raw token is converted to.
    - name: str
      shown in hints; must not contain whitespace.
    - default: Any | Unset
      when given (None included), the parameter is optional and the default is
      passed to the handler if the user leaves it out.
    """

    __slots__ = ("_kind", "_name", "_default")

    def __init__(self, kind, name, /, default=Unset):
        self._kind = sanitize(kind)
        self._name = _sanitize_name(type(self), name)
        self._default = default

    kind = mirror("kind")
    name = mirror("name")

    @property
    def default(self):
        return self._default

    @property
    def optional(self):
        return self._default is not Unset

    @property
    def rest(self):
        """
        whether this parameter consumes all remaining tokens.
        """
        return isinstance(self._kind, Array)

    @property
    def hint(self):
        """
        '<Type name>' when required, '[Type name=default]' when optional.
        """
        if not self.optional:
            return f"<{typename(self._kind)} {self._name}>"
        return f"[{typename(self._kind)} {self._name}={_render_default(self._default)}]"

    def __eq__(self, other, /):
        if not isinstance(other, Parameter):
            return NotImplemented
        return (self._kind, self._name, self._default) == (other._kind, other._name, other._default)

    __hash__ = None

    def __repr__(self):
        if self.optional:
            return f"parameter({self._kind!r}, {self._name!r}, default={self._default!r})"
        return f"parameter({self._kind!r}, {self._name!r})"


def _sanitize_parameters(name, parameters, /):
    """
    validate declaration order and return (parameters, required).
    """
    if isinstance(parameters, str) or not isinstance(parameters, Iterable):
        raise TypeError(f"command {name!r} parameters must be an iterable of parameters")

    parameters = tuple(parameters)
    names = set()
    required = 0
    optional = False

    for index, parameter in enumerate(parameters):
        if not isinstance(parameter, Parameter):
            raise TypeError(f"command {name!r} parameters must be parameter objects")
        if parameter.name in names:
            raise ValueError(f"command {name!r} declares parameter {parameter.name!r} twice")
        names.add(parameter.name)
        if parameter.rest and index != len(parameters) - 1:
            raise TypeError(f"command {name!r} array parameter {parameter.name!r} must be the last parameter")
        if parameter.optional:
            optional = True
        elif optional:
            raise TypeError(f"command {name!r} required parameter {parameter.name!r} follows an optional parameter")
        else:
            required += 1

    return parameters, required


class Command:
    """
    Immutable command descriptor.

    parameters
    - name: str
      bare keyword (e.g. "give"); a leading prefix is accepted and ignored.
    - descr: str
      human-readable description used by help.
    - handler: Callable[..., Any]
      invoked with one positional argument per declared parameter.
    - parameters: Iterable[Parameter]
    - complete: Callable[[], Iterable[str]] | Unset
      autocomplete provider returning candidate strings for arguments.
    - prefix: str
      keyword prefix; set by the Registry from its settings.

    derived
    - keyword: prefix + name, the registry key.
    - required: number of parameters without a default.
    - hint: parameter hints joined by spaces ('' when there are none).
    """

    __introspectable__ = (
        "keyword",
        "name",
        "descr",
        "hint",
        "required",
        "parameters",
        "handler",
        "complete",
    )

    def __init__(self, name, descr, handler, /, parameters=(), *, complete=Unset, prefix=""):
        if not isinstance(prefix, str):
            raise TypeError("command 'prefix' must be a string")
        name = _sanitize_name(type(self), name)
        if prefix:
            name = name.removeprefix(prefix)
            if not name:
                raise ValueError("command name cannot be only the prefix")
        if not isinstance(descr, str):
            raise TypeError(f"command {name!r} 'descr' must be a string")
        if not callable(handler):
            raise TypeError(f"command {name!r} handler must be callable")
        if complete is not Unset and not callable(complete):
            raise TypeError(f"command {name!r} 'complete' must be callable")

        self._name = name
        self._prefix = prefix
        self._descr = descr.strip()
        self._handler = handler
        self._parameters, self._required = _sanitize_parameters(name, parameters)
        self._complete = complete
        self._hint = " ".join(parameter.hint for parameter in self._parameters)

    name = mirror("name")
    prefix = mirror("prefix")
    descr = mirror("descr")
    hint = mirror("hint")
    required = mirror("required")
    parameters = mirror("parameters")

    @property
    def keyword(self):
        return self._prefix + self._name

    @property
    def handler(self):
        return self._handler

    @property
    def complete(self):
        return coalesce(self._complete)

    @property
    def usage(self):
        """
        keyword followed by the hint, as printed by help.
        """
        return f"{self.keyword} {self._hint}" if self._hint else self.keyword

    def candidates(self):
        """
        autocomplete candidates from the provider, or [] when there is none.
        """
        if self._complete is Unset:
            return []
        return [candidate for candidate in (self._complete() or ()) if isinstance(candidate, str)]

    def __replace__(self, /, **overrides):
        fields = {
            "name": self._name,
            "descr": self._descr,
            "handler": self._handler,
            "parameters": self._parameters,
            "complete": self._complete,
            "prefix": self._prefix,
        } | overrides
        return type(self)(
            fields.pop("name"),
            fields.pop("descr"),
            fields.pop("handler"),
            fields.pop("parameters"),
            **fields
        )

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"command({self.keyword!r}, {self._hint!r})"


class Table:
    """
    Builder collecting command definitions before the registry is built.

    usage
        table = Table()

        @table.command("heal", "Heal all of your wounds.")
        def heal(): ...

    The decorator returns the handler unchanged, so handlers stay plain,
    directly testable functions.
    """

    def __init__(self, definitions=(), /):
        self._definitions = []
        for definition in definitions:
            self.add(definition)

    def add(self, definition, /):
        if not isinstance(definition, Command):
            raise TypeError("table entries must be commands")
        self._definitions.append(definition)
        return definition

    def command(self, name, descr=Unset, /, *parameters, complete=Unset):
        """
        decorator registering the decorated function as a command handler.

        descr defaults to the handler's docstring.
        """
        @named("command")
        def wrapper(handler, /):
            if not callable(handler):
                raise TypeError("@command() must be applied to a callable")
            self.add(Command(
                name,
                coalesce(descr, inspect.getdoc(handler) or ""),
                handler,
                parameters,
                complete=complete
            ))
            return handler

        return wrapper

    def __iter__(self):
        return iter(tuple(self._definitions))

    def __len__(self):
        return len(self._definitions)


class Registry:
    """
    Build-once mapping from prefixed keyword to Command.

    parameters
    - definitions: Iterable[Command]
      e.g. a Table; each definition is re-created with the registry prefix.
    - settings: Settings | Unset

    lookups
    - lookup(keyword): exact keyword (prefix included) or None.
    - get(keyword): same, adding the prefix when it is missing.

    Commands are kept in keyword order; iteration and help follow it.
    """

    def __init__(self, definitions, /, settings=Unset):
        if not isinstance(settings, Settings | Unset):
            raise TypeError("registry 'settings' must be a settings object")
        if isinstance(definitions, str) or not isinstance(definitions, Iterable):
            raise TypeError("registry definitions must be an iterable of commands")

        self.settings = coalesce(settings, Settings())
        commands = {}

        for definition in definitions:
            if not isinstance(definition, Command):
                raise TypeError("registry definitions must be commands")
            command = copy.replace(definition, prefix=self.settings.prefix)
            if commands.setdefault(command.keyword, command) is not command:
                raise ValueError(f"command keyword {command.keyword!r} is already in use")
            logger.debug("registered command %s", command.keyword)

        self._commands = dict(sorted(commands.items()))
        logger.info("registered %d commands", len(self._commands))

    @property
    def keywords(self):
        return tuple(self._commands)

    def lookup(self, keyword, /):
        return self._commands.get(keyword)

    def get(self, keyword, /):
        if not isinstance(keyword, str):
            raise TypeError("get() argument must be a string")
        if not keyword.startswith(self.settings.prefix):
            keyword = self.settings.prefix + keyword
        return self._commands.get(keyword)

    def __contains__(self, keyword, /):
        return isinstance(keyword, str) and self.get(keyword) is not None

    def __iter__(self):
        return iter(tuple(self._commands.values()))

    def __len__(self):
        return len(self._commands)

    def __repr__(self):
        return f"registry({list(self._commands)!r})"


__all__ = (
    "Parameter",
    "Command",
    "Table",
    "Registry",
)
