"""
Herald settings: the explicit configuration object handed to every component.

Scope
- One immutable, validated bag of knobs shared by the registry (keyword
  prefix), the tokenizer entry points (chain separator), the converters
  (truthy literals), the shell built-ins (help paging) and the diagnostic
  renderer (fancy/colorful/styles/title).
- There is no global configuration: build a Settings and pass it in. Use
  Settings.replace(...) (or copy.replace) to derive variations.

Fields
- prefix: str = "/"            leading marker stored on every keyword.
- separator: str = ";"         chain separator used by Dispatcher.submit.
- truthy: Set[str]             lowercase literals read as True (others are False).
- keep: bool = False           keep empty chained segments.
- page: int = 10               help entries per page.
- fancy: bool = False          render diagnostics inside a rich Panel.
- colorful: bool = True        apply the style palette when rendering.
- styles: Mapping[str, str]    overrides merged over STYLES.
- title: str = "herald"        program name shown in diagnostic headers.

Settings.paint(fragment, style) turns a fragment into rich Text styled from the
palette (plain when colorful is False); diagnostics and the shell render with it.
"""
import operator
import functools
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from rich.text import Text

from .utils import *

TRUTHY = frozenset({"true", "1", "yes", "on"})

STYLES = MappingProxyType({
    # diagnostic header
    "prog-name": "bold #E6E6F0",  # near-white program name
    "code": "bold #00E5FF",  # neon cyan fault code
    "error-title": "bold #FF4DA6",  # friendly pinky title

    # diagnostic body
    "error-message": "#C8C8D0",  # soft light gray message
    "token": "bold white",  # offending token inside messages
    "hint-arrow": "#9CE19C dim",  # gentle green arrow
    "hint": "italic #9CE19C",  # gentle green hint text

    # help and listings
    "keyword": "bold #EBCB8B",  # command keyword
    "usage": "#AFCC96",  # hint string
    "descr": "#C8C8D0",  # description
    "good": "#AFCC96",
})


def _sanitize_strings(metadata, /):
    for name in ("prefix", "separator", "title"):
        if not isinstance(value := metadata[name], str):
            raise TypeError(f"settings {name!r} must be a string")
        if any(char.isspace() for char in value) or (name != "prefix" and not value):
            raise ValueError(f"settings {name!r} must be a non-empty string without whitespace")
        if value == '"':
            raise ValueError(f"settings {name!r} cannot be a quote")


def _sanitize_truthy(metadata, /):
    if isinstance(truthy := metadata["truthy"], str) or not isinstance(truthy, Iterable):
        raise TypeError("settings 'truthy' must be an iterable of strings")
    literals = set()
    for literal in truthy:
        if not isinstance(literal, str):
            raise TypeError("settings 'truthy' must contain only strings")
        if not (literal := literal.strip().lower()):
            raise ValueError("settings 'truthy' cannot contain empty strings")
        literals.add(literal)
    metadata["truthy"] = frozenset(literals)


def _sanitize_page(metadata, /):
    # bool is an int subclass, reject it explicitly
    if not isinstance(page := metadata["page"], int) or isinstance(page, bool):
        raise TypeError("settings 'page' must be an integer")
    if page < 1:
        raise ValueError("settings 'page' must be a positive integer")


def _sanitize_styles(metadata, /):
    if not isinstance(styles := metadata["styles"], Mapping):
        raise TypeError("settings 'styles' must be a mapping")
    if not all(isinstance(key, str) for key in styles):
        raise TypeError("settings 'styles' keys must be strings")
    metadata["styles"] = dict(STYLES) | dict(styles)


class Settings:
    """
    Immutable interpreter configuration.

    Construction validates every field (TypeError for wrong types, ValueError
    for out-of-range values) and mirrors them into read-only properties.
    """

    __introspectable__ = (
        "prefix",
        "separator",
        "truthy",
        "keep",
        "page",
        "fancy",
        "colorful",
        "styles",
        "title",
    )

    def __new__(
            cls,
            *,
            prefix="/",
            separator=";",
            truthy=TRUTHY,
            keep=False,
            page=10,
            fancy=False,
            colorful=True,
            styles=MappingProxyType({}),
            title="herald",
    ):
        metadata = {
            "prefix": prefix,
            "separator": separator,
            "truthy": truthy,
            "keep": bool(keep),
            "page": page,
            "fancy": bool(fancy),
            "colorful": bool(colorful),
            "styles": styles,
            "title": title,
        }
        _sanitize_strings(metadata)
        _sanitize_truthy(metadata)
        _sanitize_page(metadata)
        _sanitize_styles(metadata)

        self = super().__new__(cls)
        for name, value in metadata.items():
            setattr(self, "_" + name, value)
        return self

    prefix = mirror("prefix")
    separator = mirror("separator")
    truthy = mirror("truthy")
    keep = mirror("keep")
    page = mirror("page")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    styles = mirror("styles")
    title = mirror("title")

    def __setattr__(self, name, value, /):
        if not name.startswith("_") or hasattr(self, name):
            raise AttributeError(f"{type(self).__name__} is read-only")
        object.__setattr__(self, name, value)

    def replace(self, **overrides):
        """
        return a new Settings with the given fields replaced.
        """
        unknown = set(overrides) - set(type(self).__introspectable__)
        if unknown:
            raise TypeError("replace() got unexpected field(s) %s" % ", ".join(sorted(map(repr, unknown))))
        fields = {name: getattr(self, name) for name in type(self).__introspectable__}
        return type(self)(**fields | overrides)

    __replace__ = replace

    def paint(self, fragment, style="", /):
        """
        rich Text for a fragment, styled from the palette when colorful.
        """
        if isinstance(fragment, Text):
            return fragment if self._colorful else Text(fragment.plain)
        return Text(str(fragment), self._styles.get(style, "") if self._colorful else "")

    def __eq__(self, other, /):
        if not isinstance(other, Settings):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__introspectable__)

    def __hash__(self):
        return hash(tuple(
            frozenset(value.items()) if isinstance(value, Mapping) else value
            for value in map(functools.partial(getattr, self), type(self).__introspectable__)
        ))

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"settings({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"


__all__ = (
    "Settings",
    "TRUTHY",
    "STYLES",
)
