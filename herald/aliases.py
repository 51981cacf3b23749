"""
Herald alias table: user-defined shortcuts expanded before dispatch.

An alias maps a single word to a replacement line ("g" → "give torch 5").
Expansion only looks at the first word of a line and happens once: the
replacement is never expanded again, so "h" → "g" → ... can never loop.

Aliases can never shadow a command: names that resolve to a registered
keyword, with or without the prefix, are rejected with AliasError. Since the
registry is fixed after construction, this check never goes stale.
"""
from .registry import Registry
from .tokens import QUOTE, simplify
from .utils import *


class AliasError(ValueError):
    """
    raised when an alias name or replacement line is rejected.
    """


class Aliases:
    """
    Session-owned alias table bound to a registry.

    parameters
    - registry: Registry
      used to reject names that collide with command keywords.
    - aliases: Mapping[str, str]
      initial aliases (e.g. loaded by the host); validated like set().
    """

    def __init__(self, registry, aliases=(), /):
        if not isinstance(registry, Registry):
            raise TypeError("aliases 'registry' must be a registry")
        self._registry = registry
        self._aliases = {}
        for name, line in dict(aliases).items():
            self.set(name, line)

    mapping = mirror("aliases")

    def _sanitize(self, name, /):
        if not isinstance(name, str):
            raise TypeError("alias name must be a string")
        if not name or any(char.isspace() for char in name):
            raise AliasError("an alias cannot be empty or contain spaces")
        if QUOTE in name:
            raise AliasError("an alias cannot contain quotes")
        if name in self._registry:
            raise AliasError(f"{name!r} is a command and cannot be overwritten")
        return name

    def set(self, name, line, /):
        """
        create or replace an alias and return its normalized replacement line.
        """
        name = self._sanitize(name)
        if not isinstance(line, str):
            raise TypeError("alias line must be a string")
        if not (line := simplify(line)):
            raise AliasError(f"alias {name!r} needs a command line to expand to")
        self._aliases[name] = line
        return line

    def remove(self, name, /):
        """
        delete an alias; returns its replacement line, or None when it did not exist.
        """
        return self._aliases.pop(self._sanitize(name), None)

    def clear(self):
        self._aliases.clear()

    def get(self, name, /):
        return self._aliases.get(name)

    def expand(self, line, /):
        """
        substitute the replacement for the first word of a simplified line.

        single hop: the result is returned as-is, even when it starts with
        another alias.
        """
        head, separator, rest = simplify(line).partition(" ")
        if (replacement := self._aliases.get(head)) is None:
            return simplify(line)
        return replacement + separator + rest

    def __contains__(self, name, /):
        return name in self._aliases

    def __iter__(self):
        return iter(tuple(self._aliases))

    def __len__(self):
        return len(self._aliases)

    def __repr__(self):
        return f"aliases({self._aliases!r})"


__all__ = (
    "AliasError",
    "Aliases",
)
