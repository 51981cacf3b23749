"""
Herald shell: the embedding facade with built-in commands.

A Shell wires every component together for a host console:
- a Channel collecting everything the shell and the built-ins print;
- a Registry built from the host's definitions plus the built-ins
  (a host definition with the same keyword replaces the built-in);
- an Aliases table bound to that registry;
- a Converter and a Dispatcher sharing the same Settings.

Built-ins
- help [String topic=none]     list commands, a page of them, or one command.
- alias <String name> <String[] line>
- unalias <String name>
- unaliasall <Boolean confirm>
- listaliases [String name=none]
- echo <String[] values>

Usage
    shell = Shell(table)
    shell.submit("/alias g give torch 5; /g")
    for entry in shell.channel.drain():
        console.print(entry)
"""
import math

from rich.text import Text

from .aliases import AliasError, Aliases
from .converters import Converter
from .dispatcher import Dispatcher
from .kinds import Array
from .outputs import Channel
from .registry import Command, Parameter, Registry, Table
from .settings import Settings
from .tokens import tokenize


class Shell:
    """
    Interpreter facade owning the output channel and the alias table.

    parameters
    - definitions: Iterable[Command]
      host commands, usually a Table.
    - settings: Settings | None
    - aliases: Mapping[str, str] | None
      aliases restored by the host (e.g. from its own storage).
    - logger: logging.Logger | None
      forwarded to the Dispatcher.
    """

    def __init__(self, definitions=(), /, *, settings=None, aliases=None, logger=None):
        if settings is not None and not isinstance(settings, Settings):
            raise TypeError("shell 'settings' must be a settings object")

        self.settings = settings if settings is not None else Settings()
        self.channel = Channel()

        definitions = list(Table(definitions))
        names = {definition.name.removeprefix(self.settings.prefix) for definition in definitions}
        builtins = [command for command in self._builtins() if command.name not in names]

        self.registry = Registry(definitions + builtins, self.settings)
        self.aliases = Aliases(self.registry, aliases if aliases is not None else {})
        self.converter = Converter(self.settings)
        self.dispatcher = Dispatcher(
            self.registry,
            aliases=self.aliases,
            converter=self.converter,
            settings=self.settings,
            logger=logger
        )

    def run(self, line, /):
        """
        dispatch one line, print its diagnostic (if any) and return it.
        """
        if (diagnostic := self.dispatcher.run(line)) is not None:
            self.channel.print(diagnostic)
        return diagnostic

    def submit(self, line, /):
        """
        dispatch a chained line, print every diagnostic and return them.
        """
        diagnostics = self.dispatcher.submit(line)
        self.channel.print(*diagnostics)
        return diagnostics

    def get(self, keyword, /):
        return self.registry.get(keyword)

    def complete(self, line, /):
        """
        autocomplete candidates for a partially typed line.

        - first word: command keywords and alias names starting with it;
        - afterwards: the command's provider candidates starting with the word
          being typed (empty after a trailing space); case-insensitive.
        """
        if not isinstance(line, str):
            raise TypeError("complete() argument must be a string")

        tokens = tokenize(line)
        typing = bool(line) and not line[-1].isspace()

        if not tokens or (len(tokens) == 1 and typing):
            query = (tokens[0] if tokens else "").casefold()
            prefix = self.settings.prefix
            keywords = [
                keyword for keyword in self.registry.keywords
                if keyword.casefold().startswith(query) or keyword.removeprefix(prefix).casefold().startswith(query)
            ]
            return keywords + sorted(name for name in self.aliases if name.casefold().startswith(query))

        if (command := self.registry.get(tokens[0])) is None:
            return []

        query = tokens[-1].casefold() if typing else ""
        return sorted(candidate for candidate in command.candidates() if candidate.casefold().startswith(query))

    # --- rendering helpers ---

    def _text(self, fragment, style="", /):
        return self.settings.paint(fragment, style)

    def _error(self, message, /):
        self.channel.print(self._text(message, "error-title"))

    def _good(self, message, /):
        self.channel.print(self._text(message, "good"))

    def _entry(self, command, /):
        head = self._text(command.keyword, "keyword")
        if command.hint:
            head = Text.assemble(head, " ", self._text(command.hint, "usage"))
        return Text.assemble(head, "\n", self._text(command.descr or "no description", "descr"))

    # --- built-in commands ---

    def _builtins(self):
        topic = Parameter(str, "topic", default=None)
        name = Parameter(str, "name")

        return [
            Command(
                "help",
                "Prints the command list, or looks up the syntax of a specific command. "
                "Also accepts a page number, in case of many commands.",
                self._help,
                (topic,)
            ),
            Command(
                "alias",
                "Create a shortcut or alternate name for a command, or sequence of commands.",
                self._alias,
                (name, Parameter(Array(str), "line")),
                complete=lambda: list(self.registry.keywords)
            ),
            Command(
                "unalias",
                "Remove an alias you've created.",
                self._unalias,
                (name,),
                complete=lambda: list(self.aliases)
            ),
            Command(
                "unaliasall",
                "Removes all of your custom command aliases. Requires a true/1/yes as parameter to confirm you mean it.",
                self._unaliasall,
                (Parameter(bool, "confirm"),)
            ),
            Command(
                "listaliases",
                "List all of your custom aliases, or check what a specific alias does.",
                self._listaliases,
                (Parameter(str, "name", default=None),),
                complete=lambda: list(self.aliases)
            ),
            Command(
                "echo",
                "Shout into the void.",
                self._echo,
                (Parameter(Array(str), "values"),)
            ),
        ]

    def _help(self, topic):
        commands = list(self.registry)

        if topic is None:
            self.channel.print(self._text(f"[{self.settings.title}] {len(commands)} commands", "prog-name"))
            self.channel.print(*map(self._entry, commands))
            return

        if topic.isdecimal():
            size = self.settings.page
            pages = max(math.ceil(len(commands) / size), 1)
            page = max(int(topic), 1)
            if page > pages:
                self._error(f"max number of help pages is {pages}")
                return
            self.channel.print(self._text(f"page ({page}/{pages})", "prog-name"))
            self.channel.print(*map(self._entry, commands[(page - 1) * size:page * size]))
            return

        if (command := self.registry.get(topic)) is None:
            self._error(f"no command named {topic!r}; run '{self.settings.prefix}help' to list commands")
            return

        self.channel.print(self._entry(command))

    def _alias(self, name, line):
        try:
            line = self.aliases.set(name, " ".join(line))
        except AliasError as error:
            self._error(str(error))
            return
        self._good(f"alias {name!r} created for {line!r}")

    def _unalias(self, name):
        try:
            removed = self.aliases.remove(name)
        except AliasError as error:
            self._error(str(error))
            return
        if removed is None:
            self._error(f"no alias named {name!r} exists")
            return
        self._good(f"alias {name!r} deleted")

    def _unaliasall(self, confirm):
        if not confirm:
            self._error("your aliases are safe")
            return
        self.aliases.clear()
        self._good("all of your aliases have been cleared")

    def _listaliases(self, name):
        if not self.aliases:
            self._error(f"you have no aliases currently set; use '{self.settings.prefix}alias' to add some")
            return

        if name is None:
            for alias, line in self.aliases.mapping.items():
                self.channel.print(Text.assemble(self._text(alias, "keyword"), " = ", self._text(line, "usage")))
            return

        if (line := self.aliases.get(name)) is None:
            self._error(f"the alias {name!r} does not exist")
            return

        self.channel.print(Text.assemble(self._text(name, "keyword"), " = ", self._text(line, "usage")))

    def _echo(self, values):
        self.channel.print(" ".join(values))

    def __repr__(self):
        return f"shell({len(self.registry)} commands, {len(self.aliases)} aliases)"


__all__ = (
    "Shell",
)
