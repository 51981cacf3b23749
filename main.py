import logging
from types import SimpleNamespace

from rich.console import Console

from herald import *

console = Console()

players = [
    SimpleNamespace(id=1, name="Ben"),
    SimpleNamespace(id=2, name="Benjamin"),
]
prefabs = ["torch", "torch_unlit", "hammer", "shield"]

table = Table()
Player = Lookup("Player", lambda: players)


@table.command(
    "give",
    "Give an item to yourself or another player.",
    Parameter(str, "item"),
    Parameter(int, "amount", default=1),
    Parameter(Maybe(Player), "player", default=None),
    complete=lambda: prefabs,
)
def give(item, amount, player):
    found = partial(prefabs, item)
    if not found:
        shell.channel.print(f"no prefab matches {item!r}")
        return
    target = player.name if player else "yourself"
    shell.channel.print(f"gave {amount} {found.value} to {target}")


@table.command("setlevel", "Set the current level.", Parameter(int, "level"), Parameter(str, "mode", default="normal"))
def setlevel(level, mode):
    shell.channel.print(f"level {level} ({mode})")


shell = Shell(table)


if __name__ == '__main__':
    logs.configure(logging.INFO)
    while True:
        try:
            line = console.input("[bold]> [/bold]")
        except (EOFError, KeyboardInterrupt):
            break
        shell.submit(line)
        for entry in shell.channel.drain():
            console.print(entry)
