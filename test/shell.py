"""
Shell behavioral tests (built-ins, channel output, completion).

Scope
- Validate that diagnostics and built-in output land on the channel.
- Validate help listing, paging and single-command lookup.
- Validate alias management built-ins, including rejected names.
- Validate keyword and argument completion.
- Validate that host definitions replace built-ins with the same keyword.

Conventions
- Test method names follow CamelCase per project convention.
- Channel entries are compared through str(), which drops rich styling.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from herald import Parameter, Settings, Shell, Table
from herald.faults import MissingArguments, UnknownCommand

PREFABS = ["torch", "torch_unlit", "hammer"]


def build(**options):
    calls = []
    table = Table()

    @table.command("give", "Give an item to yourself.",
                   Parameter(str, "item"), Parameter(int, "amount", default=1),
                   complete=lambda: PREFABS)
    def give(item, amount):
        calls.append((item, amount))

    @table.command("god", "Toggles invincibility.")
    def god():
        calls.append(("god",))

    return Shell(table, **options), calls


def lines(shell):
    return [str(entry) for entry in shell.channel.drain()]


class TestShellDispatch(TestCase):
    """Behavioral tests for Shell.run and Shell.submit."""

    def setUp(self):
        self.shell, self.calls = build()

    def testDiagnosticIsPrintedAndReturned(self):
        diagnostic = self.shell.run("/nope")
        self.assertIsInstance(diagnostic, UnknownCommand)
        self.assertEqual(self.shell.channel.drain(), [diagnostic])

    def testSuccessPrintsNothing(self):
        self.assertIsNone(self.shell.run("/give torch"))
        self.assertEqual(self.calls, [("torch", 1)])
        self.assertFalse(self.shell.channel)

    def testSubmitPrintsEveryDiagnostic(self):
        diagnostics = self.shell.submit("/nope; /give")
        self.assertEqual([type(diagnostic) for diagnostic in diagnostics], [UnknownCommand, MissingArguments])
        self.assertEqual(len(self.shell.channel), 2)

    def testGetProxiesRegistry(self):
        self.assertIs(self.shell.get("give"), self.shell.registry.get("/give"))

    def testEcho(self):
        self.shell.run('/echo hello "big world"')
        self.assertEqual(lines(self.shell), ["hello big world"])


class TestShellHelp(TestCase):
    """Behavioral tests for the help built-in."""

    def setUp(self):
        self.shell, _ = build(settings=Settings(page=3, colorful=False))

    def testListsEveryCommand(self):
        self.shell.run("/help")
        output = lines(self.shell)
        self.assertEqual(output[0], "[herald] 8 commands")
        self.assertEqual(len(output), 9)

    def testSingleCommand(self):
        self.shell.run("/help give")
        self.assertEqual(lines(self.shell), ["/give <String item> [Number amount=1]\nGive an item to yourself."])

    def testPage(self):
        self.shell.run("/help 3")
        output = lines(self.shell)
        self.assertEqual(output[0], "page (3/3)")
        self.assertEqual(len(output), 3)

    def testPageOutOfRange(self):
        self.shell.run("/help 9")
        self.assertEqual(lines(self.shell), ["max number of help pages is 3"])

    def testUnknownTopic(self):
        self.shell.run("/help nope")
        self.assertIn("no command named 'nope'", lines(self.shell)[0])


class TestShellAliases(TestCase):
    """Behavioral tests for the alias built-ins."""

    def setUp(self):
        self.shell, self.calls = build()

    def testAliasThenRun(self):
        self.shell.submit("/alias g /give torch 5; g")
        self.assertEqual(self.calls, [("torch", 5)])
        self.assertEqual(lines(self.shell), ["alias 'g' created for '/give torch 5'"])

    def testAliasCollisionReported(self):
        self.assertIsNone(self.shell.run("/alias give /god"))
        self.assertIn("is a command", lines(self.shell)[0])
        self.assertNotIn("give", self.shell.aliases)

    def testUnalias(self):
        self.shell.aliases.set("g", "/god")
        self.shell.run("/unalias g")
        self.shell.run("/unalias g")
        self.assertEqual(lines(self.shell), ["alias 'g' deleted", "no alias named 'g' exists"])

    def testUnaliasAllNeedsConfirmation(self):
        self.shell.aliases.set("g", "/god")
        self.shell.run("/unaliasall no")
        self.assertEqual(len(self.shell.aliases), 1)
        self.shell.run("/unaliasall yes")
        self.assertEqual(len(self.shell.aliases), 0)
        self.assertEqual(lines(self.shell), ["your aliases are safe", "all of your aliases have been cleared"])

    def testListAliases(self):
        self.shell.run("/listaliases")
        self.assertIn("you have no aliases", lines(self.shell)[0])
        self.shell.aliases.set("g", "/god")
        self.shell.aliases.set("t", "/give torch")
        self.shell.run("/listaliases")
        self.assertEqual(lines(self.shell), ["g = /god", "t = /give torch"])
        self.shell.run("/listaliases t")
        self.assertEqual(lines(self.shell), ["t = /give torch"])

    def testInitialAliases(self):
        shell, calls = build(aliases={"g": "/god"})
        shell.run("g")
        self.assertEqual(calls, [("god",)])


class TestShellCompletion(TestCase):
    """Behavioral tests for Shell.complete."""

    def setUp(self):
        self.shell, _ = build()

    def testKeywordCompletion(self):
        self.assertEqual(self.shell.complete("/gi"), ["/give"])
        self.assertEqual(self.shell.complete("go"), ["/god"])

    def testKeywordCompletionIncludesAliases(self):
        self.shell.aliases.set("gg", "/god")
        self.assertEqual(self.shell.complete("g"), ["/give", "/god", "gg"])

    def testArgumentCompletion(self):
        self.assertEqual(self.shell.complete("/give TO"), ["torch", "torch_unlit"])

    def testArgumentCompletionAfterSpace(self):
        self.assertEqual(self.shell.complete("/give "), ["hammer", "torch", "torch_unlit"])

    def testNoProvider(self):
        self.assertEqual(self.shell.complete("/god x"), [])

    def testUnknownCommand(self):
        self.assertEqual(self.shell.complete("/nope x"), [])


class TestShellOverrides(TestCase):
    """Behavioral tests for host definitions replacing built-ins."""

    def testHostEchoWins(self):
        seen = []
        table = Table()

        @table.command("echo", "Host echo.", Parameter(str, "value"))
        def echo(value):
            seen.append(value)

        shell = Shell(table)
        shell.run("/echo hi there")
        self.assertEqual(seen, ["hi"])
        self.assertEqual(shell.get("echo").descr, "Host echo.")


if __name__ == "__main__":
    unittest.main()
