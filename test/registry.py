"""
Registry behavioral tests (declaration, hints, build-time errors, lookups).

Scope
- Validate hint and required-count derivation from declared parameters.
- Validate build-time rejection of bad parameter order and duplicates.
- Validate prefix handling and idempotent lookups.
- Validate the Table decorator and keyword ordering.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Table, Command, Parameter, Registry).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from herald import Array, Command, Lookup, Maybe, Parameter, Registry, Settings, Table

Player = Lookup("Player", list)


def noop(*arguments):
    pass


class TestCommandDeclaration(TestCase):
    """Behavioral tests for Command and Parameter."""

    def testHintAndRequired(self):
        command = Command("give", "Give an item.", noop, (
            Parameter(str, "item"),
            Parameter(int, "amount", default=1),
            Parameter(Maybe(Player), "player", default=None),
            Parameter(bool, "silent", default=False),
        ))
        self.assertEqual(command.required, 1)
        self.assertEqual(
            command.hint,
            "<String item> [Number amount=1] [Player player=none] [Boolean silent=false]"
        )

    def testNoParameters(self):
        command = Command("god", "Toggle god mode.", noop)
        self.assertEqual(command.hint, "")
        self.assertEqual(command.required, 0)

    def testNoneIsALegitimateDefault(self):
        parameter = Parameter(str, "topic", default=None)
        self.assertTrue(parameter.optional)
        self.assertFalse(Parameter(str, "topic").optional)

    def testArrayHint(self):
        command = Command("echo", "Echo.", noop, (Parameter(Array(str), "values"),))
        self.assertEqual(command.hint, "<String[] values>")

    def testRequiredAfterOptionalRejected(self):
        with self.assertRaises(TypeError):
            Command("bad", "", noop, (Parameter(int, "a", default=1), Parameter(int, "b")))

    def testArrayMustBeLast(self):
        with self.assertRaises(TypeError):
            Command("bad", "", noop, (Parameter(Array(int), "a"), Parameter(int, "b")))

    def testDuplicateParameterRejected(self):
        with self.assertRaises(ValueError):
            Command("bad", "", noop, (Parameter(int, "a"), Parameter(str, "a")))

    def testUnsupportedKindRejected(self):
        with self.assertRaises(TypeError):
            Parameter(list, "items")

    def testNestedArrayRejected(self):
        with self.assertRaises(TypeError):
            Array(Array(int))

    def testKeywordWithWhitespaceRejected(self):
        with self.assertRaises(ValueError):
            Command("set level", "", noop)


class TestTable(TestCase):
    """Behavioral tests for the Table builder."""

    def testDecoratorReturnsHandler(self):
        table = Table()

        @table.command("heal", "Heal all of your wounds.")
        def heal():
            return "healed"

        self.assertEqual(heal(), "healed")
        self.assertEqual(len(table), 1)

    def testDescriptionFromDocstring(self):
        table = Table()

        @table.command("fly")
        def fly():
            """Toggles the ability to fly."""

        self.assertEqual(Registry(table).get("fly").descr, "Toggles the ability to fly.")

    def testEntriesMustBeCommands(self):
        with self.assertRaises(TypeError):
            Table(["not a command"])


class TestRegistry(TestCase):
    """Behavioral tests for Registry lookups."""

    def setUp(self):
        self.registry = Registry([
            Command("tp", "Teleport.", noop),
            Command("give", "Give.", noop),
            Command("/fly", "Fly.", noop),
        ])

    def testKeywordsArePrefixedAndSorted(self):
        self.assertEqual(self.registry.keywords, ("/fly", "/give", "/tp"))

    def testLookupIsExact(self):
        self.assertIsNotNone(self.registry.lookup("/give"))
        self.assertIsNone(self.registry.lookup("give"))

    def testGetAddsPrefix(self):
        self.assertIs(self.registry.get("give"), self.registry.get("/give"))

    def testGetIsIdempotent(self):
        first = self.registry.get("/tp")
        self.assertIs(self.registry.get("/tp"), first)
        self.assertEqual(len(self.registry), 3)

    def testUnknownKeyword(self):
        self.assertIsNone(self.registry.get("nope"))

    def testContains(self):
        self.assertIn("fly", self.registry)
        self.assertIn("/fly", self.registry)
        self.assertNotIn("/nope", self.registry)

    def testDuplicateKeywordRejected(self):
        with self.assertRaises(ValueError):
            Registry([Command("god", "", noop), Command("/god", "", noop)])

    def testCustomPrefix(self):
        registry = Registry([Command("god", "", noop)], Settings(prefix="!"))
        self.assertEqual(registry.keywords, ("!god",))
        self.assertIsNotNone(registry.get("god"))

    def testEmptyPrefix(self):
        registry = Registry([Command("god", "", noop)], Settings(prefix=""))
        self.assertEqual(registry.keywords, ("god",))

    def testRegistrationIsLogged(self):
        with self.assertLogs("herald.registry", level="INFO") as captured:
            Registry([Command("god", "", noop)])
        self.assertIn("registered 1 commands", captured.output[-1])


if __name__ == "__main__":
    unittest.main()
