"""
Utility behavioral tests (sentinel, coalesce, mirror, ordinal).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import pickle
import unittest
from unittest import TestCase

from herald.utils import Unset, UnsetType, coalesce, mirror, named, ordinal


class Holder:
    items = mirror("items")

    def __init__(self, items):
        self._items = items


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFalsyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnionWithTypes(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", Unset | str))
        self.assertFalse(isinstance(1, str | Unset))

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})

    def testCoalesceKeepsFalsyValues(self):
        self.assertEqual(coalesce(Unset, 3), 3)
        self.assertIsNone(coalesce(None, 3))
        self.assertEqual(coalesce(0, 3), 0)


class TestHelpers(TestCase):
    """Behavioral tests for mirror, named and ordinal."""

    def testMirrorFreezesContainers(self):
        self.assertEqual(Holder([1, 2]).items, (1, 2))
        with self.assertRaises(TypeError):
            Holder({"a": 1}).items["b"] = 2
        self.assertEqual(Holder("text").items, "text")

    def testMirrorIsReadOnly(self):
        with self.assertRaises(AttributeError):
            Holder([]).items = [1]

    def testNamed(self):
        @named("command")
        def wrapper():
            pass

        self.assertEqual(wrapper.__name__, "command")
        self.assertEqual(wrapper.__qualname__, "command")

    def testOrdinal(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(112), "112th")
        self.assertEqual(ordinal(103), "103rd")


if __name__ == "__main__":
    unittest.main()
