"""
Tests for the internal helpers.

This module verifies the semantic guarantees of:
- the `Unset` sentinel (singleton identity, falsiness, copy and pickle
  stability, finality, union support in isinstance checks);
- coalesce(), rename() and mirror().
"""
import copy
import io
import pickle
import unittest
from unittest import TestCase

from rich.console import Console

from switchboard.utils import *


class TestUnset(TestCase):
    """
    Test suite for the `Unset` singleton.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testRichRendering(self) -> None:
        console = Console(file=io.StringIO(), color_system=None, width=40)
        console.print(Unset)
        self.assertEqual(console.file.getvalue(), "Unset\n")

    def testCopyAndPickle(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testUnion(self) -> None:
        # the sentinel stands for its own type in unions
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("name", Unset | str)
        self.assertNotIsInstance(1, str | Unset)


class TestHelpers(TestCase):

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)

    def testRename(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameDecorator(self) -> None:
        @rename("decorated")
        def function():
            pass

        self.assertEqual(function.__name__, "decorated")

    def testRenameArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "name")
        with self.assertRaises(TypeError):
            rename()

    def testMirror(self) -> None:
        class Holder:
            items = mirror("items")
            names = mirror("names")

            def __init__(self):
                self._items = ["a", ["b"]]
                self._names = ("a", "b")

        holder = Holder()
        items = holder.items
        items[1].append("c")
        self.assertEqual(holder._items, ["a", ["b"]])
        self.assertIs(holder.names, holder._names)
        self.assertEqual(Holder.items.fget.__name__, "items")
        with self.assertRaises(AttributeError):
            holder.items = []


if __name__ == "__main__":
    unittest.main()
