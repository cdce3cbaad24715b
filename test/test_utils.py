"""
Utilities behavioral tests (Unset sentinel, rename, mirror, pluralize, basename).

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import unittest
from types import MappingProxyType
from unittest import TestCase

from argspec.utils import *


class TestUnset(TestCase):

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)

    def testFalsyAndRepr(self) -> None:
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")
        self.assertNotEqual(Unset, None)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class TestHelpers(TestCase):

    def testRenameFunctionForm(self) -> None:
        def f():
            pass

        self.assertIs(rename(f, "do_work"), f)
        self.assertEqual(f.__name__, "do_work")
        self.assertEqual(f.__qualname__, "do_work")

    def testRenameDecoratorForm(self) -> None:
        @rename("do_work")
        def f():
            pass

        self.assertEqual(f.__name__, "do_work")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "x")
        with self.assertRaises(TypeError):
            rename(lambda: None, 1)
        with self.assertRaises(TypeError):
            rename()

    def testMirrorFreezesContainers(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")
            tags = mirror("tags")

            def __init__(self):
                self._items = ["a", ["b"]]
                self._table = {"k": ["v"]}
                self._tags = {"x"}

        holder = Holder()
        self.assertEqual(holder.items, ("a", ("b",)))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.table["k"], ("v",))
        self.assertEqual(holder.tags, frozenset({"x"}))
        self.assertEqual(Holder.items.fget.__name__, "items")
        with self.assertRaises(AttributeError):
            holder.items = ()

    def testMirrorRequiresString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)

    def testPluralize(self) -> None:
        self.assertEqual(pluralize("problem", 1), "1 problem")
        self.assertEqual(pluralize("problem", 2), "2 problems")
        self.assertEqual(pluralize("problem", 0), "0 problems")
        self.assertEqual(pluralize("entry", 3), "3 entries")
        self.assertEqual(pluralize("day", 2), "2 days")
        self.assertEqual(pluralize("box", 2), "2 boxes")

    def testBasename(self) -> None:
        self.assertEqual(basename("/x/y/z/hello-world"), "hello-world")
        self.assertEqual(basename("hello-world"), "hello-world")
        self.assertEqual(basename("C:\\tools\\hello.exe"), "hello.exe")
        self.assertEqual(basename(""), "")
        with self.assertRaises(TypeError):
            basename(None)


if __name__ == "__main__":
    unittest.main()
