"""
Tests for the internal utilities.

This module verifies:
- The Unset sentinel (singleton, falsy, printable, sealed, usable in unions).
- coalesce() only replacing Unset.
- rename() in both call forms.
- mirror() handing out read-only, immutable snapshots.
- ordinal() labels used by fault hints.
"""
import unittest
from types import MappingProxyType
from unittest import TestCase

from argosy.utils import *


class UnsetTest(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")
        self.assertIsNot(Unset, None)

    def testSealed(self):
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA: F-841
                pass

    def testUnionWithBuiltinTypes(self):
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(1, str | Unset)


class CoalesceTest(TestCase):

    def testOnlyUnsetIsReplaced(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(Unset))


class RenameTest(TestCase):

    def testDirectForm(self):
        def function():
            pass
        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testDecoratorForm(self):
        @rename("renamed")
        def function():
            pass
        self.assertEqual(function.__name__, "renamed")

    def testInvalidArguments(self):
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(1, "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 1)


class MirrorTest(TestCase):

    def setUp(self):
        class Record:
            items = mirror("items")
            table = mirror("table")
            tags = mirror("tags")
            name = mirror("name")

            def __init__(self):
                self._items = [1, 2]
                self._table = {"a": 1}
                self._tags = {"x"}
                self._name = "record"

        self.record = Record()

    def testSnapshotsAreImmutable(self):
        self.assertEqual(self.record.items, (1, 2))
        self.assertIsInstance(self.record.table, MappingProxyType)
        self.assertEqual(self.record.tags, frozenset({"x"}))
        self.assertEqual(self.record.name, "record")

    def testPropertyIsReadOnly(self):
        with self.assertRaises(AttributeError):
            self.record.name = "other"

    def testMirrorRequiresString(self):
        with self.assertRaises(TypeError):
            mirror(1)


class OrdinalTest(TestCase):

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(112), "112th")
        self.assertEqual(ordinal(104), "104th")


if __name__ == '__main__':
    unittest.main()
