"""
Tests for the utils helpers.

This module verifies:
- Unset singleton identity, falsiness, representation and finality.
- coalesce() replacing only the sentinel.
- rename() function and decorator forms.
- mirror() read-only, detached container views.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from cmdkit.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` singleton.
    """

    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testNotEqualToNoneOrFalse(self) -> None:
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testCopyPickleRoundTripPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})

    def testUnionWithTypes(self) -> None:
        self.assertIsInstance("x", str | Unset)
        self.assertIsInstance(Unset, str | Unset)


class CoalesceTest(TestCase):

    def testReplacesUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testPreservesFalseyValues(self) -> None:
        for value in (None, 0, "", []):
            self.assertIs(coalesce(value, "fallback"), value)


class RenameTest(TestCase):

    def testFunctionForm(self) -> None:
        def f():
            pass

        self.assertIs(rename(f, "do_work"), f)
        self.assertEqual(f.__name__, "do_work")
        self.assertEqual(f.__qualname__, "do_work")

    def testDecoratorForm(self) -> None:
        @rename("do_work")
        def f():
            pass

        self.assertEqual(f.__name__, "do_work")

    def testRejectsBuiltins(self) -> None:
        with self.assertRaises(TypeError):
            rename(len, "length")

    def testRejectsWrongArity(self) -> None:
        with self.assertRaises(TypeError):
            rename()


class MirrorTest(TestCase):

    def setUp(self) -> None:
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ("a", "b")

        self.holder = Holder()

    def testReadsBackingField(self) -> None:
        self.assertEqual(self.holder.items, ["a", "b"])

    def testReturnsDetachedCopy(self) -> None:
        self.holder.items.append("c")
        self.assertEqual(self.holder.items, ["a", "b"])

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.holder.items = []

    def testRejectsNonString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == '__main__':
    unittest.main()
