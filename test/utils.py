"""
Tests for the internal utilities.

This module verifies:
- The Unset sentinel (singleton identity, falsy semantics, finality, unions).
- rename() in function and decorator forms.
- mirror() read-only properties.
"""
import copy
import unittest
from unittest import TestCase

from optscan.utils import *


class UnsetTest(TestCase):
    """Semantic guarantees of the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepresentation(self):
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self):
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testUnionWithTypes(self):
        self.assertIsInstance("x", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(1, str | Unset)


class RenameTest(TestCase):
    """rename() function and decorator forms."""

    def testFunctionForm(self):
        def f():
            pass

        self.assertIs(rename(f, "g"), f)
        self.assertEqual((f.__name__, f.__qualname__), ("g", "g"))

    def testDecoratorForm(self):
        @rename("named")
        def f():
            pass

        self.assertEqual(f.__name__, "named")

    def testRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            rename(1, "x")

    def testRejectsWrongArity(self):
        with self.assertRaises(TypeError):
            rename()


class MirrorTest(TestCase):
    """mirror() read-only properties."""

    def testReadsBackingField(self):
        class Holder:
            value = mirror("value")

            def __init__(self):
                self._value = ["kept"]

        holder = Holder()
        self.assertIs(holder.value, holder._value)
        self.assertEqual(type(holder).value.fget.__name__, "value")
        with self.assertRaises(AttributeError):
            holder.value = []

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == '__main__':
    unittest.main()
