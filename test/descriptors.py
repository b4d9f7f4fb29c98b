"""
Descriptors module behavioral tests.

Scope
- Validate Descriptor construction: name shapes, requirement normalization,
  read-only attributes and representation.
- Validate Registry lookups (first match wins, short vs long namespaces).
- Validate the Parsed record.

Conventions
- Test method names follow CamelCase per project convention.
- Identities are plain strings or enum members; the parser never inspects them.
"""

from __future__ import annotations

import enum
import unittest
from unittest import TestCase

from optscan import Descriptor, Registry, Requirement, Parsed


class Color(enum.Enum):
    RED = 1
    BLUE = 2


class TestDescriptor(TestCase):
    """Behavioral tests for Descriptor construction and access."""

    def testDefaultsToNoRequirement(self):
        d = Descriptor("verbose", "v", "verbose")
        self.assertIs(d.requirement, Requirement.NONE)

    def testRequirementFromString(self):
        d = Descriptor("out", "o", requirement="required")
        self.assertIs(d.requirement, Requirement.REQUIRED)

    def testRequirementUnknownStringRejected(self):
        with self.assertRaises(ValueError):
            Descriptor("out", "o", requirement="sometimes")

    def testRequirementWrongTypeRejected(self):
        with self.assertRaises(TypeError):
            Descriptor("out", "o", requirement=1)

    def testShortMustBeSingleCharacter(self):
        with self.assertRaises(ValueError):
            Descriptor("x", "xy")

    def testShortMayBeDashCharacter(self):
        d = Descriptor("x", "-")
        self.assertEqual(d.short, "-")

    def testShortWrongTypeRejected(self):
        with self.assertRaises(TypeError):
            Descriptor("x", 1)

    def testLongCannotBeEmpty(self):
        with self.assertRaises(ValueError):
            Descriptor("x", long="")

    def testLongCannotContainSeparator(self):
        with self.assertRaises(ValueError):
            Descriptor("x", long="a=b")

    def testNamelessDescriptorAccepted(self):
        d = Descriptor("ghost")
        self.assertIsNone(d.short)
        self.assertIsNone(d.long)

    def testIdentityIsKeptAsIs(self):
        identity = ["opaque"]
        d = Descriptor(identity, "o")
        self.assertIs(d.identity, identity)

    def testAttributesAreReadOnly(self):
        d = Descriptor(Color.RED, "r", "red")
        with self.assertRaises(AttributeError):
            d.short = "x"

    def testRepresentation(self):
        d = Descriptor("out", "o", "output", Requirement.OPTIONAL)
        self.assertEqual(
            repr(d),
            "descriptor(identity='out', short='o', long='output', requirement=Requirement.OPTIONAL)"
        )

    def testRichRepresentation(self):
        d = Descriptor(Color.BLUE, "b")
        self.assertEqual(
            list(d.__rich_repr__()),
            [("identity", Color.BLUE), ("short", "b"), ("long", None), ("requirement", Requirement.NONE)]
        )


class TestRegistry(TestCase):
    """Behavioral tests for Registry lookups."""

    def setUp(self):
        self.registry = Registry((
            Descriptor("a", "a", "alpha"),
            Descriptor("b", "b", "beta", Requirement.REQUIRED),
            Descriptor("c", None, "gamma"),
        ))

    def testShortLookup(self):
        self.assertEqual(self.registry.short("b"), 1)

    def testLongLookup(self):
        self.assertEqual(self.registry.long("gamma"), 2)

    def testMissingLookups(self):
        self.assertIsNone(self.registry.short("z"))
        self.assertIsNone(self.registry.long("zeta"))

    def testShortAndLongAreSeparateNamespaces(self):
        self.assertIsNone(self.registry.long("a"))
        self.assertIsNone(self.registry.short("alpha"))

    def testFirstMatchWins(self):
        registry = Registry((
            Descriptor("first", "x", "dup"),
            Descriptor("second", "x", "dup"),
        ))
        self.assertEqual(registry.short("x"), 0)
        self.assertEqual(registry.long("dup"), 0)

    def testSequenceProtocol(self):
        self.assertEqual(len(self.registry), 3)
        self.assertEqual([d.identity for d in self.registry], ["a", "b", "c"])
        self.assertIsInstance(self.registry[1:], Registry)
        self.assertEqual(len(self.registry[1:]), 2)

    def testItemsMustBeDescriptors(self):
        with self.assertRaises(TypeError):
            Registry(("a",))

    def testArgumentMustBeIterable(self):
        with self.assertRaises(TypeError):
            Registry(42)

    def testRegistryIsDetachedFromSource(self):
        source = [Descriptor("a", "a")]
        registry = Registry(source)
        source.append(Descriptor("b", "b"))
        self.assertEqual(len(registry), 1)


class TestParsed(TestCase):
    """Behavioral tests for the Parsed record."""

    def testFields(self):
        d = Descriptor("out", "o")
        parsed = Parsed("o", "file", d)
        self.assertEqual(parsed.name, "o")
        self.assertEqual(parsed.value, "file")
        self.assertIs(parsed.descriptor, d)

    def testIdentityShortcut(self):
        self.assertEqual(Parsed("o", None, Descriptor(Color.RED, "o")).identity, Color.RED)
        self.assertIsNone(Parsed("z", None, None).identity)

    def testTupleEquality(self):
        self.assertEqual(Parsed("x", None, None), ("x", None, None))

    def testPrefixIsOutsideTheTuple(self):
        parsed = Parsed("x", None, None, prefix="--")
        self.assertEqual(parsed.prefix, "--")
        self.assertIsNone(Parsed("x", None, None).prefix)
        self.assertEqual(parsed, Parsed("x", None, None, prefix="-"))
        self.assertEqual(len(parsed), 3)


if __name__ == '__main__':
    unittest.main()
