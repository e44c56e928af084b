"""
Flags and registry behavioral tests (construction, ids, slots, uniqueness).

Scope
- Validate named/wild flag construction and metadata normalization.
- Validate slot semantics (default, parse, presence, referred).
- Validate registry uniqueness rules and lookups.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from pennant import Kind, CoercionError, NamedFlag, WildFlag
from pennant.registry import Registry


class TestNamedFlag(TestCase):
    """Behavioral tests for NamedFlag records."""

    def testIdForms(self):
        self.assertEqual(NamedFlag(Kind.BOOLEAN, "v", "verbose").id, "-v --verbose")
        self.assertEqual(NamedFlag(Kind.BOOLEAN, "v").id, "-v")
        self.assertEqual(NamedFlag(Kind.BOOLEAN, long="verbose").id, "--verbose")

    def testRequiresShortOrLong(self):
        with self.assertRaises(TypeError):
            NamedFlag(Kind.TEXT)

    def testShortMustBeOneCharacterOtherThanDash(self):
        for short in ("", "ab", "-", " "):
            with self.subTest(short=short):
                with self.assertRaises(ValueError):
                    NamedFlag(Kind.TEXT, short)

    def testLongMustBeAWord(self):
        for long in ("", "-name", "two words", "a=b"):
            with self.subTest(long=long):
                with self.assertRaises(ValueError):
                    NamedFlag(Kind.TEXT, long=long)

    def testDefaultsToZeroValueOfKind(self):
        self.assertEqual(NamedFlag(Kind.TEXT, "t").value, "")
        self.assertEqual(NamedFlag(Kind.INTEGER, "i").value, 0)
        self.assertEqual(NamedFlag(Kind.DECIMAL, "d").value, 0.0)
        self.assertIs(NamedFlag(Kind.BOOLEAN, "b").value, False)

    def testDefaultMustFitKind(self):
        with self.assertRaises(TypeError):
            NamedFlag(Kind.INTEGER, "n", default="1")
        with self.assertRaises(TypeError):
            NamedFlag(Kind.INTEGER, "n", default=True)
        self.assertEqual(NamedFlag(Kind.DECIMAL, "r", default=2).value, 2.0)

    def testHelpIsTrimmed(self):
        self.assertEqual(NamedFlag(Kind.TEXT, "t", help="  some help \n").help, "some help")

    def testBooleanCannotHaveValidator(self):
        with self.assertRaises(TypeError):
            NamedFlag(Kind.BOOLEAN, "b", validator=bool)

    def testValidatorMustBeCallable(self):
        with self.assertRaises(TypeError):
            NamedFlag(Kind.TEXT, "t", validator="nope")

    def testParseStoresValue(self):
        flag = NamedFlag(Kind.INTEGER, "n", "number", default=5)
        self.assertEqual(flag.parse("12"), 12)
        self.assertEqual(flag.value, 12)
        self.assertEqual(flag.default, 5)

    def testFailedParseKeepsSlot(self):
        flag = NamedFlag(Kind.INTEGER, "n", default=5, validator=lambda x: x < 10)
        with self.assertRaises(CoercionError):
            flag.parse("x")
        with self.assertRaises(CoercionError):
            flag.parse("50")
        self.assertEqual(flag.value, 5)

    def testPresenceOnlyForBooleans(self):
        flag = NamedFlag(Kind.BOOLEAN, "b")
        flag.present()
        self.assertIs(flag.value, True)
        with self.assertRaises(TypeError):
            NamedFlag(Kind.TEXT, "t").present()

    def testReferredStartsFalse(self):
        flag = NamedFlag(Kind.TEXT, "t")
        self.assertFalse(flag.referred)
        flag.refer()
        self.assertTrue(flag.referred)

    def testNamePadsId(self):
        self.assertEqual(NamedFlag(Kind.TEXT, "t").name(6), "-t    ")

    def testReprUsesTypename(self):
        self.assertTrue(repr(NamedFlag(Kind.TEXT, "t")).startswith("named-flag("))


class TestWildFlag(TestCase):
    """Behavioral tests for WildFlag records."""

    def testId(self):
        self.assertEqual(WildFlag(Kind.TEXT, 0, "path").id, "[0] path")

    def testCannotBeBoolean(self):
        with self.assertRaises(TypeError):
            WildFlag(Kind.BOOLEAN, 0, "switch")

    def testPlaceholderMustBeAWord(self):
        with self.assertRaises(ValueError):
            WildFlag(Kind.TEXT, 0, "")
        with self.assertRaises(ValueError):
            WildFlag(Kind.TEXT, 0, "two words")

    def testIndexMustBeNonNegativeInteger(self):
        with self.assertRaises(ValueError):
            WildFlag(Kind.TEXT, -1, "path")
        with self.assertRaises(TypeError):
            WildFlag(Kind.TEXT, "0", "path")


class TestRegistry(TestCase):
    """Behavioral tests for the per-command flag registry."""

    def setUp(self):
        self.registry = Registry()
        self.verbose = self.registry.add_named(NamedFlag(Kind.BOOLEAN, "v", "verbose"))
        self.output = self.registry.add_named(NamedFlag(Kind.TEXT, long="output"))
        self.source = self.registry.add_wild(WildFlag(Kind.TEXT, 0, "source"))

    def testLookups(self):
        self.assertIs(self.registry.find_by_short("v"), self.verbose)
        self.assertIs(self.registry.find_by_long("output"), self.output)
        self.assertIs(self.registry.find_by_short_and_long("v", "verbose"), self.verbose)
        self.assertIsNone(self.registry.find_by_short_and_long("v", None))
        self.assertIs(self.registry.find_by_index(0), self.source)
        self.assertIs(self.registry.find_by_placeholder("source"), self.source)

    def testMissingLookupsReturnNone(self):
        self.assertIsNone(self.registry.find_by_short("x"))
        self.assertIsNone(self.registry.find_by_long("verbosity"))
        self.assertIsNone(self.registry.find_by_index(1))
        self.assertIsNone(self.registry.find_by_index(-1))
        self.assertIsNone(self.registry.find_by_placeholder("target"))

    def testDuplicateShortRejected(self):
        with self.assertRaises(ValueError):
            self.registry.add_named(NamedFlag(Kind.TEXT, "v", "version"))

    def testDuplicateLongRejected(self):
        with self.assertRaises(ValueError):
            self.registry.add_named(NamedFlag(Kind.TEXT, "o", "output"))

    def testDuplicatePlaceholderRejected(self):
        with self.assertRaises(ValueError):
            self.registry.add_wild(WildFlag(Kind.TEXT, 1, "source"))

    def testWildIndexFollowsRegistrationOrder(self):
        with self.assertRaises(ValueError):
            self.registry.add_wild(WildFlag(Kind.TEXT, 5, "target"))
        target = self.registry.add_wild(WildFlag(Kind.TEXT, 1, "target"))
        self.assertEqual(self.registry.wild, (self.source, target))

    def testHelpIndexAndRemoval(self):
        self.assertIsNone(self.registry.help_index())
        help = self.registry.add_named(NamedFlag(Kind.BOOLEAN, "h", "help"))
        self.assertEqual(self.registry.help_index(), 2)
        self.assertIs(self.registry.remove_named(2), help)
        self.assertIsNone(self.registry.help_index())

    def testMaxIdWidth(self):
        self.assertEqual(self.registry.max_id_width(), (len("-v --verbose"), len("[0] source")))
        self.assertEqual(Registry().max_id_width(), (0, 0))

    def testNamedIsReadOnlyView(self):
        self.assertIsInstance(self.registry.named, tuple)
        self.assertEqual(len(self.registry), 3)


if __name__ == "__main__":
    unittest.main()
