"""
Token classification tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from pennant.tokens import TokenKind, classify, positional


class TestClassify(TestCase):
    """Behavioral tests for classify()."""

    def testLong(self):
        self.assertEqual(classify("--verbose"), (TokenKind.LONG, "verbose"))

    def testShortAndCluster(self):
        self.assertEqual(classify("-v"), (TokenKind.SHORT, "v"))
        self.assertEqual(classify("-abc"), (TokenKind.SHORT, "abc"))

    def testNegativeNumberIsShort(self):
        self.assertEqual(classify("-5"), (TokenKind.SHORT, "5"))

    def testLoneDashIsPositional(self):
        self.assertEqual(classify("-"), (TokenKind.POSITIONAL, "-"))
        self.assertTrue(positional("-"))

    def testDoubleDashIsEmptyLong(self):
        self.assertEqual(classify("--"), (TokenKind.LONG, ""))

    def testPositional(self):
        self.assertEqual(classify("file.txt"), (TokenKind.POSITIONAL, "file.txt"))
        self.assertEqual(classify(""), (TokenKind.POSITIONAL, ""))
        self.assertFalse(positional("--x"))

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            classify(1)


if __name__ == "__main__":
    unittest.main()
