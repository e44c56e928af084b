"""
Package metadata tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

import pennant


class TestPackage(TestCase):
    """Behavioral tests for the pennant package namespace."""

    def testMetadata(self):
        self.assertEqual(pennant.__title__, "pennant")
        self.assertEqual(pennant.__author__, "The Pennant Authors")
        self.assertEqual(pennant.__version__, "%d.%d.%d" % pennant.version_info[:3])

    def testExposedApi(self):
        for name in ("Command", "Outcome", "Kind", "NamedFlag", "trigger"):
            with self.subTest(name=name):
                self.assertIn(name, pennant.__all__)
                self.assertTrue(hasattr(pennant, name))


if __name__ == "__main__":
    unittest.main()
