"""
Usage rendering tests (plain layout).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from pennant import Command


def show(command):
    console = Console(file=io.StringIO(), width=120, color_system=None)
    console.print(command.usage())
    return console.file.getvalue().splitlines()


class TestUsage(TestCase):
    """Behavioral tests for the help renderer."""

    def setUp(self):
        self.tool = Command("tool", version="1.2.0")
        self.tool.integer("c", "count", "how many times", 1)
        self.tool.text(long="name", default="anon")
        self.tool.wild_text("source", "file to read")
        self.tool.wild_decimal("scale", default=1.5)

    def testHeaderAndSynopsis(self):
        lines = show(self.tool)
        self.assertEqual(lines[0], "tool 1.2.0")
        self.assertEqual(lines[1], "usage:")
        self.assertEqual(lines[2], "  cli> tool [named flags] [source] [scale]")

    def testNamedFlagsSection(self):
        lines = show(self.tool)
        self.assertIn("  named flags:", lines)
        self.assertIn("    -h --help : (type: boolean, default: false)", lines)
        self.assertIn("    -c --count: (type: integer, default: 1)", lines)
        self.assertIn('    --name    : (type: text, default: "anon")', lines)
        self.assertIn("      how many times", lines)

    def testWildFlagsSection(self):
        lines = show(self.tool)
        self.assertIn("  wild flags:", lines)
        self.assertIn('    [0] source: (type: text, default: "")', lines)
        self.assertIn("    [1] scale : (type: decimal, default: 1.5)", lines)

    def testHelpIsWrappedToWidth(self):
        tool = Command("tool", width=40)
        tool.text("n", "name", "word " * 20)
        lines = show(tool)
        start = lines.index("      word word word word word word word")
        self.assertTrue(all(len(line) <= 40 for line in lines[start:]))

    def testChildHeaderShowsPathAndCommandsSection(self):
        run = self.tool.command("run", descr="run the thing", version="0.9")
        lines = show(run)
        self.assertEqual(lines[0], "tool run 0.9")
        lines = show(self.tool)
        self.assertIn("  commands:", lines)
        self.assertIn("    run  run the thing", lines)

    def testNoFlagsNoUsageSection(self):
        tool = Command("bare")
        tool.no_help()
        self.assertEqual(show(tool), ["bare"])


if __name__ == "__main__":
    unittest.main()
