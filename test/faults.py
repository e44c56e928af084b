"""
Faults module behavioral tests (surfacing, replacement, rendering).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import unittest
from unittest import TestCase

from rich.console import Console

from pennant import Command, faults
from pennant.faults import (
    FaultCode,
    Severity,
    UnknownFlagError,
    InvalidValueWarning,
    NotReferredWarning,
    trigger,
    getdoc,
)


class TestFaults(TestCase):
    """Behavioral tests for fault objects and trigger()."""

    def testErrorIsRaisedOutsideShell(self):
        with self.assertRaises(UnknownFlagError) as context:
            trigger(UnknownFlagError("unknown flag '-x'", flag="-x"), hint="try --help")
        self.assertEqual(str(context.exception), "unknown flag '-x'")
        self.assertEqual(context.exception.options["hint"], "try --help")

    def testErrorExitsInShell(self):
        with faults.console.capture() as capture:
            with self.assertRaises(SystemExit) as context:
                trigger(UnknownFlagError("unknown flag '-x'"), shell=True)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("unknown flag '-x'", capture.get())

    def testWarningIsWarnedOutsideShell(self):
        with self.assertWarns(InvalidValueWarning):
            trigger(InvalidValueWarning("'-n' set to default"))

    def testWarningIsPrintedInShell(self):
        with faults.console.capture() as capture:
            trigger(NotReferredWarning("'-n' set to default because it's not referred"), shell=True)
        self.assertIn("not referred", capture.get())

    def testReplaceMergesOptions(self):
        fault = InvalidValueWarning("bad value", flag="-n", index=2)
        other = copy.replace(fault, index=3, hint="fix it")
        self.assertIsNot(fault, other)
        self.assertEqual(other.message, "bad value")
        self.assertEqual(dict(other.options), {"flag": "-n", "index": 3, "hint": "fix it"})
        self.assertEqual(fault.options["index"], 2)

    def testSeverities(self):
        self.assertIs(UnknownFlagError("x").severity, Severity.ERROR)
        self.assertIs(InvalidValueWarning("x").severity, Severity.WARNING)
        self.assertIs(NotReferredWarning("x").severity, Severity.INFO)

    def testTriggerRequiresFault(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))

    def testCodes(self):
        self.assertEqual(FaultCode.UNKNOWN_FLAG.normalize(), "21101")
        self.assertIsNone(getdoc(FaultCode.UNKNOWN_FLAG))
        with self.assertRaises(TypeError):
            getdoc(21101)

    def testRichRendering(self):
        console = Console(file=io.StringIO(), width=100, color_system=None)
        console.print(UnknownFlagError("unknown flag '-x'", hint="try 'tool --help'"))
        output = console.file.getvalue()
        self.assertIn("21101", output)
        self.assertIn("Unknown Flag", output)
        self.assertIn("unknown flag '-x'", output)
        self.assertIn("try 'tool --help'", output)

    def testFancyRenderingUsesPanel(self):
        console = Console(file=io.StringIO(), width=100, color_system=None)
        console.print(InvalidValueWarning("bad value", fancy=True, colorful=True))
        output = console.file.getvalue()
        self.assertIn("Invalid Value", output)
        self.assertIn("bad value", output)
        self.assertIn("╭", output)

    def testFancyPanelFollowsToolWidth(self):
        console = Console(file=io.StringIO(), width=100, color_system=None)
        tool = Command("tool", width=40)
        console.print(InvalidValueWarning("bad value", tool=tool, fancy=True))
        lines = console.file.getvalue().splitlines()
        self.assertEqual(len(lines[0].rstrip()), 40)
        self.assertTrue(lines[0].startswith("╭"))


if __name__ == "__main__":
    unittest.main()
