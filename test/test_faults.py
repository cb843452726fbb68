"""
Fault machinery tests.

Scope
- Fault families and their builtin bases.
- str() with and without a program name; copy.replace merging options.
- trigger(): raising, shell-mode exits, rejection of non-faults.
- Rich rendering of faults and host overrides of fault codes.

Conventions
- Test method names follow CamelCase per project convention.
"""

import contextlib
import copy
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argmatch import (
    FaultCode, ArgumentFault, UsageError, LogicError, ConversionError, HelpRequested,
    MissingPositionalError, OutOfRangeError, InvalidNameError, UnknownArgumentError, IndexOutOfRangeError,
    trigger,
)


def render(renderable):
    console = Console(file=io.StringIO(), width=120, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestHierarchy(TestCase):

    def testFamilies(self):
        self.assertTrue(issubclass(MissingPositionalError, UsageError))
        self.assertTrue(issubclass(OutOfRangeError, ConversionError))
        self.assertTrue(issubclass(ConversionError, ValueError))
        self.assertTrue(issubclass(UsageError, RuntimeError))
        self.assertTrue(issubclass(InvalidNameError, LogicError))
        self.assertTrue(issubclass(UnknownArgumentError, LookupError))
        self.assertTrue(issubclass(IndexOutOfRangeError, IndexError))
        self.assertFalse(issubclass(LogicError, UsageError))
        self.assertFalse(issubclass(HelpRequested, ArgumentFault))


class TestFaultBehavior(TestCase):

    def setUp(self):
        self.fault = MissingPositionalError(
            "requires positional argument 'file'",
            title="missing positional",
            code=FaultCode.MISSING_POSITIONAL,
            hint="expected 1 positional arguments but 0 were given",
            name="file",
        )

    def testStrWithoutProgram(self):
        self.assertEqual(str(self.fault), "requires positional argument 'file'")

    def testReplaceMergesOptions(self):
        replaced = copy.replace(self.fault, prog="tool")
        self.assertIsInstance(replaced, MissingPositionalError)
        self.assertEqual(str(replaced), "tool: requires positional argument 'file'")
        self.assertEqual(replaced.options["name"], "file")
        self.assertNotIn("prog", self.fault.options)

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            self.fault.options["name"] = "other"

    def testTriggerRaisesReplacedFault(self):
        with self.assertRaises(MissingPositionalError) as context:
            trigger(self.fault, prog="tool")
        self.assertEqual(context.exception.options["prog"], "tool")

    def testTriggerRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))

    def testShellModeExitsWithStatusOne(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as context:
                trigger(self.fault, prog="tool", shell=True, colorful=False)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("requires positional argument 'file'", stderr.getvalue())

    def testLogicErrorIgnoresShellMode(self):
        with self.assertRaises(InvalidNameError):
            trigger(InvalidNameError("invalid positional argument name '-x'"), shell=True)

    def testHelpSignal(self):
        with self.assertRaises(HelpRequested):
            trigger(HelpRequested(name="help"))
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            with self.assertRaises(SystemExit) as context:
                trigger(HelpRequested(name="help"), shell=True, help="usage: tool")
        self.assertEqual(context.exception.code, 0)
        self.assertIn("usage: tool", stdout.getvalue())


class TestRendering(TestCase):

    def setUp(self):
        self.fault = MissingPositionalError(
            "requires positional argument 'file'",
            title="missing positional",
            code=FaultCode.MISSING_POSITIONAL,
            hint="pass a file",
            prog="tool",
            colorful=False,
        )

    def testHeaderMessageAndHint(self):
        output = render(self.fault)
        self.assertIn("[ tool — 11101 | Missing Positional ]", output)
        self.assertIn("requires positional argument 'file'", output)
        self.assertIn("→ pass a file", output)

    def testFancyPanel(self):
        output = render(copy.replace(self.fault, fancy=True))
        self.assertIn("requires positional argument 'file'", output)
        self.assertIn("Missing Positional", output)

    def testCodeNormalization(self):
        self.assertEqual(FaultCode.OUT_OF_RANGE.normalize(), "11205")
        with mock.patch.object(sys.modules["__main__"], "__codes__", {FaultCode.OUT_OF_RANGE: "E-RANGE"}, create=True):
            self.assertEqual(FaultCode.OUT_OF_RANGE.normalize(), "E-RANGE")
            self.assertIn("E-RANGE", render(OutOfRangeError("'x' must be in range [0,1]", code=FaultCode.OUT_OF_RANGE)))


if __name__ == "__main__":
    unittest.main()
