"""
Token matcher tests.

Scope
- Positional counting: missing, exact and leftover tokens.
- Option resolution through flags and long names; unknown options and flags.
- Arity rules (FLAG, SINGLE, APPEND), missing values, repeated options.
- The help signal and the fault precedence of a full scan.
- The matcher never writes into the schema.

Conventions
- Test method names follow CamelCase per project convention.
- Token lists exclude the program name, as match() receives them.
"""

import unittest
from unittest import TestCase

from argmatch import (
    Arity, Schema,
    HelpRequested, MissingPositionalError, UnknownOptionError, UnknownFlagError,
    RepeatedOptionError, MissingValueError, FaultCode,
)
from argmatch.matcher import Match, match


class TestPositionals(TestCase):

    def setUp(self):
        self.schema = Schema()
        self.schema.add_positional("param1")
        self.schema.add_positional("param2")

    def testNoTokens(self):
        with self.assertRaises(MissingPositionalError) as context:
            match(self.schema, [])
        self.assertEqual(str(context.exception), "requires positional argument 'param1'")
        self.assertEqual(context.exception.options["name"], "param1")

    def testOneTokenShort(self):
        with self.assertRaises(MissingPositionalError) as context:
            match(self.schema, ["arg1"])
        self.assertEqual(str(context.exception), "requires positional argument 'param2'")
        self.assertIs(context.exception.options["code"], FaultCode.MISSING_POSITIONAL)

    def testExactCount(self):
        result = match(self.schema, ["arg1", "arg2"])
        self.assertIsInstance(result, Match)
        self.assertEqual(result.positionals, ("arg1", "arg2"))
        self.assertEqual(dict(result.optionals), {})

    def testExtraTokensAreKept(self):
        result = match(self.schema, ["arg1", "arg2", "arg3"])
        self.assertEqual(result.positionals, ("arg1", "arg2", "arg3"))

    def testNumberLikeTokensArePositional(self):
        result = match(self.schema, ["-5", "-9.5", "-", "--"])
        self.assertEqual(result.positionals, ("-5", "-9.5", "-", "--"))

    def testOptionFaultWinsOverMissingPositional(self):
        with self.assertRaises(UnknownOptionError):
            match(self.schema, ["arg1", "--bogus"])


class TestUnknownOptions(TestCase):

    def setUp(self):
        self.schema = Schema()
        self.schema.add_optional("--output", flag="-o")

    def testUnknownLongOption(self):
        with self.assertRaises(UnknownOptionError) as context:
            match(self.schema, ["--opt0"])
        self.assertEqual(
            str(context.exception),
            "invalid option 'opt0', pass --help to display possible options",
        )
        self.assertEqual(context.exception.options["index"], 1)

    def testUnknownOptionSuggestsClosestSpelling(self):
        with self.assertRaises(UnknownOptionError) as context:
            match(self.schema, ["--outptu", "file"])
        self.assertIn("'--output'", context.exception.options["hint"])

    def testUnknownFlag(self):
        with self.assertRaises(UnknownFlagError) as context:
            match(self.schema, ["value", "-z"])
        self.assertEqual(
            str(context.exception),
            "invalid flag '-z', pass --help to display possible options",
        )
        self.assertEqual(context.exception.options["index"], 2)


class TestFlagArity(TestCase):

    def setUp(self):
        self.schema = Schema()
        self.schema.add_optional("--opt0", Arity.FLAG, flag="-o")

    def testFlagRecordsTrue(self):
        result = match(self.schema, ["-o"])
        self.assertEqual(result.optionals["opt0"], ("true",))

    def testFlagDoesNotConsumeNextToken(self):
        result = match(self.schema, ["-o", "extra1"])
        self.assertEqual(result.optionals["opt0"], ("true",))
        self.assertEqual(result.positionals, ("extra1",))

    def testRepeatedFlagRejected(self):
        with self.assertRaises(RepeatedOptionError) as context:
            match(self.schema, ["-o", "--opt0"])
        self.assertEqual(str(context.exception), "'opt0' should only be specified once")
        self.assertIn("second", context.exception.options["hint"])

    def testRepeatedFlagHintCountsOccurrences(self):
        with self.assertRaises(RepeatedOptionError) as context:
            match(self.schema, ["x", "y", "-o", "-o"])
        self.assertEqual(context.exception.options["hint"], "remove the second occurrence of '-o'")
        self.assertEqual(context.exception.options["index"], 4)


class TestSingleArity(TestCase):

    def setUp(self):
        self.schema = Schema()
        self.schema.add_optional("--opt0", Arity.SINGLE, flag="-o")
        self.schema.add_optional("--opt1", Arity.FLAG, flag="-a")

    def testValueConsumed(self):
        result = match(self.schema, ["-o", "a", "extra1"])
        self.assertEqual(result.optionals["opt0"], ("a",))
        self.assertEqual(result.positionals, ("extra1",))

    def testNegativeNumberIsAValue(self):
        result = match(self.schema, ["--opt0", "-5"])
        self.assertEqual(result.optionals["opt0"], ("-5",))

    def testRepeatedRejected(self):
        with self.assertRaises(RepeatedOptionError):
            match(self.schema, ["-o", "abc", "--opt0", "def"])

    def testRepeatedHintCountsOccurrences(self):
        with self.assertRaises(RepeatedOptionError) as context:
            match(self.schema, ["x", "y", "z", "-o", "abc", "--opt0", "def"])
        self.assertEqual(context.exception.options["hint"], "remove the second occurrence of '--opt0'")

    def testMissingValueAtEnd(self):
        with self.assertRaises(MissingValueError) as context:
            match(self.schema, ["-o"])
        self.assertEqual(str(context.exception), "'opt0' requires a value")

    def testOptionIsNotAValue(self):
        with self.assertRaises(MissingValueError) as context:
            match(self.schema, ["x", "y", "-o", "-a"])
        self.assertIn("third position", context.exception.options["hint"])

    def testMissingValueWinsOverRepetition(self):
        with self.assertRaises(MissingValueError):
            match(self.schema, ["-o", "abc", "-o"])


class TestAppendArity(TestCase):

    def setUp(self):
        self.schema = Schema()
        self.schema.add_optional("--opt0", Arity.APPEND, flag="-o")

    def testValuesInOrderWithLeftovers(self):
        result = match(self.schema, ["-o", "abc", "--opt0", "def", "extra1", "-o", "ghi", "extra2"])
        self.assertEqual(result.optionals["opt0"], ("abc", "def", "ghi"))
        self.assertEqual(result.positionals, ("extra1", "extra2"))

    def testMissingValue(self):
        with self.assertRaises(MissingValueError):
            match(self.schema, ["-o", "abc", "-o"])


class TestHelpAndIsolation(TestCase):

    def setUp(self):
        self.schema = Schema()
        self.schema.add_positional("file")
        self.schema.add_optional("--output", flag="-o")

    def testHelpSignalBeatsMissingPositional(self):
        for tokens in (["-h"], ["--help"], ["-help"], ["-o", "x", "-h"]):
            with self.subTest(tokens=tokens):
                with self.assertRaises(HelpRequested) as context:
                    match(self.schema, tokens)
                self.assertEqual(context.exception.options["name"], "help")

    def testSchemaIsNotModified(self):
        result = match(self.schema, ["in.txt", "-o", "out.txt"])
        self.assertEqual(result.optionals["output"], ("out.txt",))
        self.assertEqual(self.schema.optionals["output"].values, ())
        self.assertIsNone(self.schema.positionals["file"].value)

    def testResultIsReadOnly(self):
        result = match(self.schema, ["in.txt", "-o", "out.txt"])
        with self.assertRaises(TypeError):
            result.optionals["output"] = ("other",)
        self.assertNotIn("help", result.optionals)


if __name__ == "__main__":
    unittest.main()
