"""
Faults module tests.

Scope
- FaultCode stability and host remapping through __codes__.
- Exception/warning payloads: message, read-only options, copy.replace().
- trigger(): raise / warn outside shell mode, print (+ exit for errors) inside it.
- getdoc(): host documentation lookup through __docs__.

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argosy import (
    ArgumentException,
    ArgumentWarning,
    DuplicateExitStatusWarning,
    DuplicateKeyError,
    FaultCode,
    MissingArgumentsError,
    ParseError,
    SpecificationError,
    UnknownOptionError,
    getdoc,
    trigger,
)


class TestFaultCode(TestCase):

    def testCodesAreStable(self):
        self.assertEqual(FaultCode.UNKNOWN_OPTION, 11112)
        self.assertEqual(FaultCode.MISSING_ARGUMENTS, 11125)
        self.assertEqual(FaultCode.DUPLICATE_KEY, 11201)
        self.assertEqual(FaultCode.DUPLICATE_EXIT_STATUS, 12211)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.ARITY_MISMATCH.normalize(), "11122")

    def testNormalizeUsesHostCodes(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__codes__", {FaultCode.ARITY_MISMATCH: "E-ARITY"}, create=True):
            self.assertEqual(FaultCode.ARITY_MISMATCH.normalize(), "E-ARITY")


class TestHierarchy(TestCase):

    def testSpecificationErrorsAreValueErrors(self):
        self.assertTrue(issubclass(DuplicateKeyError, SpecificationError))
        self.assertTrue(issubclass(SpecificationError, ValueError))
        self.assertTrue(issubclass(SpecificationError, ArgumentException))

    def testParseErrorsAreNotValueErrors(self):
        self.assertTrue(issubclass(UnknownOptionError, ParseError))
        self.assertFalse(issubclass(ParseError, ValueError))

    def testWarningsAreWarnings(self):
        self.assertTrue(issubclass(DuplicateExitStatusWarning, ArgumentWarning))
        self.assertTrue(issubclass(ArgumentWarning, Warning))


class TestPayload(TestCase):

    def testMessageAndOptions(self):
        fault = MissingArgumentsError("Error! BAR requires 1 arguments", key="BAR")
        self.assertEqual(str(fault), "Error! BAR requires 1 arguments")
        self.assertEqual(fault.message, "Error! BAR requires 1 arguments")
        self.assertEqual(fault.options["key"], "BAR")
        with self.assertRaises(TypeError):
            fault.options["key"] = "FOO"  # type: ignore[index]

    def testReplaceMergesOptions(self):
        fault = UnknownOptionError("Error! unknown option --bogus", token="--bogus")
        replaced = copy.replace(fault, prog="tool")
        self.assertIsInstance(replaced, UnknownOptionError)
        self.assertEqual(dict(replaced.options), {"token": "--bogus", "prog": "tool"})
        self.assertNotIn("prog", fault.options)

    def testMessageDefaultsToEmpty(self):
        self.assertEqual(str(ParseError()), "")


class TestTrigger(TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.console = Console(file=self.stream, width=200, color_system=None)

    def testErrorsAreRaisedOutsideShell(self):
        with self.assertRaises(UnknownOptionError) as context:
            trigger(UnknownOptionError("Error! unknown option --bogus"), prog="tool")
        self.assertEqual(context.exception.options["prog"], "tool")

    def testErrorsExitInShell(self):
        fault = UnknownOptionError("Error! unknown option --bogus", hint="did you mean '--bar'?")
        with self.assertRaises(SystemExit) as context:
            trigger(fault, shell=True, prog="tool", console=self.console)
        self.assertEqual(context.exception.code, 1)
        output = self.stream.getvalue()
        self.assertIn("[ tool — 11112 | Unknown Option ]", output)
        self.assertIn("Error! unknown option --bogus", output)
        self.assertIn("→ did you mean '--bar'?", output)

    def testWarningsAreEmittedOutsideShell(self):
        with self.assertWarns(DuplicateExitStatusWarning):
            trigger(DuplicateExitStatusWarning("exit status 0 is already documented"))

    def testWarningsPrintInShell(self):
        trigger(DuplicateExitStatusWarning("exit status 0 is already documented"), shell=True, console=self.console)
        self.assertIn("exit status 0 is already documented", self.stream.getvalue())

    def testTriggerRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


class TestGetdoc(TestCase):

    def testMissingDocIsNone(self):
        self.assertIsNone(getdoc(FaultCode.INVALID_NAME))

    def testHostDocs(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__docs__", {FaultCode.INVALID_NAME: "names must be valid"}, create=True):
            self.assertEqual(getdoc(FaultCode.INVALID_NAME), "names must be valid")

    def testGetdocRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(11203)


if __name__ == '__main__':
    unittest.main()
