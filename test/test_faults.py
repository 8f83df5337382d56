"""
Fault taxonomy tests.

Scope
- Every ArgumentError subclass carries its own stable FaultCode.
- __replace__ keeps message, options and cause while binding new context.
- Rendering falls back to the bare message when no parser is bound.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from rich.text import Text

from argot import *


class TestFaults(TestCase):

    def testCodesAreDistinct(self):
        classes = [
            UnknownOptionError,
            MissingOptionValueError,
            ChainedOptionValueError,
            FlagAssignmentError,
            TooFewCardinalsError,
            UnexpectedCardinalError,
            MissingRequiredArgumentError,
            InvalidChoiceError,
            InvalidIntegerError,
            IntegerOutOfRangeError,
            InvalidFloatError,
            FloatOutOfRangeError,
            InvalidBooleanError,
            ValidationError,
            DelegatedError,
        ]
        codes = [cls.code for cls in classes]
        self.assertEqual(len(set(codes)), len(FaultCode))
        for cls in classes:
            with self.subTest(cls=cls):
                self.assertTrue(issubclass(cls, ArgumentError))

    def testMessageAndOptions(self):
        fault = InvalidIntegerError("bad", token="x")
        self.assertEqual(str(fault), "bad")
        self.assertEqual(fault.options["token"], "x")
        with self.assertRaises(TypeError):
            fault.options["token"] = "y"

    def testReplaceBindsContextAndKeepsCause(self):
        cause = OSError("boom")
        fault = DelegatedError("wrapped", token="t")
        fault.__cause__ = cause
        replaced = fault.__replace__(parser="p")
        self.assertIsInstance(replaced, DelegatedError)
        self.assertEqual(str(replaced), "wrapped")
        self.assertEqual(replaced.options["token"], "t")
        self.assertEqual(replaced.options["parser"], "p")
        self.assertIs(replaced.__cause__, cause)

    def testUnboundFaultRendersMessage(self):
        self.assertEqual(ValidationError("nope").__rich__(), Text("nope"))


if __name__ == "__main__":
    unittest.main()
