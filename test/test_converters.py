"""
Value conversion and validation tests.

Scope
- parse_int radix detection and rejection of malformed literals.
- validate(): defaults, required options, choices, int/float/bool conversion,
  bounds, and action dispatch (ArgumentError passthrough, DelegatedError wrapping).

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import math
import unittest
from unittest import TestCase

from rich.console import Console

from argot import *
from argot.converters import INT_MAX, INT_MIN, parse_int, validate


def _sink():
    return Console(file=io.StringIO(), color_system=None, soft_wrap=True, width=200)


def _parser(*arguments, **options):
    return Parser(
        [argument for argument in arguments if isinstance(argument, Option)],
        [argument for argument in arguments if isinstance(argument, Cardinal)],
        name="prog",
        stdout=_sink(),
        stderr=_sink(),
        **options,
    )


class TestParseInt(TestCase):
    """Radix detection mirrors strtol with base 0."""

    def testDecimal(self):
        self.assertEqual(parse_int("42"), 42)
        self.assertEqual(parse_int("-7"), -7)
        self.assertEqual(parse_int("+7"), 7)
        self.assertEqual(parse_int("0"), 0)

    def testHexadecimal(self):
        self.assertEqual(parse_int("0x1F"), 31)
        self.assertEqual(parse_int("0X1f"), 31)
        self.assertEqual(parse_int("-0x10"), -16)

    def testOctal(self):
        self.assertEqual(parse_int("017"), 15)
        self.assertEqual(parse_int("0o17"), 15)

    def testBinary(self):
        self.assertEqual(parse_int("0b101"), 5)

    def testLeadingWhitespaceIgnored(self):
        self.assertEqual(parse_int("  12"), 12)

    def testTrailingWhitespaceRejected(self):
        with self.assertRaises(ValueError):
            parse_int("12 ")

    def testMalformedRejected(self):
        for literal in ("", "abc", "12abc", "08", "1_000", "0x", "1.5", "--1"):
            with self.subTest(literal=literal):
                with self.assertRaises(ValueError):
                    parse_int(literal)


class TestValidate(TestCase):
    """validate() runs the post-pass of one descriptor."""

    def testUnspecifiedOptionalIsSkipped(self):
        o = Option("number", type=int)
        result = validate(_parser(o), o, Result())
        self.assertFalse(result.specified)
        self.assertIsNone(o.as_int)

    def testDefaultAppliedWhenUnspecified(self):
        o = Option("max-depth", short="L", type=int, min=1, max=50, default="5")
        result = validate(_parser(o), o, Result())
        self.assertTrue(result.specified)
        self.assertEqual(result.value, "5")
        self.assertEqual(o.as_int, 5)

    def testDefaultIsConverted(self):
        o = Option("ratio", type=float, default="0.5")
        validate(_parser(o), o, Result())
        self.assertEqual(o.as_float, 0.5)

    def testMissingRequiredOption(self):
        o = Option("output", short="o", required=True, valued=True)
        with self.assertRaises(MissingRequiredArgumentError) as context:
            validate(_parser(o), o, Result())
        self.assertEqual(str(context.exception), "Option '--output' is required but you did not specify it.")

    def testRequiredOptionWithDefaultIsSatisfied(self):
        o = Option("output", required=True, valued=True, default="a.out")
        self.assertEqual(validate(_parser(o), o, Result()).value, "a.out")

    def testChoiceAccepted(self):
        c = Cardinal("operation", choices="add sub mult div")
        self.assertEqual(validate(_parser(c), c, Result("mult", True)).value, "mult")

    def testChoiceRejected(self):
        c = Cardinal("operation", choices="add sub mult div")
        with self.assertRaises(InvalidChoiceError) as context:
            validate(_parser(c), c, Result("mul", True))
        self.assertEqual(
            str(context.exception),
            "Invalid value for argument 'operation', 'mul' is not in 'add sub mult div'.",
        )

    def testIntegerWithinBounds(self):
        o = Option("max-depth", short="L", type=int, min=1, max=50)
        self.assertEqual(validate(_parser(o), o, Result("50", True)).as_int, 50)
        self.assertEqual(validate(_parser(o), o, Result("1", True)).as_int, 1)

    def testIntegerOutOfBounds(self):
        o = Option("max-depth", short="L", type=int, min=1, max=50)
        with self.assertRaises(IntegerOutOfRangeError) as context:
            validate(_parser(o), o, Result("51", True))
        self.assertEqual(
            str(context.exception),
            "Invalid value for option '--max-depth', '51' is out of range. (min value: 1, max value: 50)",
        )
        self.assertEqual(context.exception.options["bounds"], (1, 50))

    def testIntegerTrailingGarbage(self):
        o = Option("number", type=int)
        with self.assertRaises(InvalidIntegerError) as context:
            validate(_parser(o), o, Result("12abc", True))
        self.assertEqual(str(context.exception), "Invalid value for option '--number', '12abc' is not an integer.")

    def testIntegerTrailingWhitespaceFailsParse(self):
        o = Option("n", type=int)
        outcome = _parser(o).parse(["--n", "5 "])
        self.assertIs(outcome.kind, OutcomeKind.FAILED)
        self.assertIsInstance(outcome.fault, InvalidIntegerError)

    def testIntegerOutsideRepresentableRange(self):
        o = Option("number", type=int)
        self.assertEqual(validate(_parser(o), o, Result(str(INT_MAX), True)).as_int, INT_MAX)
        self.assertEqual(validate(_parser(o), o, Result(str(INT_MIN), True)).as_int, INT_MIN)
        with self.assertRaises(InvalidIntegerError):
            validate(_parser(o), o, Result(str(INT_MAX + 1), True))

    def testIntegerRoundTrip(self):
        o = Option("number", type=int, min=0, max=100)
        self.assertEqual(validate(_parser(o), o, Result(str(42), True)).as_int, 42)

    def testCardinalMessageUsesBareName(self):
        c = Cardinal("left-value", type=int)
        with self.assertRaises(InvalidIntegerError) as context:
            validate(_parser(c), c, Result("x", True))
        self.assertIn("'left-value'", str(context.exception))
        self.assertNotIn("--left-value", str(context.exception))

    def testMessageFollowsConfiguredPrefix(self):
        o = Option("number", type=int)
        with self.assertRaises(InvalidIntegerError) as context:
            validate(_parser(o, long_prefix="/", short_prefix="-"), o, Result("x", True))
        self.assertIn("'/number'", str(context.exception))

    def testFloat(self):
        o = Option("ratio", type=float)
        self.assertEqual(validate(_parser(o), o, Result("2.5e1", True)).as_float, 25.0)
        self.assertEqual(validate(_parser(o), o, Result("inf", True)).as_float, math.inf)

    def testFloatGarbageRejected(self):
        o = Option("ratio", type=float)
        with self.assertRaises(InvalidFloatError):
            validate(_parser(o), o, Result("2.5x", True))

    def testFloatOutOfBounds(self):
        o = Option("ratio", type=float, min=0, max=1)
        self.assertEqual(validate(_parser(o), o, Result("1", True)).as_float, 1.0)
        with self.assertRaises(FloatOutOfRangeError):
            validate(_parser(o), o, Result("1.5", True))

    def testFloatNanRejectedWhenBounded(self):
        o = Option("ratio", type=float, min=0, max=1)
        with self.assertRaises(FloatOutOfRangeError):
            validate(_parser(o), o, Result("nan", True))

    def testFloatNanAcceptedWhenUnbounded(self):
        o = Option("ratio", type=float)
        self.assertTrue(math.isnan(validate(_parser(o), o, Result("nan", True)).as_float))

    def testBoolean(self):
        o = Option("sentence", type=bool)
        parser = _parser(o)
        for word in ("1", "true", "True", "TRUE", "y", "Y", "yes", "Yes", "YES"):
            with self.subTest(word=word):
                self.assertIs(validate(parser, o, Result(word, True)).as_bool, True)
        for word in ("0", "false", "False", "FALSE", "n", "N", "no", "No", "NO"):
            with self.subTest(word=word):
                self.assertIs(validate(parser, o, Result(word, True)).as_bool, False)

    def testBooleanIsCaseSensitive(self):
        o = Option("sentence", type=bool)
        with self.assertRaises(InvalidBooleanError) as context:
            validate(_parser(o), o, Result("tRuE", True))
        self.assertIn("(accepted: 1 true True TRUE y Y yes Yes YES 0 false False FALSE n N no No NO)", str(context.exception))

    def testBooleanCustomSynonyms(self):
        o = Option("enabled", type=bool)
        parser = _parser(o, truthy="on", falsy="off")
        self.assertIs(validate(parser, o, Result("on", True)).as_bool, True)
        with self.assertRaises(InvalidBooleanError):
            validate(parser, o, Result("yes", True))

    def testOnlyDeclaredTypeIsConverted(self):
        o = Option("number", type=int)
        result = validate(_parser(o), o, Result("7", True))
        self.assertEqual(result.as_int, 7)
        self.assertIsNone(result.as_float)
        self.assertIsNone(result.as_bool)

    def testFlagIsNotConverted(self):
        o = Option("verbose")
        self.assertEqual(validate(_parser(o), o, Result("", True)).value, "")

    def testActionSeesCommittedResult(self):
        seen = []
        o = Option("number", type=int, action=lambda parser, argument: seen.append(argument.as_int))
        validate(_parser(o), o, Result("9", True))
        self.assertEqual(seen, [9])

    def testActionArgumentErrorPropagates(self):
        def action(parser, argument):
            parser.fail("'%s' is not a directory." % argument.value)

        c = Cardinal("root", action=action)
        with self.assertRaises(ValidationError) as context:
            validate(_parser(c), c, Result("missing", True))
        self.assertEqual(str(context.exception), "'missing' is not a directory.")

    def testActionOtherExceptionIsDelegated(self):
        def action(parser, argument):
            raise OSError("disk on fire")

        c = Cardinal("root", action=action)
        with self.assertRaises(DelegatedError) as context:
            validate(_parser(c), c, Result("x", True))
        self.assertIsInstance(context.exception.__cause__, OSError)
        self.assertIn("disk on fire", str(context.exception))

    def testActionNotCalledWhenUnspecified(self):
        seen = []
        o = Option("number", type=int, action=lambda parser, argument: seen.append(argument))
        validate(_parser(o), o, Result())
        self.assertEqual(seen, [])


if __name__ == "__main__":
    unittest.main()
