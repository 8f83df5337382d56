"""
End-to-end scenarios with two small programs built on argot.

- calc: binary operation over two float cardinals, --int truncates operands.
- filetree: directory walker with a bounded --max-depth, a bool option with a
  default, and a root cardinal checked by an action.

Conventions
- Test method names follow CamelCase per project convention.
- Program glue (the calculation, the directory check) lives in this module;
  the library only parses.
"""
import io
import math
import os
import tempfile
import unittest
from unittest import TestCase

from rich.console import Console

from argot import *


def _sink():
    return Console(file=io.StringIO(), color_system=None, soft_wrap=True, width=200)


def _output(sink):
    return sink.file.getvalue()


def _calculator(stdout, stderr):
    integer = Option("int", "Values are considered as int.", "i")
    sentence = Option("sentence", "Will print a sentence instead of the raw result.", "s")
    operation = Cardinal("operation", "Operation evaluated on left and right values.", choices="add sub mult div")
    left = Cardinal("left-value", "Left operand", type=float)
    right = Cardinal("right-value", "Right operand", type=float)
    parser = Parser(
        [integer, sentence],
        [operation, left, right],
        3,
        name="calc",
        descr="Calculate the result of a binary operation.",
        epilog="Operands are parsed as floats.",
        stdout=stdout,
        stderr=stderr,
    )
    return parser, integer, operation, left, right


def _calculate(operation, lhs, rhs, integer):
    if integer:
        lhs, rhs = float(int(lhs)), float(int(rhs))
    match operation:
        case "add":
            return lhs + rhs
        case "sub":
            return lhs - rhs
        case "mult":
            return lhs * rhs
        case "div":
            # IEEE semantics: x / 0 is a signed infinity (or NaN for 0 / 0).
            if rhs == 0:
                return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs) if lhs else math.nan
            return float(int(lhs / rhs)) if integer else lhs / rhs


def _filetree(stdout, stderr):
    def directory(parser, argument):
        if not os.path.isdir(argument.value):
            parser.fail("Invalid value for argument '%s': '%s' is not a path to a directory." % (argument.name, argument.value))

    full = Option("full-path", "Print full path.", "f")
    follow = Option("follow-symlink", "Follow symbolic links for directories.", type=bool, default="false")
    depth = Option("max-depth", "How much the iteration can be nested.", "L", type=int, min=1, max=50, default="5")
    root = Cardinal("root", "Root directory to be iterated over.", default=".", action=directory)
    parser = Parser(
        [follow, full, depth],
        [root],
        name="filetree",
        descr="Iterate recursively over a directory and print its files.",
        stdout=stdout,
        stderr=stderr,
    )
    return parser, full, follow, depth, root


class TestCalculator(TestCase):

    def setUp(self):
        self.stdout, self.stderr = _sink(), _sink()
        self.parser, self.integer, self.operation, self.left, self.right = _calculator(self.stdout, self.stderr)

    def testAddition(self):
        outcome = self.parser.parse(["add", "3", "4"])
        self.assertTrue(outcome)
        self.assertEqual(self.operation.value, "add")
        self.assertEqual(self.left.as_float, 3.0)
        self.assertEqual(self.right.as_float, 4.0)
        self.assertFalse(self.integer.specified)
        self.assertEqual(_output(self.stderr), "")

    def testIntegerDivisionByZero(self):
        outcome = self.parser.parse(["--int", "div", "7", "0"])
        self.assertTrue(outcome)
        self.assertTrue(self.integer.specified)
        self.assertEqual(self.left.as_float, 7.0)
        self.assertEqual(self.right.as_float, 0.0)
        self.assertEqual(
            _calculate(self.operation.value, self.left.as_float, self.right.as_float, self.integer.specified),
            math.inf,
        )

    def testIntegerDivisionTruncates(self):
        self.parser.parse(["-i", "div", "7.9", "2"])
        self.assertEqual(
            _calculate(self.operation.value, self.left.as_float, self.right.as_float, self.integer.specified),
            3.0,
        )

    def testUnknownOperation(self):
        outcome = self.parser.parse(["mul", "3", "4"])
        self.assertIsInstance(outcome.fault, InvalidChoiceError)
        self.assertIn("'mul' is not in 'add sub mult div'", _output(self.stderr))

    def testMissingOperand(self):
        outcome = self.parser.parse(["add", "3"])
        self.assertIsInstance(outcome.fault, TooFewCardinalsError)
        self.assertEqual(outcome.status, 1)

    def testHelp(self):
        outcome = self.parser.parse(["--help"])
        self.assertIs(outcome.kind, OutcomeKind.HELP)
        self.assertEqual(outcome.status, 0)
        output = _output(self.stdout)
        sections = (
            "Calculate the result of a binary operation.",
            "USAGE: calc",
            "Positional Arguments:",
            "Options:",
            "Operands are parsed as floats.",
        )
        positions = [output.index(section) for section in sections]
        self.assertEqual(positions, sorted(positions))


class TestFiletree(TestCase):

    def setUp(self):
        self.stdout, self.stderr = _sink(), _sink()
        self.parser, self.full, self.follow, self.depth, self.root = _filetree(self.stdout, self.stderr)

    def testDefaults(self):
        self.assertTrue(self.parser.parse([]))
        self.assertEqual(self.root.value, ".")
        self.assertEqual(self.depth.as_int, 5)
        self.assertIs(self.follow.as_bool, False)
        self.assertFalse(self.full.specified)

    def testExplicitValues(self):
        with tempfile.TemporaryDirectory() as directory:
            outcome = self.parser.parse(["-fL", "3", "--follow-symlink", "yes", directory])
            self.assertTrue(outcome)
            self.assertEqual(self.root.value, directory)
        self.assertTrue(self.full.specified)
        self.assertEqual(self.depth.as_int, 3)
        self.assertIs(self.follow.as_bool, True)

    def testAttachedShortValue(self):
        self.parser.parse(["-L12"])
        self.assertEqual(self.depth.as_int, 12)

    def testDepthOutOfRange(self):
        outcome = self.parser.parse(["-L", "100"])
        self.assertIs(outcome.kind, OutcomeKind.FAILED)
        self.assertEqual(outcome.status, 1)
        self.assertIsInstance(outcome.fault, IntegerOutOfRangeError)
        self.assertEqual(
            _output(self.stderr),
            "ERROR!\n"
            "USAGE: filetree [--follow-symlink ...] [--full-path|-f] [--max-depth|-L ...] [--] [root]\n"
            "Invalid value for option '--max-depth', '100' is out of range. (min value: 1, max value: 50)\n"
            "Type 'filetree --help' for more information.\n",
        )
        self.assertIsNone(self.depth.as_int)

    def testDepthBoundary(self):
        self.assertTrue(self.parser.parse(["-L", "50"]))
        self.assertIsInstance(self.parser.parse(["-L", "51"]).fault, IntegerOutOfRangeError)

    def testRootMustBeADirectory(self):
        with tempfile.TemporaryDirectory() as directory:
            missing = os.path.join(directory, "missing")
            outcome = self.parser.parse([missing])
        self.assertIsInstance(outcome.fault, ValidationError)
        self.assertIn("is not a path to a directory.", _output(self.stderr))
        self.assertIsNone(self.root.value)


if __name__ == "__main__":
    unittest.main()
