"""
Argot value conversion and validation.

Runs once per descriptor after the whole token stream was matched, options
first and cardinals second (the parser drives the order). For one descriptor:

1. presence: an unspecified valued descriptor falls back to its default; a
   missing required option is an error; anything else unspecified is skipped.
2. choices: the raw value must be one of the declared words (exact match).
3. conversion: int (auto-detected radix), float, bool (synonym sets), each
   enforcing declared bounds.
4. action: the user callback runs last, with the result already visible on the
   descriptor. ArgumentError subclasses propagate; other exceptions are
   wrapped into DelegatedError.

Messages always name the descriptor the way the user typed it: options with the
configured long prefix ('--max-depth'), cardinals by their bare label ('root').
"""
import math
import re

from .arguments import Option, Result
from .faults import *

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

_INTEGER = re.compile(r"(?P<sign>[+-]?)(?P<digits>0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+|0[0-7]*|[1-9][0-9]*)")


def parse_int(text, /):
    """
    Parse an integer literal, detecting its radix like C strtol(text, NULL, 0).

    - "0x1F" / "0X1f" → hexadecimal
    - "017" / "0o17"  → octal
    - "0b101"        → binary
    - "42", "-7"     → decimal

    Leading whitespace is skipped; anything else (trailing characters or
    whitespace, underscores, empty input) raises ValueError.
    """
    if not (match := _INTEGER.fullmatch(text.lstrip())):
        raise ValueError("invalid integer literal: %r" % text)
    digits = match["digits"]
    value = int(digits, 8) if re.fullmatch(r"0[0-7]+", digits) else int(digits, 0)
    return -value if match["sign"] == "-" else value


def label(parser, argument, /):
    """
    Return the user-facing spelling of a descriptor ('--name' or 'name').
    """
    if isinstance(argument, Option):
        return parser.long_prefix + argument.name
    return argument.name


def _kind(argument):
    return "option" if isinstance(argument, Option) else "argument"


def check_choice(parser, argument, value, /):
    if value not in argument.choices:
        raise InvalidChoiceError(
            "Invalid value for %s '%s', '%s' is not in '%s'." % (
                _kind(argument), label(parser, argument), value, " ".join(argument.choices)
            ),
            argument=argument,
            token=value,
            choices=argument.choices,
        )


def to_int(parser, argument, value, /):
    try:
        number = parse_int(value)
    except ValueError:
        raise InvalidIntegerError(
            "Invalid value for %s '%s', '%s' is not an integer." % (_kind(argument), label(parser, argument), value),
            argument=argument,
            token=value,
        ) from None

    if not INT_MIN <= number <= INT_MAX:
        raise InvalidIntegerError(
            "Invalid value for %s '%s', '%s' is not a representable integer. (min value: %d, max value: %d)" % (
                _kind(argument), label(parser, argument), value, INT_MIN, INT_MAX
            ),
            argument=argument,
            token=value,
            bounds=(INT_MIN, INT_MAX),
        )

    if argument.bounded and not argument.min <= number <= argument.max:
        raise IntegerOutOfRangeError(
            "Invalid value for %s '%s', '%s' is out of range. (min value: %d, max value: %d)" % (
                _kind(argument), label(parser, argument), value, argument.min, argument.max
            ),
            argument=argument,
            token=value,
            bounds=(argument.min, argument.max),
        )
    return number


def to_float(parser, argument, value, /):
    try:
        number = float(value)
    except ValueError:
        raise InvalidFloatError(
            "Invalid value for %s '%s', '%s' is not a number." % (_kind(argument), label(parser, argument), value),
            argument=argument,
            token=value,
        ) from None

    # NaN never lies within declared bounds.
    if argument.bounded and (math.isnan(number) or not argument.min <= number <= argument.max):
        raise FloatOutOfRangeError(
            "Invalid value for %s '%s', '%s' is out of range. (min value: %g, max value: %g)" % (
                _kind(argument), label(parser, argument), value, argument.min, argument.max
            ),
            argument=argument,
            token=value,
            bounds=(argument.min, argument.max),
        )
    return number


def to_bool(parser, argument, value, /):
    if value in parser.truthy:
        return True
    if value in parser.falsy:
        return False
    raise InvalidBooleanError(
        "Invalid value for %s '%s', '%s' is not a boolean. (accepted: %s %s)" % (
            _kind(argument), label(parser, argument), value, " ".join(parser.truthy), " ".join(parser.falsy)
        ),
        argument=argument,
        token=value,
        truthy=parser.truthy,
        falsy=parser.falsy,
    )


_converters = {
    int: ("as_int", to_int),
    float: ("as_float", to_float),
    bool: ("as_bool", to_bool),
}


def validate(parser, argument, result, /):
    """
    Resolve defaults, check choices, convert and run the action of one descriptor.

    parameters
    - parser: the Parser driving this call (prefixes, synonym sets).
    - argument: the Option or Cardinal to validate.
    - result: the Result staged by the matching pass (Result() when untouched).

    returns
    - the final Result, already committed to the descriptor.

    raises
    - MissingRequiredArgumentError, InvalidChoiceError, InvalidIntegerError,
      IntegerOutOfRangeError, InvalidFloatError, FloatOutOfRangeError,
      InvalidBooleanError, or whatever ArgumentError the action raises
      (other action exceptions are wrapped into DelegatedError).
    """
    if not result.specified:
        if argument.valued and argument.default is not None:
            result = Result(argument.default, True)
        elif argument.required:
            raise MissingRequiredArgumentError(
                "%s '%s' is required but you did not specify it." % (
                    _kind(argument).capitalize(), label(parser, argument)
                ),
                argument=argument,
            )
        else:
            argument._result = result
            return result

    if argument.valued:
        if argument.choices:
            check_choice(parser, argument, result.value)
        if argument.type in _converters:
            field, converter = _converters[argument.type]
            result = result._replace(**{field: converter(parser, argument, result.value)})

    argument._result = result

    if argument.action is not None:
        try:
            argument.action(parser, argument)
        except ArgumentError:
            raise
        except Exception as exception:
            raise DelegatedError(
                "Invalid value for %s '%s': %s" % (_kind(argument), label(parser, argument), exception),
                argument=argument,
                exception=exception,
            ) from exception
    return result


__all__ = (
    "INT_MIN",
    "INT_MAX",
    "parse_int",
    "label",
    "check_choice",
    "to_int",
    "to_float",
    "to_bool",
    "validate",
)
