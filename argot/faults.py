"""
Argot faults (errors, warnings and interrupts) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing parse
  failure. Codes are grouped by domain to keep copy consistent and make
  logs/searches predictable.
- ArgumentError: base type for all parse failures. Carries a message plus
  context options and knows how to render the error envelope through rich:
    ERROR!
    USAGE: prog [--opt|-o ...] [--] <positional>
    <message>
    Type 'prog --help' for more information.
- ArgumentWarning: declaration-time warnings emitted with the stdlib warnings module.
- Interrupt: control-flow signals for the built-in help and attribution keywords.
  They are not failures; the parser turns them into "handled" outcomes.

Integration
- The matcher, converters and parser raise faults; Parser.parse() catches them,
  binds itself with __replace__(parser=...) and prints them to its stderr sink.
- User actions (post-validation callbacks) may raise ValidationError (or any
  ArgumentError). Any other exception is wrapped into DelegatedError.
"""
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - options (1111x)
      • UNKNOWN_OPTION, MISSING_OPTION_VALUE, CHAINED_OPTION_VALUE, FLAG_ASSIGNMENT
    - positionals (1112x)
      • TOO_FEW_CARDINALS, UNEXPECTED_CARDINAL
    - presence (1113x)
      • MISSING_REQUIRED_ARGUMENT
    - conversions (1114x)
      • INVALID_CHOICE, INVALID_INTEGER, INTEGER_OUT_OF_RANGE,
        INVALID_FLOAT, FLOAT_OUT_OF_RANGE, INVALID_BOOLEAN
    - delegated (1115x)
      • VALIDATION_FAILED, DELEGATED_ERROR

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- option errors ---
    UNKNOWN_OPTION              = 11111
    MISSING_OPTION_VALUE        = 11112
    CHAINED_OPTION_VALUE        = 11113
    FLAG_ASSIGNMENT             = 11114

    # --- positional/cardinal errors ---
    TOO_FEW_CARDINALS           = 11121
    UNEXPECTED_CARDINAL         = 11122

    # --- presence errors ---
    MISSING_REQUIRED_ARGUMENT   = 11131

    # --- conversion errors ---
    INVALID_CHOICE              = 11141
    INVALID_INTEGER             = 11142
    INTEGER_OUT_OF_RANGE        = 11143
    INVALID_FLOAT               = 11144
    FLOAT_OUT_OF_RANGE          = 11145
    INVALID_BOOLEAN             = 11146

    # --- delegated errors ---
    VALIDATION_FAILED           = 11151
    DELEGATED_ERROR             = 11152

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentError(Exception):
    """
    Base class of every parse failure.

    options
    - parser: the Parser that reported the fault (bound by the parser before rendering).
    - argument: the descriptor concerned, when there is one.
    - token: the offending token, when there is one.
    - any other context (bounds, choices, count, ...) useful to a reporter.
    """
    code = FaultCode.DELEGATED_ERROR

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message or ""

    def __rich__(self):
        # Lazy import: arguments and formatter both depend on this module.
        from .arguments import HELP, HELP_SHORT
        from .formatter import format_usage, painter

        if (parser := self.options.get("parser")) is None:
            return Text(str(self))
        text = painter(parser)

        renders = [
            text("ERROR!", "error-banner"),
            format_usage(parser),
            text(self.message, "error-message"),
        ]
        if not parser.nohelp and (parser.long_prefix or parser.short_prefix):
            helper = parser.long_prefix + HELP if parser.long_prefix else parser.short_prefix + HELP_SHORT
            renders.append(Text.assemble(
                "Type '",
                text(parser.name, "program-name"),
                " ",
                text(helper, "option-name"),
                "' for more information.",
            ))
        return Group(*renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        fault = type(self)(self.message, **{**self.options, **overrides})
        fault.__cause__ = self.__cause__
        return fault


class UnknownOptionError(ArgumentError):
    code = FaultCode.UNKNOWN_OPTION
class MissingOptionValueError(ArgumentError):
    code = FaultCode.MISSING_OPTION_VALUE
class ChainedOptionValueError(ArgumentError):
    code = FaultCode.CHAINED_OPTION_VALUE
class FlagAssignmentError(ArgumentError):
    code = FaultCode.FLAG_ASSIGNMENT
class TooFewCardinalsError(ArgumentError):
    code = FaultCode.TOO_FEW_CARDINALS
class UnexpectedCardinalError(ArgumentError):
    code = FaultCode.UNEXPECTED_CARDINAL
class MissingRequiredArgumentError(ArgumentError):
    code = FaultCode.MISSING_REQUIRED_ARGUMENT
class InvalidChoiceError(ArgumentError):
    code = FaultCode.INVALID_CHOICE
class InvalidIntegerError(ArgumentError):
    code = FaultCode.INVALID_INTEGER
class IntegerOutOfRangeError(ArgumentError):
    code = FaultCode.INTEGER_OUT_OF_RANGE
class InvalidFloatError(ArgumentError):
    code = FaultCode.INVALID_FLOAT
class FloatOutOfRangeError(ArgumentError):
    code = FaultCode.FLOAT_OUT_OF_RANGE
class InvalidBooleanError(ArgumentError):
    code = FaultCode.INVALID_BOOLEAN
class ValidationError(ArgumentError):
    code = FaultCode.VALIDATION_FAILED
class DelegatedError(ArgumentError):
    code = FaultCode.DELEGATED_ERROR


class ArgumentWarning(UserWarning):
    """
    Base class of declaration-time warnings (emitted through warnings.warn).
    """


class IgnoredDefaultWarning(ArgumentWarning): ...


class Interrupt(Exception):
    """
    Control-flow signal raised by the matcher when a built-in keyword asks the
    parser to stop and report (help, attribution). Never surfaces to callers.
    """


class HelpRequested(Interrupt): ...
class AttributionRequested(Interrupt): ...


__all__ = (
    "FaultCode",
    "ArgumentError",
    "UnknownOptionError",
    "MissingOptionValueError",
    "ChainedOptionValueError",
    "FlagAssignmentError",
    "TooFewCardinalsError",
    "UnexpectedCardinalError",
    "MissingRequiredArgumentError",
    "InvalidChoiceError",
    "InvalidIntegerError",
    "IntegerOutOfRangeError",
    "InvalidFloatError",
    "FloatOutOfRangeError",
    "InvalidBooleanError",
    "ValidationError",
    "DelegatedError",
    "ArgumentWarning",
    "IgnoredDefaultWarning",
)
