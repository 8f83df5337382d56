"""
Argot token matcher.

match() classifies the token at tokens[index] against the declared options and
returns how many tokens it consumed (0 means "not an option, try positional").

- long path (checked first): "--name", "--name value", "--name=value".
  "--argot" and "--help" (unless suppressed) interrupt the parse.
- short path: "-x", "-xyz" (chained flags), "-Lvalue", "-L value".
  "-h" (unless suppressed) interrupts the parse anywhere in a run.
- a bare short prefix ("-") is not an option.

Matches are staged into the results mapping (descriptor -> Result) owned by the
parser; descriptors themselves are never written here.
"""
import logging

from .arguments import ATTRIBUTION, HELP, HELP_SHORT, Result
from .faults import *
from .faults import AttributionRequested, HelpRequested

logger = logging.getLogger(__name__)


def _value(option, tokens, index, token):
    """
    Internal: bind the token following tokens[index] as the value of option.
    """
    if index + 1 >= len(tokens):
        raise MissingOptionValueError(
            "No value provided for option: %s" % token,
            argument=option,
            token=token,
        )
    return tokens[index + 1]


def match_long(parser, tokens, index, results, /):
    token = tokens[index]
    if not parser.long_prefix or not token.startswith(parser.long_prefix):
        return 0
    name = token[len(parser.long_prefix):]

    if name == ATTRIBUTION:
        raise AttributionRequested(token)
    if not parser.nohelp and name == HELP:
        raise HelpRequested(token)

    name, assigned, inline = name.partition("=")
    if (option := parser._longs.get(name)) is None:
        raise UnknownOptionError("Unknown option: %s" % token, token=token)

    if not option.valued:
        if assigned:
            raise FlagAssignmentError(
                "Option '%s%s' does not take a value, but you entered: %s" % (parser.long_prefix, name, token),
                argument=option,
                token=token,
            )
        results[option] = Result("", True)
        logger.debug("matched flag %r from %r", option.name, token)
        return 1

    if assigned:
        results[option] = Result(inline, True)
        consumed = 1
    else:
        results[option] = Result(_value(option, tokens, index, token), True)
        consumed = 2
    logger.debug("matched option %r from %r (%d token(s))", option.name, token, consumed)
    return consumed


def match_short(parser, tokens, index, results, /):
    token = tokens[index]
    if not parser.short_prefix or not token.startswith(parser.short_prefix) or token == parser.short_prefix:
        return 0
    run = token[len(parser.short_prefix):]

    chained = False
    while run:
        character, run = run[0], run[1:]

        if not parser.nohelp and character == HELP_SHORT:
            raise HelpRequested(token)

        if (option := parser._shorts.get(character)) is None:
            raise UnknownOptionError(
                "Unknown option: %s%s in %s" % (parser.short_prefix, character, token),
                token=token,
                character=character,
            )

        if not option.valued:
            results[option] = Result("", True)
            chained = True
            logger.debug("matched short flag %r in %r", option.name, token)
            continue

        if chained and parser.strict:
            raise ChainedOptionValueError(
                "%s%s requires a value, so it cannot be used in group, but you entered: %s" % (
                    parser.short_prefix, character, token
                ),
                argument=option,
                token=token,
            )
        if run:
            results[option] = Result(run, True)
            logger.debug("matched short option %r with attached value in %r", option.name, token)
            return 1
        results[option] = Result(_value(option, tokens, index, token), True)
        logger.debug("matched short option %r with value from next token", option.name)
        return 2
    return 1


def match(parser, tokens, index, results, /):
    """
    Try the long path, then the short path, on tokens[index].

    parameters
    - parser: the Parser providing prefixes, lookups and switches.
    - tokens: the whole token sequence (read-only).
    - index: position of the head token.
    - results: mutable mapping staging descriptor -> Result.

    returns
    - the number of tokens consumed (0, 1 or 2).

    raises
    - UnknownOptionError, MissingOptionValueError, FlagAssignmentError,
      ChainedOptionValueError (strict parsers only).
    - HelpRequested / AttributionRequested for the built-in keywords.
    """
    return match_long(parser, tokens, index, results) or match_short(parser, tokens, index, results)


__all__ = (
    "match",
    "match_long",
    "match_short",
)
