"""
Argot parser: configuration, positional binding and the parse driver.

Overview
- Parser: the whole invocation declaration (options, cardinals, required
  positional count, prefixes, boolean synonyms, help texts, sinks). Sanitized
  eagerly; declaration mistakes raise TypeError/ValueError at construction.
- Parser.parse(prompt): one left-to-right pass over the tokens, then
  validation of every option and every cardinal, in declaration order.
  It never exits the process: it returns an Outcome and prints help,
  attribution or the fault envelope to the injected sinks.
- invoke(parser, prompt): embedding helper for main() functions; the only
  place where the process is terminated.

Scanning states
- scanning: the terminator switches to "no more options" for good; any other
  token goes to the matcher (long, then short) and, if it is not an option,
  to the next free cardinal (or to extra once they are all bound).
- non-greedy parsers stop as soon as the last cardinal is bound; the
  unconsumed tokens are returned in Outcome.remainder.

Results are staged while scanning and committed descriptor by descriptor while
validating. Any fault or interrupt resets every descriptor, so a failed parse
never exposes partially parsed values.

Quick example:
    >>> from argot import Parser, Option, Cardinal
    >>> depth = Option("max-depth", "How much the iteration can be nested.", "L", type=int, min=1, max=50, default="5")
    >>> root = Cardinal("root", "Root directory to be iterated over.", default=".")
    >>> parser = Parser([depth], [root], name="filetree")
    >>> bool(parser.parse(["-L", "3"]))
    True
    >>> depth.as_int, root.value
    (3, '.')
"""
import collections
import enum
import functools
import logging
import operator
import os
import re
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from .arguments import *
from .converters import validate
from .faults import *
from .faults import AttributionRequested, HelpRequested
from .formatter import format_attribution, format_help, format_usage
from .matcher import match
from .utils import *

logger = logging.getLogger(__name__)

TRUE = "1 true True TRUE y Y yes Yes YES"
"""Default true synonyms for bool descriptors."""

FALSE = "0 false False FALSE n N no No NO"
"""Default false synonyms for bool descriptors."""


class OutcomeKind(enum.Enum):
    """
    How a parse call ended.

    - PARSED: every descriptor was validated; results are available.
    - HELP: the help keyword was found; help was printed to stdout.
    - ATTRIBUTION: the attribution keyword was found; the notice was printed.
    - FAILED: an ArgumentError was reported to stderr.
    """
    PARSED = enum.auto()
    HELP = enum.auto()
    ATTRIBUTION = enum.auto()
    FAILED = enum.auto()


class Outcome(collections.namedtuple("Outcome", ("kind", "fault", "remainder"), defaults=(None, ()))):
    """
    Immutable result of Parser.parse().

    Truthy only when the parse succeeded; status is the conventional process
    exit status (1 for failures, 0 otherwise).
    """
    __slots__ = ()

    @property
    def status(self):
        return 1 if self.kind is OutcomeKind.FAILED else 0

    def __bool__(self):
        return self.kind is OutcomeKind.PARSED


class ParserType(type):
    """
    Metaclass exposing the sanitized configuration of a Parser as read-only
    properties, with the same repr conventions as the argument descriptors.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: mirror(field) for field in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}(%s)" % ", ".join(
                map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in ("name", "options", "cardinals", "required"):
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_descriptors(cls, metadata, /):
    """
    Internal: materialize the descriptor sequences and build the name lookups.

    - options: iterable of Option, unique long and short names, none of them
      shadowing a built-in keyword.
    - cardinals: iterable of Cardinal with unique names.
    - required: integer between 0 and the number of cardinals.
    """
    for field, kind in (("options", Option), ("cardinals", Cardinal)):
        if not isinstance(metadata[field], Iterable) or isinstance(metadata[field], str):
            raise TypeError(f"{cls.__typename__} '{field}' must be an iterable of {kind.__typename__}s")
        metadata[field] = list(metadata[field])
        if not all(isinstance(argument, kind) for argument in metadata[field]):
            raise TypeError(f"{cls.__typename__} '{field}' must only contain {kind.__typename__}s")

    reserved = {ATTRIBUTION} | ({HELP} if not metadata["nohelp"] else set())
    longs, shorts = {}, {}
    for option in metadata["options"]:
        if option.name in reserved:
            raise ValueError(f"{cls.__typename__} option name {option.name!r} is reserved")
        if option.name in longs:
            raise ValueError(f"{cls.__typename__} option name {option.name!r} is declared twice")
        longs[option.name] = option

        if option.short is None:
            continue
        if option.short == HELP_SHORT and not metadata["nohelp"]:
            raise ValueError(f"{cls.__typename__} short name {option.short!r} is reserved")
        if option.short in shorts:
            raise ValueError(f"{cls.__typename__} short name {option.short!r} is declared twice")
        shorts[option.short] = option
    metadata["longs"], metadata["shorts"] = longs, shorts

    names = [cardinal.name for cardinal in metadata["cardinals"]]
    if len(set(names)) != len(names):
        raise ValueError(f"{cls.__typename__} cardinal names must be distinct")

    if not isinstance(required := metadata["required"], int) or isinstance(required, bool):
        raise TypeError(f"{cls.__typename__} 'required' must be an integer")
    if not 0 <= required <= len(metadata["cardinals"]):
        raise ValueError(f"{cls.__typename__} 'required' must be between 0 and the number of cardinals")


def _sanitize_strings(cls, metadata, /):
    """
    Internal: normalize the free texts (name, descr, usage, epilog).

    The program name falls back to __prog__ in __main__, then to the basename
    of sys.argv[0]. The other texts become None when omitted.
    """
    name = coalesce(metadata["name"], getattr(__import__("__main__"), "__prog__", Unset))
    if name is Unset:
        name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "prog"
    if not isinstance(name, str) or not name.strip():
        raise TypeError(f"{cls.__typename__} 'name' must be a non-empty string")
    metadata["name"] = name.strip()

    for field in ("descr", "usage", "epilog"):
        if not isinstance(object := metadata[field], str | Text | Unset):
            raise TypeError(f"{cls.__typename__} '{field}' must be a string")
        metadata[field] = coalesce(object) or None


def _sanitize_syntax(cls, metadata, /):
    """
    Internal: validate prefixes, terminator and boolean synonym sets.

    Empty prefixes disable the matching option kind and an empty terminator
    disables the terminator; two non-empty prefixes must differ.
    """
    for field in ("short_prefix", "long_prefix", "terminator"):
        if not isinstance(object := metadata[field], str):
            raise TypeError(f"{cls.__typename__} '{field}' must be a string")
        if object != "".join(object.split()):
            raise ValueError(f"{cls.__typename__} '{field}' cannot contain whitespace")

    if metadata["short_prefix"] and metadata["short_prefix"] == metadata["long_prefix"]:
        raise ValueError(f"{cls.__typename__} short and long prefixes must differ")

    for field in ("truthy", "falsy"):
        try:
            metadata[field] = delimited(metadata[field])
        except (TypeError, ValueError) as exception:
            raise type(exception)(f"{cls.__typename__} '{field}' must be distinct words") from None
        if not metadata[field]:
            raise ValueError(f"{cls.__typename__} '{field}' cannot be empty")


def _sanitize_runtime(cls, metadata, /):
    """
    Internal: resolve the overflow callable and the output sinks.

    Sinks are anything exposing print(renderable), like rich Console.
    """
    if not callable(extra := metadata["extra"]) and extra is not Unset:
        raise TypeError(f"{cls.__typename__} 'extra' must be callable")
    metadata["extra"] = coalesce(extra)

    for field, stderr in (("stdout", False), ("stderr", True)):
        if (sink := metadata[field]) is Unset:
            sink = Console(stderr=stderr, soft_wrap=True)
        if not callable(getattr(sink, "print", None)):
            raise TypeError(f"{cls.__typename__} '{field}' must provide a print() method")
        metadata[field] = sink


class Parser(metaclass=ParserType):
    """
    Declaration of one command-line invocation.

    Properties
    - The names listed in __introspectable__ are exposed as read-only
      attributes mirroring the sanitized configuration.
    - options / cardinals are exposed as tuples in declaration order.
    """

    __introspectable__ = (
        "options",
        "cardinals",
        "required",
        "name",
        "descr",
        "usage",
        "epilog",
        "short_prefix",
        "long_prefix",
        "terminator",
        "truthy",
        "falsy",
        "extra",
        "nohelp",
        "greedy",
        "strict",
        "colorful",
        "stdout",
        "stderr",
    )

    def __init__(
            self,
            options=(),
            cardinals=(),
            /,
            required=0,
            *,
            name=Unset,
            descr=Unset,
            usage=Unset,
            epilog=Unset,
            short_prefix="-",
            long_prefix="--",
            terminator="--",
            truthy=TRUE,
            falsy=FALSE,
            extra=Unset,
            nohelp=False,
            greedy=True,
            strict=False,
            colorful=False,
            stdout=Unset,
            stderr=Unset
    ):
        """
        Construct a Parser.

        Parameters
        - options: Iterable[Option]
        - cardinals: Iterable[Cardinal]
          Bound in order to the non-option tokens.
        - required: int
          Minimum number of cardinals the user must give.
        - name: Unset | str
          Program name; defaults to __prog__ in __main__, then basename(sys.argv[0]).
        - descr, usage, epilog: Unset | str | Text
          Help texts; usage replaces the synthesized usage line.
        - short_prefix, long_prefix, terminator: str
          Option syntax; an empty string disables the corresponding feature.
        - truthy, falsy: str | Iterable[str]
          Boolean synonyms for bool descriptors.
        - extra: Unset | Callable[[str], Any]
          Receives positional tokens once every cardinal is bound.
        - nohelp: bool
          Disable the built-in --help/-h.
        - greedy: bool
          When False, stop scanning once the last cardinal is bound.
        - strict: bool
          Reject a value-needing short option chained after short flags.
        - colorful: bool
          Style help, usage and faults (palette overridable with __styles__).
        - stdout, stderr: Unset | sink
          Output sinks; default to rich consoles on the standard streams.
        """
        metadata = {
            "options": options,
            "cardinals": cardinals,
            "required": required,
            "name": name,
            "descr": descr,
            "usage": usage,
            "epilog": epilog,
            "short_prefix": short_prefix,
            "long_prefix": long_prefix,
            "terminator": terminator,
            "truthy": truthy,
            "falsy": falsy,
            "extra": extra,
            "nohelp": bool(nohelp),
            "greedy": bool(greedy),
            "strict": bool(strict),
            "colorful": bool(colorful),
            "stdout": stdout,
            "stderr": stderr,
        }
        _sanitize_descriptors(__class__, metadata)
        _sanitize_strings(__class__, metadata)
        _sanitize_syntax(__class__, metadata)
        _sanitize_runtime(__class__, metadata)

        for field, object in metadata.items():
            setattr(self, "_" + field, object)

    @property
    def arguments(self):
        """
        Every descriptor in validation order: options first, then cardinals.
        """
        return (*self._options, *self._cardinals)

    def help(self):
        """
        Return the rendered help screen as rich Text.
        """
        return format_help(self)

    def usage_line(self):
        """
        Return the rendered usage line as rich Text.
        """
        return format_usage(self)

    def fail(self, message, /, **options):
        """
        Abort the current parse from an action with a ValidationError.
        """
        raise ValidationError(message, **options)

    def _reset(self):
        for argument in self.arguments:
            argument._result = Result()

    def _scan(self, tokens):
        """
        Internal: single left-to-right pass staging a Result per matched descriptor.

        returns
        - (results, remainder): the staged results and the unconsumed tokens.
        """
        results = {}
        terminated = False
        cursor = 0
        index = 0

        while index < len(tokens):
            token = tokens[index]

            if not terminated:
                if self._terminator and token == self._terminator:
                    logger.debug("terminator found at %d, options are disabled", index)
                    terminated = True
                    index += 1
                    continue
                if consumed := match(self, tokens, index, results):
                    index += consumed
                    continue

            if cursor < len(self._cardinals):
                cardinal = self._cardinals[cursor]
                results[cardinal] = Result(token, True)
                logger.debug("bound %r to the %s cardinal %r", token, ordinal(cursor + 1), cardinal.name)
            elif self._extra is not None:
                logger.debug("forwarding extra token %r", token)
                try:
                    self._extra(token)
                except ArgumentError:
                    raise
                except Exception as exception:
                    raise DelegatedError(
                        "Invalid extra argument '%s': %s" % (token, exception),
                        token=token,
                        exception=exception,
                    ) from exception
            else:
                raise UnexpectedCardinalError(
                    "Only %d positional arguments are accepted, but you gave '%s'" % (len(self._cardinals), token),
                    token=token,
                    count=len(self._cardinals),
                )

            cursor += 1
            index += 1
            if not self._greedy and cursor == len(self._cardinals):
                logger.debug("last cardinal bound, stopping at %d", index)
                break

        if cursor < self._required:
            raise TooFewCardinalsError(
                "At least %d positional arguments are required, but you gave %d arguments." % (self._required, cursor),
                count=cursor,
                required=self._required,
            )
        return results, tuple(tokens[index:])

    def parse(self, prompt=Unset, /):
        """
        Parse a token stream against this declaration.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; will be split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, used as-is.

        Returns
        - Outcome: PARSED (descriptor results committed), HELP or ATTRIBUTION
          (printed to stdout), FAILED (envelope printed to stderr, every
          descriptor reset).

        Raises
        - TypeError: when prompt is not Unset/str/Iterable[str].
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        logger.debug("parsing %d token(s) for %r", len(tokens), self._name)
        self._reset()
        try:
            results, remainder = self._scan(tokens)
            for argument in self.arguments:
                validate(self, argument, results.get(argument, Result()))
        except HelpRequested:
            self._reset()
            self._stdout.print(self.help())
            logger.debug("help requested")
            return Outcome(OutcomeKind.HELP)
        except AttributionRequested:
            self._reset()
            self._stdout.print(format_attribution(self))
            logger.debug("attribution requested")
            return Outcome(OutcomeKind.ATTRIBUTION)
        except ArgumentError as exception:
            self._reset()
            fault = exception.__replace__(parser=self)
            self._stderr.print(fault)
            logger.debug("parse failed with %s (%s)", type(fault).__name__, fault.code.normalize())
            return Outcome(OutcomeKind.FAILED, fault)

        logger.debug("parse succeeded, %d token(s) left over", len(remainder))
        return Outcome(OutcomeKind.PARSED, remainder=remainder)

    def __invoke__(self, prompt=Unset):
        """
        Parse and return the Outcome on success; exit with its status otherwise.
        """
        if outcome := self.parse(prompt):
            return outcome
        sys.exit(outcome.status)


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for main() functions.

    Parameters
    - object: an instance providing __invoke__(prompt), such as a Parser.
    - prompt: forwarded as-is (see Parser.parse).

    Raises
    - TypeError: when 'object' does not implement __invoke__.
    - SystemExit: when the parse did not succeed (help, attribution or failure).
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


def discard(token, /):
    """
    Overflow callable ignoring every extra positional token.
    """


__all__ = (
    "TRUE",
    "FALSE",
    "OutcomeKind",
    "Outcome",
    "Parser",
    "invoke",
    "discard",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ParserType
