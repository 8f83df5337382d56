r"""
Argot argument descriptors.

Overview
- Descriptors
  • Option: named argument introduced by the long prefix (--name) and, optionally,
    by a single-character short name (-n). Either a presence-only flag or valued.
  • Cardinal: positional argument, bound by position among the non-option tokens.

- Declaration fields (sanitized on construction, read-only afterwards)
  • name: long name (options) or display label (cardinals).
  • descr: short help text, None when omitted.
  • type: str (no conversion), int, float or bool.
  • min / max: inclusive numeric bounds for int/float; disabled when min == max.
  • choices: allowed values, given as a space-delimited string or an iterable.
  • default: raw textual value used when the argument is not specified.
  • action: post-validation callable action(parser, argument).
  • Option only: short, required, valued (forced when type or choices are declared).

- Result fields (engine-owned, read-only to callers)
  • value: raw string, None when unset, "" for a specified flag.
  • specified: whether the user (or a default) provided the argument.
  • as_int / as_float / as_bool: converted value when the matching type was declared.
  Results are held in an immutable Result record that only the parser replaces.

Validation highlights
- Option names must match r"[^\W\d_](-?[^\W_]+)*" (no prefix, no underscores).
- Short names are a single non-whitespace character.
- Bounds are only accepted on int/float descriptors and min cannot exceed max.
- Choices reject duplicates; defaults must be strings.

Quick example:
    >>> from argot.arguments import Option, Cardinal
    >>> depth = Option("max-depth", "How much the iteration can be nested.", "L", type=int, min=1, max=50, default="5")
    >>> root = Cardinal("root", "Root directory to be iterated over.", default=".")
    >>> depth.valued
    True
"""
import collections
import functools
import numbers
import operator
import re
import warnings

from rich.text import Text

from .faults import IgnoredDefaultWarning
from .utils import *

ATTRIBUTION = "argot"
"""Reserved long name printing the library attribution notice."""

HELP = "help"
"""Reserved long name printing the generated help (unless suppressed)."""

HELP_SHORT = "h"
"""Reserved short name printing the generated help (unless suppressed)."""

Result = collections.namedtuple("Result", (
    "value",
    "specified",
    "as_int",
    "as_float",
    "as_bool",
), defaults=(None, False, None, None, None))
Result.__doc__ = """
Engine-owned result of one descriptor for one parse call.

The parser builds a fresh record per descriptor and swaps it in wholesale, so
callers never observe a half-written state.
"""


def _outcome(field, /):
    """
    Internal: read-only property exposing one field of the committed Result.
    """

    @rename(field)
    def getter(self):
        return getattr(self._result, field)

    return property(getter)


class ArgumentType(type):
    """
    Metaclass that turns descriptor classes into introspectable specs.

    Responsibilities
    - Expose each field listed in __introspectable__ as a read-only property
      backed by the private "_{field}" attribute (see mirror()).
    - Expose each field of Result as a read-only property reading self._result.
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Derive __typename__ from the class name, used in declaration messages.
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
            } | {
                field: _outcome(field) for field in Result._fields
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
            for field in type(self).__introspectable__:
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the fields shared by every descriptor.

    - descr: optional short description. If omitted (Unset), it becomes None.
      If provided, it must be a non-empty string (or rich Text) after trimming.
    - action: optional callable invoked after conversion; None when omitted.

    The dict is modified in place.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    if not callable(action := metadata["action"]) and action is not Unset:
        raise TypeError(f"{cls.__typename__} 'action' must be callable")
    metadata["action"] = coalesce(action)


def _sanitize_valued_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the value-bearing fields.

    - type: one of str, int, float, bool.
    - min / max: real numbers; a non-trivial range (min != max) requires an int
      or float type, integral bounds for int, and min <= max.
    - choices: space-delimited string or iterable of words, normalized to a tuple.
    - default: Unset or a string, normalized to None when Unset.
    """
    if metadata["type"] not in (str, int, float, bool):
        raise TypeError(f"{cls.__typename__} 'type' must be one of str, int, float or bool")

    for bound in ("min", "max"):
        if not isinstance(metadata[bound], numbers.Real) or isinstance(metadata[bound], bool):
            raise TypeError(f"{cls.__typename__} '{bound}' must be a number")

    if metadata["min"] != metadata["max"]:
        if metadata["type"] not in (int, float):
            raise TypeError(f"{cls.__typename__} bounds require an int or float type")
        if metadata["type"] is int and not all(isinstance(metadata[bound], numbers.Integral) for bound in ("min", "max")):
            raise TypeError(f"{cls.__typename__} integer bounds must be integers")
        if metadata["min"] > metadata["max"]:
            raise ValueError(f"{cls.__typename__} 'min' cannot exceed 'max'")

    try:
        metadata["choices"] = delimited(metadata["choices"])
    except (TypeError, ValueError) as exception:
        raise type(exception)(f"{cls.__typename__} 'choices' must be distinct words") from None

    if not isinstance(default := metadata["default"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'default' must be a string")
    metadata["default"] = coalesce(default)


def _sanitize_named_metadata(cls, metadata, /):
    r"""
    Internal: validate and normalize the option-only fields.

    - name: must match r"[^\W\d_](-?[^\W_]+)*" once trimmed (prefix excluded).
    - short: Unset or a single non-whitespace character, normalized to None.
    - valued: forced to True when a type other than str or any choice is declared.
    - default: dropped with an IgnoredDefaultWarning when the option is a flag.
    """
    if not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", metadata["name"]):
        raise ValueError(f"{cls.__typename__} names must be valid shell-style option names without prefix")

    if not isinstance(short := metadata["short"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif isinstance(short, str) and (len(short) != 1 or short.isspace()):
        raise ValueError(f"{cls.__typename__} 'short' must be a single non-whitespace character")
    metadata["short"] = coalesce(short)

    metadata["valued"] = bool(metadata["valued"] or metadata["type"] is not str or metadata["choices"])

    if metadata["default"] is not None and not metadata["valued"]:
        warnings.warn(IgnoredDefaultWarning(
            f"default of flag {metadata['name']!r} is ignored because it does not take a value"
        ), stacklevel=3)
        metadata["default"] = None


def _sanitize_name(cls, metadata, /):
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif name != "".join(name.split()):
        raise ValueError(f"{cls.__typename__} 'name' cannot contain whitespace")
    metadata["name"] = name


class Option(metaclass=ArgumentType):
    """
    Named argument descriptor.

    An option is a presence-only flag unless it is valued: a valued option binds
    the next token (--name value, -n value) or, for short names, the remainder
    of its token (-nvalue).

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes
      mirroring the sanitized declaration.
    - value, specified, as_int, as_float and as_bool expose the last committed Result.
    """

    __introspectable__ = (
        "name",
        "descr",
        "short",
        "required",
        "valued",
        "type",
        "min",
        "max",
        "choices",
        "default",
        "action",
    )

    def __init__(
            self,
            name,
            descr=Unset,
            /,
            short=Unset,
            *,
            required=False,
            valued=False,
            type=str,
            min=0,
            max=0,
            choices=(),
            default=Unset,
            action=Unset
    ):
        """
        Construct an Option descriptor.

        Parameters
        - name: str
          Long name without prefix (e.g. "max-depth").
        - descr: Unset | str
          Help text shown next to the option.
        - short: Unset | str
          Single-character short name (e.g. "L").
        - required: bool
          Report a missing option as an error.
        - valued: bool
          The option takes a value. Implied by a non-str type or by choices.
        - type: str | int | float | bool
          Conversion applied to the raw value.
        - min, max: numbers
          Inclusive bounds for int/float values; ignored when equal.
        - choices: str | Iterable[str]
          Allowed raw values (exact match).
        - default: Unset | str
          Raw value used when the option is not specified (valued options only).
        - action: Unset | Callable[[Parser, Option], Any]
          Called after a successful conversion; may raise an ArgumentError.
        """
        metadata = {
            "name": name,
            "descr": descr,
            "short": short,
            "required": bool(required),
            "valued": bool(valued),
            "type": type,
            "min": min,
            "max": max,
            "choices": choices,
            "default": default,
            "action": action,
        }
        _sanitize_name(__class__, metadata)
        _sanitize_metadata(__class__, metadata)
        _sanitize_valued_metadata(__class__, metadata)
        _sanitize_named_metadata(__class__, metadata)

        for field, object in metadata.items():
            setattr(self, "_" + field, object)
        self._result = Result()

    @property
    def bounded(self):
        """
        Whether a numeric range is enforced (min != max).
        """
        return self._min != self._max


class Cardinal(metaclass=ArgumentType):
    """
    Positional argument descriptor.

    A cardinal always carries a value: the token bound to it. Whether it must
    be present is decided by the parser's required count, not by the descriptor.
    """

    __introspectable__ = (
        "name",
        "descr",
        "type",
        "min",
        "max",
        "choices",
        "default",
        "action",
    )

    def __init__(
            self,
            name,
            descr=Unset,
            /,
            *,
            type=str,
            min=0,
            max=0,
            choices=(),
            default=Unset,
            action=Unset
    ):
        """
        Construct a Cardinal descriptor.

        Parameters
        - name: str
          Display label used in usage/help (e.g. "left-value").
        - descr, type, min, max, choices, default, action:
          Same meaning as for Option.
        """
        metadata = {
            "name": name,
            "descr": descr,
            "type": type,
            "min": min,
            "max": max,
            "choices": choices,
            "default": default,
            "action": action,
        }
        _sanitize_name(__class__, metadata)
        _sanitize_metadata(__class__, metadata)
        _sanitize_valued_metadata(__class__, metadata)

        for field, object in metadata.items():
            setattr(self, "_" + field, object)
        self._result = Result()

    short = None
    required = False
    valued = True

    @property
    def bounded(self):
        """
        Whether a numeric range is enforced (min != max).
        """
        return self._min != self._max


__all__ = (
    # Descriptors
    "Option",
    "Cardinal",

    # Engine-owned results
    "Result",

    # Reserved names
    "ATTRIBUTION",
    "HELP",
    "HELP_SHORT",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
