"""
Argot utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the descriptor, converter, formatter and parser layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated accessors for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr).

- delimited(text)
  • Normalize a space-delimited word set ("add sub mult div") or an iterable of words into a tuple.

- ordinal(number)
  • 1 → "1st", 2 → "2nd", 11 → "11th"; used by position-first messages.

Stability and contract
- Names not in __all__ are internal and may change without notice.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> delimited("add sub  mult")
    ('add', 'sub', 'mult')
    >>> ordinal(3)
    '3rd'
"""
import builtins
import functools
from collections.abc import Iterable, Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in keyword parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when Unset appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    - Function form: rename(callable, name) -> callable
    - Decorator form: rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance. Containers are
    exposed as read-only views (tuple, MappingProxyType, frozenset) so the
    declared configuration cannot be mutated through the public API.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        value = getattr(self, "_" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    return property(getter)


def delimited(source, /):
    """
    Normalize a word set into a tuple of non-empty words, keeping order.

    Parameters
    - source: str | Iterable[str]
      • str → split on whitespace ("1 true True" → ("1", "true", "True")).
      • iterable → every item must be a string without whitespace.

    Raises
    - TypeError: when source is neither a string nor an iterable of strings.
    - ValueError: when an iterable item is empty or contains whitespace, or on duplicates.
    """
    if isinstance(source, str):
        words = source.split()
    elif isinstance(source, Iterable):
        words = []
        for word in source:
            if not isinstance(word, str):
                raise TypeError("delimited() items must be strings")
            if not word or word != "".join(word.split()):
                raise ValueError("delimited() items must be non-empty words without whitespace")
            words.append(word)
    else:
        raise TypeError("delimited() argument must be a string or an iterable of strings")

    if len(set(words)) != len(words):
        raise ValueError("delimited() words cannot contain duplicates")
    return tuple(words)


@functools.cache
def ordinal(number, /):
    """
    Return the English ordinal for a positive integer ("1st", "2nd", "13th").
    """
    if 10 <= number % 100 <= 20:
        return f"{number}th"
    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "delimited",
    "ordinal",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
