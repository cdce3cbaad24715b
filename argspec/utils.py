"""
argspec utilities (internal helpers, carefully exposed)

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated accessors for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) as a frozen
    snapshot, so callers can never mutate the spec state through the public API.

- pluralize(word, count)
  • Tiny English pluralizer for fault summaries ("1 problem", "2 problems").

- basename(path)
  • Final segment of a program path, splitting on both '/' and '\\'.

Quick examples
    >>> basename("/x/y/z/hello-world")
    'hello-world'
"""
import builtins
import functools
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
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


def _freeze(object):
    """
    Recursively snapshot containers into their read-only counterparts.

    - Sequence (non-string) → tuple
    - Mapping → MappingProxyType over a fresh dict (keys kept, values frozen)
    - Set → frozenset
    - anything else is returned unchanged
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(map(_freeze, object))
    elif isinstance(object, Mapping):
        return MappingProxyType(dict(zip(object.keys(), map(_freeze, object.values()))))
    elif isinstance(object, Set):
        return frozenset(map(_freeze, object))
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" from the instance and returns a
    frozen snapshot of it (see _freeze). Later mutations of the backing field
    are not reflected in snapshots already handed out.

    Example
    - Given self._problems, declare problems = mirror("problems").
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


def pluralize(word, count, /):
    """
    Prefix a word with its count, pluralizing regular English nouns.

    Examples
    - pluralize("problem", 1)  -> "1 problem"
    - pluralize("problem", 3)  -> "3 problems"
    - pluralize("entry", 0)    -> "0 entries"
    """
    if not isinstance(word, str):
        raise TypeError("pluralize() first argument must be a string")
    if count == 1 or not word:
        return f"{count} {word}"
    if word.endswith(("s", "sh", "ch", "x", "z")):
        word += "es"
    elif len(word) > 1 and word.endswith("y") and word[-2] not in "aeiou":
        word = word[:-1] + "ies"
    else:
        word += "s"
    return f"{count} {word}"


def basename(path, /):
    """
    Return the final segment of a program path.

    Both POSIX and Windows separators are honoured regardless of the host
    platform.
    """
    if not isinstance(path, str):
        raise TypeError("basename() argument must be a string")
    return re.split(r"[/\\]", path)[-1]


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "rename",
    "mirror",
    "pluralize",
    "basename",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
