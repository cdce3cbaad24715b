"""
argspec field declarations: bind positional tokens to named fields, detect flags.

Overview
- ArgSpec: builder/parser over an explicit token sequence.
  • Construction partitions tokens once: a token starting with '-' or '+' is a flag
    token, anything else (including the empty string) is a positional candidate.
  • require(name) / optional(name) claim the next unclaimed candidate in call order.
    Required fields that find nothing record a problem; optional ones do not.
  • flag(name) registers a flag for the usage line only; has_flag() looks at the
    tokens themselves and does not care about declarations.
  • check() returns a read-only ArgsView, or raises ArgsError with every problem.
- ArgsView: read-only facade returned by a successful check().
- Field / FieldKind: the per-name record kept by ArgSpec.

Declaration contract (violations raise DeclarationError subclasses immediately)
- Field names are unique across required and optional fields.
- Every required field is declared before the first optional one.
- A flag is declared at most once.

Quick example
    >>> spec = ArgSpec(["abc", "-v", "def"], program="/usr/bin/tool")
    >>> spec.require("name").optional("file").flag("-v")
    ArgSpec(required='<name>', optional='[file]', flag='-v')
    >>> args = spec.check()
    >>> args.get_value("file"), args.has_flag("-v")
    ('def', True)
    >>> str(spec)
    'tool <name> [file] [-v] '
"""
import functools
import logging
import operator
import shlex
from collections import namedtuple
from collections.abc import Iterable
from enum import Enum
from types import MappingProxyType

from .faults import *
from .utils import *

logger = logging.getLogger(__name__)


class FieldKind(Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"

    def decorate(self, name, /):
        """Usage form of a field name: <name> when required, [name] when optional."""
        return f"<{name}>" if self is FieldKind.REQUIRED else f"[{name}]"


Field = namedtuple("Field", ("name", "kind", "value"))
Field.__doc__ = "A declared field; value is the bound token, or None when nothing was left to bind."


def isflag(token, /):
    """
    Tell whether a token is a flag token.

    Purely lexical: the first character decides. The empty string has no first
    character and is therefore a positional candidate.
    """
    return token[:1] in ("-", "+")


def _tokenize(tokens, /):
    """
    Normalize the constructor input into a list of token strings.

    - str: split shell-style via shlex.split.
    - Iterable[str]: items are kept verbatim (no trimming, empty strings included).
    """
    if isinstance(tokens, str):
        return shlex.split(tokens)
    if not isinstance(tokens, Iterable):
        raise TypeError("ArgSpec() argument must be a string or an iterable of strings")
    tokens = list(tokens)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("ArgSpec() argument must be a string or an iterable of strings")
    return tokens


class ArgSpec:
    """
    Declarative binding of command-line tokens to named fields.

    All binding happens at declaration time: each require()/optional() call takes
    the candidate under the cursor and advances it. check() only reports on what
    the declarations already produced, and bindings stay queryable even after a
    failed check().

    Properties (frozen snapshots, never live state)
    - fields: declared field names, in declaration order.
    - candidates: positional candidates, in input order.
    - flags: flag tokens found in the input, in input order.
    - possible_flags: flags declared with flag(), in declaration order.
    - problems: missing-required messages, in the order they were recorded.
    - values: mapping of bound field names to their values.
    """

    fields = mirror("fields")
    candidates = mirror("candidates")
    flags = mirror("flags")
    possible_flags = mirror("possible_flags")
    problems = mirror("problems")

    def __init__(self, tokens=(), /, *, program=Unset):
        self._program = None
        self._candidates = []
        self._flags = []
        self._table = {}
        self._fields = []
        self._possible_flags = []
        self._problems = []
        self._cursor = 0

        for token in _tokenize(tokens):
            (self._flags if isflag(token) else self._candidates).append(token)

        if program is not Unset:
            self.program = program

        logger.debug(
            "partitioned input into %d candidate(s) and %d flag(s)",
            len(self._candidates),
            len(self._flags),
        )

    @classmethod
    def from_argv(cls, argv, /):
        """
        Build a spec from a full argument vector.

        argv[0] becomes the program identity and the remaining items are the
        tokens. An empty vector yields an empty spec without a program.
        """
        tokens = _tokenize(argv)
        if not tokens:
            return cls()
        return cls(tokens[1:], program=tokens[0])

    @property
    def program(self):
        """The program identity as it was set (not stripped), or None."""
        return self._program

    @program.setter
    def program(self, program):
        if not isinstance(program, str | None):
            raise TypeError("ArgSpec 'program' must be a string or None")
        self._program = program

    @property
    def values(self):
        return MappingProxyType({
            name: field.value for name, field in self._table.items() if field.value is not None
        })

    def _declare(self, name, kind, /):
        if not isinstance(name, str):
            raise TypeError(f"{kind.value} argument name must be a string")
        if not name:
            raise DeclarationError(f"{kind.value} argument name cannot be empty")
        if name in self._table:
            raise DuplicateFieldError(f"{kind.value} argument '{name}' specified twice", name=name)
        if kind is FieldKind.REQUIRED and any(field.kind is FieldKind.OPTIONAL for field in self._table.values()):
            raise FieldOrderError(f"required argument '{name}' specified after optional argument", name=name)

        value = None
        if self._cursor < len(self._candidates):
            value = self._candidates[self._cursor]
            self._cursor += 1
            logger.debug("bound %s argument %r to %r", kind.value, name, value)
        elif kind is FieldKind.REQUIRED:
            self._problems.append(f"required argument '{name}' not found")
            logger.debug("required argument %r not found", name)

        self._table[name] = Field(name, kind, value)
        self._fields.append(name)
        return self

    def require(self, name, /):
        """
        Declare a required field bound to the next positional candidate.

        When no candidate is left, the field is still declared (and shown in
        the usage line) but a problem is recorded for check() to report.

        Raises
        - DuplicateFieldError: the name is already used by any field.
        - FieldOrderError: an optional field has already been declared.
        """
        return self._declare(name, FieldKind.REQUIRED)

    required = require

    def optional(self, name, /):
        """
        Declare an optional field bound to the next positional candidate, if any.

        Raises
        - DuplicateFieldError: the name is already used by any field.
        """
        return self._declare(name, FieldKind.OPTIONAL)

    def flag(self, name, /):
        """
        Declare a possible flag for the usage line.

        The name conventionally starts with '-' or '+', which is not enforced.
        has_flag() detects flags whether or not they were declared here.

        Raises
        - DuplicateFlagError: the flag was already declared.
        """
        if not isinstance(name, str):
            raise TypeError("flag name must be a string")
        if name in self._possible_flags:
            raise DuplicateFlagError(f"flag '{name}' specified twice", name=name)
        self._possible_flags.append(name)
        return self

    def check(self):
        """
        Return a read-only view of this spec, or raise ArgsError listing every
        missing required field.
        """
        if self._problems:
            raise ArgsError(self._problems, usage=self.usage(), program=self._program)
        return ArgsView(self)

    def get_value(self, name, /):
        """Bound value of a field, or None when the name is unknown or unbound."""
        if not isinstance(name, str):
            return None
        field = self._table.get(name)
        return None if field is None else field.value

    get_arg = get_value

    def has_flag(self, name, /):
        """Whether a flag token exactly equal to name was given."""
        return name in self._flags

    def usage(self):
        """
        Render the single-line usage string.

        Every element is followed by a space, the last one included. The
        program (final path segment only) leads when set.
        """
        segments = [basename(self._program)] if self._program else []
        segments += [self._table[name].kind.decorate(name) for name in self._fields]
        segments += [f"[{flag}]" for flag in self._possible_flags]
        return "".join(segment + " " for segment in segments if segment)

    def __str__(self):
        return self.usage()

    def __repr__(self):
        return f"{type(self).__name__}({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"

    def __rich_repr__(self):
        for name in self._fields:
            kind = self._table[name].kind
            yield kind.value, kind.decorate(name)
        for flag in self._possible_flags:
            yield "flag", flag


class ArgsView:
    """
    Read-only facade over a checked ArgSpec.

    Only queries are exposed; the declaration methods are not. Attribute
    assignment and deletion raise AttributeError.
    """

    __slots__ = ("_spec",)

    def __init__(self, spec, /):
        if not isinstance(spec, ArgSpec):
            raise TypeError("ArgsView() argument must be an ArgSpec")
        object.__setattr__(self, "_spec", spec)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__!r} object is read-only")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__!r} object is read-only")

    @property
    def program(self):
        return self._spec.program

    @property
    def values(self):
        return self._spec.values

    @property
    def flags(self):
        return self._spec.flags

    def get_value(self, name, /):
        return self._spec.get_value(name)

    get_arg = get_value

    def has_flag(self, name, /):
        return self._spec.has_flag(name)

    def usage(self):
        return self._spec.usage()

    def __str__(self):
        return self._spec.usage()

    def __repr__(self):
        return f"{type(self).__name__}({self._spec!r})"

    def __rich_repr__(self):
        yield from self._spec.__rich_repr__()


__all__ = (
    "ArgSpec",
    "ArgsView",
    "Field",
    "FieldKind",
    "isflag",
)
