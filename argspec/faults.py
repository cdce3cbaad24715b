"""
argspec faults (declaration errors, missing arguments) and rendering.

Scope
- DeclarationError and its subclasses: raised immediately when the embedding
  program declares its fields wrongly (duplicate names, a required field after
  an optional one, a flag declared twice). These are bugs in the caller's code
  and are never collected or deferred.
- ArgsError: the one recoverable fault. It carries every “required argument not
  found” problem gathered while fields were declared, in the order they were
  recorded, and knows how to render itself with rich.
- trigger(): central entry point to surface a fault (respecting shell/deferred/fancy/colorful).

Integration
- ArgSpec.check() raises ArgsError with the usage line and program name attached
  as options.
- Callers either catch it and inspect .problems, or pass it to trigger(..., shell=True)
  to print a friendly report on stderr and exit with status 1.
- Hosts can restyle the report with a __styles__ mapping and name the program
  with __prog__, both read from __main__.
"""
import copy
import sys
from collections import defaultdict
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import mirror, pluralize, basename

console = Console(stderr=True)


class DeclarationError(Exception):
    """
    the embedding program declared its fields inconsistently.

    raised at declaration time, never through check(); continuing would operate
    on a field topology that does not match the caller's intent.
    """

    def __init__(self, message, /, *, name=None):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.name = name


class DuplicateFieldError(DeclarationError): ...
class FieldOrderError(DeclarationError): ...
class DuplicateFlagError(DeclarationError): ...


class ArgsError(Exception):
    """
    one or more required arguments were not supplied on the command-line.

    options (all optional)
    - usage: the rendered usage line of the spec that failed.
    - program: program identity shown in the report header.
    - shell, deferred, fancy, colorful: surfacing flags, see trigger().
    """

    problems = mirror("problems")

    def __init__(self, problems=(), /, **options):
        problems = list(problems)
        for problem in problems:
            if not isinstance(problem, str):
                raise TypeError("ArgsError() problems must be strings")
        super().__init__(tuple(problems))
        self._problems = problems
        self._options = options

    @property
    def options(self):
        return MappingProxyType(self._options)

    def __reduce__(self):
        return type(self), (self._problems,), {"_options": dict(self._options)}

    def __str__(self):
        return f"ArgsError - {pluralize("problem", len(self._problems))}"

    def __repr__(self):
        return f"ArgsError({", ".join("error=%r" % problem for problem in self._problems)})"

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        program = self.options.get("program") or getattr(main, "__prog__", None) or "argspec"

        header = Text.assemble(
            "[ ",
            text(basename(program), "prog-name"),
            " | ",
            text("Missing Arguments", "error-title"),
            " ]"
        )
        messages = [text(problem, "error-message") for problem in self._problems]

        renders = [*messages]
        if usage := self.options.get("usage", "").rstrip():
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text("usage: " + usage, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self._problems, **{**self._options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgsError).
    - options are merged into a copy of the fault via copy.replace() before triggering.
    - in shell mode the fault is printed on stderr via rich and the process exits
      with status 1 (unless deferred); otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "DeclarationError",
    "DuplicateFieldError",
    "FieldOrderError",
    "DuplicateFlagError",
    "ArgsError",
    "trigger",
)
