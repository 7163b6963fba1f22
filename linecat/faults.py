"""
linecat faults (errors) and their rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
- CommandException: base type that carries a message plus options and knows how
  to render itself for rich, how to surface itself, and how to be copied with
  overrides (copy.replace).
- trigger(): central entry point to surface any fault.
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Short lowercased messages that echo the offending input (flag or path).
- One clear hint per fault.
- Styling configurable via __styles__ in __main__; codes remappable via __codes__.

Integration
- The resolver and the file collaborator raise faults as plain exceptions.
- The command layer catches them and calls trigger(fault, **ctx): in shell mode the
  fault is printed on stderr and the process exits with status 1, otherwise it is
  raised again to the caller.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True, highlight=False)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the cli (stable identifiers).

    grouping (by high-level domain)
    - invocation (1110x)
      • MISSING_ARGUMENTS
    - switches (1111x)
      • UNKNOWN_SWITCH
    - inputs (1113x)
      • UNREADABLE_FILE
    """
    # --- invocation errors (11xxx) ---
    MISSING_ARGUMENTS           = 11101

    # --- switch errors (11xxx) ---
    UNKNOWN_SWITCH              = 11112

    # --- input errors (11xxx) ---
    UNREADABLE_FILE             = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        try:
            prog = self.options["tool"].name
        except KeyError:
            prog = "linecat"
        prog = text(getattr(main, "__prog__", prog), styler("prog-name"))

        code = self.options.get("code")
        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code else "?", styler("code")),
            " | ",
            text(self.options.get("title", "error").title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))

        if not (hint := self.options.get("hint")):
            body = Group(message)
        else:
            body = Group(message, Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(body, title=header, title_align="left")

        return Group(header, *body.renderables)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingArgumentsError(CommandException): ...
class UnknownFlagError(CommandException): ...
class FileReadError(CommandException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via the rich console; otherwise the fault is raised.

    typical options
    - tool, shell, fancy, colorful, title, code, hint, docs, and any other
      context the reporter may want to show (e.g., input/path/cause).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings. when
    not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "MissingArgumentsError",
    "UnknownFlagError",
    "FileReadError",
    "FaultCode",
    "trigger",
    "getdoc",
)
