r"""
linecat options: the flag table and the option resolver.

Overview
- Option: closed enumeration of the recognized display flags.
- Descriptor: static record per option (spellings, description, priority rank).
  The table is built and validated once at import time and exposed read-only.
- Invocation: immutable result of a successful resolution (ordered options + paths).
- HelpRequested: singleton outcome returned instead of an Invocation when help is asked for.
- resolve(tokens): turn raw argument tokens into an Invocation or HelpRequested.
- render_help(prog): build the help text for the option table.

Resolution rules
- Tokens are consumed left to right; a token is an option token iff it starts with '-'.
- Option consumption stops at the first other token; it and everything after it
  are file paths, even tokens that look like flags.
- Spellings match exactly and case-sensitively (no prefixes, no "-En" bundles).
- Repeated flags collapse; the resulting options are ordered by ascending priority
  rank, ties broken by enumeration order.
- '-h'/'--help' short-circuits into HelpRequested; an unknown flag raises
  UnknownFlagError. Whichever comes first in the token stream wins.
- No tokens at all, or flags without any file path, raise MissingArgumentsError.

Quick example:
    >>> resolve(["-n", "-E", "a.txt"])
    Invocation(options=(<Option.SHOW_ENDS>, <Option.NUMBER>), paths=('a.txt',))
    >>> resolve(["--help"]) is HelpRequested
    True
"""
import difflib
import functools
import re
from collections import deque
from collections.abc import Iterable
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import NamedTuple, final

from .faults import FaultCode, MissingArgumentsError, UnknownFlagError, getdoc
from .utils import mirror


class Priority(IntEnum):
    """
    application order of active options (lower ranks are applied first).

    an option whose effect would be clobbered by another one must rank above it,
    so the transformer can let the higher-ranked rule win deterministically.
    """
    LOW    = 0
    MIDDLE = 1
    HIGH   = 2


class Descriptor(NamedTuple):
    names: tuple[str, ...]
    descr: str
    priority: Priority


class Option(Enum):
    """
    Recognized display flags, in help order.

    Metadata is looked up in the descriptor table; see names, descr and priority.
    """
    NUMBER_NONBLANK = "number-nonblank"
    SHOW_ENDS       = "show-ends"
    NUMBER          = "number"
    SHOW_TABS       = "show-tabs"
    HELP            = "help"

    @property
    def descriptor(self):
        return _descriptors[self]

    @property
    def names(self):
        return _descriptors[self].names

    @property
    def descr(self):
        return _descriptors[self].descr

    @property
    def priority(self):
        return _descriptors[self].priority

    def __repr__(self):
        return f"<{type(self).__name__}.{self.name}>"


_descriptors = MappingProxyType({
    Option.NUMBER_NONBLANK: Descriptor(("-b", "--number-nonblank"), "number nonblank output lines", Priority.HIGH),
    Option.SHOW_ENDS:       Descriptor(("-E", "--show-ends"), "display $ at end of each line", Priority.LOW),
    Option.NUMBER:          Descriptor(("-n", "--number"), "number all output lines", Priority.MIDDLE),
    Option.SHOW_TABS:       Descriptor(("-T", "--show-tabs"), "display TAB characters as ^I", Priority.LOW),
    Option.HELP:            Descriptor(("-h", "--help"), "display this help and exit", Priority.LOW),
})


def _sanitize_switches(descriptors, /):
    r"""
    Internal: validate the descriptor table and index it by spelling.

    - every Option member must have exactly one descriptor.
    - each spelling must match r"--?[^\W\d_](-?[^\W_]+)*" (short "-x" or long "--name-parts").
    - spellings must be unique across the whole table.

    Returns a dict mapping each spelling to its Option.
    """
    if missing := set(Option) - descriptors.keys():
        raise TypeError("options without a descriptor: %s" % ", ".join(sorted(option.name for option in missing)))

    switches = {}
    for option, descriptor in descriptors.items():
        if not descriptor.names:
            raise TypeError(f"option {option.name!r} must specify at least one name")
        for name in descriptor.names:
            if not re.fullmatch(r"--?[^\W\d_](-?[^\W_]+)*", name):
                raise ValueError(f"option {option.name!r} name {name!r} is not a valid shell-style option name")
            if name in switches:
                raise ValueError(f"option name {name!r} is already used by {switches[name].name!r}")
            switches[name] = option
        if not descriptor.descr.strip():
            raise ValueError(f"option {option.name!r} description cannot be empty")
    return switches


_switches = MappingProxyType(_sanitize_switches(_descriptors))
_order = MappingProxyType({option: index for index, option in enumerate(Option)})

# Spaces between the spellings column and the descriptions in help output.
_MARGIN = 10


def _rank(option):
    return option.priority, _order[option]


def lookup(token, /):
    """
    Return the Option spelled exactly as token, or None when it is not recognized.
    """
    return _switches.get(token)


@final
class Invocation:
    """
    Parsed, deduplicated and ordered result of argument resolution.

    - options: tuple of distinct Options sorted by ascending priority rank.
    - paths: tuple of file paths in the order given (repeats allowed).

    Instances are immutable; both fields are exposed as read-only tuples.
    """
    __introspectable__ = ("options", "paths")

    options = mirror("options")
    paths = mirror("paths")

    def __init__(self, options=(), paths=()):
        options = set(options)
        if not all(isinstance(option, Option) for option in options):
            raise TypeError("invocation options must be Option members")
        if isinstance(paths, str) or not all(isinstance(path, str) for path in paths):
            raise TypeError("invocation paths must be an iterable of strings")
        self._options = tuple(sorted(options, key=_rank))
        self._paths = tuple(paths)

    def __eq__(self, other):
        if not isinstance(other, Invocation):
            return NotImplemented
        return (self._options, self._paths) == (other._options, other._paths)

    def __hash__(self):
        return hash((self._options, self._paths))

    def __setattr__(self, name, value):
        if name in ("_options", "_paths") and name in self.__dict__:
            raise AttributeError(f"{type(self).__name__!r} object is immutable")
        super().__setattr__(name, value)

    def __repr__(self):
        return f"{type(self).__name__}({', '.join('%s=%r' % pair for pair in self.__rich_repr__())})"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


@final
class HelpRequestedType:
    """
    Singleton outcome signaling that help was requested.

    The resolver returns it instead of an Invocation; the caller renders the help
    text and decides the exit status.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __repr__(self):
        return "HelpRequested"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'HelpRequestedType' is not an acceptable base type")


HelpRequested = HelpRequestedType()


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.
    """
    try:
        return ("first", "second", "third", "fourth", "fifth",
                "sixth", "seventh", "eighth", "ninth", "tenth")[number - 1]
    except IndexError:
        pass
    if 10 < number % 100 < 20:
        return f"{number}th"
    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def resolve(tokens, /):
    """
    Resolve raw argument tokens (program name excluded) into an Invocation.

    Returns
    - Invocation: options ordered by priority rank, paths in original order.
    - HelpRequested: when '-h'/'--help' is met before any unknown flag.

    Raises
    - MissingArgumentsError: no tokens at all, or no file path after the flags.
    - UnknownFlagError: an option token that matches no spelling.
    - TypeError: tokens is a string or contains non-string items.
    """
    if isinstance(tokens, str) or not isinstance(tokens, Iterable):
        raise TypeError("resolve() argument must be an iterable of strings")
    tokens = deque(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("resolve() argument must be an iterable of strings")

    if not tokens:
        raise MissingArgumentsError(
            "no arguments were given",
            title="missing arguments",
            code=FaultCode.MISSING_ARGUMENTS,
            hint="pass at least one file path, or '--help' to see all options",
            docs=getdoc(FaultCode.MISSING_ARGUMENTS),
        )

    selected = set()
    index = 0
    while tokens and tokens[0].startswith("-"):
        token = tokens.popleft()
        index += 1

        if (option := lookup(token)) is None:
            suggestions = difflib.get_close_matches(token, _switches.keys(), 5)
            try:
                hint = "did you mean %r? you can also run with '--help' to see all options" % suggestions[0]
            except IndexError:
                hint = "run with '--help' to see all available options"
            raise UnknownFlagError(
                "unknown option %r at %s position" % (token, _ordinal(index)),
                title="unknown option",
                code=FaultCode.UNKNOWN_SWITCH,
                input=token,
                index=index,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.UNKNOWN_SWITCH),
            )

        if option is Option.HELP:
            return HelpRequested
        selected.add(option)

    if not tokens:
        raise MissingArgumentsError(
            "no file path was given after %s" % ("the option" if index == 1 else "the options"),
            title="missing arguments",
            code=FaultCode.MISSING_ARGUMENTS,
            hint="add at least one file path after the options",
            docs=getdoc(FaultCode.MISSING_ARGUMENTS),
        )

    return Invocation(selected, tokens)


def render_help(prog="linecat", /):
    """
    Build the help text: a usage header, then one aligned line per option.

    Each option line lists its spellings joined by ", ", padded to the widest
    spellings column plus a fixed margin, followed by the description.
    """
    columns = {option: ", ".join(option.names) for option in Option}
    width = max(map(len, columns.values())) + _MARGIN

    lines = [
        f"usage: {prog} [OPTION]... FILE...",
        "Concatenate FILE(s) to standard output.",
        "",
    ]
    lines.extend(f"  {columns[option]:<{width}}{option.descr}" for option in Option)
    return "\n".join(lines)


__all__ = (
    "Priority",
    "Descriptor",
    "Option",
    "Invocation",
    "HelpRequestedType",
    "HelpRequested",
    "lookup",
    "resolve",
    "render_help",
)
