"""
linecat command layer: run the resolve → read → transform → write pipeline.

What this module provides
- Command: holds the runtime configuration of one program (name, shell/fancy/
  colorful rendering switches, trace, input encoding) and runs invocations.
- invoke(obj, prompt): convenience runner for anything exposing __invoke__.
- main(): console-script entry point; runs a shell-mode command on sys.argv.

Run contract
- prompt is Unset (sys.argv[1:]), a shell-like string (shlex.split), or an
  iterable of strings used as-is.
- on success the transformed text plus one trailing newline goes to stdout and
  the status is 0.
- on help the help text goes to stdout and the status is 1.
- faults go through Command.trigger: a registered fallback handles them, else
  shell mode prints them on stderr and exits with 1, else they are raised.

Quick start
    from linecat import Command, invoke

    cat = Command("cat", shell=True, colorful=True)

    if __name__ == "__main__":
        raise SystemExit(invoke(cat, "-n -E ./README.md"))
"""
import codecs
import os.path
import shlex
import sys
from collections import defaultdict
from collections.abc import Iterable

from rich.console import Console
from rich.pretty import pprint
from rich.text import Text

from .faults import *
from .files import concatenate
from .options import HelpRequested, render_help, resolve
from .transformer import transform
from .utils import *


def _sanitize_flag(cls, name, value, default=False):
    if not isinstance(value, bool | Unset):
        raise TypeError(f"{cls.__name__.lower()} {name!r} must be a boolean")
    return coalesce(value, default)


class Command:
    """
    One configured concatenation program.

    Properties (read-only)
    - name: program name for usage lines and fault headers. When not given it is
      taken from __main__.__prog__ or the basename of sys.argv[0] at render time.
    - shell: print faults and exit instead of raising them.
    - fancy: draw a panel around faults.
    - colorful: style help and faults.
    - trace: pretty-print the resolved invocation on stderr after the output.
    - encoding: text encoding used to read input files.
    """
    __introspectable__ = ("name", "shell", "fancy", "colorful", "trace", "encoding")

    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    trace = mirror("trace")
    encoding = mirror("encoding")

    def __init__(
            self,
            name=Unset,
            /,
            *,
            shell=Unset,
            fancy=Unset,
            colorful=Unset,
            trace=Unset,
            encoding=Unset
    ):
        if not isinstance(name, str | Unset):
            raise TypeError("command 'name' must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError("command 'name' cannot be empty")

        if not isinstance(encoding, str | Unset):
            raise TypeError("command 'encoding' must be a string")
        try:
            encoding = codecs.lookup(coalesce(encoding, "utf-8")).name
        except LookupError:
            raise ValueError(f"command 'encoding' {encoding!r} is not a known text encoding") from None

        self._name = name
        self._shell = _sanitize_flag(type(self), "shell", shell)
        self._fancy = _sanitize_flag(type(self), "fancy", fancy)
        self._colorful = _sanitize_flag(type(self), "colorful", colorful)
        self._trace = _sanitize_flag(type(self), "trace", trace)
        self._encoding = encoding
        self._fallback = Unset

    @property
    def name(self):
        return coalesce(
            self._name,
            getattr(__import__("__main__"), "__prog__", os.path.basename(sys.argv[0]) or "linecat"),
        )

    def __repr__(self):
        return f"{type(self).__name__}({', '.join('%s=%r' % pair for pair in self.__rich_repr__())})"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def fallback(self, fallback, /):
        """
        Register a callable that receives every fault instead of the default
        shell/raise dispatch. Usable as a decorator; returns the callable.
        """
        if not callable(fallback):
            raise TypeError("fallback() argument must be callable")
        self._fallback = fallback
        return fallback

    def trigger(self, fault, /, **options):
        """
        Fill in this command's runtime options and surface the fault.
        """
        if (
                not hasattr(fault, "__trigger__") or
                not callable(fault.__trigger__) or
                not hasattr(fault, "__replace__") or
                not callable(fault.__replace__)
        ):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        options |= {"tool": self, "shell": self.shell, "fancy": self.fancy, "colorful": self.colorful}
        if self._fallback:
            return self._fallback(fault.__replace__(**options))
        trigger(fault, **options)

    def _helper(self):
        """
        Render the help text on stdout.

        Palette keys (override through __main__.__styles__)
        - usage-label, switch-name
        """
        console = Console(highlight=False, soft_wrap=True)
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # cyan headline
            "switch-name": "bold #22C55E",  # green spellings
        } | getattr(__import__("__main__"), "__styles__", {}))

        help = Text(render_help(self.name))
        if self.colorful:
            help.stylize(styles["usage-label"], 0, len("usage"))
            help.highlight_regex(r"(?<=[ ,])--?[^\W\d_][\w-]*(?=,|  )", styles["switch-name"])
        console.print(help)

    def _tracer(self, invocation):
        pprint(invocation, console=Console(stderr=True), expand_all=True)

    def __invoke__(self, prompt=Unset):
        """
        Run one invocation and return its exit status.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; will be split via shlex.split.
          • Iterable[str]: pre-tokenized sequence used as-is.

        Raises
        - TypeError: when prompt is not Unset/str/Iterable[str].
        - CommandException: when shell mode is off and no fallback is registered.
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("__invoke__() argument must be a string or an iterable of strings")
        else:
            raise TypeError("__invoke__() argument must be a string or an iterable of strings")

        try:
            invocation = resolve(tokens)
            if invocation is HelpRequested:
                self._helper()
                return 1
            text = concatenate(invocation.paths, encoding=self.encoding)
        except CommandException as fault:
            self.trigger(fault)
            return 1

        sys.stdout.write(transform(text, invocation.options) + "\n")
        sys.stdout.flush()
        if self.trace:
            self._tracer(invocation)
        return 0


def invoke(object, prompt=Unset, /):
    """
    Run object with prompt and return the exit status.

    - object must implement __invoke__(prompt).
    - prompt: Unset (sys.argv[1:]), str (shlex.split) or Iterable[str].
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


def main():
    """
    Console-script entry point: run a shell-mode command on sys.argv.
    """
    sys.exit(invoke(Command(shell=True)))


__all__ = (
    "Command",
    "invoke",
    "main",
)
