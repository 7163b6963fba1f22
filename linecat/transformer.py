"""
linecat line transformer.

transform(text, options) applies each option's rule, in the given order, to the
whole buffered text; every rule receives the output of the previous one.

Line model
- lines are split on "\\n" only; a "\\r" right before a "\\n" goes with the terminator.
- a final terminator does not open an extra empty line, and empty text has no lines.
- rules that work per line rebuild the text with a "\\n" after every line, so the
  original terminator style and a missing final newline are not preserved.

Rules
- SHOW_TABS:       every TAB becomes "^I" (plain substring replacement).
- SHOW_ENDS:       "$" is appended to every line.
- NUMBER:          every line is prefixed with "<n> "; skipped entirely when
                   NUMBER_NONBLANK is active too.
- NUMBER_NONBLANK: non-empty lines are prefixed with "<n> " where n counts only
                   non-empty lines; empty lines are padded with spaces as wide as
                   the widest prefix issued so far.
- HELP:            no-op (help never reaches the transformer in a normal run).
"""
from types import MappingProxyType

from .options import Option


def split(text, /):
    """
    Split text into lines without terminators.
    """
    lines = text.split("\n")
    tail = lines.pop()
    lines = [line.removesuffix("\r") for line in lines]
    if tail:
        lines.append(tail)
    return lines


def join(lines, /):
    return "".join(line + "\n" for line in lines)


def _show_tabs(text, options, /):
    return text.replace("\t", "^I")


def _show_ends(text, options, /):
    return join(line + "$" for line in split(text))


def _number(text, options, /):
    # NUMBER_NONBLANK ranks higher and owns the numbering
    if Option.NUMBER_NONBLANK in options:
        return text
    return join(f"{index} {line}" for index, line in enumerate(split(text), 1))


def _number_nonblank(text, options, /):
    counter = 0
    lines = []
    for line in split(text):
        if line:
            counter += 1
            lines.append(f"{counter} {line}")
        else:
            lines.append(" " * (len(str(max(counter, 1))) + 1))
    return join(lines)


def _noop(text, options, /):
    return text


_rules = MappingProxyType({
    Option.SHOW_TABS: _show_tabs,
    Option.SHOW_ENDS: _show_ends,
    Option.NUMBER: _number,
    Option.NUMBER_NONBLANK: _number_nonblank,
    Option.HELP: _noop,
})

if set(Option) - _rules.keys():
    raise TypeError("every option must have a transformation rule")


def transform(text, options=(), /):
    """
    Apply options, in order, to text and return the transformed text.

    Parameters
    - text: str, the concatenated input.
    - options: iterable of Option, normally Invocation.options (already ordered
      by priority rank).

    Raises
    - TypeError: text is not a string or an item is not an Option.
    """
    if not isinstance(text, str):
        raise TypeError("transform() first argument must be a string")
    options = tuple(options)
    for option in options:
        try:
            rule = _rules[option]
        except (KeyError, TypeError):
            raise TypeError("transform() options must be Option members") from None
        text = rule(text, options)
    return text


__all__ = (
    "split",
    "join",
    "transform",
)
