r"""
cmdkit argument bundles and the line grammar.

Overview
- tokenize(line): split a raw line on runs of ASCII whitespace (no quoting, no escaping).
- parse(source) / CommandArgs.parse(source): classify tokens into a CommandArgs bundle.
- CommandArgs: positional tokens, presence flags and key/value options of one line.

Grammar (applied left to right)
- A token is a marker only when it starts with "--" AND the line has more than
  two tokens. "cmd --able" therefore keeps "--able" positional; this threshold
  keeps a bare command name or a command plus one argument from ever being
  read as switches.
- For a marker, the key is the token without its "--" prefix, and
  • the marker is the last token, or the next token is itself a marker
    (starts with "--" and is longer than two characters) → key is a flag;
  • otherwise the next token is consumed as the value → options[key] = value.
- Every other token is positional, in order of appearance.

Notes
- Parsing never fails for str/iterable-of-str input; a marker without a value
  always lands in the flag branch, so there is no unparseable state.
- positional[0] is the command name; handler arguments start at index 1.
- Repeated option keys keep the last value.

Quick example
    >>> args = parse("string_str Hello World --able --divide ->")
    >>> args.positional, args.has_flag("able"), args.get_option("divide", "-")
    (['string_str', 'Hello', 'World'], True, '->')
"""
import re
from collections.abc import Iterable
from types import MappingProxyType

from .utils import *

_separators = re.compile(r"[ \t\n\v\f\r]+")


def tokenize(line, /):
    """
    Split a raw line into whitespace-delimited tokens.

    Only ASCII whitespace (space, tab, newline, vertical tab, form feed,
    carriage return) separates tokens; other Unicode spaces and control
    characters stay inside the token. Empty or blank input yields an empty list.
    """
    if not isinstance(line, str):
        raise TypeError("tokenize() argument must be a string")
    return [token for token in _separators.split(line) if token]


def _marker(token):
    return token.startswith("--")


def _lookahead(token):
    # A value that merely starts with "--" (i.e. "--" itself) is still consumed as a value.
    return len(token) > 2 and _marker(token)


class CommandArgs:
    """
    Structured arguments of one command line.

    Properties (read-only, detached copies)
    - positional: list[str], index 0 is the command name.
    - flags: set[str], presence-only switches.
    - options: dict[str, str], key/value switches.

    Instances are produced by parse() and never change afterwards.
    """

    __slots__ = ("_positional", "_flags", "_options")

    positional = mirror("positional")
    flags = mirror("flags")
    options = mirror("options")

    def __init__(self, positional=(), flags=(), options=Unset, /):
        if isinstance(positional, str):
            raise TypeError("CommandArgs positional must be an iterable of strings")
        positional = tuple(positional)
        if not all(isinstance(x, str) for x in positional):
            raise TypeError("CommandArgs positional must be an iterable of strings")
        if isinstance(flags, str):
            raise TypeError("CommandArgs flags must be an iterable of strings")
        flags = frozenset(flags)
        if not all(isinstance(x, str) for x in flags):
            raise TypeError("CommandArgs flags must be an iterable of strings")
        options = dict(coalesce(options, {}))
        if not all(isinstance(x, str) for x in (*options.keys(), *options.values())):
            raise TypeError("CommandArgs options must map strings to strings")
        self._positional = positional
        self._flags = flags
        self._options = MappingProxyType(options)

    @classmethod
    def parse(cls, source, /):
        """
        Build a CommandArgs from a raw line or a pre-tokenized sequence.

        Parameters
        - source:
          • str: tokenized with tokenize().
          • Iterable[str]: used as-is; every element must be a string.
          • CommandArgs: returned unchanged.

        Raises
        - TypeError: for any other input, or non-string elements.
        """
        if isinstance(source, CommandArgs):
            return source
        if isinstance(source, str):
            tokens = tokenize(source)
        elif isinstance(source, Iterable):
            tokens = list(source)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        positional = []
        flags = set()
        options = {}

        gated = len(tokens) > 2
        index = 0
        while index < len(tokens):
            token = tokens[index]
            if gated and _marker(token):
                key = token[2:]
                if index == len(tokens) - 1 or _lookahead(tokens[index + 1]):
                    flags.add(key)
                else:
                    options[key] = tokens[index := index + 1]
            else:
                positional.append(token)
            index += 1

        return cls(positional, flags, options)

    def get_option(self, key, default="", /):
        """
        Return the value recorded for key, or default when absent.
        """
        return self._options.get(key, default)

    def has_flag(self, name, /):
        return name in self._flags

    def __getitem__(self, index):
        return self._positional[index]

    def __len__(self):
        return len(self._positional)

    def __eq__(self, other):
        if not isinstance(other, CommandArgs):
            return NotImplemented
        return (
            self._positional == other._positional and
            self._flags == other._flags and
            self._options == other._options
        )

    __hash__ = None

    def __repr__(self):
        return "command-args(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "positional", self.positional
        yield "flags", sorted(self._flags)
        yield "options", self.options


def parse(source, /):
    """
    Module-level shortcut for CommandArgs.parse(source).
    """
    return CommandArgs.parse(source)


__all__ = (
    "CommandArgs",
    "parse",
    "tokenize",
)
