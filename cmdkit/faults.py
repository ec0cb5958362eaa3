"""
cmdkit faults (raised and rendered errors).

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the package
  can surface. Codes are grouped by domain so logs stay searchable.
- Fault: base exception carrying a message + options; knows how to render itself
  through rich and how to surface itself (raise or print) via trigger().
- InvalidAccessError: unwrap()/unwrap_err() called on the wrong Result variant.
  A programmer fault; always raised, never converted into an Err value.
- CommandNotFoundError: dispatch could not resolve a command name and no
  fallback was supplied.
- DelegatedCommandError: a handler returned an Err; only used to display the
  domain error in interactive loops, never raised by dispatch itself.

Host configuration (read from __main__ when present)
- __prog__: program label shown in fault headers.
- __styles__: style overrides merged over the defaults below.
- __codes__: FaultCode → label mapping used by FaultCode.normalize().
- __docs__: FaultCode → documentation string used by getdoc().
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

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (111xx)
      • UNKNOWN_COMMAND
    - delegated handler errors (1113x)
      • DELEGATED_ERROR
    - result access (131xx)
      • INVALID_ACCESS
    """
    # --- routing errors (111xx) ---
    UNKNOWN_COMMAND             = 11101

    # --- delegated errors (1113x) ---
    DELEGATED_ERROR             = 11131

    # --- result access errors (131xx) ---
    INVALID_ACCESS              = 13101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


_defaults = MappingProxyType({
    "title": "fault",
    "hint": "",
    "prog": "cmdkit",
    "shell": False,
    "fancy": False,
    "colorful": True,
    "deferred": False,
})


class Fault(Exception):
    """
    Base fault: a message plus read-only rendering/surfacing options.

    Options (all optional, see _defaults)
    - title, code, hint, prog: header/body copy.
    - shell: render instead of raising when triggered.
    - fancy: wrap the rendering in a panel.
    - colorful: apply styles.
    - deferred: in shell mode, keep running after rendering.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(_defaults | options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "fault-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "fault-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if self.options["colorful"] else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options["prog"]), styler("prog-name"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code is not None else "-", styler("code")),
            " | ",
            text(self.options["title"].title(), styler("fault-title")),
            " ]"
        )
        message = text(str(self), styler("fault-message"))

        parts = [message]
        if self.options["hint"]:
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint"))))

        if self.options["fancy"]:
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __trigger__(self):
        if not self.options["shell"]:
            raise self from None
        console.print(self)
        if self.options["deferred"]:
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidAccessError(Fault):
    """
    unwrap()/unwrap_err() was called on the wrong Result variant.
    """

    def __init__(self, message=Unset, /, **options):
        super().__init__(message, **{
            "title": "invalid access",
            "code": FaultCode.INVALID_ACCESS,
            "hint": "check is_ok()/is_err() first, or use unwrap_or()/match()",
        } | options)


class CommandNotFoundError(Fault, LookupError):
    """
    A command name could not be resolved and no fallback was supplied.
    """

    def __init__(self, message=Unset, /, **options):
        super().__init__(message, **{
            "title": "unknown command",
            "code": FaultCode.UNKNOWN_COMMAND,
        } | options)


class DelegatedCommandError(Fault):
    """
    Display wrapper for an Err value returned by a command handler.
    """

    def __init__(self, message=Unset, /, **options):
        super().__init__(message, **{
            "title": "command failed",
            "code": FaultCode.DELEGATED_ERROR,
        } | options)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see Fault).
    - options are merged into a copy of the fault via copy.replace() before
      triggering; the original fault is left untouched.
    - in shell mode the fault is rendered on the stderr console; otherwise it
      is raised.
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
    optional documentation lookup for a fault code.

    the host application may expose a __docs__ mapping in __main__; missing
    entries yield None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "Fault",
    "InvalidAccessError",
    "CommandNotFoundError",
    "DelegatedCommandError",
    "FaultCode",
    "trigger",
    "getdoc",
)
