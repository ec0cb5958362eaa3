"""
cmdkit command layer: named handlers over parsed arguments.

What this module provides
- Command: a name, an optional description and a handler
  (CommandArgs -> Result[None, str]).
- command(...): create a Command directly or as a decorator.
- invoke(obj, source): convenience runner for anything exposing __invoke__
  (Command, Terminal) or a plain callable.

Core ideas
- The handler is an opaque callable; it may close over and mutate external state.
  The command layer provides no isolation and performs no argument validation:
  handlers report bad input by returning Result.err(message).
- A handler must return a Result. Returning anything else (including None) is
  a programming mistake and raises TypeError; there is no implicit success.

Quick start
    from cmdkit import Result, command

    @command(descr="log one string")
    def log_str(args):
        print("Log string:", args[1])
        return Result.ok(None)

    log_str.invoke("log_str Hello_world!")
"""
import logging
import re

from .arguments import CommandArgs
from .results import Result
from .utils import *

logger = logging.getLogger(__name__)


def _sanitize_metadata(metadata, /):
    """
    Internal: validate and normalize command metadata in place.

    - name: non-empty string without whitespace (lookup is by the first
      whitespace-delimited token, so a name containing spaces could never match).
    - handler: callable.
    - descr: Unset or string; trimmed, defaults to "".
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError("command name must be a string")
    elif not (name := name.strip()):
        raise ValueError("command name cannot be empty")
    elif re.search(r"\s", name):
        raise ValueError(f"command name {name!r} cannot contain whitespace")
    metadata["name"] = name

    if not callable(metadata["handler"]):
        raise TypeError(f"command {name!r} handler must be callable")

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"command {name!r} 'descr' must be a string")
    metadata["descr"] = coalesce(descr, "").strip()


class Command:
    """
    Named handler bound to the line grammar of cmdkit.arguments.

    Properties (read-only)
    - name: str
    - descr: str ("" when not provided)
    - handler: the wrapped callable

    Invocation
    - invoke(CommandArgs) runs the handler directly.
    - invoke(str | Iterable[str]) parses first, then runs the handler.
    - calling the command object is the same as invoke().
    """

    __slots__ = ("_name", "_descr", "_handler")

    name = mirror("name")
    descr = mirror("descr")
    handler = mirror("handler")

    def __init__(self, name, handler, /, descr=Unset):
        metadata = {
            "name": name,
            "handler": handler,
            "descr": descr,
        }
        _sanitize_metadata(metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def invoke(self, source, /):
        """
        Run the handler against parsed arguments and return its Result.

        Raises
        - TypeError: when source cannot be parsed or the handler does not
          return a Result.
        """
        args = CommandArgs.parse(source)
        if not isinstance(result := self._handler(args), Result):
            raise TypeError(f"command {self._name!r} handler must return a Result, not {type(result).__name__!r}")
        logger.debug("command %r returned %r", self._name, result)
        return result

    __call__ = invoke

    def __invoke__(self, source, /):
        return self.invoke(source)

    def __repr__(self):
        return "command(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "name", self._name
        yield "descr", self._descr


def command(source=Unset, /, name=Unset, descr=Unset):
    """
    Create a Command or return a decorator that builds one.

    Invocation modes
    - Direct:     cmd = command(func, name="x", descr="...")
    - Decorator:  @command(name="x", descr="...")
                  def func(args): ...
    - Bare:       @command
                  def func(args): ...

    The command name defaults to the function's __name__.
    """
    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        return Command(coalesce(name, getattr(source, "__name__", Unset)), source, descr)

    return wrapper(source) if source is not Unset else wrapper


def invoke(object, source, /):
    """
    Convenience runner for commands, terminals and plain callables.

    Behavior
    - objects implementing __invoke__ (Command, Terminal) are invoked with source
      and their return value is passed back.
    - a plain callable is wrapped into a Command first; source[0] is then the
      command name as usual.

    Raises
    - TypeError: when object is neither invocable nor callable.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(source)

    if callable(object):
        return invoke(command(object), source)

    raise TypeError("invoke() first argument must implement __invoke__ method")


__all__ = (
    "Command",
    "command",
    "invoke",
)
