"""
cmdkit terminal: a name-keyed command registry with line dispatch.

What this module provides
- Terminal: registers Commands and dispatches raw lines (or parsed CommandArgs)
  to them by the first positional token.
  • register(cmd, name=...): insert or overwrite (last registration wins).
  • command(...): decorator that builds and registers in one step.
  • dispatch(source, fallback=...): resolve and invoke, or fall back.
  • help(): rich table of the registered commands.
  • loop(stream): read-dispatch loop for interactive tools.

Dispatch contract
- Lookup is exact string equality on positional[0]; no prefix matching, no
  case folding. An empty line has no command name and always misses.
- Found: the handler runs and its Result is returned to the caller untouched.
- Missing with fallback: fallback() runs exactly once, None is returned and the
  table is not modified.
- Missing without fallback: CommandNotFoundError is raised. Lookup failures and
  handler failures (Err results) are different error classes.

Threading
- Everything runs synchronously on the caller's thread. The table is not
  synchronized: serialize register()/dispatch() externally when a Terminal is
  shared across threads. A handler that never returns blocks dispatch forever.
"""
import logging
import operator

from rich.box import ROUNDED
from rich.table import Table
from rich.text import Text

from .arguments import CommandArgs
from .commands import Command, command
from .faults import *
from .faults import console
from .results import Result
from .utils import *

logger = logging.getLogger(__name__)


class Terminal:
    """
    Command registry and dispatcher.

    Parameters
    - name: program label used in rendered faults and the help title
      (defaults to "terminal").
    - shell: inside loop(), render faults raised by handlers (e.g. an
      InvalidAccessError from a bad unwrap) and keep reading instead of
      propagating them.
    - fancy: wrap rendered faults and the help table in panels/boxes.
    - colorful: apply styles when rendering.
    - helper: register help() as the "help" command.
    """

    name = mirror("name")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(self, name=Unset, /, *, shell=False, fancy=False, colorful=True, helper=False):
        if not isinstance(name := coalesce(name, "terminal"), str):
            raise TypeError("terminal name must be a string")
        elif not (name := name.strip()):
            raise ValueError("terminal name cannot be empty")
        self._name = name
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._commands = {}

        if helper:
            @self.command(name="help", descr="list the available commands")
            def listing(args, /):
                self.help()
                return Result.ok(None)

    @property
    def commands(self):
        """
        Snapshot of the command table (name → Command), in registration order.
        """
        return dict(self._commands)

    @property
    def names(self):
        return sorted(self._commands)

    def __contains__(self, name):
        return name in self._commands

    def __len__(self):
        return len(self._commands)

    def register(self, command, /, name=Unset):
        """
        Insert command into the table, keyed by its name or by an explicit name.

        An existing entry under the same key is overwritten.

        Returns
        - the registered command (decorator friendly).
        """
        if not isinstance(command, Command):
            raise TypeError("register() argument must be a command")
        if not isinstance(name := coalesce(name, command.name), str):
            raise TypeError("register() name must be a string")
        elif not (name := name.strip()) or len(name.split()) != 1:
            raise ValueError(f"register() name {name!r} must be a single non-empty token")

        if name in self._commands:
            logger.debug("%s: overriding command %r", self._name, name)
        self._commands[name] = command
        logger.debug("%s: registered command %r", self._name, name)
        return command

    def command(self, source=Unset, /, name=Unset, descr=Unset):
        """
        Build a Command with cmdkit.commands.command(...) and register it.

        Supports the same direct/decorator/bare modes as command(...).
        """
        @rename("command")
        def wrapper(source, /):
            return self.register(command(source, name=name, descr=descr))

        return wrapper(source) if source is not Unset else wrapper

    def dispatch(self, source, /, fallback=Unset):
        """
        Resolve source to a registered command and invoke it.

        Parameters
        - source: str | Iterable[str] | CommandArgs
        - fallback: zero-argument callable run when the name is not registered.

        Returns
        - the handler's Result when found; None when the fallback ran.

        Raises
        - CommandNotFoundError: the name is not registered and no fallback was given.
        - TypeError: fallback is not callable, or the handler misbehaves.
        """
        if fallback is not Unset and not callable(fallback):
            raise TypeError("dispatch() fallback must be callable")

        args = CommandArgs.parse(source)
        name = args[0] if len(args) else ""

        if (target := self._commands.get(name)) is not None:
            logger.debug("%s: dispatching %r", self._name, name)
            return target.invoke(args)

        logger.debug("%s: command %r not found", self._name, name)
        if fallback is not Unset:
            fallback()
            return None
        raise CommandNotFoundError(
            f"command {name!r} is not registered" if name else "no command name was given",
            prog=self._name,
            hint="run 'help' to list the available commands" if "help" in self._commands else "",
        )

    __invoke__ = dispatch

    def help(self):
        """
        Print the registered commands, sorted by name, on the console.
        """
        table = Table(
            title=Text(self._name.upper(), style="bold #E6E6F0" if self._colorful else ""),
            title_justify="left",
            show_header=False,
            show_edge=self._fancy,
            box=ROUNDED if self._fancy else None,
        )
        table.add_column("name", style="bold #00E5FF" if self._colorful else "", no_wrap=True)
        table.add_column("descr", style="#C8C8D0" if self._colorful else "")

        for name, target in sorted(self._commands.items(), key=operator.itemgetter(0)):
            table.add_row(name, target.descr)

        console.print(table)

    def loop(self, stream=Unset, /, *, prompt="> "):
        """
        Read lines and dispatch them until the input is exhausted.

        Parameters
        - stream: iterable of lines (e.g., a file); when Unset, lines are read
          from the console with the given prompt until EOF or Ctrl-C.
        - prompt: console prompt (ignored when stream is given).

        Behavior
        - blank lines are skipped.
        - unknown commands and Err results are rendered on the console through
          the fault renderer and never stop the loop.
        - faults raised by handlers propagate, unless the terminal runs in
          shell mode, where they are rendered as well.
        """
        for line in self._lines(stream, prompt):
            if not line.strip():
                continue
            args = CommandArgs.parse(line)
            try:
                result = self.dispatch(args, fallback=lambda: self._report(CommandNotFoundError(
                    f"command {args[0]!r} is not registered",
                    hint="run 'help' to list the available commands" if "help" in self._commands else "",
                )))
            except Fault as fault:
                if not self._shell:
                    raise
                self._report(fault)
                continue
            if result is not None and result.is_err():
                self._report(DelegatedCommandError(str(result.unwrap_err())))

    def _lines(self, stream, prompt):
        if stream is not Unset:
            yield from stream
            return
        while True:
            try:
                yield console.input(prompt)
            except (EOFError, KeyboardInterrupt):
                return

    def _report(self, fault):
        trigger(fault, prog=self._name, shell=True, deferred=True, fancy=self._fancy, colorful=self._colorful)

    def __repr__(self):
        return "terminal(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "name", self._name
        yield "commands", self.names
        yield "shell", self._shell
        yield "fancy", self._fancy
        yield "colorful", self._colorful


__all__ = (
    "Terminal",
)
