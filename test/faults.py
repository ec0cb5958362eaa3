"""
Faults module behavioral tests (codes, rendering, triggering, host hooks).

Scope
- Validate fault defaults per subclass (title, code) and option merging.
- Validate rendering (plain and fancy) without colors.
- Validate trigger(): raise outside shell, print in deferred shell mode, exit otherwise.
- Validate __main__ hooks (__codes__, __docs__, __prog__).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from rich.console import Console

from cmdkit.faults import (
    CommandNotFoundError,
    DelegatedCommandError,
    Fault,
    FaultCode,
    InvalidAccessError,
    console,
    getdoc,
    trigger,
)


def _render(renderable):
    output = Console(color_system=None, force_terminal=False, width=100)
    with output.capture() as capture:
        output.print(renderable)
    return capture.get()


class TestFaultShape(TestCase):
    """Defaults and option handling."""

    def testSubclassDefaults(self):
        self.assertIs(InvalidAccessError("x").options["code"], FaultCode.INVALID_ACCESS)
        self.assertIs(CommandNotFoundError("x").options["code"], FaultCode.UNKNOWN_COMMAND)
        self.assertIs(DelegatedCommandError("x").options["code"], FaultCode.DELEGATED_ERROR)

    def testFaultClassesAreDistinct(self):
        self.assertFalse(issubclass(InvalidAccessError, CommandNotFoundError))
        self.assertFalse(issubclass(CommandNotFoundError, InvalidAccessError))
        self.assertTrue(issubclass(CommandNotFoundError, LookupError))

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            Fault("x").options["shell"] = True  # type: ignore[index]

    def testStrIsMessage(self):
        self.assertEqual(str(Fault("boom")), "boom")
        self.assertEqual(str(Fault()), "")

    def testReplaceKeepsMessageAndMergesOptions(self):
        fault = CommandNotFoundError("missing", prog="demo")
        replaced = copy.replace(fault, fancy=True)
        self.assertIsInstance(replaced, CommandNotFoundError)
        self.assertEqual(replaced.message, "missing")
        self.assertTrue(replaced.options["fancy"])
        self.assertEqual(replaced.options["prog"], "demo")
        self.assertFalse(fault.options["fancy"])


class TestFaultRendering(TestCase):
    """rich rendering."""

    def testPlainRendering(self):
        output = _render(CommandNotFoundError("command 'x' is not registered", prog="demo", hint="run 'help'"))
        self.assertIn("[ demo — 11101 | Unknown Command ]", output)
        self.assertIn("command 'x' is not registered", output)
        self.assertIn("→ run 'help'", output)

    def testFancyRenderingUsesPanel(self):
        output = _render(InvalidAccessError("unwrap called on an error Result", fancy=True))
        self.assertIn("Invalid Access", output)
        self.assertIn("unwrap called on an error Result", output)

    def testHostCodeLabels(self):
        main = __import__("__main__")
        main.__codes__ = {FaultCode.UNKNOWN_COMMAND: "E-ROUTE"}
        self.addCleanup(delattr, main, "__codes__")
        self.assertEqual(FaultCode.UNKNOWN_COMMAND.normalize(), "E-ROUTE")
        self.assertEqual(FaultCode.INVALID_ACCESS.normalize(), "13101")

    def testHostProgName(self):
        main = __import__("__main__")
        main.__prog__ = "mytool"
        self.addCleanup(delattr, main, "__prog__")
        self.assertIn("[ mytool —", _render(Fault("x", prog="demo")))


class TestTrigger(TestCase):
    """trigger() surfacing policy."""

    def testRaisesOutsideShell(self):
        with self.assertRaises(CommandNotFoundError) as context:
            trigger(CommandNotFoundError("missing"), prog="demo")
        self.assertEqual(context.exception.options["prog"], "demo")

    def testPrintsInDeferredShell(self):
        with console.capture() as capture:
            trigger(DelegatedCommandError("handler said no"), shell=True, deferred=True)
        self.assertIn("handler said no", capture.get())

    def testExitsInShell(self):
        with console.capture():
            with self.assertRaises(SystemExit) as context:
                trigger(DelegatedCommandError("fatal"), shell=True)
        self.assertEqual(context.exception.code, 1)

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


class TestGetdoc(TestCase):
    """getdoc() host lookup."""

    def testMissingDocIsNone(self):
        self.assertIsNone(getdoc(FaultCode.INVALID_ACCESS))

    def testHostDocs(self):
        main = __import__("__main__")
        main.__docs__ = {FaultCode.INVALID_ACCESS: "see the Result docs"}
        self.addCleanup(delattr, main, "__docs__")
        self.assertEqual(getdoc(FaultCode.INVALID_ACCESS), "see the Result docs")

    def testRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(11101)


if __name__ == "__main__":
    unittest.main()
