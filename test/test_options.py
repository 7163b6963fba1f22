# python
"""
Options module behavioral tests (flag table, resolution, help text).

Scope
- Validate the descriptor table: spellings, descriptions, priority ranks, validation.
- Validate resolve(): ordering, deduplication, stop-at-first-path, help and fault outcomes.
- Validate Invocation immutability and value semantics.
- Validate the help text layout.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (resolve, lookup, Option, Invocation, HelpRequested, render_help).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from linecat import (
    Option,
    Priority,
    Invocation,
    HelpRequested,
    HelpRequestedType,
    lookup,
    resolve,
    render_help,
)
from linecat.faults import FaultCode, MissingArgumentsError, UnknownFlagError
from linecat.options import _descriptors, _sanitize_switches, Descriptor


class TestOptionTable(TestCase):
    """Behavioral tests for the static option descriptors."""

    def testEverySpellingIsRecognized(self):
        expected = {
            "-b": Option.NUMBER_NONBLANK, "--number-nonblank": Option.NUMBER_NONBLANK,
            "-E": Option.SHOW_ENDS, "--show-ends": Option.SHOW_ENDS,
            "-n": Option.NUMBER, "--number": Option.NUMBER,
            "-T": Option.SHOW_TABS, "--show-tabs": Option.SHOW_TABS,
            "-h": Option.HELP, "--help": Option.HELP,
        }
        for token, option in expected.items():
            self.assertIs(lookup(token), option)

    def testLookupIsExactAndCaseSensitive(self):
        for token in ("-e", "-t", "-N", "--num", "--Number", "-En", "--show-ends=1", "-", "--"):
            self.assertIsNone(lookup(token))

    def testNumberNonblankOutranksNumber(self):
        self.assertGreater(Option.NUMBER_NONBLANK.priority, Option.NUMBER.priority)
        self.assertEqual(Option.NUMBER.priority, Priority.MIDDLE)
        self.assertEqual(Option.SHOW_ENDS.priority, Priority.LOW)

    def testDescriptorIsStaticRecord(self):
        self.assertIs(Option.NUMBER.descriptor, Option.NUMBER.descriptor)
        self.assertEqual(Option.SHOW_TABS.names, ("-T", "--show-tabs"))
        self.assertEqual(Option.SHOW_TABS.descr, "display TAB characters as ^I")

    def testDescriptorTableIsReadOnly(self):
        with self.assertRaises(TypeError):
            _descriptors[Option.NUMBER] = Descriptor(("-n",), "x", Priority.LOW)  # type: ignore[index]

    def testDuplicateSpellingsRejected(self):
        table = dict(_descriptors)
        table[Option.NUMBER] = Descriptor(("-b", "--number"), "number all output lines", Priority.MIDDLE)
        with self.assertRaises(ValueError):
            _sanitize_switches(table)

    def testInvalidSpellingRejected(self):
        table = dict(_descriptors)
        table[Option.NUMBER] = Descriptor(("-n", "--num_ber"), "number all output lines", Priority.MIDDLE)
        with self.assertRaises(ValueError):
            _sanitize_switches(table)

    def testMissingDescriptorRejected(self):
        table = dict(_descriptors)
        del table[Option.HELP]
        with self.assertRaises(TypeError):
            _sanitize_switches(table)


class TestResolve(TestCase):
    """Behavioral tests for resolve()."""

    def testInputOrderDoesNotMatter(self):
        self.assertEqual(resolve(["-n", "-b", "f"]), resolve(["-b", "-n", "f"]))
        self.assertEqual(resolve(["-n", "-b", "f"]).options, (Option.NUMBER, Option.NUMBER_NONBLANK))

    def testOptionsSortedByRank(self):
        invocation = resolve(["-b", "-T", "--number", "-E", "f"])
        self.assertEqual(
            invocation.options,
            (Option.SHOW_ENDS, Option.SHOW_TABS, Option.NUMBER, Option.NUMBER_NONBLANK),
        )

    def testRepeatedFlagsCollapse(self):
        invocation = resolve(["-n", "--number", "-n", "f"])
        self.assertEqual(invocation.options, (Option.NUMBER,))

    def testNoFlagsMeansNoOptions(self):
        invocation = resolve(["a.txt"])
        self.assertEqual(invocation.options, ())
        self.assertEqual(invocation.paths, ("a.txt",))

    def testPathsKeepOrderAndRepeats(self):
        invocation = resolve(["-E", "b.txt", "a.txt", "b.txt"])
        self.assertEqual(invocation.paths, ("b.txt", "a.txt", "b.txt"))

    def testFlagsAfterFirstPathAreLiteralPaths(self):
        invocation = resolve(["-n", "a.txt", "-E", "--help", "-z"])
        self.assertEqual(invocation.options, (Option.NUMBER,))
        self.assertEqual(invocation.paths, ("a.txt", "-E", "--help", "-z"))

    def testHelpShortCircuits(self):
        self.assertIs(resolve(["-h"]), HelpRequested)
        self.assertIs(resolve(["-n", "--help", "a.txt"]), HelpRequested)

    def testHelpBeforeUnknownFlagWins(self):
        self.assertIs(resolve(["--help", "-z"]), HelpRequested)

    def testUnknownFlagBeforeHelpWins(self):
        with self.assertRaises(UnknownFlagError):
            resolve(["-z", "--help"])

    def testUnknownFlagRaises(self):
        with self.assertRaises(UnknownFlagError) as context:
            resolve(["-n", "-z", "a.txt"])
        fault = context.exception
        self.assertEqual(fault.options["input"], "-z")
        self.assertEqual(fault.options["index"], 2)
        self.assertIs(fault.options["code"], FaultCode.UNKNOWN_SWITCH)
        self.assertIn("'-z'", fault.message)
        self.assertIn("second position", fault.message)

    def testUnknownFlagSuggestsCloseSpelling(self):
        with self.assertRaises(UnknownFlagError) as context:
            resolve(["--numbr", "a.txt"])
        self.assertIn("--number", context.exception.options["suggestions"])
        self.assertIn("did you mean '--number'", context.exception.options["hint"])

    def testCombinedShortFlagsAreUnknown(self):
        with self.assertRaises(UnknownFlagError):
            resolve(["-En", "a.txt"])

    def testNoTokensIsMissingArguments(self):
        with self.assertRaises(MissingArgumentsError) as context:
            resolve([])
        self.assertIs(context.exception.options["code"], FaultCode.MISSING_ARGUMENTS)

    def testFlagsWithoutPathsIsMissingArguments(self):
        with self.assertRaises(MissingArgumentsError):
            resolve(["-n", "-E"])

    def testRejectsStringAndNonStringTokens(self):
        with self.assertRaises(TypeError):
            resolve("-n a.txt")
        with self.assertRaises(TypeError):
            resolve(["-n", 1])

    def testAcceptsAnyIterable(self):
        invocation = resolve(token for token in ("-T", "a.txt"))
        self.assertEqual(invocation.options, (Option.SHOW_TABS,))


class TestInvocation(TestCase):
    """Behavioral tests for Invocation and HelpRequested."""

    def testFieldsAreReadOnly(self):
        invocation = Invocation([Option.NUMBER], ["a.txt"])
        with self.assertRaises(AttributeError):
            invocation.options = ()  # type: ignore[misc]
        with self.assertRaises(AttributeError):
            invocation._paths = ()

    def testConstructorOrdersAndDeduplicates(self):
        invocation = Invocation([Option.NUMBER_NONBLANK, Option.SHOW_TABS, Option.NUMBER_NONBLANK], ["a"])
        self.assertEqual(invocation.options, (Option.SHOW_TABS, Option.NUMBER_NONBLANK))

    def testValueEquality(self):
        self.assertEqual(Invocation([Option.NUMBER], ["a"]), Invocation([Option.NUMBER], ["a"]))
        self.assertNotEqual(Invocation([Option.NUMBER], ["a"]), Invocation([Option.NUMBER], ["b"]))
        self.assertEqual(len({Invocation([], ["a"]), Invocation([], ["a"])}), 1)

    def testRejectsForeignMembers(self):
        with self.assertRaises(TypeError):
            Invocation(["-n"], ["a"])
        with self.assertRaises(TypeError):
            Invocation([], "a.txt")

    def testRepr(self):
        text = repr(Invocation([Option.NUMBER], ["a.txt"]))
        self.assertEqual(text, "Invocation(options=(<Option.NUMBER>,), paths=('a.txt',))")

    def testHelpRequestedIsSingleton(self):
        self.assertIs(HelpRequestedType(), HelpRequested)
        self.assertEqual(repr(HelpRequested), "HelpRequested")
        with self.assertRaises(TypeError):
            class Sub(HelpRequestedType):  # NOQA: F-841
                pass


class TestHelpText(TestCase):
    """Behavioral tests for render_help()."""

    def testHeader(self):
        lines = render_help("cat").splitlines()
        self.assertEqual(lines[0], "usage: cat [OPTION]... FILE...")
        self.assertEqual(lines[2], "")

    def testOneLinePerOptionInEnumerationOrder(self):
        lines = render_help("cat").splitlines()[3:]
        self.assertEqual(len(lines), len(Option))
        for line, option in zip(lines, Option):
            self.assertTrue(line.startswith("  " + ", ".join(option.names) + " "))
            self.assertTrue(line.endswith(option.descr))

    def testDescriptionsAreAligned(self):
        lines = render_help("cat").splitlines()[3:]
        columns = {line.index(option.descr) for line, option in zip(lines, Option)}
        self.assertEqual(columns, {2 + len("-b, --number-nonblank") + 10})

    def testExactLine(self):
        lines = render_help("cat").splitlines()
        self.assertEqual(lines[3], "  -b, --number-nonblank" + " " * 10 + "number nonblank output lines")


if __name__ == "__main__":
    unittest.main()
