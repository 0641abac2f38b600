"""
Option declaration and registry tests.

Scope
- Validate OptionSpec construction: identities, value modes, types, patterns.
- Validate Registry ordering, declaration strings, lookups and duplicate warnings.

Conventions
- Test method names follow CamelCase per project convention.
"""
import re
import unittest
import warnings
from unittest import TestCase

from switchboard import (
    OptionSpec,
    OptionType,
    Registry,
    ValueMode,
    InvalidSpecError,
    UnknownOptionRequestedError,
    DuplicateOptionWarning,
    FaultCode,
)
from switchboard.utils import Unset


class TestOptionSpec(TestCase):

    def testRequiresAShortOrLongName(self):
        with self.assertRaises(InvalidSpecError) as context:
            OptionSpec(help="nameless")
        self.assertEqual(context.exception.code, FaultCode.INVALID_SPEC)

    def testInvalidSpecIsAValueError(self):
        with self.assertRaises(ValueError):
            OptionSpec()

    def testShortOnly(self):
        spec = OptionSpec("v")
        self.assertEqual(spec.short, "v")
        self.assertIsNone(spec.long)
        self.assertEqual(spec.names, ("v",))

    def testLongOnly(self):
        spec = OptionSpec(long="verbose")
        self.assertIsNone(spec.short)
        self.assertEqual(spec.names, ("verbose",))

    def testNamesListLongFirst(self):
        spec = OptionSpec("e", "environment")
        self.assertEqual(spec.names, ("environment", "e"))

    def testShortNameMustBeASingleCharacter(self):
        with self.assertRaises(InvalidSpecError):
            OptionSpec("ee")

    def testLongNameMayBeASingleCharacter(self):
        self.assertEqual(OptionSpec(long="x").names, ("x",))

    def testLongNameAllowsUnderscoreAndDigits(self):
        self.assertEqual(OptionSpec(long="dry_run").long, "dry_run")
        self.assertEqual(OptionSpec(long="2fa").long, "2fa")

    def testLongNameRejectsDeclarationSeparators(self):
        for name in ("", "env:", "env=prod", "dry run", "-verbose", "\tx"):
            with self.subTest(name=name), self.assertRaises(InvalidSpecError):
                OptionSpec(long=name)

    def testLongNameAllowsHyphenatedSegments(self):
        spec = OptionSpec(long="number-of-entries")
        self.assertEqual(spec.long, "number-of-entries")

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            OptionSpec(1)

    def testDefaults(self):
        spec = OptionSpec("v")
        self.assertIs(spec.value, ValueMode.NONE)
        self.assertIs(spec.type, OptionType.STRING)
        self.assertIsNone(spec.validate)
        self.assertEqual(spec.help, "")
        self.assertFalse(spec.required)
        self.assertFalse(spec.multiple)
        self.assertIs(spec.default, Unset)
        self.assertFalse(spec.takes_value)

    def testLegacyValueTriState(self):
        self.assertIs(OptionSpec("a", value=None).value, ValueMode.NONE)
        self.assertIs(OptionSpec("a", value=False).value, ValueMode.OPTIONAL)
        self.assertIs(OptionSpec("a", value=True).value, ValueMode.REQUIRED)
        self.assertTrue(OptionSpec("a", value=False).takes_value)

    def testInvalidValueMode(self):
        with self.assertRaises(InvalidSpecError):
            OptionSpec("a", value="sometimes")

    def testTypeAcceptsNames(self):
        self.assertIs(OptionSpec("n", type="integer").type, OptionType.INTEGER)
        self.assertIs(OptionSpec("n", type=OptionType.URL).type, OptionType.URL)

    def testUnknownTypeRejected(self):
        with self.assertRaises(InvalidSpecError):
            OptionSpec("n", type="float")

    def testValidateIsCompiled(self):
        spec = OptionSpec("t", validate=r"\d+")
        self.assertIsInstance(spec.validate, re.Pattern)
        self.assertEqual(spec.validate.pattern, r"\d+")

    def testValidateAcceptsCompiledPattern(self):
        pattern = re.compile(r"\d+")
        self.assertIs(OptionSpec("t", validate=pattern).validate, pattern)

    def testInvalidValidatePattern(self):
        with self.assertRaises(InvalidSpecError):
            OptionSpec("t", validate="(")

    def testNoneIsALegitimateDefault(self):
        self.assertIsNone(OptionSpec("d", default=None).default)

    def testHelpMustBeAString(self):
        with self.assertRaises(TypeError):
            OptionSpec("h", help=None)

    def testFieldsAreReadOnly(self):
        spec = OptionSpec("v")
        with self.assertRaises(AttributeError):
            spec.short = "w"

    def testRepr(self):
        self.assertTrue(repr(OptionSpec("v", "verbose")).startswith("OptionSpec(short='v', long='verbose'"))


class TestRegistry(TestCase):

    def testAddOptionRejectsNamelessSpec(self):
        registry = Registry()
        with self.assertRaises(InvalidSpecError):
            registry.add_option(help="nameless")
        self.assertEqual(len(registry), 0)

    def testAddOptionAcceptsSpecsMappingsAndKeywords(self):
        registry = Registry()
        registry.add_option(OptionSpec("a"))
        registry.add_option({"short": "b"})
        registry.add_option(short="c")
        self.assertEqual([spec.short for spec in registry], ["a", "b", "c"])

    def testAddOptionRejectsSpecAndKeywords(self):
        with self.assertRaises(TypeError):
            Registry().add_option(OptionSpec("a"), help="both")

    def testSortedByShortThenLong(self):
        registry = Registry([
            {"short": "x", "long": "x-ray"},
            {"long": "verbose"},
            {"short": "e"},
            {"short": "c", "long": "commit"},
            {"short": "c", "long": "alpha"},
        ])
        self.assertEqual(
            [(spec.short, spec.long) for spec in registry.list_options()],
            [(None, "verbose"), ("c", "alpha"), ("c", "commit"), ("e", None), ("x", "x-ray")],
        )

    def testListOptionsIsRestartable(self):
        registry = Registry([{"short": "a"}, {"short": "b"}])
        self.assertEqual(list(registry.list_options()), list(registry.list_options()))
        self.assertEqual(len(list(registry)), 2)

    def testDeclarationStrings(self):
        registry = Registry()
        registry.add_option(short="e", long="environment", value=True)
        registry.add_option(short="v", long="verbose", value=False)
        registry.add_option(short="x", long="x-ray")
        self.assertEqual(registry.short_options, "e:v::x")
        self.assertEqual(registry.long_options, ("environment:", "verbose::", "x-ray"))

    def testDeclarationStringsKeepDeclarationOrder(self):
        registry = Registry([{"short": "z"}, {"short": "a", "value": True}])
        self.assertEqual(registry.short_options, "za:")

    def testLookupByEitherName(self):
        registry = Registry()
        spec = registry.add_option(short="e", long="environment")
        self.assertIs(registry.lookup("e"), spec)
        self.assertIs(registry.lookup("environment"), spec)
        self.assertIn("e", registry)
        self.assertNotIn("q", registry)

    def testLookupUnknownName(self):
        with self.assertRaises(UnknownOptionRequestedError) as context:
            Registry().lookup("nope")
        self.assertEqual(context.exception.name, "nope")
        self.assertIsInstance(context.exception, LookupError)

    def testDuplicateNameWarns(self):
        registry = Registry([{"short": "e", "long": "environment"}])
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            registry.add_option(long="environment")
        self.assertTrue(any(isinstance(warning.message, DuplicateOptionWarning) for warning in caught))
        self.assertEqual(len(registry), 2)


if __name__ == "__main__":
    unittest.main()
