# python
"""
Arguments module behavioral tests (option schema entries, argument bundle).

Scope
- Validate OptionSpec construction, normalization and validation.
- Validate OptionSpec.coerce() over yargs-shaped mappings.
- Validate HandlerArgs callbacks, mapping access and attribute access.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from admincommand import OptionSpec, HandlerArgs


class TestOptionSpec(TestCase):
    """Behavioral tests for OptionSpec."""

    def testDefaults(self):
        spec = OptionSpec()
        self.assertIsNone(spec.description)
        self.assertIsNone(spec.alias)
        self.assertFalse(spec.required)
        self.assertIsNone(spec.type)
        self.assertEqual(dict(spec.extras), {})

    def testDescriptionKeptVerbatim(self):
        self.assertEqual(OptionSpec("  Reason for the ban  ").description, "  Reason for the ban  ")
        self.assertEqual(OptionSpec("").description, "")
        self.assertEqual(OptionSpec.coerce({"description": ""}).description, "")

    def testNonStringDescriptionRejected(self):
        with self.assertRaises(TypeError):
            OptionSpec(12)  # type: ignore[arg-type]

    def testAliasLeadingDashesDropped(self):
        self.assertEqual(OptionSpec(alias="-r").alias, "r")

    def testAliasWithWhitespaceRejected(self):
        with self.assertRaises(ValueError):
            OptionSpec(alias="r x")

    def testAliasOnlyDashesRejected(self):
        with self.assertRaises(ValueError):
            OptionSpec(alias="--")

    def testRequiredMustBeBool(self):
        with self.assertRaises(TypeError):
            OptionSpec(required="yes")  # type: ignore[arg-type]

    def testExtrasKeptReadOnly(self):
        spec = OptionSpec("Limit", type="number", default=10, choices=[1, 10])
        self.assertEqual(spec.type, "number")
        self.assertEqual(dict(spec.extras), {"default": 10, "choices": [1, 10]})
        with self.assertRaises(TypeError):
            spec.extras["default"] = 5  # type: ignore[index]

    def testFieldsReadOnly(self):
        spec = OptionSpec("Why")
        with self.assertRaises(AttributeError):
            spec.description = "Other"  # type: ignore[misc]

    def testEquality(self):
        self.assertEqual(OptionSpec("Why", alias="r"), OptionSpec("Why", alias="-r"))
        self.assertNotEqual(OptionSpec("Why"), OptionSpec("Why", required=True))

    def testRepr(self):
        self.assertEqual(
            repr(OptionSpec("Why", alias="r")),
            "option-spec(description='Why', alias='r', required=False, type=None, extras={})",
        )


class TestOptionSpecCoerce(TestCase):
    """Behavioral tests for OptionSpec.coerce()."""

    def testSpecPassesThrough(self):
        spec = OptionSpec("Why")
        self.assertIs(OptionSpec.coerce(spec), spec)

    def testYargsShape(self):
        spec = OptionSpec.coerce({
            "description": "Room to ban",
            "alias": "i",
            "demandOption": True,
            "type": "string",
        })
        self.assertEqual(spec, OptionSpec("Room to ban", alias="i", required=True, type="string"))

    def testDescriptionSynonyms(self):
        self.assertEqual(OptionSpec.coerce({"describe": "Why"}).description, "Why")
        self.assertEqual(OptionSpec.coerce({"desc": "Why"}).description, "Why")
        self.assertEqual(OptionSpec.coerce({"description": "A", "describe": "B"}).description, "A")

    def testRequiredSynonyms(self):
        self.assertTrue(OptionSpec.coerce({"required": True}).required)
        self.assertTrue(OptionSpec.coerce({"demand_option": 1}).required)
        self.assertFalse(OptionSpec.coerce({"demandOption": False}).required)

    def testAliasSequenceUsesFirst(self):
        self.assertEqual(OptionSpec.coerce({"alias": ["r", "why"]}).alias, "r")
        self.assertIsNone(OptionSpec.coerce({"alias": []}).alias)

    def testNoneValuesCountAsAbsent(self):
        spec = OptionSpec.coerce({"description": None, "alias": None, "default": None})
        self.assertIsNone(spec.description)
        self.assertIsNone(spec.alias)
        self.assertEqual(dict(spec.extras), {})

    def testUnknownFieldsGoToExtras(self):
        spec = OptionSpec.coerce({"description": "Why", "nargs": 1})
        self.assertEqual(dict(spec.extras), {"nargs": 1})

    def testNonMappingRejected(self):
        with self.assertRaises(TypeError):
            OptionSpec.coerce(["description"])  # type: ignore[arg-type]


class TestHandlerArgs(TestCase):
    """Behavioral tests for the argument bundle."""

    def setUp(self) -> None:
        self.events = []
        self.argv = HandlerArgs(
            lambda: self.events.append("matched"),
            lambda error: self.events.append(("completed", error)),
            lambda message: self.events.append(("respond", message)),
            roomId="!abc:example.org",
            reason="spam",
            limit=3,
        )

    def testCallbacksForward(self):
        self.argv.matched()
        self.argv.respond("hello")
        self.argv.completed(None)
        self.assertEqual(self.events, ["matched", ("respond", "hello"), ("completed", None)])

    def testCompletedDefaultsToNone(self):
        self.argv.completed()
        self.assertEqual(self.events, [("completed", None)])

    def testMappingAccess(self):
        self.assertEqual(self.argv["roomId"], "!abc:example.org")
        self.assertEqual(len(self.argv), 3)
        self.assertEqual(list(self.argv), ["roomId", "reason", "limit"])
        self.assertEqual(self.argv.get("missing", "fallback"), "fallback")
        self.assertIn("reason", self.argv)

    def testAttributeAccess(self):
        self.assertEqual(self.argv.reason, "spam")
        self.assertEqual(self.argv.limit, 3)
        with self.assertRaises(AttributeError):
            self.argv.missing  # NOQA: B-018

    def testCallbacksNotShadowedByValues(self):
        argv = HandlerArgs(lambda: None, lambda error: None, lambda message: None, matched="value")
        self.assertEqual(argv["matched"], "value")
        self.assertTrue(callable(argv.matched))

    def testNonCallableCallbackRejected(self):
        with self.assertRaises(TypeError):
            HandlerArgs(None, lambda error: None, lambda message: None)  # type: ignore[arg-type]

    def testReadOnly(self):
        with self.assertRaises(TypeError):
            self.argv["reason"] = "other"  # type: ignore[index]

    def testRepr(self):
        argv = HandlerArgs(lambda: None, lambda error: None, lambda message: None, reason="spam")
        self.assertEqual(repr(argv), "handler-args(reason='spam')")


if __name__ == "__main__":
    unittest.main()
