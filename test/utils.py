"""
Tests for the Unset sentinel and the small helpers in admincommand.utils.

This module verifies:
- Singleton identity, falsy semantics and representation of Unset.
- Copying and pickling preserve the singleton.
- coalesce() only replaces Unset.
- mirror() exposes read-only properties with read-only mapping views.
"""
import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from admincommand.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(Unset, UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testNotEqualToNoneOrFalse(self) -> None:
        """
        Falsy does not imply equality with other falsy values (None/False).
        """
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testPickleRoundTrip(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnionAnnotation(self) -> None:
        self.assertIsInstance(Unset, str | UnsetType)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class CoalesceTest(TestCase):

    def testUnsetReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalseyValuesPreserved(self) -> None:
        for value in (None, 0, "", [], False):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class MirrorTest(TestCase):

    def setUp(self) -> None:
        class Holder:
            name = mirror("name")
            options = mirror("options")

            def __init__(self):
                self._name = "ban"
                self._options = {"reason": 1}

        self.holder = Holder()

    def testReadsBackingField(self) -> None:
        self.assertEqual(self.holder.name, "ban")

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.holder.name = "kick"

    def testMappingsAreProxied(self) -> None:
        options = self.holder.options
        self.assertIsInstance(options, MappingProxyType)
        with self.assertRaises(TypeError):
            options["other"] = 2  # type: ignore[index]
        self.holder._options["other"] = 2
        self.assertEqual(options["other"], 2)

    def testNameMustBeString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)  # type: ignore[arg-type]


if __name__ == '__main__':
    unittest.main()
