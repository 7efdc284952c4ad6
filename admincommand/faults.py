"""
admincommand faults (warnings) and rendering.

Scope
- CommandWarning: base type carrying message + options; knows how to render
  itself through rich and how to surface through the warnings module.
- AmbiguousPositionalWarning: an option was taken as positional only because
  its name occurs inside a longer token of the command template.
- trigger(): central entry point to surface a fault with extra context.

Handler failures are not faults: AdminCommand.handle hands them to the
argument bundle's completed() callback untouched.

Integration
- Hosts filter these with the standard warnings machinery
  (warnings.simplefilter("error", AmbiguousPositionalWarning) etc.).
- Hosts that want a styled report can console.print() a caught warning;
  palette entries are overridable through a __styles__ mapping in __main__.
"""
import copy
import os.path
import warnings
from abc import ABC
from collections import defaultdict
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class CommandWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "command-name": "bold #E6E6F0",  # near-white command template
            "warning-title": "bold #FFC2E0",  # soft pink title

            # body
            "warning-message": "#D6D6DE",  # light gray body
            "hint-arrow": "#B8EFAF dim",  # soft green arrow
            "hint": "italic #B8EFAF",  # soft green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), style)

        header = Text.assemble(
            "[ ",
            text(self.options.get("command", "admin command"), styler("command-name")),
            " | ",
            text(self.options.get("title", "warning"), styler("warning-title")),
            " ]"
        )
        message = text(self.message, styler("warning-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

        if self.options.get("fancy", False):
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        # Attribute the warning to the first frame outside this package.
        warnings.warn(self, skip_file_prefixes=(os.path.dirname(__file__) + os.sep,))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class AmbiguousPositionalWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandWarning).
    - options are merged into the fault via __replace__(**options) before triggering.

    typical options
    - command, title, hint, colorful, fancy.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "CommandWarning",
    "AmbiguousPositionalWarning",
    "trigger",
)
