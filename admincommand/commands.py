"""
admincommand command layer: describe, document, and run administrative commands.

What this module provides
- AdminCommand: binds a command template ("ban [roomId]"), a description, a
  handler and an options schema. It:
  • renders a one-line usage synopsis (simple_help) and a line-per-option
    listing (detailed_help), required options first;
  • detects positional options by looking for " key" / " [key]" in the template;
  • runs the handler through handle(argv), reporting matched() before any work
    and exactly one completed(error | None) afterwards, whatever happens.

- admin_command(...): create an AdminCommand or a decorator that produces one.

Quick start
    from admincommand import admin_command

    @admin_command("ban [roomId]", options={
        "roomId": {"description": "Room to ban", "demandOption": True},
        "reason": {"description": "Why the room is banned", "alias": "r"},
    })
    async def ban(argv):
        \"\"\"Bans a room\"\"\"
        argv.respond(f"banned {argv['roomId']}")

    ban.simple_help()    # 'ban [roomId] [--reason REASON] - Bans a room'
    ban.detailed_help()  # ['ban [roomId] - Bans a room',
                         #  '  roomId - Room to ban (Required)',
                         #  '  --reason|-r - Why the room is banned']

Design notes
- Positional detection is textual: an option named "room" is positional in
  "join roomId" as well. Such partial-token matches emit
  AmbiguousPositionalWarning at construction but keep the textual result.
- Handler failures never escape handle(); they are the error passed to completed().
  Cancellation and KeyboardInterrupt still propagate, after completed() has fired.
"""
import asyncio
import inspect
import logging
import re
from collections import defaultdict
from collections.abc import Mapping

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .arguments import OptionSpec
from .faults import AmbiguousPositionalWarning, trigger
from .utils import Unset, mirror

logger = logging.getLogger(__name__)


def _process_strings(cls, metadata):
    """
    Validate the command template and description; both are kept exactly as given.

    Errors
    - TypeError: when a value is not a string.
    - ValueError: when a string is blank.
    """
    for name in ("command", "description"):
        if not isinstance(object := metadata[name], str):
            raise TypeError(f"{cls.__typename__} {name!r} must be a string")
        elif not object.strip():
            raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")


def _process_options(cls, metadata):
    """
    Normalize the options schema into an insertion-ordered dict of OptionSpec.

    Accepts None (no options) or a mapping of option name -> OptionSpec | mapping.
    Names must be non-empty strings without whitespace.
    """
    options = metadata["options"]
    if options is None:
        metadata["options"] = {}
        return
    if not isinstance(options, Mapping):
        raise TypeError(f"{cls.__typename__} 'options' must be a mapping")

    processed = {}
    for key, option in options.items():
        if not isinstance(key, str):
            raise TypeError(f"{cls.__typename__} option name {key!r} must be a string")
        elif not key or any(char.isspace() for char in key):
            raise ValueError(f"{cls.__typename__} option name {key!r} must be a single non-empty word")
        try:
            processed[key] = OptionSpec.coerce(option)
        except (TypeError, ValueError) as error:
            raise type(error)(f"{cls.__typename__} option {key!r}: {error}") from None
    metadata["options"] = processed


def _check_positionals(self):
    """
    Warn about options that are positional only by partial-token match.

    A key is positional when the template contains " key" or " [key]"; when
    neither "key" nor "[key]" is a whole whitespace-delimited token, the match
    came from a longer token ("room" inside "roomId") and is likely unintended.
    """
    tokens = set(self.command.split())
    for key in self.options:
        if self.is_positional(key) and not {key, f"[{key}]"} & tokens:
            trigger(
                AmbiguousPositionalWarning(
                    f"option {key!r} is treated as positional because ' {key}' occurs inside the command template"
                ),
                command=self.command,
                title="ambiguous positional",
                hint=f"rename the option or add {key!r} to the template as its own word",
                colorful=self.colorful,
                fancy=self.fancy,
            )


class AdminCommand:
    """
    Descriptor of one administrative command.

    Responsibilities
    - Holds the immutable command template, description, handler and options.
    - Renders help: simple_help() for listings, detailed_help() for one command.
    - Runs the handler via handle(argv) with lifecycle notifications.

    Parameters
    - command: str. Template of literal words and positional placeholders,
      e.g. "join room [roomId]".
    - description: str. Free-text summary.
    - handler: Callable[[HandlerArgs], None | Awaitable[None]].
    - options: Mapping[str, OptionSpec | Mapping] | None. None means no options.
    - colorful, fancy: bool. Styling of the rich rendering (__rich__).

    Raises
    - TypeError/ValueError on invalid arguments (see _process_strings/_process_options).
    """
    __typename__ = "admin-command"

    __introspectable__ = (
        "command",
        "description",
        "options",
        "colorful",
        "fancy",
    )

    __displayable__ = (
        "command",
        "description",
        "options",
    )

    command = mirror("command")
    description = mirror("description")
    handler = mirror("handler")
    options = mirror("options")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    def __init__(self, command, description, handler, options=None, *, colorful=False, fancy=False):
        if not callable(handler):
            raise TypeError(f"{self.__typename__} 'handler' must be callable")

        metadata = {
            "command": command,
            "description": description,
            "options": options,
        }
        _process_strings(type(self), metadata)
        _process_options(type(self), metadata)

        self._handler = handler
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        _check_positionals(self)

    def is_positional(self, key, /):
        """
        Return True when the option is spelled out in the command template.

        The check is textual: " key" or " [key]" anywhere in the template.
        """
        return f" {key}" in self.command or f" [{key}]" in self.command

    def _ordered(self):
        """
        Option items with required ones first; declaration order within each class.
        """
        return sorted(self.options.items(), key=lambda item: not item[1].required)

    def simple_help(self):
        """
        Return a one-liner of how to use the command.

        Format: "<command>[ <flags>] - <description>", where each non-positional
        option renders as "--key KEY" and optional ones are wrapped in brackets.
        """
        flags = []
        for key, option in self._ordered():
            if self.is_positional(key):
                continue
            flag = f"--{key} {key.upper()}"
            flags.append(flag if option.required else f"[{flag}]")
        rendered = " " + " ".join(flags) if flags else ""
        return f"{self.command}{rendered} - {self.description}"

    def detailed_help(self):
        """
        Return a detailed description of the command and its options.

        The first entry is "<command> - <description>", followed by one entry per
        option. Display each string on its own line.
        """
        response = [f"{self.command} - {self.description}"]
        for key, option in self._ordered():
            positional = self.is_positional(key)
            name = key if positional else f"--{key}"
            alias = f"|-{option.alias}" if option.alias and not positional else ""
            required = " (Required)" if option.required else ""
            description = option.description if option.description is not None else "undefined"
            response.append(f"  {name}{alias} - {description}{required}")
        return response

    async def handle(self, argv, /):
        """
        Run the handler with lifecycle notifications.

        Contract
        - argv.matched() is called first, before the handler runs.
        - The handler is called with argv; an awaitable result is awaited.
        - argv.completed(None) on success, argv.completed(error) on failure.
        - Handler failures are never re-raised, SystemExit included. Cancellation
          and KeyboardInterrupt are reported through completed() and then re-raised.
        """
        argv.matched()
        logger.debug("dispatching admin command %r", self.command)
        try:
            result = self._handler(argv)
            if inspect.isawaitable(result):
                await result
        except BaseException as error:
            logger.debug("admin command %r failed", self.command, exc_info=True)
            argv.completed(error)
            if isinstance(error, asyncio.CancelledError | KeyboardInterrupt):
                raise
        else:
            logger.debug("admin command %r completed", self.command)
            argv.completed(None)

    __call__ = handle

    def __repr__(self):
        return f"{self.__typename__}({', '.join('%s=%r' % pair for pair in self.__rich_repr__())})"

    def __rich_repr__(self):
        for name in self.__displayable__:
            yield name, getattr(self, "_" + name)

    def __rich__(self):
        """
        Render the detailed help as a rich renderable.

        Palette keys
        - command-name, description, option-name, positional-name, alias,
          option-description, required-marker, panel-title

        Customization
        - Define a mapping named __styles__ in __main__ to override any palette entry.
        - When colorful is False, styling is suppressed.
        """
        styles = defaultdict(str, {
            "command-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "description": "italic #A3A3A3",  # Neutral gray
            "option-name": "bold #00E6FF",  # CYAN for flags
            "positional-name": "bold #FFD600",  # AMBER for template words
            "alias": "#36C5F0",  # SKY-BLUE
            "option-description": "#9CA3AF",  # Muted gray
            "required-marker": "bold #EF4444",  # RED
            "panel-title": "bold #FF4D94",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self.colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styler(style))

        headline = Text.assemble(
            text(self.command, "command-name"),
            " - ",
            text(self.description, "description"),
        )
        renders = [headline]

        if self.options:
            table = Table.grid(padding=(0, 2))
            table.add_column()
            table.add_column()
            for key, option in self._ordered():
                if self.is_positional(key):
                    name = text(key, "positional-name")
                else:
                    name = text(f"--{key}", "option-name")
                    if option.alias:
                        name.append_text(Text("|")).append_text(text(f"-{option.alias}", "alias"))
                description = text(option.description if option.description is not None else "undefined", "option-description")
                if option.required:
                    description.append_text(Text(" ")).append_text(text("(Required)", "required-marker"))
                table.add_row(Text("  ").append_text(name), description)
            renders.append(table)

        renderable = Group(*renders)

        if self.fancy:
            # Panel title uses the literal words of the template only.
            title = re.sub(r"\s*\[[^\]]*\]", "", self.command).upper()
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{title} HELP", " ", "]", style=styler("panel-title")),
                title_align="left",
            )

        return renderable


def admin_command(source=Unset, /, *args, **kwargs):
    """
    Create an AdminCommand or return a decorator to build it later.

    Invocation modes
    - Direct:
        ban = admin_command(handler, "ban [roomId]", "Bans a room", options)
    - Decorator:
        @admin_command("ban [roomId]", "Bans a room", options)
        def ban(argv): ...
      When the description is omitted, the handler's docstring is used.

    Keyword arguments (colorful, fancy, options) are forwarded to AdminCommand.
    """
    if callable(source):
        return _build(source, *args, **kwargs)

    if source is Unset:
        raise TypeError("admin_command() missing the command template")

    def wrapper(handler, /):
        if not callable(handler):
            raise TypeError("@admin_command() must be applied to a callable")
        return _build(handler, source, *args, **kwargs)

    wrapper.__name__ = wrapper.__qualname__ = "admin_command"
    return wrapper


def _build(handler, command, description=Unset, options=None, /, **flags):
    if "options" in flags:
        options = flags.pop("options")
    if "description" in flags:
        description = flags.pop("description")
    if description is Unset:
        description = inspect.getdoc(handler) or Unset
    if description is Unset:
        raise ValueError(f"{AdminCommand.__typename__} 'description' is required when the handler has no docstring")
    return AdminCommand(command, description, handler, options, **flags)


__all__ = (
    "AdminCommand",
    "admin_command",
)
