"""
admincommand option schema and argument bundle.

Overview
- OptionSpec
  • One entry of a command's declarative options schema: description, alias,
    required flag, parser type hint, plus any parser-specific extras (kept, ignored).
  • OptionSpec.coerce() accepts yargs-shaped mappings
    ({"description": ..., "alias": ..., "demandOption": ...}) so schemas written for
    the dispatch layer can be reused as-is.

- HandlerArgs
  • The argument bundle a dispatcher hands to AdminCommand.handle(): the
    matched/completed/respond callbacks plus parsed option values.
  • Read-only Mapping over the option values; values are also reachable as attributes.

Quick example:
    >>> spec = OptionSpec.coerce({"description": "Reason for the ban", "alias": "r"})
    >>> spec.required
    False
    >>> argv = HandlerArgs(print, print, print, roomId="!abc:example.org")
    >>> argv["roomId"], argv.roomId
    ('!abc:example.org', '!abc:example.org')
"""
from collections.abc import Mapping, Sequence

from .utils import Unset, coalesce, mirror


def _sanitize_text(cls, name, object, /):
    """
    Validate an optional name-like field: trimmed, non-empty, or Unset.
    """
    if not isinstance(object, str | Unset):
        raise TypeError(f"{cls.__typename__} {name!r} must be a string")
    elif isinstance(object, str) and not (object := object.strip()):
        raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
    return object


class OptionSpec:
    """
    Declarative metadata for a single command option.

    Fields
    - description: str | None. Shown in the detailed help listing.
    - alias: str | None. Short flag name without dashes ("r" renders as "-r").
    - required: bool. Required options sort first and are unbracketed in usage.
    - type: parser hint (e.g. "string", "number", int). Not interpreted here.
    - extras: read-only mapping of every other keyword given at construction.

    Validation
    - description must be a string when provided; it is kept exactly as given.
    - alias must be a non-empty string when provided; it may not contain
      whitespace and leading dashes are dropped.
    - required must be a bool.
    """
    __typename__ = "option-spec"

    __introspectable__ = (
        "description",
        "alias",
        "required",
        "type",
        "extras",
    )

    description = mirror("description")
    alias = mirror("alias")
    required = mirror("required")
    type = mirror("type")
    extras = mirror("extras")

    def __init__(self, description=Unset, /, alias=Unset, required=False, type=Unset, **extras):
        if not isinstance(description, str | Unset):
            raise TypeError(f"{self.__typename__} 'description' must be a string")
        alias = _sanitize_text(OptionSpec, "alias", alias)

        if isinstance(alias, str):
            if any(char.isspace() for char in alias):
                raise ValueError(f"{self.__typename__} 'alias' cannot contain whitespace")
            elif not (alias := alias.lstrip("-")):
                raise ValueError(f"{self.__typename__} 'alias' must name a flag")

        if not isinstance(required, bool):
            raise TypeError(f"{self.__typename__} 'required' must be a boolean")

        self._description = coalesce(description)
        self._alias = coalesce(alias)
        self._required = required
        self._type = coalesce(type)
        self._extras = dict(extras)

    @classmethod
    def coerce(cls, object, /):
        """
        Build an OptionSpec from a spec or a yargs-shaped mapping.

        Recognized keys
        - description | describe | desc -> description (first non-None wins)
        - alias -> alias (a sequence contributes its first element)
        - required | demandOption | demand_option -> required (truthy => True)
        - type -> type
        Everything else lands in extras. Keys holding None count as absent.
        """
        if isinstance(object, cls):
            return object
        if not isinstance(object, Mapping):
            raise TypeError(f"{cls.__typename__} source must be a mapping or an option spec")

        fields = {key: value for key, value in object.items() if value is not None}

        description = Unset
        for key in ("description", "describe", "desc"):
            value = fields.pop(key, Unset)
            if description is Unset:
                description = value

        alias = fields.pop("alias", Unset)
        if isinstance(alias, Sequence) and not isinstance(alias, str):
            alias = alias[0] if alias else Unset

        required = False
        for key in ("required", "demandOption", "demand_option"):
            required |= bool(fields.pop(key, False))

        return cls(description, alias=alias, required=required, type=fields.pop("type", Unset), **fields)

    def __eq__(self, other):
        if not isinstance(other, OptionSpec):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__introspectable__)

    __hash__ = None

    def __repr__(self):
        return f"{self.__typename__}({', '.join('%s=%r' % pair for pair in self.__rich_repr__())})"

    def __rich_repr__(self):
        for name in self.__introspectable__:
            yield name, getattr(self, "_" + name)


class HandlerArgs(Mapping):
    """
    Argument bundle handed to a command handler.

    The three callbacks are positional-only so every option name stays usable
    as a keyword:

        HandlerArgs(on_matched, on_completed, on_respond, roomId="!a:b", reason="spam")

    - matched(): dispatch of this command has begun.
    - completed(error): terminal notification; error is None on success.
    - respond(message): send a message back to whoever issued the command.

    Option values are not validated or converted; handlers read only the keys
    declared in their command's schema.
    """
    __slots__ = ("_matched", "_completed", "_respond", "_values")

    def __init__(self, matched, completed, respond, /, **values):
        for name, callback in (("matched", matched), ("completed", completed), ("respond", respond)):
            if not callable(callback):
                raise TypeError(f"handler-args {name!r} must be callable")
        self._matched = matched
        self._completed = completed
        self._respond = respond
        self._values = values

    def matched(self):
        self._matched()

    def completed(self, error=None, /):
        self._completed(error)

    def respond(self, message, /):
        self._respond(message)

    def __getitem__(self, key):
        return self._values[key]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __getattr__(self, name):
        # Only reached when normal lookup fails, i.e. for option values.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no option {name!r}") from None

    def __repr__(self):
        return f"handler-args({', '.join('%s=%r' % pair for pair in self._values.items())})"


__all__ = (
    "OptionSpec",
    "HandlerArgs",
)
