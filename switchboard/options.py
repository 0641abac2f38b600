r"""
Switchboard option declarations and registry.

Overview
- ValueMode: whether an option takes no value (flag), an optional value, or a
  required value. Carries the getopt marker used in declaration strings.
- OptionType: the conversion applied to a raw value (string, integer, number,
  json, url).
- OptionSpec: one declared option (short and/or long identity plus metadata).
- Registry: the ordered collection of OptionSpec instances.

Ordering
- The registry keeps its specs sorted by (short, long), where a missing name
  sorts as the empty string. The sort is stable, so specs with equal keys keep
  their declaration order. Both the parser and the usage formatter walk the
  registry in this order.

Declaration strings
- short_options: concatenation of "<short><marker>" in declaration order,
  e.g. "e:v::x".
- long_options: tuple of "<long><marker>" in declaration order,
  e.g. ("environment:", "verbose::", "x-ray").
  Markers: "" (no value), ":" (required value), "::" (optional value).

Example
    >>> registry = Registry()
    >>> registry.add_option(short="e", long="environment", value=True, required=True)
    OptionSpec(short='e', long='environment', ...)
    >>> registry.short_options
    'e:'
"""
import re
from collections.abc import Iterable, Mapping
from enum import Enum, StrEnum

from .faults import *
from .utils import *


class ValueMode(Enum):
    """
    value requirement of an option.

    the legacy tri-state is accepted by the constructor:
    ValueMode(None) -> NONE, ValueMode(False) -> OPTIONAL, ValueMode(True) -> REQUIRED.
    """
    NONE = "none"
    OPTIONAL = "optional"
    REQUIRED = "required"

    @classmethod
    def _missing_(cls, value):
        if value is None:
            return cls.NONE
        if value is False:
            return cls.OPTIONAL
        if value is True:
            return cls.REQUIRED
        return None

    @property
    def marker(self):
        return {"none": "", "optional": "::", "required": ":"}[self.value]


class OptionType(StrEnum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    JSON = "json"
    URL = "url"


_SHORT_NAME = re.compile(r"[^\W_]")
_LONG_NAME = re.compile(r"[^\s:=-][^\s:=]*")


def _sanitize_names(cls, metadata, /):
    """
    Internal: validate the short/long identity of a spec.

    - short: Unset | str, exactly one letter or digit.
    - long: Unset | str, non-empty, without whitespace, ":" or "=" (they would
      break the declaration strings) and without a leading "-".
    - at least one of them is required.

    Raises
    - TypeError: when a name is not a string.
    - InvalidSpecError: when a name is malformed or both are missing.
    """
    for key, pattern in (("short", _SHORT_NAME), ("long", _LONG_NAME)):
        if not isinstance(name := metadata[key], str | Unset):
            raise TypeError(f"{cls.__name__} {key!r} name must be a string")
        if isinstance(name, str) and not pattern.fullmatch(name):
            raise InvalidSpecError(
                f"{cls.__name__} {key!r} name {name!r} is not a valid option name",
                name=name,
            )
        metadata[key] = coalesce(name)

    if metadata["short"] is None and metadata["long"] is None:
        raise InvalidSpecError(
            f"{cls.__name__} must specify a short name, a long name, or both",
        )


def _sanitize_value(cls, metadata, /):
    """
    Internal: normalize value-related metadata.

    - value: ValueMode | None | bool, normalized to ValueMode.
    - type: OptionType | str, normalized to OptionType.
    - validate: Unset | str | re.Pattern, compiled to a pattern (None when Unset).
    - help: Unset | str, defaults to "".
    - required/multiple: coerced to bool.
    - default: untouched; Unset means “no default” (None is a valid default).
    """
    try:
        metadata["value"] = ValueMode(metadata["value"])
    except ValueError:
        raise InvalidSpecError(
            f"{cls.__name__} 'value' must be None, True, False or a ValueMode",
        ) from None

    try:
        metadata["type"] = OptionType(metadata["type"])
    except ValueError:
        raise InvalidSpecError(
            f"{cls.__name__} 'type' must be one of %s" % ", ".join(repr(member.value) for member in OptionType),
        ) from None

    if isinstance(validate := metadata["validate"], str):
        try:
            validate = re.compile(validate)
        except re.error as error:
            raise InvalidSpecError(
                f"{cls.__name__} 'validate' is not a valid pattern: {error}",
            ) from None
    elif not isinstance(validate, re.Pattern | Unset):
        raise TypeError(f"{cls.__name__} 'validate' must be a string or a compiled pattern")
    metadata["validate"] = coalesce(validate)

    if not isinstance(help := metadata["help"], str | Unset):
        raise TypeError(f"{cls.__name__} 'help' must be a string")
    metadata["help"] = coalesce(help, "")

    metadata["required"] = bool(metadata["required"])
    metadata["multiple"] = bool(metadata["multiple"])


class OptionSpec:
    """
    One declared option.

    Fields (read-only properties)
    - short: str | None
    - long: str | None
    - value: ValueMode
    - type: OptionType
    - validate: re.Pattern | None
    - help: str
    - required: bool
    - default: Any (Unset when not declared)
    - multiple: bool

    Derived
    - names: present identities, long first (the parser prefers long names).
    - takes_value: whether the option accepts a value at all.
    """

    __introspectable__ = (
        "short",
        "long",
        "value",
        "type",
        "validate",
        "help",
        "required",
        "default",
        "multiple",
    )

    def __init__(
            self,
            short=Unset,
            long=Unset,
            *,
            value=None,
            type=OptionType.STRING,
            validate=Unset,
            help=Unset,
            required=False,
            default=Unset,
            multiple=False
    ):
        metadata = {
            "short": short,
            "long": long,
            "value": value,
            "type": type,
            "validate": validate,
            "help": help,
            "required": required,
            "default": default,
            "multiple": multiple,
        }
        _sanitize_names(self.__class__, metadata)
        _sanitize_value(self.__class__, metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    short = mirror("short")
    long = mirror("long")
    value = mirror("value")
    type = mirror("type")
    validate = mirror("validate")
    help = mirror("help")
    required = mirror("required")
    default = mirror("default")
    multiple = mirror("multiple")

    @property
    def names(self):
        return tuple(name for name in (self._long, self._short) if name is not None)

    @property
    def takes_value(self):
        return self._value is not ValueMode.NONE

    def sortkey(self):
        return self._short or "", self._long or ""

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, ", ".join("%s=%r" % item for item in self.__rich_repr__()))


class Registry:
    """
    Ordered collection of OptionSpec instances.

    The registry exclusively owns its specs; parsers and formatters only read
    from it. Iterating the registry (or calling list_options()) walks the specs
    in sorted order and can be restarted at will.
    """

    def __init__(self, options=(), /):
        if not isinstance(options, Iterable):
            raise TypeError("Registry() argument must be an iterable of options")
        self._options = []
        self._short_options = []
        self._long_options = []
        for option in options:
            self.add_option(option)

    def add_option(self, spec=Unset, /, **metadata):
        """
        Declare an option.

        Accepted forms
        - add_option(OptionSpec(...))
        - add_option({"short": "e", "value": True, ...})
        - add_option(short="e", value=True, ...)

        Raises
        - InvalidSpecError: when the spec declares neither a short nor a long name.
        - TypeError: on any other argument shape.

        Warns
        - DuplicateOptionWarning: when one of the names is already declared.
        """
        if spec is Unset:
            spec = OptionSpec(**metadata)
        elif metadata:
            raise TypeError("add_option() takes either a spec or keyword arguments, not both")
        elif isinstance(spec, Mapping):
            spec = OptionSpec(**spec)
        elif not isinstance(spec, OptionSpec):
            raise TypeError("add_option() argument must be an option spec or a mapping")

        for name in spec.names:
            if any(name in option.names for option in self._options):
                trigger(DuplicateOptionWarning(
                    "option name %r is already declared" % name,
                    name=name,
                ))

        self._options.append(spec)
        self._options.sort(key=OptionSpec.sortkey)

        if spec.short is not None:
            self._short_options.append(spec.short + spec.value.marker)
        if spec.long is not None:
            self._long_options.append(spec.long + spec.value.marker)
        return spec

    def list_options(self):
        """
        Return a fresh iterator over the specs in sorted order.
        """
        return iter(tuple(self._options))

    def lookup(self, name, /):
        """
        Return the spec declaring `name` as its long or short name.

        Raises UnknownOptionRequestedError when no spec declares it.
        """
        for option in self._options:
            if option.long == name or option.short == name:
                return option
        trigger(UnknownOptionRequestedError(
            "invalid option %r requested" % name,
            name=name,
        ))

    @property
    def short_options(self):
        return "".join(self._short_options)

    @property
    def long_options(self):
        return tuple(self._long_options)

    def __iter__(self):
        return self.list_options()

    def __len__(self):
        return len(self._options)

    def __contains__(self, name):
        return any(name in option.names for option in self._options)

    def __rich_repr__(self):
        yield from self._options

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self._options)


__all__ = (
    "ValueMode",
    "OptionType",
    "OptionSpec",
    "Registry",
)
