"""
Switchboard usage formatter.

Layout

    <command name>

    <description, sliced every line-width characters, when set>

    Required:
    -c=value, --commit=value       Commit

    Optional:
    -e=value, --environment=value  Set the environment
    -x=value, --xray=value         Lorem ipsum dolor sit amet, consectetur adipiscing
                                    elit. Maecenas sagittis nunc ac ante tristique vi

Rules
- specs are split into Required and Optional, each keeping registry order; a
  section is only rendered when it has at least one option.
- the name column is one character wider than the longest display name across
  both sections, so the two sections align.
- line width is max(width, name column + minimum help width); the help column
  takes the rest.
- help texts are sliced at fixed character counts, not at word boundaries.
  Continuation slices are indented by the name column plus one blank.
"""
import sys

from .console import DEFAULT_WIDTH, terminal_width
from .utils import *

DEFAULT_MINIMUM_HELP_WIDTH = 30


def display_name(spec, /):
    """
    "-e=value, --environment=value" style label of a spec.
    """
    suffix = "=value" if spec.takes_value else ""
    names = []
    if spec.short is not None:
        names.append("-" + spec.short + suffix)
    if spec.long is not None:
        names.append("--" + spec.long + suffix)
    return ", ".join(names)


def _slices(text, length, /):
    return [text[index:index + length] for index in range(0, len(text), length)]


def _section(title, rows, name_length, help_length, /):
    if not rows:
        return ""
    out = "\n%s:\n" % title
    for name, help in rows:
        slices = _slices(help, help_length)
        out += name.ljust(name_length) + " " + (slices[0] if slices else "") + "\n"
        for chunk in slices[1:]:
            part = chunk + "\n"
            out += part.rjust(name_length + len(part) + 1)
    return out


def _default_name():
    if prog := getattr(__import__("__main__"), "__prog__", None):
        return str(prog)
    return sys.argv[0] if sys.argv else ""


class Formatter:
    """
    Render a registry into usage text.

    Configuration (all settable)
    - name: command name; defaults to __prog__ in __main__, else sys.argv[0].
    - descr: command-level help text (None when unset).
    - width: overall line width; defaults to the terminal width (80 when unknown),
      queried once and cached.
    - minimum_help_width: smallest help column; defaults to 30.
    """

    def __init__(self, registry, /, name=Unset, descr=Unset, *, width=Unset, minimum_help_width=Unset, columns=terminal_width):
        if not callable(columns):
            raise TypeError("Formatter 'columns' must be callable")
        self._registry = registry
        self._columns = columns
        self._name = Unset
        self._descr = None
        self._width = Unset
        self._minimum_help_width = DEFAULT_MINIMUM_HELP_WIDTH
        if name is not Unset:
            self.name = name
        if descr is not Unset:
            self.descr = descr
        if width is not Unset:
            self.width = width
        if minimum_help_width is not Unset:
            self.minimum_help_width = minimum_help_width

    @property
    def name(self):
        if not self._name:
            self._name = _default_name()
        return self._name

    @name.setter
    def name(self, name):
        if not isinstance(name, str):
            raise TypeError("Formatter 'name' must be a string")
        self._name = name

    @property
    def descr(self):
        return self._descr

    @descr.setter
    def descr(self, descr):
        if not isinstance(descr, str | None):
            raise TypeError("Formatter 'descr' must be a string")
        self._descr = descr

    @property
    def width(self):
        if not self._width:
            self._width = self._columns() or DEFAULT_WIDTH
        return self._width

    @width.setter
    def width(self, width):
        self._width = int(width)

    @property
    def minimum_help_width(self):
        return self._minimum_help_width

    @minimum_help_width.setter
    def minimum_help_width(self, width):
        if (width := int(width)) < 1:
            raise ValueError("Formatter 'minimum_help_width' must be a positive integer")
        self._minimum_help_width = width

    def render(self):
        """
        Return the full usage text (ends with a newline).
        """
        required, optional = [], []
        for spec in self._registry:
            (required if spec.required else optional).append((display_name(spec), spec.help))

        name_length = max((len(name) for name, _ in required + optional), default=0) + 1
        line_length = max(self.width, name_length + self.minimum_help_width)
        help_length = line_length - name_length

        out = self.name + "\n"
        if self.descr:
            out += "\n"
            for chunk in _slices(self.descr, name_length + help_length):
                out += chunk + "\n"
        out += _section("Required", required, name_length, help_length)
        out += _section("Optional", optional, name_length, help_length)
        return out


__all__ = (
    "DEFAULT_MINIMUM_HELP_WIDTH",
    "Formatter",
    "display_name",
)
