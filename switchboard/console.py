"""
Switchboard host collaborators: message sink, process terminator, terminal width.

The parser never prints or exits by itself; it goes through two narrow
interfaces so hosts and tests can swap them:

- Printer.msg(text): write human-readable text. ConsolePrinter writes through
  a rich Console with every rendering feature off (markup, highlighting,
  emoji, wrapping) so the text reaches the stream unchanged, except for tabs,
  which rich always expands to the console tab stops (8 columns by default).
  CapturingPrinter records the messages instead.
- Quitter.quit(code): end the process. SystemQuitter calls sys.exit();
  RecordingQuitter records the codes instead and returns.

terminal_width() queries the display width through rich, which honours the
COLUMNS environment variable and falls back to 80 when no terminal is attached.
"""
import sys
from typing import Protocol, runtime_checkable

from rich.console import Console

DEFAULT_WIDTH = 80


@runtime_checkable
class Printer(Protocol):
    def msg(self, message, /): ...


@runtime_checkable
class Quitter(Protocol):
    def quit(self, code, /): ...


class ConsolePrinter:

    def __init__(self, console=None, /, *, stderr=False):
        self.console = console if console is not None else Console(stderr=stderr)

    def msg(self, message, /):
        self.console.print(
            message,
            end="",
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )


class CapturingPrinter:
    """
    Printer test double: keeps every message in order.
    """

    def __init__(self):
        self.messages = []

    def msg(self, message, /):
        self.messages.append(message)

    @property
    def output(self):
        return "".join(self.messages)


class SystemQuitter:

    def quit(self, code, /):
        sys.exit(code)


class RecordingQuitter:
    """
    Quitter test double: records exit codes and lets execution continue.
    """

    def __init__(self):
        self.codes = []

    def quit(self, code, /):
        self.codes.append(code)


def terminal_width(default=DEFAULT_WIDTH, /):
    """
    Best-effort display width; `default` on any failure.
    """
    try:
        width = Console().width
    except Exception:  # NOQA: BLE001
        return default
    if not isinstance(width, int) or width <= 0:
        return default
    return width


__all__ = (
    "DEFAULT_WIDTH",
    "Printer",
    "Quitter",
    "ConsolePrinter",
    "CapturingPrinter",
    "SystemQuitter",
    "RecordingQuitter",
    "terminal_width",
)
