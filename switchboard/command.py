"""
Switchboard command facade: declare, parse and query options in one object.

Command bundles the registry, the usage formatter, the parser and the host
collaborators (printer, quitter, tokenizer) behind a small surface.

Quick start
    from switchboard import Command

    tool = Command(name="deploy", descr="Deploy the current build")
    tool.add_option(short="e", long="environment", value=True, required=True,
                    help="Set the environment")
    tool.add_option(short="n", long="number-of-entries", value=True, type="integer")
    tool.add_option(short="v", long="verbose", help="Verbose output")

    tool.run()                       # reads sys.argv[1:]
    tool.get_option("e")             # value of -e or --environment
    tool.get_option("verbose")       # True when given, None otherwise
    tool.get_options()               # {"environment": ..., "e": ..., ...}

Lazy parsing
- get_option()/get_options() call run() first when nothing was parsed yet.

Testing and embedding
- Pass printer=CapturingPrinter() and quitter=RecordingQuitter() to observe
  usage-and-exit without writing to the terminal or leaving the process, and
  parse() a raw option map directly instead of running the tokenizer.
"""
import shlex
import sys
from collections.abc import Iterable

from .faults import *
from .options import Registry
from .parser import Parser
from .tokens import tokenize
from .usage import Formatter
from .utils import *


class Command:
    """
    High-level option parser.

    Parameters
    - options: Iterable[OptionSpec | Mapping]
      Options declared right away (see Registry.add_option).
    - name: str | Unset
      Command name shown in usage; defaults to __prog__ in __main__, else sys.argv[0].
    - descr: str | Unset
      Command-level help text shown below the name.
    - width, minimum_help_width: int | Unset
      Usage layout (defaults: terminal width or 80, and 30).
    - printer, quitter: message sink and process terminator.
    - tokenizer: Callable[[list[str], str, tuple[str, ...]], RawOptionMap]
      Turns process arguments into a raw option map (defaults to tokenize).
    """

    def __init__(
            self,
            options=(),
            /,
            name=Unset,
            descr=Unset,
            *,
            width=Unset,
            minimum_help_width=Unset,
            printer=Unset,
            quitter=Unset,
            tokenizer=tokenize
    ):
        if not callable(tokenizer):
            raise TypeError("Command 'tokenizer' must be callable")
        self._registry = Registry(options)
        self._formatter = Formatter(
            self._registry,
            name,
            descr,
            width=width,
            minimum_help_width=minimum_help_width,
        )
        self._parser = Parser(self._registry, self._formatter, printer=printer, quitter=quitter)
        self._tokenizer = tokenizer

    # ── Declarations ────────────────────────────────────────────────────────

    def add_option(self, spec=Unset, /, **metadata):
        return self._registry.add_option(spec, **metadata)

    @property
    def options(self):
        return self._registry.list_options()

    @property
    def registry(self):
        return self._registry

    # ── Configuration ───────────────────────────────────────────────────────

    @property
    def name(self):
        return self._formatter.name

    @name.setter
    def name(self, name):
        self._formatter.name = name

    @property
    def descr(self):
        return self._formatter.descr

    @descr.setter
    def descr(self, descr):
        self._formatter.descr = descr

    @property
    def width(self):
        return self._formatter.width

    @width.setter
    def width(self, width):
        self._formatter.width = width

    @property
    def minimum_help_width(self):
        return self._formatter.minimum_help_width

    @minimum_help_width.setter
    def minimum_help_width(self, width):
        self._formatter.minimum_help_width = width

    @property
    def printer(self):
        return self._parser.printer

    @printer.setter
    def printer(self, printer):
        if not callable(getattr(printer, "msg", None)):
            raise TypeError("Command 'printer' must implement msg()")
        self._parser.printer = printer

    @property
    def quitter(self):
        return self._parser.quitter

    @quitter.setter
    def quitter(self, quitter):
        if not callable(getattr(quitter, "quit", None)):
            raise TypeError("Command 'quitter' must implement quit()")
        self._parser.quitter = quitter

    # ── Parsing ─────────────────────────────────────────────────────────────

    def run(self, prompt=Unset, /):
        """
        Tokenize process arguments and parse them.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized sequence.

        A TokenizeError shows the error and usage (exit status 1); parsing then
        continues with an empty raw map.
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("run() argument must be a string or an iterable of strings")
        else:
            raise TypeError("run() argument must be a string or an iterable of strings")

        try:
            raw = self._tokenizer(tokens, self._registry.short_options, self._registry.long_options)
        except TokenizeError as fault:
            self.usage(1, fault.message)
            raw = {}
        return self.parse(raw)

    def parse(self, raw, /):
        """
        Parse an already tokenized raw option map (None: tokenizer failure).
        """
        return self._parser.parse(raw)

    @property
    def has_run(self):
        return self._parser.has_run

    # ── Results ─────────────────────────────────────────────────────────────

    def get_option(self, name, /):
        if not self.has_run:
            self.run()
        return self._parser.resolved.get_option(name)

    def get_options(self):
        if not self.has_run:
            self.run()
        return self._parser.resolved.get_options()

    # ── Usage ───────────────────────────────────────────────────────────────

    def get_usage(self):
        return self._formatter.render()

    def usage(self, code=None, message=None, /):
        self._parser.usage(code, message)

    def __rich_repr__(self):
        yield "name", self.name
        yield "descr", self.descr
        yield "options", list(self._registry)

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, ", ".join("%s=%r" % item for item in self.__rich_repr__()))


__all__ = (
    "Command",
)
