"""
Switchboard parser: raw option map -> resolved options.

For every declared option, in registry order:

1. look the option up in the raw map, long name first, then short name;
2. when found, coerce it (see switchboard.coercion);
3. otherwise use the declared default, verbatim (it is not coerced);
4. otherwise, when the option is required, fail;
5. otherwise leave it unresolved.

Failures (a validation mismatch or a missing required option) end the pass:
the parser writes the error and the usage text through its printer and asks
its quitter to exit with status 1. No further option is processed. When the
quitter returns (test doubles, embedding hosts), parse() returns the options
resolved before the failure.

A raw map of None stands for a tokenizer that failed altogether: usage is
shown right away and the pass continues as if no option was given, so that
required options are still reported.
"""
from .coercion import coerce
from .console import ConsolePrinter, SystemQuitter
from .faults import *
from .results import ResolvedOptions
from .usage import Formatter, display_name
from .utils import *


class Parser:
    """
    Parse raw option maps against a registry.

    Collaborators
    - registry: the declared options (read only).
    - formatter: renders the usage text; defaults to Formatter(registry).
    - printer: message sink (msg(text)); defaults to ConsolePrinter().
    - quitter: process terminator (quit(code)); defaults to SystemQuitter().
    """

    def __init__(self, registry, formatter=Unset, /, *, printer=Unset, quitter=Unset):
        self._registry = registry
        self.formatter = formatter if formatter is not Unset else Formatter(registry)
        self.printer = printer if printer is not Unset else ConsolePrinter()
        self.quitter = quitter if quitter is not Unset else SystemQuitter()
        self._resolved = ResolvedOptions(registry)
        self._has_run = False

    @property
    def resolved(self):
        return self._resolved

    @property
    def has_run(self):
        return self._has_run

    def parse(self, raw, /):
        """
        Resolve every declared option against `raw` and return the result.
        """
        self._has_run = True
        self._resolved = resolved = ResolvedOptions(self._registry)

        if raw is None:
            self.usage(1)
            raw = {}

        for spec in self._registry:
            try:
                self._resolve(spec, raw, resolved)
            except (ValidationError, MissingRequiredOptionError) as fault:
                self.usage(1, fault.message)
                break
        return resolved

    def _resolve(self, spec, raw, resolved):
        for name in spec.names:
            if name in raw:
                resolved._store(spec, coerce(spec, raw[name]))
                return
        if spec.default is not Unset:
            resolved._store(spec, spec.default)
            return
        if spec.required:
            raise MissingRequiredOptionError(
                "missing required option %s" % display_name(spec),
                names=spec.names,
            )

    def usage(self, code=None, message=None, /):
        """
        Write `message` (when given) and the usage text, then exit with `code`
        (unless it is None).
        """
        if message is not None:
            self.printer.msg("%s Error: %s\n\n" % (self.formatter.name, message))
        self.printer.msg(self.formatter.render())
        if code is not None:
            self.quitter.quit(code)


__all__ = (
    "Parser",
)
