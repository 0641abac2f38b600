r"""
Switchboard tokenizer: argv-like tokens -> raw option map.

This is a getopt-style reader driven by the registry's declaration strings
(see switchboard.options): short_options such as "e:v::x" and long_options
such as ("environment:", "verbose::", "x-ray").

Accepted forms
- flags:            -v  --verbose  -vx (clustered)
- required values:  -e VALUE  -eVALUE  -e=VALUE  --environment VALUE  --environment=VALUE
- optional values:  -eVALUE  -e=VALUE  --environment=VALUE (attached only)

Result
- {name: value}: value is the string, or False for “present without value”.
  Repeated options collect their values in a list, in order of appearance.

Stops
- at "--" (consumed) and at the first non-option token (getopt semantics).

Faults
- undeclared options are skipped, as getopt does.
- a required value missing at the end of the input, or a value attached to a
  long option that takes none, raises TokenizeError.
"""
import re
from collections import deque

from .faults import *

_DECLARATION = re.compile(r"(?P<name>[^:]+)(?P<marker>:{0,2})")


def _declarations(short_options, long_options):
    shorts = {}
    for match in _DECLARATION.finditer(short_options):
        name, marker = match["name"], match["marker"]
        # each character but the last one of a run is a value-less flag
        for character in name[:-1]:
            shorts[character] = ""
        shorts[name[-1]] = marker
    longs = {}
    for declaration in long_options:
        if not (match := _DECLARATION.fullmatch(declaration)):
            raise TypeError("tokenize() malformed long option declaration %r" % declaration)
        longs[match["name"]] = match["marker"]
    return shorts, longs


def _record(raw, name, value):
    if name not in raw:
        raw[name] = value
    elif isinstance(raw[name], list):
        raw[name].append(value)
    else:
        raw[name] = [raw[name], value]


def tokenize(arguments, short_options="", long_options=(), /):
    """
    Read `arguments` (argv without the program name) into a raw option map.
    """
    shorts, longs = _declarations(short_options, long_options)
    tokens = deque(arguments)
    raw = {}

    while tokens:
        token = tokens.popleft()

        if token == "--":
            break

        if token.startswith("--"):
            name, equals, value = token[2:].partition("=")
            if (marker := longs.get(name)) is None:
                continue
            if not marker:
                if equals:
                    raise TokenizeError(
                        "option '--%s' does not take a value" % name,
                        token=token,
                    )
                _record(raw, name, False)
            elif equals:
                _record(raw, name, value)
            elif marker == "::":
                _record(raw, name, False)
            elif tokens:
                _record(raw, name, tokens.popleft())
            else:
                raise TokenizeError(
                    "option '--%s' requires a value" % name,
                    token=token,
                )
            continue

        if not token.startswith("-") or token == "-":
            break

        cluster = token[1:]
        while cluster:
            name, cluster = cluster[0], cluster[1:]
            if (marker := shorts.get(name)) is None:
                continue
            if not marker:
                _record(raw, name, False)
                continue
            # the rest of the cluster is the value; a leading '=' is dropped
            value = cluster.removeprefix("=")
            cluster = ""
            if value:
                _record(raw, name, value)
            elif marker == "::":
                _record(raw, name, False)
            elif tokens:
                _record(raw, name, tokens.popleft())
            else:
                raise TokenizeError(
                    "option '-%s' requires a value" % name,
                    token=token,
                )

    return raw


__all__ = (
    "tokenize",
)
