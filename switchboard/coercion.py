"""
Switchboard value coercion.

coerce(spec, raw) turns a raw value, as produced by the tokenizer, into the
typed value of an option:

- raw forms
  • str: a supplied value.
  • bool: the “present, no value” marker (getopt reports False); it always
    coerces to True.
  • list/tuple: repeated occurrences of the same flag.

- arity
  • multiple options always yield a list, one coerced item per occurrence.
  • other options keep only the last occurrence (last wins, silently).

- conversion (OptionType)
  • string: unchanged.
  • integer/number: permissive numeric prefix parse; text without a numeric
    prefix becomes 0 (or 0.0). “12abc” is 12, “abc” is 0, “1e3” is 1000.
  • json: json.loads; undecodable or too deeply nested text becomes None.
  • url: dict of the components present among scheme, host, port, user,
    pass, path, query and fragment.

- validation
  • the pattern is searched in the string form of the *coerced* value, so an
    integer option validated with r"^\\d+$" sees "0" for an input of "abc".
"""
import json
import math
import re
from urllib.parse import urlsplit

from .faults import *
from .options import OptionType

# Leading whitespace, sign, digits with optional fraction, optional exponent.
_NUMERIC_PREFIX = re.compile(r"[ \t\n\r\v\f]*(?P<number>[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?)")


def _to_integer(text):
    if not (match := _NUMERIC_PREFIX.match(text)):
        return 0
    number = match["number"]
    if re.fullmatch(r"[+-]?\d+", number):
        try:
            return int(number)
        except ValueError:
            # too many digits for int(); goes through float like fractions
            pass
    number = float(number)
    if not math.isfinite(number):
        return 0
    return int(number)


def _to_number(text):
    if not (match := _NUMERIC_PREFIX.match(text)):
        return 0.0
    return float(match["number"])


def _to_json(text):
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return None


def _to_url(text):
    components = {}
    try:
        parts = urlsplit(text)
    except ValueError:
        return components
    if parts.scheme:
        components["scheme"] = parts.scheme
    if parts.hostname:
        components["host"] = parts.hostname
    try:
        if parts.port is not None:
            components["port"] = parts.port
    except ValueError:
        # non-numeric or out of range port: keep what was decomposed so far
        pass
    if parts.username is not None:
        components["user"] = parts.username
    if parts.password is not None:
        components["pass"] = parts.password
    for key, object in (("path", parts.path), ("query", parts.query), ("fragment", parts.fragment)):
        if object:
            components[key] = object
    return components


_CONVERTERS = {
    OptionType.INTEGER: _to_integer,
    OptionType.NUMBER: _to_number,
    OptionType.JSON: _to_json,
    OptionType.URL: _to_url,
}


def stringify(value, /):
    """
    Render a coerced value back to text (the form validation patterns see).

    - True -> "1", False/None -> ""
    - integral floats drop their fraction (1.0 -> "1")
    - dicts and lists render as compact JSON
    """
    if value is True:
        return "1"
    if value is False or value is None:
        return ""
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return repr(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _coerce_single(spec, raw):
    if isinstance(raw, bool):
        raw = True

    value = raw
    if (converter := _CONVERTERS.get(spec.type)) is not None:
        value = converter(stringify(raw))

    if spec.validate is not None and not spec.validate.search(text := stringify(value)):
        raise ValidationError(
            "%s does not match %s" % (text, spec.validate.pattern),
            value=value,
            pattern=spec.validate.pattern,
            names=spec.names,
        )
    return value


def coerce(spec, raw, /):
    """
    Convert a raw value into the typed value of `spec`.

    Raises
    - ValidationError: when the coerced value does not match spec.validate.
    """
    if spec.multiple:
        if not isinstance(raw, (list, tuple)):
            raw = [raw]
        return [_coerce_single(spec, item) for item in raw]
    if isinstance(raw, (list, tuple)):
        raw = raw[-1] if raw else True
    return _coerce_single(spec, raw)


__all__ = (
    "coerce",
    "stringify",
)
