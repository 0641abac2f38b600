"""
Switchboard faults (errors and warnings).

Scope
- FaultCode: canonical, stable numeric identifiers for every user- or
  programmer-facing issue. Codes are grouped by domain:
  • declarations (2110x): issues found while declaring or querying options.
  • input (2111x): issues found while parsing user input.
  • warnings (22xxx): non-fatal declaration issues.
- OptionException / OptionWarning: base types carrying a message plus keyword
  options (the context of the fault: names, value, pattern, ...).
- trigger(): raise an exception or emit a warning uniformly.

Propagation
- Declaration faults (InvalidSpecError, UnknownOptionRequestedError) are
  programmer errors and always propagate to the caller.
- Input faults (ValidationError, MissingRequiredOptionError, TokenizeError)
  are caught by the parser and turned into usage-and-exit.
"""
import warnings
from enum import IntEnum
from types import MappingProxyType

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers), exposed as the `code`
    attribute of every fault class.
    """
    # --- declaration errors (2110x) ---
    INVALID_SPEC                = 21101
    UNKNOWN_OPTION_REQUESTED    = 21102

    # --- input errors (2111x) ---
    VALIDATION                  = 21111
    MISSING_REQUIRED_OPTION     = 21112
    MALFORMED_INPUT             = 21113

    # --- warnings (22xxx) ---
    DUPLICATE_OPTION            = 22101


class OptionException(Exception):
    """
    base class of every switchboard error.

    attributes
    - message: human readable, lowercased description.
    - options: read-only mapping with the fault context.
    - code: the FaultCode of the concrete class (None on the base).
    """
    code = None

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = "" if message is Unset else message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        # context keys are reachable as attributes (fault.value, fault.pattern, ...)
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __str__(self):
        return self.message

    def __reduce__(self):
        return _rebuild, (type(self), self.message, dict(self.options))


def _rebuild(cls, message, options):
    return cls(message, **options)


class InvalidSpecError(OptionException, ValueError):
    code = FaultCode.INVALID_SPEC

class UnknownOptionRequestedError(OptionException, LookupError):
    code = FaultCode.UNKNOWN_OPTION_REQUESTED

class ValidationError(OptionException, ValueError):
    code = FaultCode.VALIDATION

class MissingRequiredOptionError(OptionException):
    code = FaultCode.MISSING_REQUIRED_OPTION

class TokenizeError(OptionException, ValueError):
    code = FaultCode.MALFORMED_INPUT


class OptionWarning(UserWarning):
    """
    base class of every switchboard warning; same shape as OptionException.
    """
    code = None

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = "" if message is Unset else message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message


class DuplicateOptionWarning(OptionWarning):
    code = FaultCode.DUPLICATE_OPTION


def trigger(fault, /, *, stacklevel=3):
    """
    surface a fault: exceptions are raised, warnings are emitted.

    the default stacklevel points warnings at the caller of the public API
    method that triggered them.
    """
    if isinstance(fault, OptionException):
        raise fault
    if isinstance(fault, OptionWarning):
        return warnings.warn(fault, stacklevel=stacklevel)
    raise TypeError("trigger() argument must be an option exception or an option warning")


__all__ = (
    "FaultCode",
    "OptionException",
    "InvalidSpecError",
    "UnknownOptionRequestedError",
    "ValidationError",
    "MissingRequiredOptionError",
    "TokenizeError",
    "OptionWarning",
    "DuplicateOptionWarning",
    "trigger",
)
