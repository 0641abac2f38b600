"""
Switchboard resolved options (result accessor).

ResolvedOptions is the outcome of one parse pass. It is a read-only mapping
from option names to typed values where both names of an option (short and
long) are keys of the same value. Options that were neither supplied nor
defaulted have no entry at all.

Accessors
- get_option(name): value by short or long name; None when unresolved.
  Value-less flags report True when present and None (never False) otherwise.
- get_options(): every declared option by both names, unresolved ones as None.
"""
from collections.abc import Mapping


class ResolvedOptions(Mapping):

    def __init__(self, registry, values=(), /):
        self._registry = registry
        self._values = dict(values)

    def _store(self, spec, value, /):
        for name in spec.names:
            self._values[name] = value

    def get_option(self, name, /):
        """
        Return the value of an option by its short or long name.

        Raises UnknownOptionRequestedError when `name` was never declared; this
        is a caller error and never triggers usage-and-exit.
        """
        spec = self._registry.lookup(name)
        for key in (name, *spec.names):
            if key in self._values:
                value = self._values[key]
                break
        else:
            return None
        if value is False:
            return True
        return value

    def get_options(self):
        """
        Return {name: value} for every declared option, long name first.
        """
        options = {}
        for spec in self._registry:
            for name in spec.names:
                options[name] = self.get_option(name)
        return options

    def __getitem__(self, name):
        return self._values[name]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __rich_repr__(self):
        yield from self._values.items()

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, ", ".join("%s=%r" % item for item in self._values.items()))


__all__ = (
    "ResolvedOptions",
)
