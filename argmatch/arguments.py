r"""
Argmatch argument definitions.

Overview
- Definitions
  • Positional: argument identified by its position (e.g. <file>); holds one value.
  • Optional: argument identified by a "--long-name" (and optionally a "-x" flag);
    holds zero, one or many values depending on its arity.
- Arity
  • FLAG:   presence only; recorded as the single value "true" when given.
  • SINGLE: one value, given at most once.
  • APPEND: any number of values, one per occurrence, in command-line order.

Ownership
- Definitions are created by the schema (see argmatch.schema) and returned to the
  host as handles. The host may set their help text through describe(); values are
  written by the parser only, after a successful parse.

Introspection & representation
- ArgumentType metaclass exposes the fields listed in __introspectable__ as read-only
  properties (via mirror()) and provides stable __repr__/__rich_repr__ for
  diagnostics and rendering.

Quick example:
    >>> from argmatch import Parser, Arity
    >>> parser = Parser()
    >>> parser.add_positional("file").describe("file to read")
    positional(name='file', descr='file to read', value=None)
    >>> parser.add_optional("--verbose", Arity.FLAG, flag="-v")
    optional(name='verbose', flag='v', arity=<Arity.FLAG: 1>, descr=None, values=())
"""
import functools
import operator
import re
from enum import IntEnum

from .utils import *


class Arity(IntEnum):
    """
    how many values an optional argument may carry.
    """
    FLAG   = 1
    SINGLE = 2
    APPEND = 3


class ArgumentType(type):
    """
    Metaclass that turns definitions into introspectable records.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages and help output.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - optional(name='verbose', flag='v', arity=<Arity.FLAG: 1>, descr=None, values=())
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers, in __introspectable__ order.
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_descr(cls, descr, /):
    """
    Internal: validate help text; Unset becomes None, strings are trimmed.
    """
    if not isinstance(descr, str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    if isinstance(descr, str):
        descr = descr.strip()
    return coalesce(descr) or None


class Argument(metaclass=ArgumentType):
    """
    Behavior shared by positional and optional definitions.
    """

    def describe(self, descr, /):
        """
        Set the help text shown next to this argument, and return the definition.

        An empty (or blank) string clears it.
        """
        self._descr = _sanitize_descr(type(self), descr)
        return self


class Positional(Argument):
    """
    Positional argument definition.

    Properties
    - name: identifier used for retrieval and displayed as <name> in usage.
    - descr: help text or None.
    - value: the matched token, None until a successful parse.
    """

    __introspectable__ = (
        "name",
        "descr",
        "value",
    )

    def __init__(self, name, /, descr=Unset):
        self._name = name
        self._descr = _sanitize_descr(type(self), descr)
        self._value = None

    @property
    def count(self):
        return 0 if self._value is None else 1

    def _assign(self, value, /):
        self._value = value


class Optional(Argument):
    """
    Optional argument definition.

    Properties
    - name: reference name (the long name without its leading dashes).
    - flag: single-character alias or None.
    - arity: Arity.FLAG, Arity.SINGLE or Arity.APPEND.
    - descr: help text or None.
    - values: tuple of the recorded values, in command-line order.

    Truthiness follows `exists`: an optional is truthy once the user supplied it.
    """

    __introspectable__ = (
        "name",
        "flag",
        "arity",
        "descr",
        "values",
    )

    def __init__(self, name, arity=Arity.SINGLE, /, flag=None, descr=Unset):
        self._name = name
        self._flag = flag
        self._arity = Arity(arity)
        self._descr = _sanitize_descr(type(self), descr)
        self._values = []

    @property
    def count(self):
        return len(self._values)

    @property
    def exists(self):
        return len(self._values) > 0

    def __bool__(self):
        return self.exists

    @property
    def metavar(self):
        """
        Placeholder shown after value-bearing options in help (None for flags).
        """
        return None if self._arity is Arity.FLAG else self._name.upper()

    def _assign(self, values, /):
        self._values = list(values)


__all__ = (
    "Arity",
    "Argument",
    "Positional",
    "Optional",
)

# Not part of the public API.
del ArgumentType
