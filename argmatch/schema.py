"""
Argument schema: the registry of declared positional and optional arguments.

Namespaces
- positionals: name -> Positional, in declaration order.
- optionals:   reference name -> Optional, in declaration order.
- flags:       flag character -> reference name.
Positional names and optional reference names share one namespace; a name can be
declared at most once across both.

Registration faults are LogicError subclasses (bugs in the host program):
- InvalidNameError:   malformed positional name or long option name.
- DuplicateNameError: name already declared (either namespace).
- InvalidFlagError:   flag not spelled "-x" with x a letter or underscore.
- DuplicateFlagError: flag already aliased to another optional.
A failed registration leaves the schema unchanged.

The reserved `help` optional (-h/--help, FLAG) is declared by the constructor.
"""
from types import MappingProxyType

from .arguments import Arity, Positional, Optional
from .faults import *
from .names import *
from .utils import Unset

HELP = "help"


class Schema:
    """
    Ordered registry of argument definitions.
    """

    def __init__(self):
        self._positionals = {}
        self._optionals = {}
        self._flags = {}
        self.add_optional("--help", Arity.FLAG, flag="-h", descr="display this help text")

    @property
    def positionals(self):
        return MappingProxyType(self._positionals)

    @property
    def optionals(self):
        return MappingProxyType(self._optionals)

    @property
    def flags(self):
        return MappingProxyType(self._flags)

    def add_positional(self, name, /, descr=Unset):
        if not is_valid_positional_name(name):
            raise InvalidNameError(
                "invalid positional argument name %r" % (name,),
                title="invalid name",
                code=FaultCode.INVALID_NAME,
                hint="positional names are word characters and hyphens (for example: input-file)",
                name=name,
            )
        if name in self._optionals:
            raise DuplicateNameError(
                "positional argument name conflicts with optional argument reference name %r" % name,
                title="duplicate name",
                code=FaultCode.DUPLICATE_NAME,
                hint="positionals and optionals share one namespace",
                name=name,
            )
        if name in self._positionals:
            raise DuplicateNameError(
                "duplicate positional argument name %r" % name,
                title="duplicate name",
                code=FaultCode.DUPLICATE_NAME,
                hint="declare each positional once",
                name=name,
            )
        self._positionals[name] = positional = Positional(name, descr)
        return positional

    def add_optional(self, long_name, arity=Arity.SINGLE, /, flag=Unset, descr=Unset):
        """
        Declare an optional argument and return its definition.

        Parameters
        - long_name: str, "-name" or "--name"; the reference name drops the dashes.
        - arity: Arity (SINGLE by default).
        - flag: "-x" short alias, optional.
        - descr: help text, optional.
        """
        char = None
        if flag is not Unset:
            if (char := format_flag(flag)) is None:
                raise InvalidFlagError(
                    "invalid flag name %r" % (flag,),
                    title="invalid flag",
                    code=FaultCode.INVALID_FLAG,
                    hint="flags are a dash and one letter or underscore (for example: -v)",
                    name=flag,
                )
            if char in self._flags:
                raise DuplicateFlagError(
                    "duplicate flag name %r" % flag,
                    title="duplicate flag",
                    code=FaultCode.DUPLICATE_FLAG,
                    hint="flag %r already belongs to %r" % (flag, self._flags[char]),
                    name=flag,
                )

        if (name := format_long_name(long_name)) is None:
            raise InvalidNameError(
                "invalid optional argument name: %s" % (long_name,),
                title="invalid name",
                code=FaultCode.INVALID_NAME,
                hint="long names are one or two dashes and at least two characters (for example: --output)",
                name=long_name,
            )
        if name in self._positionals:
            raise DuplicateNameError(
                "optional argument reference name conflicts with positional argument name %r" % name,
                title="duplicate name",
                code=FaultCode.DUPLICATE_NAME,
                hint="positionals and optionals share one namespace",
                name=name,
            )
        if name in self._optionals:
            raise DuplicateNameError(
                "duplicate optional argument name %r" % name,
                title="duplicate name",
                code=FaultCode.DUPLICATE_NAME,
                hint="declare each option once",
                name=name,
            )

        self._optionals[name] = optional = Optional(name, arity, flag=char, descr=descr)
        if char is not None:
            self._flags[char] = name
        return optional

    def resolve_flag(self, char, /):
        return self._flags.get(char)

    def positional(self, name, /):
        try:
            return self._positionals[name]
        except KeyError:
            raise UnknownArgumentError(
                "no positional argument by the name %r" % (name,),
                title="unknown argument",
                code=FaultCode.UNKNOWN_ARGUMENT,
                name=name,
            ) from None

    def optional(self, name, /):
        try:
            return self._optionals[name]
        except KeyError:
            raise UnknownArgumentError(
                "no optional argument by the name %r" % (name,),
                title="unknown argument",
                code=FaultCode.UNKNOWN_ARGUMENT,
                name=name,
            ) from None

    def lookup(self, name, /):
        """
        Return the optional or positional definition registered under name.
        """
        if name in self._optionals:
            return self._optionals[name]
        if name in self._positionals:
            return self._positionals[name]
        raise UnknownArgumentError(
            "no argument by the name %r" % (name,),
            title="unknown argument",
            code=FaultCode.UNKNOWN_ARGUMENT,
            name=name,
        )


__all__ = (
    "HELP",
    "Schema",
)
