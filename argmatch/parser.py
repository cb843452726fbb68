"""
Argmatch parser: declare, parse, then retrieve typed values.

Usage steps
1. Declare arguments with add_positional() and add_optional().
2. Pass the process argument vector (program name first) to parse().
3. Retrieve each value by name with arg(), arg_at() or args(), naming the kind
   the value should be converted to.

    from argmatch import Parser, Arity, UINT32

    parser = Parser()
    parser.add_positional("string")
    parser.add_optional("--invert", Arity.FLAG, flag="-i")
    parser.add_optional("--repeat", flag="-r")
    parser.add_optional("--filter", Arity.APPEND, flag="-f")

    parser.parse(["sort", "banana", "-f", "a", "-r", "2"])   # -> [] (no leftovers)
    parser.arg("repeat", UINT32, default=1)                  # -> 2
    parser.args("filter")                                    # -> ['a']
    parser.arg("invert", bool)                               # -> False

Fault policy
- Declaration and retrieval mistakes raise LogicError subclasses immediately.
- Faults caused by the argument vector (UsageError subclasses, including conversion
  faults at retrieval time) go through Parser.trigger(): they carry the program name
  and are raised, or, with shell=True, printed with the usage line before exiting
  with status 1.
- -h/--help raises HelpRequested, or, with shell=True, prints the help and exits 0.
"""
from rich.console import Console

from . import rendering
from .arguments import Arity, Positional, Optional
from .converters import convert, resolve_kind
from .faults import *
from .matcher import match
from .schema import Schema
from .utils import Unset


class Parser:
    """
    Command-line argument parser for one flat namespace of arguments.

    Options
    - prog: program name used in messages and usage; defaults to the first element
      of the vector given to parse().
    - shell: print faults/help and exit instead of raising (host convenience).
    - colorful: style rich output.
    - fancy: wrap help in a panel and faults in panels.
    """

    def __init__(self, prog=Unset, /, *, shell=False, colorful=True, fancy=False):
        if not isinstance(prog, str | Unset):
            raise TypeError("parser 'prog' must be a string")
        self._schema = Schema()
        self._prog = prog
        self._program = None
        self.shell = bool(shell)
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)

    @property
    def prog(self):
        return self._program if self._prog is Unset else self._prog

    @property
    def schema(self):
        return self._schema

    @property
    def positionals(self):
        return self._schema.positionals

    @property
    def optionals(self):
        return self._schema.optionals

    def add_positional(self, name, /, descr=Unset):
        return self._schema.add_positional(name, descr)

    def add_optional(self, long_name, arity=Arity.SINGLE, /, flag=Unset, descr=Unset):
        return self._schema.add_optional(long_name, arity, flag=flag, descr=descr)

    def trigger(self, fault, /, **options):
        """
        Fire a usage fault or help signal with this parser's runtime options merged in.
        """
        if isinstance(fault, HelpRequested):
            options["help"] = rendering.help(self, colorful=self.colorful, fancy=self.fancy)
        elif isinstance(fault, UsageError):
            options["usage"] = rendering.usage(self, colorful=self.colorful)
        trigger(fault, prog=self.prog, shell=self.shell, colorful=self.colorful, fancy=self.fancy, **options)

    def parse(self, args, /):
        """
        Match the argument vector against the declared arguments.

        Parameters
        - args: sequence of str, program name first (e.g. sys.argv).

        Returns
        - list of the positional tokens left over beyond the declared positionals,
          in command-line order. The given sequence is not modified.

        Raises
        - UsageError subclasses (see argmatch.matcher) and HelpRequested. On failure
          no argument definition is modified.
        """
        args = list(args)
        if not args:
            raise ValueError("parse() argument must start with the program name")
        self._program = args[0]

        try:
            result = match(self._schema, args[1:])
        except (UsageError, HelpRequested) as fault:
            return self.trigger(fault)

        positionals = tuple(self._schema.positionals.values())
        for positional, value in zip(positionals, result.positionals):
            positional._assign(value)
        for optional in self._schema.optionals.values():
            optional._assign(result.optionals.get(optional.name, ()))

        return list(result.positionals[len(positionals):])

    def has_arg(self, name, /):
        """
        True if the user supplied the named optional argument at least once.
        """
        return self._schema.optional(name).exists

    def arg_count(self, name, /):
        """
        Number of values recorded for the named argument (1 for a parsed positional).
        """
        return self._schema.lookup(name).count

    def arg(self, name, kind=str, /, default=Unset):
        """
        First value of the named argument converted to kind, or default when absent.
        """
        return self.arg_at(name, 0, kind, default=default)

    def arg_at(self, name, index, kind=str, /, default=Unset):
        """
        Value at index of the named argument, converted to kind.

        Resolution
        - recorded values exist: index must be within them (IndexOutOfRangeError
          otherwise, even when a default is given);
        - no values: default when given (returned as-is), "false" for a FLAG
          optional, else NoDefaultAvailableError;
        - positionals hold a single value at index 0;
        - unknown names raise UnknownArgumentError.
        """
        argument = self._schema.lookup(name)
        kind = resolve_kind(kind)

        if isinstance(argument, Positional):
            if index != 0:
                raise IndexOutOfRangeError(
                    "index %d is out of range for %r" % (index, name),
                    title="index out of range",
                    code=FaultCode.INDEX_OUT_OF_RANGE,
                    hint="positional arguments hold a single value at index 0",
                    name=name,
                )
            values = () if argument.value is None else (argument.value,)
        else:
            values = argument.values

        if values:
            if not 0 <= index < len(values):
                raise IndexOutOfRangeError(
                    "index %d is out of range for %r" % (index, name),
                    title="index out of range",
                    code=FaultCode.INDEX_OUT_OF_RANGE,
                    hint="%r holds %d value(s); check arg_count() first" % (name, len(values)),
                    name=name,
                )
            value = values[index]
        elif default is not Unset:
            return default
        elif isinstance(argument, Optional) and argument.arity is Arity.FLAG:
            value = "false"
        else:
            raise NoDefaultAvailableError(
                "no value given for %r and no default specified" % name,
                title="no default available",
                code=FaultCode.NO_DEFAULT_AVAILABLE,
                hint="pass a default or check has_arg() first",
                name=name,
            )

        try:
            return convert(kind, value, name=name)
        except ConversionError as fault:
            return self.trigger(fault)

    def args(self, name, kind=str, /):
        """
        All values of the named argument converted to kind (empty when absent).
        """
        return [self.arg_at(name, index, kind) for index in range(self.arg_count(name))]

    def print_usage(self):
        Console().print(rendering.usage(self, colorful=self.colorful))

    def print_help(self):
        Console().print(rendering.help(self, colorful=self.colorful, fancy=self.fancy))


__all__ = (
    "Parser",
)
