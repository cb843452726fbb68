"""
Tokenizer/matcher: assign raw command-line tokens to declared arguments.

The matcher walks the tokens once, left to right, with one token of lookahead:
- "-x" tokens are resolved through the schema's flag table,
- "--name" / "-name" tokens are taken by their reference name,
- anything else (including "-5", "-" and "--") is a positional token.

Arity rules
- FLAG:   recorded as "true"; a second occurrence is a RepeatedOptionError.
- SINGLE: consumes the next token as its value; a second occurrence is a
          RepeatedOptionError.
- APPEND: consumes the next token as its value on every occurrence.
A value may not itself look like an option: "-o -a" is a MissingValueError for -o.

Only after the whole stream has been scanned is the number of positional tokens
checked against the declared positionals, so option faults always win over a
MissingPositionalError. Extra positional tokens are leftovers, not faults.

The matcher never writes into the schema; the parser applies a Match only when
matching succeeded as a whole.
"""
import difflib
import functools
from collections import defaultdict, deque
from types import MappingProxyType
from typing import NamedTuple

from .arguments import Arity
from .faults import *
from .names import *
from .schema import HELP


class Match(NamedTuple):
    positionals: tuple
    optionals: MappingProxyType


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def _suggest(token, candidates):
    """
    hint for an unknown option, pointing at the closest declared spelling if any.
    """
    suggestions = difflib.get_close_matches(token, candidates, 1)
    if suggestions:
        return "did you mean %r? pass --help to display possible options" % suggestions[0]
    return "pass --help to display possible options"


def _resolve(schema, token, index):
    """
    Return the reference name an option token designates, or None for a positional.
    """
    if (char := format_flag(token)) is not None:
        if (name := schema.resolve_flag(char)) is None:
            raise UnknownFlagError(
                "invalid flag %r, pass --help to display possible options" % token,
                title="unknown flag",
                code=FaultCode.UNKNOWN_FLAG,
                hint=_suggest(token, ["-" + flag for flag in schema.flags]),
                name=token,
                index=index,
            )
        return name
    return format_long_name(token)


def match(schema, tokens, /):
    """
    Match tokens (program name excluded) against schema.

    Returns
    - Match(positionals, optionals): positional tokens in scan order and a read-only
      mapping of reference name -> tuple of values, for the optionals actually given.

    Raises
    - HelpRequested when the reserved help option is met.
    - UnknownFlagError, UnknownOptionError, RepeatedOptionError, MissingValueError
      as soon as the offending token is seen.
    - MissingPositionalError once the whole stream has been scanned.
    """
    pending = deque(enumerate(tokens, start=1))
    positionals = []
    optionals = defaultdict(list)

    while pending:
        index, token = pending.popleft()

        if (name := _resolve(schema, token, index)) is None:
            positionals.append(token)
            continue

        if name == HELP:
            raise HelpRequested(name=name, index=index)

        try:
            optional = schema.optionals[name]
        except KeyError:
            raise UnknownOptionError(
                "invalid option %r, pass --help to display possible options" % name,
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                hint=_suggest("--" + name, ["--" + other for other in schema.optionals]),
                name=name,
                index=index,
            ) from None

        repeated = name in optionals

        if optional.arity is Arity.FLAG:
            if repeated:
                raise RepeatedOptionError(
                    "%r should only be specified once" % name,
                    title="repeated option",
                    code=FaultCode.REPEATED_OPTION,
                    hint="remove the %s occurrence of %r" % (_ordinal(len(optionals[name]) + 1), token),
                    name=name,
                    index=index,
                )
            optionals[name].append("true")
            continue

        if not pending or is_valid_option_name(pending[0][1]):
            raise MissingValueError(
                "%r requires a value" % name,
                title="missing value",
                code=FaultCode.MISSING_VALUE,
                hint="pass a value right after %r at %s position" % (token, _ordinal(index)),
                name=name,
                index=index,
            )
        _, value = pending.popleft()

        if repeated and optional.arity is not Arity.APPEND:
            raise RepeatedOptionError(
                "%r should only be specified once" % name,
                title="repeated option",
                code=FaultCode.REPEATED_OPTION,
                hint="remove the %s occurrence of %r" % (_ordinal(len(optionals[name]) + 1), token),
                name=name,
                index=index,
            )
        optionals[name].append(value)

    if len(positionals) < len(schema.positionals):
        missing = list(schema.positionals)[len(positionals)]
        raise MissingPositionalError(
            "requires positional argument %r" % missing,
            title="missing positional",
            code=FaultCode.MISSING_POSITIONAL,
            hint="expected %d positional arguments but %d were given" % (len(schema.positionals), len(positionals)),
            name=missing,
        )

    return Match(
        tuple(positionals),
        MappingProxyType({name: tuple(values) for name, values in optionals.items()}),
    )


__all__ = (
    "Match",
    "match",
)
