"""
Typed conversion of stored argument strings.

Every value the parser records is a string; retrieval asks for it as a concrete
kind. A Kind is an explicit tag (domain + bit width) so that range checks run
against the bounds of the requested type, not of Python's unbounded int.

Kinds
- BOOL                          "true" / "false" only (case-sensitive)
- CHAR                          exactly one character
- UINT8, UINT16, UINT32, UINT64 unsigned integers; any "-" is rejected up front so a
                                negative literal never wraps into a huge value
- INT8, INT16, INT32, INT64     signed integers
- FLOAT32, FLOAT64              floating point
- STRING                        identity

Python builtins act as aliases: bool -> BOOL, int -> INT64, float -> FLOAT64,
str -> STRING.

Numeric parsing follows the C library conventions the CLI world expects: leading
whitespace is skipped, the longest numeric prefix is taken and anything after it is
ignored ("-9.5" read as an integer is -9). Integers are decimal only; floats also
accept C99 hexadecimal literals ("0x1.8p1" is 3.0). The format check always runs
before the range check.
"""
import re
import struct
import sys
from decimal import Decimal
from typing import NamedTuple

from .faults import *
from .utils import Unset, coalesce


class Kind(NamedTuple):
    domain: str
    width: int = 0

    @property
    def label(self):
        return self.domain + (str(self.width) if self.width else "")

    @property
    def bounds(self):
        """
        (lowest, max) of the kind, or None for non-numeric kinds.
        """
        match self.domain:
            case "uint":
                return 0, 2 ** self.width - 1
            case "int":
                return -2 ** (self.width - 1), 2 ** (self.width - 1) - 1
            case "float":
                highest = _FLOAT32_MAX if self.width == 32 else sys.float_info.max
                return -highest, highest
        return None


_FLOAT32_MAX = 3.4028234663852886e+38

BOOL = Kind("bool")
CHAR = Kind("char")
UINT8 = Kind("uint", 8)
UINT16 = Kind("uint", 16)
UINT32 = Kind("uint", 32)
UINT64 = Kind("uint", 64)
INT8 = Kind("int", 8)
INT16 = Kind("int", 16)
INT32 = Kind("int", 32)
INT64 = Kind("int", 64)
FLOAT32 = Kind("float", 32)
FLOAT64 = Kind("float", 64)
STRING = Kind("string")

_ALIASES = {
    bool: BOOL,
    int: INT64,
    float: FLOAT64,
    str: STRING,
}

_SPACE = "[ \t\n\v\f\r]*"
_INTEGRAL = re.compile(_SPACE + r"([+-]?)0*([0-9]+)")
# Significant digits of the longest 64-bit value.
_MAX_DIGITS = 20
_NUMERIC = re.compile(
    _SPACE + r"([+-]?(?:"
    r"(?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?)"
    r"|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?|inf(?:inity)?|nan))",
    re.IGNORECASE
)


def resolve_kind(kind, /):
    """
    Normalize a Kind or a builtin alias (bool/int/float/str) into a Kind.
    """
    if isinstance(kind, Kind):
        if kind.domain in ("uint", "int") and kind.width not in (8, 16, 32, 64):
            raise ValueError("integer kinds must be 8, 16, 32 or 64 bits wide")
        if kind.domain == "float" and kind.width not in (32, 64):
            raise ValueError("float kinds must be 32 or 64 bits wide")
        if kind.domain not in ("bool", "char", "uint", "int", "float", "string"):
            raise ValueError("unknown kind domain %r" % kind.domain)
        return kind
    try:
        return _ALIASES[kind]
    except (KeyError, TypeError):
        raise TypeError("unsupported conversion kind %r" % (kind,)) from None


def _out_of_range(name, kind):
    lowest, highest = kind.bounds
    return OutOfRangeError(
        "'%s' must be in range [%r,%r]" % (name, lowest, highest),
        title="value out of range",
        code=FaultCode.OUT_OF_RANGE,
        hint="pass a %s between %r and %r" % (kind.label, lowest, highest),
        name=name,
    )


def _to_bool(name, value):
    if value == "true":
        return True
    elif value == "false":
        return False
    raise InvalidBooleanError(
        "'%s' must be either 'true' or 'false'" % name,
        title="invalid boolean",
        code=FaultCode.INVALID_BOOLEAN,
        hint="booleans are spelled exactly 'true' or 'false'",
        name=name,
    )


def _to_char(name, value):
    if len(value) != 1:
        raise InvalidCharError(
            "'%s' must be a single character" % name,
            title="invalid character",
            code=FaultCode.INVALID_CHAR,
            hint="pass exactly one character",
            name=name,
        )
    return value


def _to_integral(name, value, kind):
    # Rejected before parsing: a "-" would otherwise wrap around like strtoull does.
    if kind.domain == "uint" and "-" in value:
        raise _out_of_range(name, kind)

    if not (match := _INTEGRAL.match(value)):
        raise NotIntegralError(
            "'%s' must be of integral type" % name,
            title="not an integer",
            code=FaultCode.NOT_INTEGRAL,
            hint="pass a whole number (for example: 42)",
            name=name,
        )

    sign, digits = match.groups()
    if len(digits) > _MAX_DIGITS:
        raise _out_of_range(name, kind)

    number = int(sign + digits)
    widest = UINT64 if kind.domain == "uint" else INT64
    for lowest, highest in (widest.bounds, kind.bounds):
        if not lowest <= number <= highest:
            raise _out_of_range(name, kind)
    return number


def _to_float(name, value, kind):
    if not (match := _NUMERIC.match(value)):
        raise NotNumericError(
            "'%s' must be of integral type" % name,
            title="not a number",
            code=FaultCode.NOT_NUMERIC,
            hint="pass a number (for example: 2.5 or 1e-3)",
            name=name,
        )

    if match["hex"]:
        try:
            number = Decimal(float.fromhex(match[1]))
        except OverflowError:
            raise _out_of_range(name, kind) from None
    else:
        number = Decimal(match[1])
    if number.is_nan():
        return float("nan")

    lowest, highest = kind.bounds
    if number < Decimal(lowest) or number > Decimal(highest):
        raise _out_of_range(name, kind)

    if kind.width == 32:
        return struct.unpack("f", struct.pack("f", float(number)))[0]
    return float(number)


def convert(kind, value, /, name=Unset):
    """
    Convert a stored string into the requested kind.

    Parameters
    - kind: Kind | bool | int | float | str
      Target kind (builtins are aliases, see module docs).
    - value: str
      The recorded token.
    - name: str
      Argument name used in fault messages (defaults to "value").

    Raises
    - InvalidBooleanError, InvalidCharError, NotIntegralError, NotNumericError,
      OutOfRangeError (all ConversionError, a UsageError).
    """
    if not isinstance(value, str):
        raise TypeError("convert() value must be a string")

    kind = resolve_kind(kind)
    name = coalesce(name, "value")

    match kind.domain:
        case "bool":
            return _to_bool(name, value)
        case "char":
            return _to_char(name, value)
        case "uint" | "int":
            return _to_integral(name, value, kind)
        case "float":
            return _to_float(name, value, kind)
        case _:
            return value


__all__ = (
    "Kind",
    "BOOL",
    "CHAR",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "FLOAT32",
    "FLOAT64",
    "STRING",
    "resolve_kind",
    "convert",
)
