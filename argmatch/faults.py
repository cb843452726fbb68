"""
Argmatch faults (errors and signals) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the library
  can raise. Codes are grouped by domain to keep logs/searches predictable.
- ArgumentFault: base type that carries message + options and knows how to render
  itself (rich) and how to fire (raise, or print and exit in shell mode).
- UsageError / LogicError: the two fault families.
  • UsageError: the user supplied a bad argument vector (missing positional,
    unknown option, repeated option, missing value, unconvertible value). Hosts
    are expected to catch it, print it and exit with a non-zero status.
  • LogicError: the host program itself is wrong (malformed or duplicate names,
    querying an undeclared argument, asking for a value that cannot exist).
    These are bugs; they always propagate.
- HelpRequested: the `-h/--help` signal (not a fault).
- trigger(): central entry point to surface a fault with runtime options.

Integration
- The parser merges its own options (prog, shell, colorful, fancy, usage) into a
  fault through copy.replace(...) and then triggers it.
- In non-shell mode faults are raised; in shell mode usage errors are rendered via
  rich on stderr and the process exits with status 1.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - matching (1110x)
      • MISSING_POSITIONAL, UNKNOWN_OPTION, UNKNOWN_FLAG, REPEATED_OPTION, MISSING_VALUE
    - conversion (1120x)
      • INVALID_BOOLEAN, INVALID_CHAR, NOT_INTEGRAL, NOT_NUMERIC, OUT_OF_RANGE
    - registration (2110x)
      • INVALID_NAME, DUPLICATE_NAME, INVALID_FLAG, DUPLICATE_FLAG
    - lookup (2120x)
      • UNKNOWN_ARGUMENT, NO_DEFAULT_AVAILABLE, INDEX_OUT_OF_RANGE

    rationale
    - 1xxxx codes are user-input faults, 2xxxx codes are host-program faults.
    - spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- matching errors (11xxx) ---
    MISSING_POSITIONAL   = 11101
    UNKNOWN_OPTION       = 11102
    UNKNOWN_FLAG         = 11103
    REPEATED_OPTION      = 11104
    MISSING_VALUE        = 11105

    # --- conversion errors (11xxx) ---
    INVALID_BOOLEAN      = 11201
    INVALID_CHAR         = 11202
    NOT_INTEGRAL         = 11203
    NOT_NUMERIC          = 11204
    OUT_OF_RANGE         = 11205

    # --- registration errors (21xxx) ---
    INVALID_NAME         = 21101
    DUPLICATE_NAME       = 21102
    INVALID_FLAG         = 21103
    DUPLICATE_FLAG       = 21104

    # --- lookup errors (21xxx) ---
    UNKNOWN_ARGUMENT     = 21201
    NO_DEFAULT_AVAILABLE = 21202
    INDEX_OUT_OF_RANGE   = 21203

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentFault(Exception):
    """
    base class of every argmatch fault.

    carries a one-sentence message and a read-only mapping of options. common
    options: code (FaultCode), title, hint, name (argument involved), prog
    (program name, prefixed to str()), shell, colorful, fancy and usage
    (a renderable printed after the fault in shell mode).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        if prog := self.options.get("prog"):
            return "%s: %s" % (prog, self.message)
        return str(self.message)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog") or "argmatch"), styler("prog-name"))

        header = Text.assemble("[ ", prog)
        if (code := self.options.get("code")) is not None:
            header.append(" — ").append(text(code.normalize(), styler("code")))
        if title := self.options.get("title"):
            header.append(" | ").append(text(title.title(), styler("error-title")))
        header.append(" ]")

        message = text(self.message, styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UsageError(ArgumentFault, RuntimeError):
    """
    fault caused by the argument vector supplied at runtime.
    """

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if (usage := self.options.get("usage")) is not None:
            console.print(usage)
        sys.exit(1)


class LogicError(ArgumentFault):
    """
    fault caused by the host program's schema or retrieval calls (always raised).
    """


class MissingPositionalError(UsageError): ...
class UnknownOptionError(UsageError): ...
class UnknownFlagError(UsageError): ...
class RepeatedOptionError(UsageError): ...
class MissingValueError(UsageError): ...


class ConversionError(UsageError, ValueError):
    """
    a stored string value could not be converted to the requested kind.
    """


class InvalidBooleanError(ConversionError): ...
class InvalidCharError(ConversionError): ...
class NotIntegralError(ConversionError): ...
class NotNumericError(ConversionError): ...
class OutOfRangeError(ConversionError): ...


class InvalidNameError(LogicError): ...
class DuplicateNameError(LogicError): ...
class InvalidFlagError(LogicError): ...
class DuplicateFlagError(LogicError): ...
class UnknownArgumentError(LogicError, LookupError): ...
class NoDefaultAvailableError(LogicError): ...
class IndexOutOfRangeError(LogicError, IndexError): ...


class HelpRequested(Exception):
    """
    signal raised when the reserved `help` option is matched.

    outside shell mode it propagates to the host, which is expected to call
    print_help() and stop. in shell mode the `help` renderable found in the
    options is printed to stdout and the process exits with status 0.
    """

    def __init__(self, message="help requested", /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        if (help := self.options.get("help")) is not None:
            Console().print(help)
        sys.exit(0)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, usage errors are rendered via the rich console; otherwise raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ArgumentFault",
    "UsageError",
    "LogicError",
    "MissingPositionalError",
    "UnknownOptionError",
    "UnknownFlagError",
    "RepeatedOptionError",
    "MissingValueError",
    "ConversionError",
    "InvalidBooleanError",
    "InvalidCharError",
    "NotIntegralError",
    "NotNumericError",
    "OutOfRangeError",
    "InvalidNameError",
    "DuplicateNameError",
    "InvalidFlagError",
    "DuplicateFlagError",
    "UnknownArgumentError",
    "NoDefaultAvailableError",
    "IndexOutOfRangeError",
    "HelpRequested",
    "trigger",
)
