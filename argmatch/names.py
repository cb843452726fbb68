r"""
Lexical rules for argument names and option tokens.

Forms
- positional name:  r"\w[\w-]*"            e.g. "file", "in-path", "_x"
- option token:     "-x", "-long", "--long-name"
                    (a leading digit never starts an option, so "-5" and "-9.5" are values)
- long name:        one or two dashes, then a letter or underscore and at least one more
                    letter, digit, underscore or hyphen; the reference name is what follows
                    the dashes ("--dry-run" -> "dry-run")
- flag:             one dash and exactly one letter or underscore ("-v" -> "v")

All helpers are pure and never raise; "no match" is reported as False / None.
"""
import re

_POSITIONAL = re.compile(r"\w[\w-]*")
_OPTION = re.compile(r"-([a-zA-Z_]|-?[a-zA-Z_][a-zA-Z0-9_-]+)")
_LONG_NAME = re.compile(r"--?([a-zA-Z_][a-zA-Z0-9_-]+)")
_FLAG = re.compile(r"-([a-zA-Z_])")


def is_valid_positional_name(name, /):
    return isinstance(name, str) and _POSITIONAL.fullmatch(name) is not None


def is_valid_option_name(token, /):
    """
    True if token is spelled like an option occurrence (flag or long form).

    Used while scanning to tell option tokens apart from option values and
    positionals; it does not check that the option is declared.
    """
    return isinstance(token, str) and _OPTION.fullmatch(token) is not None


def format_long_name(token, /):
    """
    Strip the leading dashes of a long option and return its reference name.

    Returns None when token is not a well-formed long option.
    """
    if not isinstance(token, str) or not (match := _LONG_NAME.fullmatch(token)):
        return None
    return match[1]


def format_flag(token, /):
    """
    Return the flag character of a "-x" token, or None.
    """
    if not isinstance(token, str) or not (match := _FLAG.fullmatch(token)):
        return None
    return match[1]


__all__ = (
    "is_valid_positional_name",
    "is_valid_option_name",
    "format_long_name",
    "format_flag",
)
