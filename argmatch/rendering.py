"""
Usage and help rendering.

Layout
    usage: prog [options] <file> <mode>

    positional arguments:
      file              file to read
      mode              processing mode

    options:
      -h, --help                  display this help text
      -o, --output OUTPUT         where to write

- Positional names are padded to a 20-column field, option spellings to a
  30-column field (both include the 2-column indent). A spelling longer than its
  field is followed by a single space.
- Value-bearing options show their upper-cased reference name as a metavar.

Palette keys
- usage-label, program-name, positional-name
- section-label, option-name, flag-name, metavar, argument-description
- panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict

from rich.panel import Panel
from rich.text import Text

from .arguments import Arity

_POSITIONAL_WIDTH = 20
_OPTIONAL_WIDTH = 30


def _palette(colorful):
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "positional-name": "bold #FFD600",  # AMBER for positionals

        # === Sections / arguments ===
        "section-label": "bold #FFFFFF",  # Pure white headers
        "argument-description": "#9CA3AF",  # Muted gray

        # === Names / metavars ===
        "option-name": "bold #00E6FF",  # CYAN for value-bearing options
        "flag-name": "bold #22C55E",  # GREEN for flags
        "metavar": "bold #FFD600",  # AMBER for parameters

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _column(spelling, descr, width):
    """
    one indented help row: spelling padded to width, then the description.
    """
    row = Text("  ").append(spelling)
    if descr:
        row.append(" " * max(width - len(row), 1)).append(descr)
    return row


def usage(parser, /, *, colorful=True):
    """
    Build the single usage line of a parser as a rich Text.
    """
    styler = _palette(colorful)

    line = Text()
    line.append("usage", styler("usage-label")).append(":")
    line.append(" ")
    line.append(parser.prog or "", styler("program-name"))
    if parser.optionals:
        line.append(" [options]")
    for name in parser.positionals:
        line.append(" ").append("<%s>" % name, styler("positional-name"))
    return line


def help(parser, /, *, colorful=True, fancy=False):
    """
    Build the full help text (usage plus argument sections) of a parser.

    Returns a rich renderable: Text, or a Panel around it when fancy is True.
    """
    styler = _palette(colorful)

    renderable = usage(parser, colorful=colorful)

    if parser.positionals:
        renderable.append("\n\n").append("positional arguments", styler("section-label")).append(":")
        for positional in parser.positionals.values():
            renderable.append("\n").append(_column(
                Text(positional.name, styler("positional-name")),
                Text(positional.descr or "", styler("argument-description")),
                _POSITIONAL_WIDTH,
            ))

    if parser.optionals:
        renderable.append("\n\n").append("options", styler("section-label")).append(":")
        for optional in parser.optionals.values():
            style = styler("flag-name" if optional.arity is Arity.FLAG else "option-name")
            spelling = Text()
            if optional.flag is not None:
                spelling.append("-" + optional.flag, style).append(", ")
            spelling.append("--" + optional.name, style)
            if optional.metavar is not None:
                spelling.append(" ").append(optional.metavar, styler("metavar"))
            renderable.append("\n").append(_column(
                spelling,
                Text(optional.descr or "", styler("argument-description")),
                _OPTIONAL_WIDTH,
            ))

    if fancy:
        return Panel(
            renderable,
            title=Text.assemble("[", " ", f"{parser.prog or ''} HELP".upper().strip(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )
    return renderable


__all__ = (
    "usage",
    "help",
)
