"""
Argosy help renderer.

render_help(spec) builds the help screen as a rich Text; format_help(spec) is
its plain string. Both are pure: same spec, same output, no side effects.

Layout (sections separated by one blank line, empty sections left out)

    Usage: <prog> <POS1> <POS2*3> [OPTIONS]
    <description>

    Positional Arguments:
        POS1    help
        POS2*3  help

    Options:
        -f  --foo        help
            --no-help*2
        -h  --help       Use this to print this help message

    Exit Statuses:
        0  help

    <epilog>
    <credits>

Arity annotations
- positionals: "*N" whenever the arity is not Exact(1), "*∞" when unbounded.
- options: "*N" appended to the long name whenever the arity is neither 0 nor 1
  (to the short name for short-only options), "*∞" when unbounded.
- [OPTIONS] shows up when the caller declared at least one option.

Palette keys (override through __styles__ in __main__, used when colorful=True)
- usage-label, program-name, placeholder, usage-options, description-section
- group-label, option-name, arity, argument-description, exit-code
- epilog-section, credits-section
"""
from collections import defaultdict

from rich.text import Text

from .arguments import Exact, Unbounded

INDENT = 4
GUTTER = 2


def _annotation(arity, *, bare):
    """
    "*N" / "*∞" suffix; `bare` lists the arities shown without one.
    """
    if arity in bare:
        return ""
    if arity is Unbounded:
        return "*∞"
    return "*%d" % arity.count


def _table(title, rows, styler):
    """
    title line plus rows of cells; every column but the last is padded to its
    widest cell plus the gutter, trailing blanks are trimmed.
    """
    table = Text()
    table.append(title, styler("group-label")).append(":")

    widths = [max(len(row[column]) for row in rows) for column in range(len(rows[0]) - 1)]
    for row in rows:
        line = Text(" " * INDENT)
        for cell, width in zip(row, widths):
            line.append_text(cell)
            if width:
                line.append(" " * (width - len(cell) + GUTTER))
        line.append_text(row[-1])
        line.rstrip()
        table.append("\n").append_text(line)
    return table


def render_help(spec, /, *, colorful=False):
    """
    render the help screen of `spec` as a rich Text.

    colorful toggles the palette; the characters are the same either way.
    """
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "placeholder": "bold #FFD600",  # AMBER for positionals
        "usage-options": "#36C5F0",  # SKY-BLUE
        "description-section": "italic #A3A3A3",  # Neutral gray

        # === Tables ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "option-name": "bold #00E6FF",  # CYAN for options
        "arity": "bold italic #FFD600",  # AMBER for *N annotations
        "argument-description": "#9CA3AF",  # Muted gray
        "exit-code": "bold #22C55E",  # GREEN codes

        # === Footer ===
        "epilog-section": "#737373",  # Dim footer gray
        "credits-section": "italic #737373",
    } | getattr(__import__('__main__'), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    sections = []

    # Usage line and description
    head = Text()
    head.append("Usage", styler("usage-label")).append(": ")
    head.append(spec.name, styler("program-name"))
    for positional in spec.positionals:
        head.append(" ").append(positional.placeholder, styler("placeholder"))
        head.append(_annotation(positional.arity, bare=(Exact(1),)), styler("arity"))
    if any(not option.implicit for option in spec.options.values()):
        head.append(" ").append("[OPTIONS]", styler("usage-options"))
    if spec.description:
        head.append("\n").append(spec.description, styler("description-section"))
    sections.append(head)

    if spec.positionals:
        sections.append(_table("Positional Arguments", [
            (
                Text.assemble(
                    (positional.placeholder, styler("placeholder")),
                    (_annotation(positional.arity, bare=(Exact(1),)), styler("arity")),
                ),
                Text(positional.help, styler("argument-description")),
            )
            for positional in spec.positionals
        ], styler))

    if spec.options:
        rows = []
        for option in spec.options.values():
            annotation = Text(_annotation(option.arity, bare=(Exact(0), Exact(1))), styler("arity"))
            short = Text("-" + option.short if option.short is not None else "", styler("option-name"))
            long = Text("--" + option.long if option.long is not None else "", styler("option-name"))
            # short-only options carry the annotation themselves
            (long if option.long is not None else short).append_text(annotation)
            rows.append((short, long, Text(option.help, styler("argument-description"))))
        sections.append(_table("Options", rows, styler))

    if spec.exit_statuses:
        sections.append(_table("Exit Statuses", [
            (Text(str(code), styler("exit-code")), Text(description, styler("argument-description")))
            for code, description in spec.exit_statuses
        ], styler))

    footer = [
        Text(spec.epilog, styler("epilog-section")) if spec.epilog else None,
        Text(spec.credits, styler("credits-section")) if spec.credits else None,
    ]
    if footer := [part for part in footer if part is not None]:
        sections.append(Text("\n").join(footer))

    return Text("\n\n").join(sections)


def format_help(spec, /):
    """
    plain-text help screen of `spec` (no styles, no trailing newline).
    """
    return render_help(spec).plain


__all__ = (
    "render_help",
    "format_help",
)
