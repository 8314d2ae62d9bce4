"""
Argosy shell: the only place that prints and ends the process.

run(spec, tokens) matches the tokens and acts on the outcome
- Parsed         → the ParseResult is returned
- HelpRequested  → the help screen goes to standard output, exit status 0
- Failed         → the fault goes to standard error, exit status 1

Runtime options
- strict: surplus tokens are an error instead of the result's remainder
- fancy: wrap help and faults in a rich Panel
- colorful: apply the palette (see argosy.helper / argosy.faults)
- console: a rich Console used for both streams (tests, embedding)
"""
import sys

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .faults import trigger
from .helper import render_help
from .matcher import Failed, HelpRequested, match
from .utils import *


def print_help(spec, /, *, fancy=False, colorful=False, console=Unset):
    """
    print the help screen of `spec` (standard output unless a console is given).
    """
    if console is Unset:
        console = Console()
    renderable = render_help(spec, colorful=colorful)

    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{spec.name} HELP".upper(), " ", "]"),
            title_align="left",
            subtitle=spec.credits or None,
        )

    console.print(renderable, soft_wrap=not fancy)


def run(spec, tokens=Unset, /, *, strict=False, fancy=False, colorful=False, console=Unset):
    """
    parse `tokens` (sys.argv[1:] when Unset) against `spec` for a command-line program.

    returns the ParseResult; never returns on help (exit 0) or on a fault (exit 1).
    """
    outcome = match(spec, tokens, strict=strict)
    match outcome:
        case HelpRequested():
            print_help(spec, fancy=fancy, colorful=colorful, console=console)
            sys.exit(0)
        case Failed(fault):
            options = dict(shell=True, fancy=fancy, colorful=colorful, prog=spec.name)
            if console is not Unset:
                options["console"] = console
            trigger(fault, **options)
        case _:
            return outcome.result


__all__ = (
    "print_help",
    "run",
)
