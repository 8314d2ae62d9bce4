"""
Argosy faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain to keep copy consistent and searches predictable.
- ArgumentException / ArgumentWarning: base types that carry a message plus
  options and know how to render themselves with rich.
- SpecificationError: declaration-time faults (raised immediately, the ArgumentSpec
  rejects the declaration).
- ParseError: parse-time faults (returned by the matcher inside a Failed outcome
  and surfaced by the shell).
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Rendering
- str(fault) is the bare message, e.g. "Error! BAR requires 1 arguments".
- the rich rendering adds a header "[ prog — code | title ]" and a hint line.

Integration
- The registry raises SpecificationError subclasses directly.
- The matcher raises ParseError subclasses internally and hands the first one
  back to the caller; argosy.shell triggers it in shell mode (print + exit 1).
"""
import copy
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - options (1111x/1112x)
      • UNKNOWN_OPTION, UNEXPECTED_ARGUMENT, ARITY_MISMATCH, MISSING_ARGUMENTS
    - declarations (1120x)
      • DUPLICATE_KEY, INVALID_ARITY, INVALID_NAME
    - warnings (122xx)
      • DUPLICATE_EXIT_STATUS

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- parse errors (111xx) ---
    UNKNOWN_OPTION              = 11112
    UNEXPECTED_ARGUMENT         = 11121
    ARITY_MISMATCH              = 11122
    MISSING_ARGUMENTS           = 11125

    # --- declaration errors (112xx) ---
    DUPLICATE_KEY               = 11201
    INVALID_ARITY               = 11202
    INVALID_NAME                = 11203

    # --- warnings (122xx) ---
    DUPLICATE_EXIT_STATUS       = 12211

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, message_style):
    """
    shared rich rendering for exceptions and warnings.

    the palette is merged with __styles__ from __main__ (host overrides win).
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

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

    prog = text(getattr(main, "__prog__", options.get("prog", "")), styler("prog-name"))
    code = options.get("code", fault.code)

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "", styler("code")),
        " | ",
        text(options.get("title", fault.title).title(), styler(message_style + "-title")),
        " ]"
    )
    message = text(str(fault), styler(message_style + "-message"))
    renders = [message]
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if fancy:
        return Panel(Group(*renders), title=header, title_align="left")

    return Group(header, *renders)


class ArgumentException(Exception):
    """
    base type of every argosy error.

    carries a message plus a read-only options mapping (code, title, hint and
    any context the reporter may want to show, e.g. key/token/index).
    """
    code = Unset
    title = "argument error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class SpecificationError(ArgumentException, ValueError):
    """
    raised while declaring arguments; the declaration is rejected.
    """
    title = "invalid specification"


class DuplicateKeyError(SpecificationError):
    code = FaultCode.DUPLICATE_KEY
    title = "duplicate key"


class InvalidArityError(SpecificationError):
    code = FaultCode.INVALID_ARITY
    title = "invalid arity"


class InvalidNameError(SpecificationError):
    code = FaultCode.INVALID_NAME
    title = "invalid name"


class ParseError(ArgumentException):
    """
    raised while matching tokens; the first one aborts the scan.
    """
    title = "parse error"


class UnknownOptionError(ParseError):
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"


class UnexpectedArgumentError(ParseError):
    code = FaultCode.UNEXPECTED_ARGUMENT
    title = "unexpected argument"


class ArityMismatchError(ParseError):
    code = FaultCode.ARITY_MISMATCH
    title = "arity mismatch"


class MissingArgumentsError(ParseError):
    code = FaultCode.MISSING_ARGUMENTS
    title = "missing arguments"


class ArgumentWarning(Warning):
    """
    base type of every argosy warning (non-fatal, the declaration goes through).
    """
    code = Unset
    title = "argument warning"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=self.options.get("stacklevel", 2))
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicateExitStatusWarning(ArgumentWarning):
    code = FaultCode.DUPLICATE_EXIT_STATUS
    title = "duplicate exit status"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via the rich console (errors exit with 1);
      otherwise exceptions are raised and warnings are emitted.

    typical options
    - shell, fancy, colorful, console, prog, title, code, hint, and any other context
      the reporter may want to show (e.g., key/token/index).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ArgumentException",
    "SpecificationError",
    "DuplicateKeyError",
    "InvalidArityError",
    "InvalidNameError",
    "ParseError",
    "UnknownOptionError",
    "UnexpectedArgumentError",
    "ArityMismatchError",
    "MissingArgumentsError",
    "ArgumentWarning",
    "DuplicateExitStatusWarning",
    "trigger",
    "getdoc",
)
