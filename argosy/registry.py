"""
Argosy argument registry.

ArgumentSpec is the declarative side of the parser: it owns the program
metadata (name, description, epilog, credits), the ordered positionals, the
options (insertion order kept for help) and the exit-status table.

Declaration is append-only and fails fast:
- add_option(short, long, arity, help) → DuplicateKeyError / InvalidArityError / InvalidNameError
- add_arg(placeholder, arity, help)    → DuplicateKeyError / InvalidArityError / InvalidNameError
- add_exit_status(code, description)   → always appended (a reused code only warns)

Every key a result can be addressed by (placeholders, long names, short
characters) lives in a single namespace, so lookups on a ParseResult are never
ambiguous.

Implicit help
- "-h"/"--help" (arity 0) is available unless the caller takes those names:
  declaring long "help" drops it entirely, declaring short "h" leaves "--help".

Quick example
    >>> spec = ArgumentSpec("example-1", "The first example program!", "Bottom text", "Someone 2023")
    >>> _ = spec.add_option("f", "foo", "0", "Some help!")
    >>> _ = spec.add_arg("BAR", "1")
    >>> spec.match(["value", "-f"]).result["foo"]
    Entry(used=True, values=())
"""
from types import MappingProxyType

from .arguments import ArgumentType, Exact, Option, Positional
from .faults import DuplicateExitStatusWarning, DuplicateKeyError, trigger
from .helper import format_help
from .matcher import match
from .shell import print_help, run
from .utils import *

HELP_TEXT = "Use this to print this help message"


def _sanitize_text(cls, name, object, /):
    if not isinstance(object, str | Unset):
        raise TypeError(f"{cls.__typename__} {name!r} must be a string")
    return coalesce(object, "").strip()


class ArgumentSpec(metaclass=ArgumentType):
    """
    Declared arguments of one program.

    Read-only views
    - name, description, epilog, credits: str
    - positionals: tuple[Positional, ...] in declaration order
    - options: Mapping[str, Option] keyed by canonical key, implicit help last
    - exit_statuses: tuple[tuple[int, str], ...] in insertion order
    - helper: the implicit help Option, or None when the caller took its names
    """

    __introspectable__ = (
        "name",
        "description",
        "epilog",
        "credits",
        "positionals",
        "exit_statuses",
    )

    def __init__(self, name, description=Unset, epilog=Unset, credits=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{type(self).__typename__} 'name' cannot be empty")

        self._name = name
        self._description = _sanitize_text(type(self), "description", description)
        self._epilog = _sanitize_text(type(self), "epilog", epilog)
        self._credits = _sanitize_text(type(self), "credits", credits)

        self._positionals = []
        self._options = {}
        self._markers = {}
        self._keys = {}
        self._exit_statuses = []
        self._helper = Option("h", "help", Exact(0), HELP_TEXT, implicit=True)

    def __str__(self):
        return "{name: %s, description: %s, epilog: %s, credits: %s}" % (
            self._name, self._description, self._epilog, self._credits
        )

    @property
    def options(self):
        options = dict(self._options)
        if self._helper is not None:
            options[self._helper.key] = self._helper
        return MappingProxyType(options)

    @property
    def helper(self):
        return self._helper

    def lookup(self, token, /):
        """
        return the Option a marker token names ("-x" or "--name"), or None.
        """
        if not isinstance(token, str):
            raise TypeError("lookup() argument must be a string")
        try:
            return self._markers[token]
        except KeyError:
            pass
        if self._helper is not None and token in self._helper.markers:
            return self._helper
        return None

    def _claim(self, argument, keys, /):
        for key in keys:
            if key in self._keys:
                raise DuplicateKeyError(
                    "Error! %s is already declared" % key,
                    key=key,
                    argument=argument,
                    prog=self._name,
                    hint="every placeholder, long name and short name must be unique",
                )
        for key in keys:
            self._keys[key] = argument

    def add_option(self, short, long, arity, help=Unset):
        """
        declare an option answering to "-<short>" and/or "--<long>".

        - short: one character, or '-'/' ' for none
        - long: the bare long name, or ""/" "/"-"/"--" for none
        - arity: "0" (flag), a positive-integer string, or "+" (unbounded)
        - help: text shown in the options table
        """
        option = Option(short, long, arity, help)
        self._claim(option, tuple(name for name in (option.long, option.short) if name is not None))

        self._options[option.key] = option
        for marker in option.markers:
            self._markers[marker] = option

        # the implicit help gives way to caller-declared names
        if option.long == "help":
            self._helper = None
        elif option.short == "h" and self._helper is not None:
            self._helper = Option(None, "help", Exact(0), HELP_TEXT, implicit=True)
        return option

    def add_arg(self, placeholder, arity, help=Unset):
        """
        declare the next positional argument.
        """
        positional = Positional(placeholder, arity, help)
        self._claim(positional, (positional.placeholder,))
        self._positionals.append(positional)
        return positional

    def add_exit_status(self, code, description):
        """
        append an exit status to the help glossary (documentation only).
        """
        if not isinstance(code, int) or isinstance(code, bool):
            raise TypeError(f"{type(self).__typename__} exit status code must be an integer")
        elif not 0 <= code <= 0xFFFF:
            raise ValueError(f"{type(self).__typename__} exit status code must be between 0 and 65535")
        if not isinstance(description, str):
            raise TypeError(f"{type(self).__typename__} exit status description must be a string")

        if any(existing == code for existing, _ in self._exit_statuses):
            trigger(DuplicateExitStatusWarning(
                "exit status %d is already documented; both entries are kept" % code,
                prog=self._name,
                status=code,
                hint="remove one of the descriptions if the duplicate is unintended",
                stacklevel=4,
            ))
        self._exit_statuses.append((code, description.strip()))

    def match(self, tokens=Unset, /, *, strict=False):
        """pure parse: Parsed | HelpRequested | Failed (see argosy.matcher)"""
        return match(self, tokens, strict=strict)

    def parse_args(self, tokens=Unset, /, **options):
        """parse and return the result; prints help / faults and exits as needed"""
        return run(self, tokens, **options)

    def print_help(self, **options):
        print_help(self, **options)

    def format_help(self):
        return format_help(self)


__all__ = (
    "ArgumentSpec",
)
