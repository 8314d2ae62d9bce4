"""
Argosy matcher: one left-to-right scan of the tokens against an ArgumentSpec.

Outcome
- match(spec, tokens) never prints and never exits; it returns one of
  • Parsed(result)           the scan completed
  • HelpRequested(marker, …) the implicit help marker was met
  • Failed(fault)            the first ParseError met (no partial result)
  argosy.shell decides what to print and which status to exit with.

Token classes
- option marker   "-x" / "--name" naming a declared option (implicit help included)
- terminator      exactly "-"; closes an unbounded fill (or the unbounded positional
                  at the head of the queue, left empty) and is not stored
- escaped literal starts with "\\"; one leading backslash is stripped
- plain           anything else
A dash-prefixed token naming nothing is an unknown option, except while an
unbounded consumer is filling: then it is just another value.

Consumers
- at most one consumer (an option, or the positional at the head of the queue)
  is filling at a time.
- Exact(n) consumers close themselves once they hold n values; later tokens fall
  through to the positionals. Closing one early (a marker arrives) is an
  ArityMismatchError; running out of input is a MissingArgumentsError.
- Unbounded consumers close on a marker, on "-", or at the end of input.
- Exact(0) positionals are complete as soon as they reach the head of the queue.

Surplus plain tokens (no option filling, no positional left) are kept, escape
stripped, in ParseResult.remainder, or rejected with UnexpectedArgumentError in strict mode.
"""
import copy
import difflib
import sys
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass

from .arguments import Positional, Unbounded
from .faults import ArityMismatchError, MissingArgumentsError, ParseError, UnexpectedArgumentError, UnknownOptionError
from .results import Entry, ParseResult
from .utils import *

TERMINATOR = "-"
ESCAPE = "\\"


@dataclass(frozen=True)
class Parsed:
    result: ParseResult


@dataclass(frozen=True)
class HelpRequested:
    marker: str
    index: int


@dataclass(frozen=True)
class Failed:
    fault: ParseError


type Outcome = Parsed | HelpRequested | Failed


class HelpSignal(Exception):
    """
    internal: unwinds the scan when the implicit help marker is met.
    """
    def __init__(self, marker, index):
        super().__init__(marker, index)
        self.marker = marker
        self.index = index


def _unescape(token):
    return token[1:] if token.startswith(ESCAPE) else token


class Matcher:
    """
    single-use scanner; run() returns a ParseResult or raises.

    state
    - _pending: positionals not yet complete, head first
    - _filling: the consumer currently receiving values (or None)
    - _values: canonical key → values received; an option key present here was used
    - _index: 1-based position of the token being handled
    """

    def __init__(self, spec, tokens, *, strict=False):
        self._spec = spec
        self._tokens = deque(tokens)
        self._strict = strict
        self._pending = deque(spec.positionals)
        self._filling = None
        self._values = {}
        self._remainder = []
        self._index = 0

    def _fault(self, fault, /):
        return copy.replace(fault, prog=self._spec.name)

    def _route(self):
        """what the user is pointed at in hints"""
        return "%s --help" % self._spec.name if self._spec.helper is not None else self._spec.name

    def run(self):
        self._advance()
        while self._tokens:
            token = self._tokens.popleft()
            self._index += 1
            self._feed(token)
        self._finish()
        return self._build()

    def _feed(self, token):
        option = self._spec.lookup(token) if token.startswith("-") else None
        filling = self._filling

        # an unbounded fill takes anything that is neither a marker nor the terminator
        if filling is not None and filling.arity is Unbounded and option is None and token != TERMINATOR:
            self._take(filling, token)
            return

        if option is not None:
            self._close(token)
            if option.implicit:
                raise HelpSignal(token, self._index)
            self._open(option)
            return

        if token == TERMINATOR:
            if filling is not None and filling.arity is Unbounded:
                self._close(token)
                return
            # an unbounded positional waiting at the head of the queue ends empty
            if filling is None and self._pending and self._pending[0].arity is Unbounded:
                self._values[self._pending.popleft().key] = []
                self._advance()
                return
            self._value(token)
            return

        if token.startswith("-"):
            raise self._unknown(token)

        self._value(token)

    def _value(self, token):
        if self._filling is None:
            if not self._pending:
                self._surplus(token)
                return
            self._filling = self._pending[0]
            self._values[self._filling.key] = []
        self._take(self._filling, token)

    def _take(self, argument, token):
        values = self._values[argument.key]
        values.append(_unescape(token))
        if argument.arity.saturated(len(values)):
            self._complete()

    def _open(self, option):
        # a repeated option starts over with a fresh accumulator
        self._values[option.key] = []
        if not option.arity.saturated(0):
            self._filling = option

    def _close(self, token):
        if (argument := self._filling) is None:
            return
        received = len(self._values[argument.key])
        if not argument.arity.satisfied(received):
            count = argument.arity.count
            raise self._fault(ArityMismatchError(
                "Error! %s requires %d arguments" % (argument.display, count),
                title="arity mismatch",
                key=argument.key,
                argument=argument,
                required=count,
                received=received,
                missing=count - received,
                token=token,
                index=self._index,
                hint="%s got %d of %d values before %r at %s position; escape a value with '\\' "
                     "if it looks like an option" % (
                    argument.display, received, count, token, ordinal(self._index)
                ),
            ))
        self._complete()

    def _complete(self):
        argument, self._filling = self._filling, None
        if isinstance(argument, Positional):
            self._pending.popleft()
            self._advance()

    def _advance(self):
        # zero-arity positionals never wait for a token
        while self._pending and self._pending[0].arity.saturated(0):
            self._values[self._pending.popleft().key] = []

    def _unknown(self, token):
        markers = [marker for option in self._spec.options.values() for marker in option.markers]
        suggestions = difflib.get_close_matches(token, markers, 5)
        try:
            hint = "did you mean %r? to pass %r as a value write %r" % (suggestions[0], token, ESCAPE + token)
        except IndexError:
            hint = "run '%s' to see all options; to pass %r as a value write %r" % (
                self._route(), token, ESCAPE + token
            )
        return self._fault(UnknownOptionError(
            "Error! unknown option %s" % token,
            title="unknown option",
            token=token,
            index=self._index,
            suggestions=suggestions,
            hint=hint,
        ))

    def _surplus(self, token):
        if self._strict:
            raise self._fault(UnexpectedArgumentError(
                "Error! unexpected argument %s" % token,
                title="unexpected argument",
                token=token,
                index=self._index,
                hint="%r at %s position has no positional left to fill; remove it or run '%s'" % (
                    token, ordinal(self._index), self._route()
                ),
            ))
        self._remainder.append(_unescape(token))

    def _finish(self):
        if (argument := self._filling) is not None:
            received = len(self._values[argument.key])
            if not argument.arity.satisfied(received):
                raise self._missing(argument, received)
            self._complete()

        for positional in self._pending:
            if positional.required:
                raise self._missing(positional, 0)
            self._values[positional.key] = []

    def _missing(self, argument, received):
        count = argument.arity.count
        return self._fault(MissingArgumentsError(
            "Error! %s requires %d arguments" % (argument.display, count),
            title="missing arguments",
            key=argument.key,
            argument=argument,
            required=count,
            received=received,
            missing=count - received,
            hint="add %d more value%s for %s; run '%s' to see the expected usage" % (
                count - received, "s" * (count - received != 1), argument.display, self._route()
            ),
        ))

    def _build(self):
        entries = {}
        aliases = {}
        for positional in self._spec.positionals:
            entries[positional.key] = Entry(True, tuple(self._values.get(positional.key, ())))
        for key, option in self._spec.options.items():
            if option.implicit:
                continue
            entries[key] = Entry(key in self._values, tuple(self._values.get(key, ())))
            if option.short is not None and option.short != key:
                aliases[option.short] = key
        return ParseResult(entries, aliases, self._remainder)


def match(spec, tokens=Unset, /, *, strict=False):
    """
    match tokens against spec and return Parsed | HelpRequested | Failed.

    parameters
    - spec: ArgumentSpec (read only during the scan)
    - tokens: Unset (sys.argv[1:]) or an iterable of strings, already split
    - strict: reject surplus plain tokens instead of keeping them in remainder

    raises
    - TypeError when tokens is a bare string or holds non-strings.
    """
    if tokens is Unset:
        tokens = sys.argv[1:]
    elif isinstance(tokens, str) or not isinstance(tokens, Iterable):
        raise TypeError("match() tokens must be an iterable of strings")
    tokens = list(tokens)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("match() tokens must be an iterable of strings")

    try:
        return Parsed(Matcher(spec, tokens, strict=strict).run())
    except HelpSignal as signal:
        return HelpRequested(signal.marker, signal.index)
    except ParseError as fault:
        return Failed(fault)


__all__ = (
    "Parsed",
    "HelpRequested",
    "Failed",
    "Outcome",
    "match",
)
