r"""
Argosy argument specifications and arity.

Overview
- Arity
  • Exact(n): exactly n value tokens (n >= 0); Exact(0) is a presence-only flag.
  • Unbounded: any number of value tokens, ended by a recognized option marker,
    the bare "-" terminator, or the end of input.
  • arity(spec): the single place where the string encodings "0", "3", "+" are
    validated; everything downstream works on Exact/Unbounded only.

- Specs
  • Positional: placeholder-keyed, matched strictly in declaration order.
  • Option: long name and/or short character, e.g. -f/--foo. The canonical key
    is the long name, falling back to the short character for short-only options.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties.

Validation highlights
- Placeholders are non-empty and never start with a dash.
- Short names are a single non-space character; '-' and ' ' mean "no short name".
- Long names never start with a dash nor contain whitespace; "", " ", "-" and
  "--" mean "no long name". At least one of the two names must remain.
- Help texts are strings; surrounding whitespace is trimmed.

Quick example:
    >>> from argosy.arguments import Positional, Option, arity
    >>> Positional("BAR", arity("1"))
    positional(placeholder='BAR', arity=Exact(1), help='')
    >>> Option("f", "foo", arity("0")).markers
    ('-f', '--foo')
"""
import functools
import operator
import re
from typing import final

from .faults import InvalidArityError, InvalidNameError
from .utils import *


@final
class Exact:
    """
    Fixed arity: the argument consumes exactly `count` value tokens.
    """
    __slots__ = ("_count",)

    def __new__(cls, count, /):
        if not isinstance(count, int) or isinstance(count, bool):
            raise TypeError("Exact() argument must be an integer")
        if count < 0:
            raise ValueError("Exact() argument must be a non-negative integer")
        self = super().__new__(cls)
        self._count = count
        return self

    @property
    def count(self):
        return self._count

    def satisfied(self, received, /):
        """whether `received` values close this arity without a fault"""
        return received == self._count

    def saturated(self, received, /):
        """whether no further value may be taken"""
        return received >= self._count

    def __eq__(self, other, /):
        if not isinstance(other, Exact):
            return NotImplemented
        return self._count == other._count

    def __hash__(self):
        return hash((Exact, self._count))

    def __repr__(self):
        return f"Exact({self._count})"

    def __str__(self):
        return str(self._count)


@final
class UnboundedType:
    """
    Unbounded arity: the argument consumes value tokens until a terminator.

    Singleton per process, exposed as `Unbounded`.
    """
    __slots__ = ()

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    @property
    def count(self):
        return None

    def satisfied(self, received, /):
        return True

    def saturated(self, received, /):
        return False

    def __repr__(self):
        return "Unbounded"

    def __str__(self):
        return "+"

    def __reduce__(self):
        return type(self), ()

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnboundedType' is not an acceptable base type")


Unbounded = UnboundedType()


def arity(spec, /):
    """
    Validate an arity encoding into Exact | Unbounded.

    Accepted
    - "0"                      → Exact(0)
    - a positive-integer string → Exact(n) (no sign, no leading zeros, no spaces)
    - "+"                      → Unbounded
    - an Exact or Unbounded     → returned unchanged

    Raises
    - InvalidArityError for anything else.
    """
    if isinstance(spec, Exact | UnboundedType):
        return spec
    if isinstance(spec, str):
        if spec == "+":
            return Unbounded
        if re.fullmatch(r"0|[1-9][0-9]*", spec):
            return Exact(int(spec))
    raise InvalidArityError(
        "Error! arity %r must be either a positive integer, 0 or +" % (spec,),
        arity=spec,
        hint="use \"0\" for a flag, a positive integer like \"2\", or \"+\" for any amount",
    )


class ArgumentType(type):
    """
    Metaclass that turns specs into introspectable, read-only records.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by "_<name>" (see mirror()).
    - Provide stable, readable __repr__/__rich_repr__ implementations.
    - Seal classes declared with `sealed=True` against subclassing.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages and representations.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("sealed", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_help(cls, help, /):
    if not isinstance(help, str | Unset):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    return coalesce(help, "").strip()


class Positional(metaclass=ArgumentType, sealed=True):
    """
    Positional argument specification.

    Positionals are keyed by their placeholder (also their display label in
    help) and filled strictly in declaration order.
    """

    __introspectable__ = (
        "placeholder",
        "arity",
        "help",
    )

    def __new__(cls, placeholder, arity_spec, /, help=Unset):
        if not isinstance(placeholder, str):
            raise TypeError(f"{cls.__typename__} 'placeholder' must be a string")
        elif not (placeholder := placeholder.strip()):
            raise InvalidNameError(
                f"Error! {cls.__typename__} placeholder cannot be empty",
                hint="name the value as it should appear in the usage line, e.g. FILE",
            )
        elif placeholder.startswith("-"):
            raise InvalidNameError(
                f"Error! {cls.__typename__} placeholder {placeholder!r} cannot start with a dash",
                key=placeholder,
                hint="dash-prefixed names are reserved for options; declare it with add_option()",
            )

        self = super().__new__(cls)
        self._placeholder = placeholder
        self._arity = arity(arity_spec)
        self._help = _sanitize_help(cls, help)
        return self

    @property
    def key(self):
        return self._placeholder

    @property
    def display(self):
        return self._placeholder

    @property
    def required(self):
        """true when at least one value token must be supplied"""
        return isinstance(self._arity, Exact) and self._arity.count > 0


class Option(metaclass=ArgumentType, sealed=True):
    """
    Named option specification.

    An option answers to "-<short>" and/or "--<long>". Values are stored once,
    under the canonical key (long name, else short character); the short
    character is an alias of that slot, never a second one.
    """

    __introspectable__ = (
        "short",
        "long",
        "arity",
        "help",
        "implicit",
    )

    def __new__(cls, short, long, arity_spec, /, help=Unset, *, implicit=False):
        # '-' and ' ' are the "no short name" sentinels
        if short is None or short in ("-", " "):
            short = None
        elif not isinstance(short, str):
            raise TypeError(f"{cls.__typename__} 'short' must be a string")
        elif len(short) != 1 or short.isspace() or short == "\\":
            raise InvalidNameError(
                f"Error! {cls.__typename__} short name {short!r} must be a single character",
                key=short,
                hint="pass a single letter such as 'f', or '-' for no short name",
            )

        # "", " ", "-" and "--" are the "no long name" sentinels
        if long is None or long in ("", " ", "-", "--"):
            long = None
        elif not isinstance(long, str):
            raise TypeError(f"{cls.__typename__} 'long' must be a string")
        elif long.startswith("-") or any(char.isspace() for char in long):
            raise InvalidNameError(
                f"Error! {cls.__typename__} long name {long!r} cannot start with a dash or contain spaces",
                key=long,
                hint="pass the bare name, e.g. 'foo' for --foo",
            )

        if short is None and long is None:
            raise InvalidNameError(
                f"Error! {cls.__typename__} needs a short or a long name",
                hint="give at least one of them, e.g. add_option('f', 'foo', '0')",
            )

        self = super().__new__(cls)
        self._short = short
        self._long = long
        self._arity = arity(arity_spec)
        self._help = _sanitize_help(cls, help)
        self._implicit = bool(implicit)
        return self

    @property
    def key(self):
        return self._long or self._short

    @property
    def markers(self):
        """command-line spellings, short first"""
        markers = ()
        if self._short is not None:
            markers += ("-" + self._short,)
        if self._long is not None:
            markers += ("--" + self._long,)
        return markers

    @property
    def display(self):
        """preferred spelling in messages ("--long", else "-s")"""
        return self.markers[-1]


__all__ = (
    "Exact",
    "UnboundedType",
    "Unbounded",
    "arity",
    "Positional",
    "Option",
)
