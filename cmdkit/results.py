"""
cmdkit results: a two-variant success/error container.

What this module provides
- Result[T, E]: holds exactly one of a success value (ok) or an error value (err).
  • Construction only through Result.ok(value) / Result.err(value).
  • Inspection: is_ok(), is_err(), bool(result).
  • Extraction: unwrap(), unwrap_err(), unwrap_or(), unwrap_err_or().
  • Combinators: map(), map_err(), and_then(), match().

Core ideas
- Domain errors travel as values. A handler that fails returns Result.err(...);
  nothing is raised and the caller decides how to report it.
- Wrong-variant extraction is a programmer fault, not a domain error:
  unwrap() on an err (or unwrap_err() on an ok) raises InvalidAccessError.
- T and E must differ. Result[str, str] is rejected when subscripted, since a
  single-tag union of identical types cannot tell its variants apart by type.
- Results are immutable and never mutated by combinators; every transformation
  produces a new Result and the held value is passed to callbacks as-is.

Quick start
    from cmdkit import Result

    def divide(x, y):
        if y == 0:
            return Result.err("y shouldn't be zero!")
        return Result.ok(x // y)

    divide(10, 2).map(lambda x: x + 1).unwrap()        # 6
    divide(10, 0).unwrap_or(0)                           # 0
    divide(10, 2).match(lambda x: "ok", lambda e: e)     # "ok"
"""
from rich.text import Text

from .faults import InvalidAccessError


class Result[T, E]:
    """
    Generic two-variant container: exactly one of ok(T) or err(E).

    Invariants
    - never both, never neither; the variant is fixed at construction.
    - Result(...) cannot be called directly; use Result.ok / Result.err.
    - Result[X, X] raises TypeError (variants must be distinguishable).
    - instances are immutable and the class is final.
    """

    __slots__ = ("_okay", "_value")

    def __class_getitem__(cls, parameters):
        if isinstance(parameters, tuple) and len(parameters) == 2:
            okay, error = parameters
            if okay is error or okay == error:
                raise TypeError(f"Result[T, E]: T and E must not be the same type (got {okay!r})")
        return super().__class_getitem__(parameters)

    def __new__(cls, *unused, **ignored):
        raise TypeError("Result cannot be instantiated directly; use Result.ok() or Result.err()")

    def __init_subclass__(cls, **options):
        raise TypeError("type 'Result' is not an acceptable base type")

    @classmethod
    def _build(cls, okay, value, /):
        self = object.__new__(cls)
        object.__setattr__(self, "_okay", okay)
        object.__setattr__(self, "_value", value)
        return self

    @classmethod
    def ok(cls, value, /):
        """
        Build a success Result holding value.
        """
        return cls._build(True, value)

    @classmethod
    def err(cls, value, /):
        """
        Build an error Result holding value.
        """
        return cls._build(False, value)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __reduce__(self):
        return type(self).ok if self._okay else type(self).err, (self._value,)

    def is_ok(self):
        return self._okay

    def is_err(self):
        return not self._okay

    def __bool__(self):
        return self._okay

    def unwrap(self):
        """
        Return the success value.

        Raises
        - InvalidAccessError: when called on an error Result.
        """
        if self._okay:
            return self._value
        raise InvalidAccessError("unwrap called on an error Result")

    def unwrap_err(self):
        """
        Return the error value.

        Raises
        - InvalidAccessError: when called on an okay Result.
        """
        if not self._okay:
            return self._value
        raise InvalidAccessError("unwrap_err called on an okay Result")

    def unwrap_or(self, default, /):
        return self._value if self._okay else default

    def unwrap_err_or(self, default, /):
        return self._value if not self._okay else default

    def map(self, function, /):
        """
        Transform the success value, leaving an error untouched.

        - ok(v)  → ok(function(v))
        - err(e) → err(e); function is not called.
        """
        if self._okay:
            return type(self).ok(function(self._value))
        return type(self).err(self._value)

    def map_err(self, function, /):
        """
        Transform the error value, leaving a success untouched.

        - err(e) → err(function(e))
        - ok(v)  → ok(v); function is not called.
        """
        if not self._okay:
            return type(self).err(function(self._value))
        return type(self).ok(self._value)

    def and_then(self, function, /):
        """
        Chain a fallible step (monadic bind).

        Behavior
        - ok(v): returns function(v) as-is. The callback must return a Result
          whose error side has the same type as this one; the type is not
          checked at runtime, only that a Result comes back.
        - err(e): short-circuits with err(e) without calling function.

        Raises
        - TypeError: when function does not return a Result.
        """
        if not self._okay:
            return type(self).err(self._value)
        if not isinstance(result := function(self._value), Result):
            raise TypeError(f"and_then() callback must return a Result, not {type(result).__name__!r}")
        return result

    def match(self, on_ok, on_err, /):
        """
        Collapse into a plain value: exactly one callback runs.
        """
        if self._okay:
            return on_ok(self._value)
        return on_err(self._value)

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        return self._okay is other._okay and self._value == other._value

    def __hash__(self):
        return hash((self._okay, self._value))

    def __repr__(self):
        return f"{"Ok" if self._okay else "Err"}({self._value!r})"

    def __rich__(self):
        return Text.assemble(
            ("Ok" if self._okay else "Err", "bold green" if self._okay else "bold red"),
            ("(", "yellow"),
            repr(self._value),
            (")", "yellow"),
        )


__all__ = (
    "Result",
)
