"""Three-valued truth and immutable partial assignments."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterator, Mapping, Optional

from errors import InconsistentAssignmentError

if TYPE_CHECKING:
    from core import Variable


class Bool(Enum):
    TRUE = "TRUE"
    FALSE = "FALSE"
    UNDEFINED = "UNDEFINED"

    def __repr__(self) -> str:
        return self.value

    @staticmethod
    def of(value: bool) -> Bool:
        return Bool.TRUE if value else Bool.FALSE

    def negate(self) -> Bool:
        if self is Bool.TRUE:
            return Bool.FALSE
        if self is Bool.FALSE:
            return Bool.TRUE
        return Bool.UNDEFINED


class Environment:
    """
    An immutable assignment of variables to TRUE/FALSE.

    Unbound variables read as UNDEFINED. put_true/put_false return a new
    Environment and leave this one untouched, so backtracking only needs to
    keep the old reference.
    """
    __slots__ = ("_bindings",)

    def __init__(self, bindings: Optional[Mapping[Variable, Bool]] = None):
        self._bindings: Dict[Variable, Bool] = {}
        for variable, value in (bindings or {}).items():
            assert value is not Bool.UNDEFINED, "cannot bind a variable to UNDEFINED"
            self._bindings[variable] = value

    def __repr__(self) -> str:
        items = sorted(self._bindings.items())
        return "Environment[" + ", ".join(f"{v!r}={b!r}" for v, b in items) + "]"

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, variable: Variable) -> bool:
        return variable in self._bindings

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._bindings)

    def __eq__(self, other) -> bool:
        return isinstance(other, Environment) and self._bindings == other._bindings

    def __hash__(self) -> int:
        return hash(frozenset(self._bindings.items()))

    def get(self, variable: Variable) -> Bool:
        return self._bindings.get(variable, Bool.UNDEFINED)

    def put_true(self, variable: Variable) -> Environment:
        return self._put(variable, Bool.TRUE)

    def put_false(self, variable: Variable) -> Environment:
        return self._put(variable, Bool.FALSE)

    def put(self, variable: Variable, value: bool) -> Environment:
        return self._put(variable, Bool.of(value))

    def _put(self, variable: Variable, value: Bool) -> Environment:
        current = self._bindings.get(variable)
        if current is value:
            return self
        if current is not None:
            raise InconsistentAssignmentError(variable=variable)
        bindings = dict(self._bindings)
        bindings[variable] = value
        environment = Environment.__new__(Environment)
        environment._bindings = bindings
        return environment

    def to_dict(self) -> Dict[str, bool]:
        return {variable.name: value is Bool.TRUE for variable, value in self._bindings.items()}
