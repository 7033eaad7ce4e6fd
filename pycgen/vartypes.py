"""Static types inferred for variables, including values known ahead of time."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional, Sequence


class VariableClass(IntEnum):
    """The broad category of a variable type."""

    UNDEFINED = 0
    INT = 1
    FLOAT = 2
    STRING = 3
    BOOLEAN = 4
    NONE = 5
    LIST = 6
    SET = 7
    TUPLE = 8
    DICT = 9
    FUNCTION = 10
    CLASS = 11
    AOT_INT = 12
    AOT_FLOAT = 13
    AOT_STRING = 14
    AOT_BOOLEAN = 15
    GROUP = 16


_SIMPLE = frozenset({
    VariableClass.UNDEFINED,
    VariableClass.NONE,
    VariableClass.INT,
    VariableClass.FLOAT,
    VariableClass.STRING,
    VariableClass.BOOLEAN,
})

_SEQUENCES = frozenset({VariableClass.LIST, VariableClass.SET, VariableClass.TUPLE})

_KNOWN_VALUES = frozenset({
    VariableClass.AOT_INT,
    VariableClass.AOT_FLOAT,
    VariableClass.AOT_STRING,
    VariableClass.AOT_BOOLEAN,
})

_C_TYPE_NAMES = {
    VariableClass.INT: "mpz_t",
    VariableClass.AOT_INT: "mpz_t",
    VariableClass.FLOAT: "double",
    VariableClass.AOT_FLOAT: "double",
    VariableClass.STRING: "string",
    VariableClass.AOT_STRING: "string",
    VariableClass.BOOLEAN: "_Bool",
    VariableClass.AOT_BOOLEAN: "_Bool",
}


@dataclass(eq=False)
class VariableType:
    """A variable's type.

    ``constant`` holds the value of the ahead-of-time kinds. ``value`` and
    ``values`` describe the element type and per-position types of lists, sets,
    tuples and dicts, with ``key`` and ``keys`` for dict keys. ``fixed_size`` is
    None when the container's length is not fixed. ``node`` is the definition of
    a function or class, and ``members`` the alternatives of a group.
    """

    kind: VariableClass
    constant: Any = None
    value: Optional["VariableType"] = None
    values: list["VariableType"] = field(default_factory=list)
    key: Optional["VariableType"] = None
    keys: list["VariableType"] = field(default_factory=list)
    fixed_size: Optional[int] = None
    node: Any = None
    members: list["VariableType"] = field(default_factory=list)

    def copy(self) -> "VariableType":
        """Return a deep copy; function and class definitions stay shared."""
        return VariableType(
            kind=self.kind,
            constant=self.constant,
            value=None if self.value is None else self.value.copy(),
            values=[item.copy() for item in self.values],
            key=None if self.key is None else self.key.copy(),
            keys=[item.copy() for item in self.keys],
            fixed_size=self.fixed_size,
            node=self.node,
            members=[item.copy() for item in self.members],
        )

    def c_type_name(self) -> str:
        """Return the C type used to declare a variable of this type, or ''."""
        return _C_TYPE_NAMES.get(self.kind, "")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VariableType):
            return NotImplemented
        return types_equal(self, other)

    __hash__ = None  # type: ignore[assignment]


def types_equal(a: Optional[VariableType], b: Optional[VariableType]) -> bool:
    """Tell whether two types (either may be None) describe the same thing."""
    if a is b:
        return True
    if a is None or b is None or a.kind != b.kind:
        return False

    kind = a.kind
    if kind in _SIMPLE:
        return True
    if kind in _SEQUENCES:
        return (
            a.fixed_size == b.fixed_size
            and types_equal(a.value, b.value)
            and type_lists_equal(a.values, b.values)
        )
    if kind is VariableClass.DICT:
        return (
            a.fixed_size == b.fixed_size
            and types_equal(a.value, b.value)
            and type_lists_equal(a.keys, b.keys)
            and type_lists_equal(a.values, b.values)
        )
    if kind in (VariableClass.FUNCTION, VariableClass.CLASS):
        return a.node is b.node
    if kind in _KNOWN_VALUES:
        return a.constant == b.constant
    return type_lists_equal(a.members, b.members)


def type_lists_equal(a: Sequence[Optional[VariableType]],
                     b: Sequence[Optional[VariableType]]) -> bool:
    """Tell whether two type lists have the same length and equal members."""
    return len(a) == len(b) and all(types_equal(x, y) for x, y in zip(a, b))