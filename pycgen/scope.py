"""Compilation scopes: declared variables and the C text emitted for them."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .vartypes import VariableType

INDENT_WIDTH = 4


@dataclass
class Variable:
    """A variable declared in a scope, numbered for the generated C code."""

    index: int
    name: int
    type: Optional[VariableType]

    @property
    def c_name(self) -> str:
        """The identifier the variable has in the generated C code."""
        return f"var_{self.index}"


@dataclass
class Scope:
    """A block of generated code with the variables declared in it.

    Variable lookups fall back to the enclosing scopes. Variable numbers are
    shared by a scope and every scope nested inside it, starting at 1.
    """

    parent: Optional["Scope"] = None
    indent: int = 0
    name: Optional[int] = None
    variables: list[Variable] = field(default_factory=list)
    _content: list[str] = field(default_factory=list, init=False, repr=False)
    _counter: Iterator[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._counter = self.parent._counter if self.parent is not None else itertools.count(1)

    def _prefix(self) -> str:
        return " " * (self.indent * INDENT_WIDTH)

    def _write(self, text: str) -> None:
        self._content.append(text)

    def append(self, text: str) -> None:
        """Append ``text`` after this scope's indentation."""
        self._write(self._prefix() + text)

    def append_line(self, text: str) -> None:
        """Append ``text`` as an indented line ending with a newline."""
        self.append(text + "\n")

    def get_variable(self, name: int) -> Optional[Variable]:
        """Find the variable called ``name`` here or in an enclosing scope."""
        scope: Optional[Scope] = self
        while scope is not None:
            for variable in scope.variables:
                if variable.name == name:
                    return variable
            scope = scope.parent
        return None

    def set_variable(self, name: int, type: Optional[VariableType]) -> tuple[int, bool]:
        """Give ``name`` the type ``type``, declaring it here if it is unknown.

        Returns the variable's number and whether it was newly declared.
        """
        existing = self.get_variable(name)
        if existing is not None:
            existing.type = type
            return existing.index, False
        variable = Variable(index=next(self._counter), name=name, type=type)
        self.variables.append(variable)
        return variable.index, True

    def write_type(self, type: Optional[VariableType]) -> None:
        """Append the C type name for ``type``, without indentation."""
        if type is None:
            raise ValueError("variable type is missing")
        self._write(type.c_type_name())

    def render(self) -> str:
        """Return all text generated in this scope so far."""
        return "".join(self._content)