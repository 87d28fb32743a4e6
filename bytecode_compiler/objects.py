"""Runtime values that can be embedded in the constant pool (pure data)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .ast_nodes import BlockStatement, Identifier


@dataclass
class Environment:
    """Shared mutable scope; function values capture it by reference."""

    bindings: dict[str, Any] = field(default_factory=dict)
    outer: Environment | None = None

    def get(self, name: str) -> Any | None:
        if name in self.bindings:
            return self.bindings[name]
        if self.outer is not None:
            return self.outer.get(name)
        return None

    def set(self, name: str, value: Any) -> Any:
        self.bindings[name] = value
        return value

    def enclosed(self) -> Environment:
        return Environment(outer=self)


@dataclass(frozen=True)
class Integer:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Boolean:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class String:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Array:
    elements: tuple[Object, ...] = ()

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


@dataclass(frozen=True)
class Function:
    parameters: tuple[Identifier, ...]
    body: BlockStatement
    env: Environment = field(default_factory=Environment, compare=False)

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {{\n{self.body}\n}}"


@dataclass(frozen=True)
class ReturnValue:
    value: Object

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Null:
    def __str__(self) -> str:
        return "null"


NULL = Null()

Object = Union[Integer, Boolean, String, Array, Function, ReturnValue, Null]
