"""Compilation error taxonomy."""

from __future__ import annotations


class CompileError(Exception):
    """Raised when an AST cannot be lowered to bytecode."""


class UnimplementedError(CompileError):
    """The AST contains a construct the compiler does not lower yet."""

    def __init__(self, construct: str):
        self.construct = construct
        super().__init__(f"Unimplemented: {construct}")


class OperandOverflowError(CompileError):
    """A constant index or jump target does not fit in its operand width."""

    def __init__(self, construct: str, value: int):
        self.construct = construct
        self.value = value
        super().__init__(f"Operand overflow: {construct} {value} exceeds the operand limit")
