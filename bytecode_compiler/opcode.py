"""Instruction Encoding — opcode set and fixed-layout byte serialisation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from . import constants


class Opcode(IntEnum):
    # Value producers
    CONST = 0
    # Stack housekeeping
    POP = 1
    # Arithmetic
    ADD = 2
    SUB = 3
    MUL = 4
    DIV = 5
    # Boolean producers
    TRUE = 6
    FALSE = 7
    # Comparison
    GREATER_THAN = 8
    EQUAL = 9
    NOT_EQUAL = 10
    # Prefix operators
    MINUS = 11
    BANG = 12
    # Control flow
    JUMP = 13
    JUMP_NOT_TRUTHY = 14


@dataclass(frozen=True)
class OpcodeDefinition:
    """Static shape of an instruction: mnemonic plus per-operand byte widths."""

    name: str
    operand_widths: tuple[int, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.operand_widths)

    @property
    def width(self) -> int:
        return 1 + sum(self.operand_widths)


_WIDE = (constants.WIDE_OPERAND_WIDTH,)

DEFINITIONS: dict[Opcode, OpcodeDefinition] = {
    Opcode.CONST: OpcodeDefinition("OpConst", _WIDE),
    Opcode.POP: OpcodeDefinition("OpPop"),
    Opcode.ADD: OpcodeDefinition("OpAdd"),
    Opcode.SUB: OpcodeDefinition("OpSub"),
    Opcode.MUL: OpcodeDefinition("OpMul"),
    Opcode.DIV: OpcodeDefinition("OpDiv"),
    Opcode.TRUE: OpcodeDefinition("OpTrue"),
    Opcode.FALSE: OpcodeDefinition("OpFalse"),
    Opcode.GREATER_THAN: OpcodeDefinition("OpGreaterThan"),
    Opcode.EQUAL: OpcodeDefinition("OpEqual"),
    Opcode.NOT_EQUAL: OpcodeDefinition("OpNotEqual"),
    Opcode.MINUS: OpcodeDefinition("OpMinus"),
    Opcode.BANG: OpcodeDefinition("OpBang"),
    Opcode.JUMP: OpcodeDefinition("OpJump", _WIDE),
    Opcode.JUMP_NOT_TRUTHY: OpcodeDefinition("OpJumpNotTruthy", _WIDE),
}


def decode_opcode(byte: int) -> Opcode:
    """Map the leading byte of an instruction back to its opcode.

    Raises ``ValueError`` if *byte* is not a defined opcode.
    """
    try:
        return Opcode(byte)
    except ValueError as exc:
        raise ValueError(f"Undefined opcode byte: {byte}") from exc


def lookup(byte: int) -> OpcodeDefinition:
    return DEFINITIONS[decode_opcode(byte)]


def instruction_width(opcode: Opcode) -> int:
    return DEFINITIONS[opcode].width


def make(opcode: Opcode, operands: tuple[int, ...] | list[int] = ()) -> bytes:
    """Encode *opcode* and its operands into a single instruction.

    Operands are written big-endian at the widths declared for *opcode*.

    Raises:
        ValueError: If the operand count does not match the opcode's arity,
            or an operand does not fit in its declared width.
    """
    definition = DEFINITIONS[opcode]
    if len(operands) != definition.arity:
        raise ValueError(
            f"{definition.name} expects {definition.arity} operand(s), "
            f"got {len(operands)}"
        )
    encoded = bytearray([int(opcode)])
    for operand, width in zip(operands, definition.operand_widths):
        try:
            encoded += int(operand).to_bytes(width, "big", signed=False)
        except OverflowError as exc:
            raise ValueError(
                f"Operand {operand} does not fit in {width} byte(s) "
                f"for {definition.name}"
            ) from exc
    return bytes(encoded)


def read_operands(
    definition: OpcodeDefinition, stream: bytes | bytearray, offset: int
) -> tuple[list[int], int]:
    """Decode the operands that follow the opcode byte at *offset*.

    Returns the decoded operands and the number of operand bytes consumed.
    """
    operands: list[int] = []
    cursor = offset + 1
    for width in definition.operand_widths:
        operands.append(int.from_bytes(stream[cursor : cursor + width], "big"))
        cursor += width
    return operands, cursor - offset - 1
