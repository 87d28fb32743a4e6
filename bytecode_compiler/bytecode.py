"""Bytecode artifact — immutable (instruction stream, constant pool) pair."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from .objects import Object
from .opcode import DEFINITIONS, Opcode, decode_opcode, read_operands
from .constants import DISASSEMBLY_OFFSET_DIGITS


@dataclass(frozen=True)
class DecodedInstruction:
    offset: int
    opcode: Opcode
    operands: tuple[int, ...] = ()

    def __str__(self) -> str:
        parts = [
            f"{self.offset:0{DISASSEMBLY_OFFSET_DIGITS}d}",
            DEFINITIONS[self.opcode].name,
        ]
        parts.extend(str(op) for op in self.operands)
        return " ".join(parts)


def iter_instructions(stream: bytes | bytearray) -> Iterator[DecodedInstruction]:
    """Walk *stream* instruction by instruction, decoding operands by arity."""
    offset = 0
    while offset < len(stream):
        opcode = decode_opcode(stream[offset])
        operands, read = read_operands(DEFINITIONS[opcode], stream, offset)
        yield DecodedInstruction(offset=offset, opcode=opcode, operands=tuple(operands))
        offset += 1 + read


def disassemble(stream: bytes | bytearray) -> str:
    """Render one ``NNNN Mnemonic [operands]`` line per instruction."""
    return "\n".join(str(inst) for inst in iter_instructions(stream))


@dataclass(frozen=True)
class Bytecode:
    """Output of one compilation pass, consumed read-only by the executor."""

    instructions: bytes = b""
    constants: tuple[Object, ...] = ()

    def iter_instructions(self) -> Iterator[DecodedInstruction]:
        return iter_instructions(self.instructions)

    def disassemble(self) -> str:
        return disassemble(self.instructions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "instructions": list(self.instructions),
            "disassembly": [str(inst) for inst in self.iter_instructions()],
            "constants": [str(c) for c in self.constants],
        }

    def __str__(self) -> str:
        return self.disassemble()
