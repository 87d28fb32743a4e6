"""Control-Flow Backpatching — instruction stream with a two-deep emission record."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .opcode import DEFINITIONS, Opcode, decode_opcode, make

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmittedInstruction:
    opcode: Opcode
    position: int


class InstructionEmitter:
    """Owns the mutable byte stream a single compilation pass writes into.

    Only the last and the previous emitted instruction are remembered, which
    is exactly enough to retract one trailing instruction.
    """

    def __init__(self):
        self._stream = bytearray()
        self.last: EmittedInstruction | None = None
        self.previous: EmittedInstruction | None = None

    @property
    def position(self) -> int:
        """Offset at which the next instruction will start."""
        return len(self._stream)

    def instructions(self) -> bytes:
        return bytes(self._stream)

    def emit(self, opcode: Opcode, operands: tuple[int, ...] | list[int] = ()) -> int:
        """Append an instruction and return its starting offset."""
        position = len(self._stream)
        self._stream += make(opcode, operands)
        self.previous = self.last
        self.last = EmittedInstruction(opcode=opcode, position=position)
        logger.debug(
            "%04d emit %s %s", position, DEFINITIONS[opcode].name, list(operands)
        )
        return position

    def patch_operand(self, offset: int, operand: int) -> None:
        """Overwrite the single operand of the instruction starting at *offset*.

        The re-encoded instruction has the same width as the original, so no
        other offset in the stream moves.

        Raises:
            ValueError: If *offset* is not the start of a live one-operand
                instruction.
        """
        if not 0 <= offset < len(self._stream):
            raise ValueError(f"No instruction at offset {offset}")
        opcode = decode_opcode(self._stream[offset])
        definition = DEFINITIONS[opcode]
        if definition.arity != 1:
            raise ValueError(f"{definition.name} at offset {offset} has no operand to patch")
        if offset + definition.width > len(self._stream):
            raise ValueError(f"Instruction at offset {offset} is truncated")
        replacement = make(opcode, (operand,))
        self._stream[offset : offset + len(replacement)] = replacement
        logger.debug("%04d patch %s -> %d", offset, definition.name, operand)

    def last_is(self, opcode: Opcode) -> bool:
        return self.last is not None and self.last.opcode == opcode

    def retract_last(self) -> None:
        """Drop the physically last instruction and make *previous* the last.

        Only valid while the last emitted instruction has not been followed
        by any other.
        """
        if self.last is None:
            return
        logger.debug(
            "%04d retract %s", self.last.position, DEFINITIONS[self.last.opcode].name
        )
        del self._stream[self.last.position :]
        self.last = self.previous
        self.previous = None
