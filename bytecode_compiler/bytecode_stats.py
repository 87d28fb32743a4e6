"""Pure functions for computing statistics over compiled bytecode."""

from __future__ import annotations

from collections import Counter

from .bytecode import Bytecode
from .opcode import DEFINITIONS


def count_opcodes(bytecode: Bytecode) -> dict[str, int]:
    """Return a frequency map of opcode mnemonics in *bytecode*.

    Args:
        bytecode: A compiled artifact.

    Returns:
        A dict mapping mnemonic strings (e.g. ``"OpConst"``) to their
        occurrence counts.  Empty dict for an empty instruction stream.
    """
    return dict(
        Counter(DEFINITIONS[inst.opcode].name for inst in bytecode.iter_instructions())
    )
