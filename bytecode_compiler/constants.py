"""Named constants — eliminates magic numbers across the codebase."""

from __future__ import annotations

# Operand written into a forward jump before its target is known.
PLACEHOLDER_OPERAND = 9999

# Width in bytes of every jump target / constant index operand.
WIDE_OPERAND_WIDTH = 2
MAX_WIDE_OPERAND = (1 << (8 * WIDE_OPERAND_WIDTH)) - 1

# Digits used for the byte offset column of the disassembly.
DISASSEMBLY_OFFSET_DIGITS = 4

NODE_KIND_FIELD = "kind"
PROGRAM_KIND = "program"

PREFIX_BANG = "!"
PREFIX_MINUS = "-"

INFIX_ADD = "+"
INFIX_SUB = "-"
INFIX_MUL = "*"
INFIX_DIV = "/"
INFIX_GT = ">"
INFIX_LT = "<"
INFIX_EQ = "=="
INFIX_NOT_EQ = "!="
