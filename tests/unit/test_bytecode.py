"""Tests for the Bytecode artifact and its disassembly."""

import dataclasses

import pytest

from bytecode_compiler.bytecode import (
    Bytecode,
    DecodedInstruction,
    disassemble,
    iter_instructions,
)
from bytecode_compiler.objects import Integer
from bytecode_compiler.opcode import Opcode, make


class TestDisassemble:
    def test_operands_rendered_by_arity(self):
        stream = make(Opcode.ADD) + make(Opcode.CONST, (2,)) + make(Opcode.CONST, (65535,))
        assert disassemble(stream) == "\n".join(
            ["0000 OpAdd", "0001 OpConst 2", "0004 OpConst 65535"]
        )

    def test_control_flow_mnemonics(self):
        stream = (
            make(Opcode.TRUE)
            + make(Opcode.JUMP_NOT_TRUTHY, (7,))
            + make(Opcode.JUMP, (7,))
            + make(Opcode.POP)
        )
        assert disassemble(stream) == "\n".join(
            [
                "0000 OpTrue",
                "0001 OpJumpNotTruthy 7",
                "0004 OpJump 7",
                "0007 OpPop",
            ]
        )

    def test_empty_stream(self):
        assert disassemble(b"") == ""

    def test_undefined_opcode_raises(self):
        with pytest.raises(ValueError):
            disassemble(bytes([200]))

    def test_iter_instructions_offsets(self):
        stream = make(Opcode.CONST, (0,)) + make(Opcode.CONST, (1,)) + make(Opcode.SUB)
        assert list(iter_instructions(stream)) == [
            DecodedInstruction(offset=0, opcode=Opcode.CONST, operands=(0,)),
            DecodedInstruction(offset=3, opcode=Opcode.CONST, operands=(1,)),
            DecodedInstruction(offset=6, opcode=Opcode.SUB),
        ]


class TestBytecode:
    def test_str_is_disassembly(self):
        bytecode = Bytecode(instructions=make(Opcode.FALSE) + make(Opcode.BANG))
        assert str(bytecode) == "0000 OpFalse\n0001 OpBang"

    def test_structural_equality(self):
        a = Bytecode(instructions=make(Opcode.CONST, (0,)), constants=(Integer(1),))
        b = Bytecode(instructions=make(Opcode.CONST, (0,)), constants=(Integer(1),))
        assert a == b
        assert a != Bytecode(instructions=make(Opcode.CONST, (0,)), constants=(Integer(2),))

    def test_is_immutable(self):
        bytecode = Bytecode()
        with pytest.raises(dataclasses.FrozenInstanceError):
            bytecode.instructions = b"\x01"

    def test_to_dict(self):
        bytecode = Bytecode(
            instructions=make(Opcode.CONST, (0,)) + make(Opcode.POP),
            constants=(Integer(42),),
        )
        assert bytecode.to_dict() == {
            "instructions": [0, 0, 0, 1],
            "disassembly": ["0000 OpConst 0", "0003 OpPop"],
            "constants": ["42"],
        }
