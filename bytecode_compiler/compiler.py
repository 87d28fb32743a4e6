"""AST-to-Bytecode Compiler — recursive descent over the closed AST variants."""

from __future__ import annotations

import logging
from typing import Callable

from .ast_nodes import (
    STATEMENT_TYPES,
    ArrayLiteral,
    Assignment,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    FloatLiteral,
    FunctionLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    StringLiteral,
)
from .bytecode import Bytecode
from .constant_pool import ConstantPool
from .emitter import InstructionEmitter
from .errors import OperandOverflowError, UnimplementedError
from .objects import Integer
from .opcode import Opcode
from . import constants

logger = logging.getLogger(__name__)


class Compiler:
    """Lowers an AST into a flat instruction stream plus constant pool.

    Every ``compile`` call starts from an empty builder, so one instance can
    be reused and compiling the same tree twice yields equal artifacts.  The
    first unsupported construct raises :class:`UnimplementedError`; no
    partial artifact is ever returned, and after a failure ``bytecode()``
    reports an empty artifact.  A constant index or jump target above
    ``0xFFFF`` raises :class:`OperandOverflowError`.

    Lowering is plain recursion over the tree, so nesting deeper than the
    interpreter's recursion limit (about 1000 levels) raises
    ``RecursionError``.
    """

    PREFIX_OPCODES: dict[str, Opcode] = {
        constants.PREFIX_BANG: Opcode.BANG,
        constants.PREFIX_MINUS: Opcode.MINUS,
    }

    INFIX_OPCODES: dict[str, Opcode] = {
        constants.INFIX_ADD: Opcode.ADD,
        constants.INFIX_SUB: Opcode.SUB,
        constants.INFIX_MUL: Opcode.MUL,
        constants.INFIX_DIV: Opcode.DIV,
        constants.INFIX_GT: Opcode.GREATER_THAN,
        constants.INFIX_LT: Opcode.GREATER_THAN,
        constants.INFIX_EQ: Opcode.EQUAL,
        constants.INFIX_NOT_EQ: Opcode.NOT_EQUAL,
    }

    # Operators compiled right operand first, mapped onto the mirrored opcode.
    SWAPPED_OPERATORS: frozenset[str] = frozenset({constants.INFIX_LT})

    def __init__(self):
        self._emitter = InstructionEmitter()
        self._constants = ConstantPool()
        self._STMT_DISPATCH: dict[type, Callable] = {
            ExpressionStatement: self._compile_expression_statement,
            ReturnStatement: self._compile_return,
            Assignment: self._unimplemented,
        }
        self._EXPR_DISPATCH: dict[type, Callable] = {
            IntegerLiteral: self._compile_integer,
            BooleanLiteral: self._compile_boolean,
            PrefixExpression: self._compile_prefix,
            InfixExpression: self._compile_infix,
            IfExpression: self._compile_if,
            Identifier: self._unimplemented,
            FloatLiteral: self._unimplemented,
            StringLiteral: self._unimplemented,
            ArrayLiteral: self._unimplemented,
            FunctionLiteral: self._unimplemented,
            CallExpression: self._unimplemented,
            IndexExpression: self._unimplemented,
        }

    # ── entry point ──────────────────────────────────────────────

    def compile(self, node: Node) -> Bytecode:
        self._reset()
        try:
            if isinstance(node, Program):
                logger.info("Compiling program (%d statements)", len(node.statements))
                for statement in node.statements:
                    self._compile_statement(statement)
            elif isinstance(node, STATEMENT_TYPES):
                self._compile_statement(node)
            else:
                self._compile_expression(node)
        except Exception:
            self._reset()
            raise
        return self.bytecode()

    def _reset(self) -> None:
        self._emitter = InstructionEmitter()
        self._constants = ConstantPool()

    def bytecode(self) -> Bytecode:
        return Bytecode(
            instructions=self._emitter.instructions(),
            constants=self._constants.snapshot(),
        )

    # ── dispatchers ──────────────────────────────────────────────

    def _compile_statement(self, node) -> None:
        handler = self._STMT_DISPATCH.get(type(node))
        if handler is None:
            raise UnimplementedError(type(node).__name__)
        handler(node)

    def _compile_expression(self, node) -> None:
        handler = self._EXPR_DISPATCH.get(type(node))
        if handler is None:
            raise UnimplementedError(type(node).__name__)
        handler(node)

    def _compile_block(self, block: BlockStatement) -> None:
        for statement in block.statements:
            self._compile_statement(statement)

    def _unimplemented(self, node) -> None:
        raise UnimplementedError(node.kind)

    # ── statements ───────────────────────────────────────────────

    def _compile_expression_statement(self, node: ExpressionStatement) -> None:
        self._compile_expression(node.expression)
        self._emitter.emit(Opcode.POP)

    def _compile_return(self, node: ReturnStatement) -> None:
        # The value is left on the stack; there is no return opcode yet.
        self._compile_expression(node.return_value)

    # ── expressions ──────────────────────────────────────────────

    def _compile_integer(self, node: IntegerLiteral) -> None:
        index = self._constants.add(Integer(node.value))
        if index > constants.MAX_WIDE_OPERAND:
            raise OperandOverflowError("constant index", index)
        self._emitter.emit(Opcode.CONST, (index,))

    def _compile_boolean(self, node: BooleanLiteral) -> None:
        self._emitter.emit(Opcode.TRUE if node.value else Opcode.FALSE)

    def _compile_prefix(self, node: PrefixExpression) -> None:
        self._compile_expression(node.right)
        opcode = self.PREFIX_OPCODES.get(node.operator)
        if opcode is None:
            raise UnimplementedError(f"prefix operator {node.operator!r}")
        self._emitter.emit(opcode)

    def _compile_infix(self, node: InfixExpression) -> None:
        if node.operator in self.SWAPPED_OPERATORS:
            self._compile_expression(node.right)
            self._compile_expression(node.left)
        else:
            self._compile_expression(node.left)
            self._compile_expression(node.right)
        opcode = self.INFIX_OPCODES.get(node.operator)
        if opcode is None:
            raise UnimplementedError(f"infix operator {node.operator!r}")
        self._emitter.emit(opcode)

    def _compile_if(self, node: IfExpression) -> None:
        self._compile_expression(node.condition)
        jnt_offset = self._emitter.emit(
            Opcode.JUMP_NOT_TRUTHY, (constants.PLACEHOLDER_OPERAND,)
        )

        self._compile_block(node.consequence)
        self._retract_trailing_pop()

        # Emitted even without an alternative; it then jumps to the next
        # instruction.
        jump_offset = self._emitter.emit(Opcode.JUMP, (constants.PLACEHOLDER_OPERAND,))
        self._patch_jump(jnt_offset)

        if node.alternative is None:
            # TODO: push a null for the untaken path once the VM has one;
            # until then both paths leave different stack depths.
            self._patch_jump(jnt_offset)
        else:
            self._compile_block(node.alternative)
            self._retract_trailing_pop()

        self._patch_jump(jump_offset)
        logger.debug(
            "if-expression: jump-not-truthy@%d, jump@%d -> %d",
            jnt_offset,
            jump_offset,
            self._emitter.position,
        )

    def _patch_jump(self, offset: int) -> None:
        target = self._emitter.position
        if target > constants.MAX_WIDE_OPERAND:
            raise OperandOverflowError("jump target", target)
        self._emitter.patch_operand(offset, target)

    def _retract_trailing_pop(self) -> None:
        # A block used as a value keeps its last result on the stack.
        if self._emitter.last_is(Opcode.POP):
            self._emitter.retract_last()


def compile(node: Node) -> Bytecode:
    """Compile *node* with a fresh :class:`Compiler`."""
    return Compiler().compile(node)
