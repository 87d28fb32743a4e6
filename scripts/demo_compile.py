"""Demo: compile a few hand-built ASTs and print their disassembly."""

import logging

from bytecode_compiler.ast_nodes import (
    BlockStatement,
    BooleanLiteral,
    ExpressionStatement,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    Program,
)
from bytecode_compiler.compiler import compile

logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


def _stmt(expression):
    return ExpressionStatement(expression=expression)


def _block(*expressions):
    return BlockStatement(statements=[_stmt(e) for e in expressions])


PROGRAMS = {
    "1 + 2;": Program(
        statements=[
            _stmt(
                InfixExpression(
                    left=IntegerLiteral(value=1),
                    operator="+",
                    right=IntegerLiteral(value=2),
                )
            )
        ]
    ),
    "if (true) { 10 } else { 20 }; 3333;": Program(
        statements=[
            _stmt(
                IfExpression(
                    condition=BooleanLiteral(value=True),
                    consequence=_block(IntegerLiteral(value=10)),
                    alternative=_block(IntegerLiteral(value=20)),
                )
            ),
            _stmt(IntegerLiteral(value=3333)),
        ]
    ),
    "if (true) { 10 }; 3333;": Program(
        statements=[
            _stmt(
                IfExpression(
                    condition=BooleanLiteral(value=True),
                    consequence=_block(IntegerLiteral(value=10)),
                )
            ),
            _stmt(IntegerLiteral(value=3333)),
        ]
    ),
}


def main():
    for source, program in PROGRAMS.items():
        print("=" * 60)
        print(source)
        print("=" * 60)
        bytecode = compile(program)
        print(bytecode.disassemble())
        print("constants:", ", ".join(str(c) for c in bytecode.constants))
        print()


if __name__ == "__main__":
    main()
