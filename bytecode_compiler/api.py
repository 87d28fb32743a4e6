"""Composable API functions for the compilation pipeline.

Each function corresponds to a CLI workflow (disassembly, --json, --stats)
but is callable programmatically without argparse.
"""

from __future__ import annotations

import json
import logging

from .ast_nodes import Node, parse_node
from .bytecode import Bytecode
from .bytecode_stats import count_opcodes
from .compiler import Compiler

logger = logging.getLogger(__name__)


def load_ast(text: str) -> Node:
    """Parse a JSON document into an AST node.

    Args:
        text: JSON produced by the external parser.  The root object's
            ``kind`` selects a program, statement or expression.

    Returns:
        The validated AST node.

    Raises:
        json.JSONDecodeError: If *text* is not valid JSON.
        pydantic.ValidationError: If the document is not a known node shape.
    """
    return parse_node(json.loads(text))


def compile_json(text: str) -> Bytecode:
    """Load a JSON AST and compile it to bytecode.

    Args:
        text: JSON AST document.

    Returns:
        The compiled Bytecode artifact.

    Raises:
        CompileError: If the AST uses a construct the compiler cannot lower.
    """
    node = load_ast(text)
    logger.info("Compiling %s node", node.kind)
    return Compiler().compile(node)


def dump_bytecode(text: str) -> str:
    """Compile a JSON AST and return its disassembly.

    Args:
        text: JSON AST document.

    Returns:
        A multi-line string with one instruction per line.
    """
    return compile_json(text).disassemble()


def bytecode_stats(text: str) -> dict[str, int]:
    """Compile a JSON AST and return opcode frequency counts.

    Args:
        text: JSON AST document.

    Returns:
        A dict mapping opcode mnemonics to their occurrence counts.
    """
    return count_opcodes(compile_json(text))
