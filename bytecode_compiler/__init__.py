"""Stack-machine bytecode compiler package."""

from .compiler import Compiler, compile  # noqa: F401
from .bytecode import Bytecode, disassemble  # noqa: F401
from .errors import CompileError, UnimplementedError  # noqa: F401
from .api import (  # noqa: F401
    load_ast,
    compile_json,
    dump_bytecode,
    bytecode_stats,
)
