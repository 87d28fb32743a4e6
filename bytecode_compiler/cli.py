"""Command-line entry point: compile a JSON AST and print the result."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from .api import compile_json
from .bytecode_stats import count_opcodes
from .errors import CompileError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compile a JSON AST into stack-machine bytecode"
    )
    parser.add_argument("file", nargs="?",
                        help="JSON AST file (default: read stdin)")
    parser.add_argument("--json", action="store_true",
                        help="Print the artifact as JSON")
    parser.add_argument("--stats", action="store_true",
                        help="Print opcode frequency counts")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log every emission, patch and retraction")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if args.file:
        with open(args.file) as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    try:
        bytecode = compile_json(text)
    except (ValidationError, json.JSONDecodeError) as exc:
        print(f"error: invalid AST: {exc}", file=sys.stderr)
        return 1
    except CompileError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(bytecode.to_dict(), indent=2))
    elif args.stats:
        for name, count in sorted(count_opcodes(bytecode).items()):
            print(f"{name:<20} {count}")
    else:
        print("═══ Bytecode ═══")
        print(bytecode.disassemble())
        print("═══ Constants ═══")
        for index, value in enumerate(bytecode.constants):
            print(f"  [{index}] {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
