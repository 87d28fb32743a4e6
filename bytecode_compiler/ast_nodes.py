"""AST — closed tagged-union node shapes consumed by the compiler.

Every node model carries a literal ``kind`` field.  ``Expression`` and
``Statement`` are pydantic discriminated unions over that field, so a JSON
document produced by an external parser validates into exactly one variant.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from . import constants

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


# ── expressions ──────────────────────────────────────────────────


class Identifier(BaseModel):
    kind: Literal["identifier"] = "identifier"
    value: str

    def __str__(self) -> str:
        return self.value


class IntegerLiteral(BaseModel):
    kind: Literal["integer"] = "integer"
    value: int = Field(strict=True, ge=INT64_MIN, le=INT64_MAX)

    def __str__(self) -> str:
        return str(self.value)


class FloatLiteral(BaseModel):
    kind: Literal["float"] = "float"
    value: float

    def __str__(self) -> str:
        return str(self.value)


class BooleanLiteral(BaseModel):
    kind: Literal["boolean"] = "boolean"
    value: bool = Field(strict=True)

    def __str__(self) -> str:
        return "true" if self.value else "false"


class StringLiteral(BaseModel):
    kind: Literal["string"] = "string"
    value: str

    def __str__(self) -> str:
        return self.value


class ArrayLiteral(BaseModel):
    kind: Literal["array"] = "array"
    elements: list[Expression] = []

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


class PrefixExpression(BaseModel):
    kind: Literal["prefix"] = "prefix"
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


class InfixExpression(BaseModel):
    kind: Literal["infix"] = "infix"
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


class IfExpression(BaseModel):
    kind: Literal["if"] = "if"
    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        if self.alternative is not None:
            return (
                f"if {self.condition} {{\n{self.consequence}\n}} "
                f"else {{\n{self.alternative}\n}}"
            )
        return f"if {self.condition} {{\n{self.consequence}\n}}"


class FunctionLiteral(BaseModel):
    kind: Literal["function"] = "function"
    parameters: list[Identifier] = []
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {{\n{self.body}\n}}"


class CallExpression(BaseModel):
    kind: Literal["call"] = "call"
    function: Expression
    arguments: list[Expression] = []

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


class IndexExpression(BaseModel):
    kind: Literal["index"] = "index"
    left: Expression
    index: Expression

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


Expression = Annotated[
    Union[
        Identifier,
        IntegerLiteral,
        FloatLiteral,
        BooleanLiteral,
        StringLiteral,
        ArrayLiteral,
        PrefixExpression,
        InfixExpression,
        IfExpression,
        FunctionLiteral,
        CallExpression,
        IndexExpression,
    ],
    Field(discriminator=constants.NODE_KIND_FIELD),
]


# ── statements ───────────────────────────────────────────────────


class ExpressionStatement(BaseModel):
    kind: Literal["expression"] = "expression"
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


class ReturnStatement(BaseModel):
    kind: Literal["return"] = "return"
    return_value: Expression

    def __str__(self) -> str:
        return f"return {self.return_value}"


class Assignment(BaseModel):
    kind: Literal["assign"] = "assign"
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value}"


Statement = Annotated[
    Union[ExpressionStatement, ReturnStatement, Assignment],
    Field(discriminator=constants.NODE_KIND_FIELD),
]


class BlockStatement(BaseModel):
    kind: Literal["block"] = "block"
    statements: list[Statement] = []

    def __str__(self) -> str:
        return "".join(f"{s}\n" for s in self.statements)


class Program(BaseModel):
    kind: Literal["program"] = "program"
    statements: list[Statement] = []

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


Node = Union[Program, Statement, Expression]

for _model in (
    ArrayLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
    IndexExpression,
    ExpressionStatement,
    ReturnStatement,
    Assignment,
    BlockStatement,
    Program,
):
    _model.model_rebuild()

STATEMENT_TYPES: tuple[type, ...] = (ExpressionStatement, ReturnStatement, Assignment)
STATEMENT_KINDS: frozenset[str] = frozenset({"expression", "return", "assign"})

_STATEMENT_ADAPTER: TypeAdapter = TypeAdapter(Statement)
_EXPRESSION_ADAPTER: TypeAdapter = TypeAdapter(Expression)


def parse_node(data: dict[str, Any]) -> Node:
    """Validate a JSON-like mapping into an AST node.

    The root shape is chosen by ``kind``: ``"program"`` yields a
    :class:`Program`, a statement kind yields a statement, anything else is
    validated as an expression.

    Raises:
        pydantic.ValidationError: If *data* does not describe a known node.
    """
    kind = data.get(constants.NODE_KIND_FIELD) if isinstance(data, dict) else None
    if kind == constants.PROGRAM_KIND:
        return Program.model_validate(data)
    if kind in STATEMENT_KINDS:
        return _STATEMENT_ADAPTER.validate_python(data)
    return _EXPRESSION_ADAPTER.validate_python(data)
