"""Abstract Syntax Tree (AST) definitions for the Rox language.

Expression nodes evaluate to a value; statement nodes are executed for
their effects. Nodes carry the `Token` of identifiers and operators so
the interpreter can name variables and report line numbers.

Expression nodes render as a parenthesized prefix form through `str()`,
e.g. `1 + 2 * x` becomes `(+ 1 (* 2 (var x)))`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .tokens import LiteralValue, Token
from .types import from_literal, to_string


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Expr(Node):
    pass


@dataclass
class Stmt(Node):
    pass


@dataclass
class Program(Node):
    body: List[Stmt]


# Expressions

@dataclass
class Literal(Expr):
    value: LiteralValue

    def __str__(self) -> str:
        return to_string(from_literal(self.value))


@dataclass
class Grouping(Expr):
    expression: Expr

    def __str__(self) -> str:
        return f"(group {self.expression})"


@dataclass
class UnaryOp(Expr):
    op: Token
    operand: Expr

    def __str__(self) -> str:
        return f"({self.op.lexeme} {self.operand})"


@dataclass
class BinaryOp(Expr):
    left: Expr
    op: Token
    right: Expr

    def __str__(self) -> str:
        return f"({self.op.lexeme} {self.left} {self.right})"


@dataclass
class LogicalOp(Expr):
    left: Expr
    op: Token
    right: Expr

    def __str__(self) -> str:
        return f"({self.op.lexeme} {self.left} {self.right})"


@dataclass
class Variable(Expr):
    name: Token

    def __str__(self) -> str:
        return f"(var {self.name.lexeme})"


@dataclass
class Assign(Expr):
    name: Token
    value: Expr

    def __str__(self) -> str:
        return f"(= {self.name.lexeme} {self.value})"


# Statements

@dataclass
class ExprStmt(Stmt):
    expr: Expr


@dataclass
class PrintStmt(Stmt):
    expr: Expr


@dataclass
class VarDecl(Stmt):
    name: Token
    initializer: Optional[Expr]  # None means nil


@dataclass
class Block(Stmt):
    statements: List[Stmt]


@dataclass
class IfStmt(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass
class WhileStmt(Stmt):
    condition: Expr
    body: Stmt
