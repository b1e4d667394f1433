"""Reference grammar for the Rox language.

This module describes Rox with a Lark grammar and builds the same AST
as the hand-written parser in `rox.parser`. It is an independent,
declarative statement of the syntax: the CLI can run programs through
it (`--grammar`) and the test suite uses it to cross-check the
recursive-descent parser.

Terminal names match `TokenType` member names, so Lark tokens convert
directly into Rox tokens with the same kind, lexeme and line.

The `if`/`else` rule has the classic shift/reduce conflict; Lark's LALR
builder resolves it as a shift, which binds `else` to the nearest `if`.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Transformer
from lark import Token as LarkToken
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken, VisitError

from .ast import (
    Assign, BinaryOp, Block, ExprStmt, Grouping, IfStmt, Literal,
    LogicalOp, PrintStmt, Stmt, UnaryOp, VarDecl, Variable, WhileStmt,
)
from .errors import ParseError, ScanError
from .tokens import Token, TokenType


ROX_GRAMMAR = r"""
    start: declaration*

    ?declaration: var_decl
                | statement

    var_decl: "var" IDENTIFIER ["=" expression] ";"

    ?statement: print_stmt
              | block
              | if_stmt
              | while_stmt
              | expr_stmt

    print_stmt: "print" expression ";"
    block: "{" declaration* "}"
    if_stmt: "if" "(" expression ")" statement ["else" statement]
    while_stmt: "while" "(" expression ")" statement
    expr_stmt: expression ";"

    // Expressions, lowest precedence first
    ?expression: assign

    ?assign: IDENTIFIER "=" assign
           | logic_or

    ?logic_or: logic_and (OR logic_and)*
    ?logic_and: equality (AND equality)*
    ?equality: comparison ((BANG_EQUAL | EQUAL_EQUAL) comparison)*
    ?comparison: term ((GREATER | GREATER_EQUAL | LESS | LESS_EQUAL) term)*
    ?term: factor ((MINUS | PLUS) factor)*
    ?factor: unary ((STAR | SLASH) unary)*

    ?unary: (BANG | MINUS) unary -> unary_op
          | primary

    ?primary: "true" -> true
            | "false" -> false
            | "nil" -> nil
            | NUMBER -> number
            | STRING -> string
            | IDENTIFIER -> variable
            | "(" expression ")" -> grouping

    // Tokens
    OR: "or"
    AND: "and"
    BANG: "!"
    BANG_EQUAL: "!="
    EQUAL_EQUAL: "=="
    GREATER: ">"
    GREATER_EQUAL: ">="
    LESS: "<"
    LESS_EQUAL: "<="
    MINUS: "-"
    PLUS: "+"
    STAR: "*"
    SLASH: "/"

    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/
    NUMBER: /[0-9]+(\.[0-9]+)?/
    STRING: /"[^"]*"/

    LINE_COMMENT: /\/\/[^\n]*/
    BLOCK_COMMENT: /\/\*[\s\S]*?\*\//

    %import common.WS
    %ignore WS
    %ignore LINE_COMMENT
    %ignore BLOCK_COMMENT
"""


ROX_PARSER = Lark(
    ROX_GRAMMAR,
    parser='lalr',
    lexer='contextual',
    propagate_positions=True,
    maybe_placeholders=True,
)


def to_token(token: LarkToken) -> Token:
    """Convert a Lark token into the equivalent Rox token."""
    return Token(TokenType[token.type], str(token), token.line, None)


class ASTTransformer(Transformer):
    """Transforms the Lark parse tree into Rox AST nodes."""

    def start(self, items):
        return list(items)

    # Statements
    def var_decl(self, items):
        name, initializer = items
        return VarDecl(to_token(name), initializer)

    def print_stmt(self, items):
        return PrintStmt(items[0])

    def block(self, items):
        return Block(list(items))

    def if_stmt(self, items):
        condition, then_branch, else_branch = items
        return IfStmt(condition, then_branch, else_branch)

    def while_stmt(self, items):
        condition, body = items
        return WhileStmt(condition, body)

    def expr_stmt(self, items):
        return ExprStmt(items[0])

    # Expressions
    def assign(self, items):
        name, value = items
        return Assign(to_token(name), value)

    def _fold(self, items, node_type):
        # items alternate: operand, op, operand, op, operand ...
        left = items[0]
        for i in range(1, len(items), 2):
            left = node_type(left, to_token(items[i]), items[i + 1])
        return left

    def logic_or(self, items):
        return self._fold(items, LogicalOp)

    def logic_and(self, items):
        return self._fold(items, LogicalOp)

    def equality(self, items):
        return self._fold(items, BinaryOp)

    def comparison(self, items):
        return self._fold(items, BinaryOp)

    def term(self, items):
        return self._fold(items, BinaryOp)

    def factor(self, items):
        return self._fold(items, BinaryOp)

    def unary_op(self, items):
        op, operand = items
        return UnaryOp(to_token(op), operand)

    def true(self, items):
        return Literal(True)

    def false(self, items):
        return Literal(False)

    def nil(self, items):
        return Literal(None)

    def number(self, items):
        return Literal(float(items[0]))

    def string(self, items):
        return Literal(str(items[0])[1:-1])

    def variable(self, items):
        return Variable(to_token(items[0]))

    def grouping(self, items):
        return Grouping(items[0])


def parse_with_grammar(source: str) -> List[Stmt]:
    """Parse Rox source with the reference grammar.

    Lexing failures surface as ScanError and syntax errors as ParseError,
    matching the hand-written pipeline.
    """
    try:
        tree = ROX_PARSER.parse(source)
    except UnexpectedCharacters as e:
        raise ScanError(f"Unidentified character '{source[e.pos_in_stream]}'", e.line) from e
    except UnexpectedToken as e:
        if e.token.type == '$END':
            raise ParseError("Unexpected end of input.", source.count('\n') + 1, 'at end') from e
        raise ParseError("Unexpected token.", e.line, f"at '{e.token}'") from e
    except UnexpectedInput as e:
        raise ParseError("Unexpected input.", getattr(e, 'line', None)) from e
    try:
        return ASTTransformer().transform(tree)
    except RecursionError:
        raise ParseError("Too much nesting.") from None
    except VisitError as e:
        if isinstance(e.orig_exc, RecursionError):
            raise ParseError("Too much nesting.") from None
        raise
