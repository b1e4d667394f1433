"""Recursive-descent parser for the Rox language.

The parser turns the scanner's token list into a list of statement
nodes. Expressions are parsed with one method per precedence level,
lowest first:

    assignment -> or -> and -> equality -> comparison -> term
               -> factor -> unary -> primary

Every binary level folds left, so `a - b - c` is `(a - b) - c`.
Assignment is right-associative and only accepts a bare variable on the
left.

A syntax error inside a declaration is recorded, the parser skips ahead
to the next statement boundary (`synchronize`) and carries on, so one
parse reports every independent error. If anything was recorded, `parse`
raises `ParseErrors` at the end.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Assign, BinaryOp, Block, Expr, ExprStmt, Grouping, IfStmt, Literal,
    LogicalOp, PrintStmt, Stmt, UnaryOp, VarDecl, Variable, WhileStmt,
)
from .errors import ParseError, ParseErrors
from .tokens import Token, TokenType


# Tokens that start a new statement; synchronize stops in front of them.
STATEMENT_STARTS = {
    TokenType.CLASS, TokenType.FUN, TokenType.VAR, TokenType.FOR,
    TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.RETURN,
}


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        self.errors: List[ParseError] = []

    # Token stream helpers

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.peek().kind == TokenType.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.pos += 1
        return self.previous()

    def match(self, *kinds: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().kind in kinds

    def consume(self, kind: TokenType, message: str) -> Token:
        if self.match(kind):
            return self.advance()
        raise ParseError.at(self.peek(), message)

    def synchronize(self):
        self.advance()
        while not self.is_at_end():
            if self.previous().kind == TokenType.SEMICOLON:
                return
            if self.peek().kind in STATEMENT_STARTS:
                return
            self.advance()

    # Statements

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        try:
            while not self.is_at_end():
                stmt = self.parse_declaration()
                if stmt is not None:
                    statements.append(stmt)
        except RecursionError:
            self.errors.append(ParseError.at(self.peek(), "Too much nesting."))
        if self.errors:
            raise ParseErrors(self.errors)
        return statements

    def parse_declaration(self) -> Optional[Stmt]:
        try:
            if self.match(TokenType.VAR):
                self.advance()
                return self.parse_var_decl()
            return self.parse_statement()
        except ParseError as e:
            self.errors.append(e)
            self.synchronize()
            return None

    def parse_var_decl(self) -> VarDecl:
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self.match(TokenType.EQUAL):
            self.advance()
            initializer = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return VarDecl(name, initializer)

    def parse_statement(self) -> Stmt:
        if self.match(TokenType.PRINT):
            self.advance()
            return self.parse_print_stmt()
        if self.match(TokenType.IF):
            self.advance()
            return self.parse_if_stmt()
        if self.match(TokenType.WHILE):
            self.advance()
            return self.parse_while_stmt()
        if self.match(TokenType.LEFT_BRACE):
            self.advance()
            return Block(self.parse_block())
        return self.parse_expr_stmt()

    def parse_print_stmt(self) -> PrintStmt:
        value = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return PrintStmt(value)

    def parse_if_stmt(self) -> IfStmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.parse_expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self.parse_statement()
        else_branch = None
        # the innermost if claims the else
        if self.match(TokenType.ELSE):
            self.advance()
            else_branch = self.parse_statement()
        return IfStmt(condition, then_branch, else_branch)

    def parse_while_stmt(self) -> WhileStmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.parse_expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        body = self.parse_statement()
        return WhileStmt(condition, body)

    def parse_block(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.match(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def parse_expr_stmt(self) -> ExprStmt:
        expr = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ExprStmt(expr)

    # Expressions

    def parse_expression(self) -> Expr:
        return self.parse_assign()

    def parse_assign(self) -> Expr:
        expr = self.parse_logic_or()
        if self.match(TokenType.EQUAL):
            equals = self.advance()
            value = self.parse_assign()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            # the parser is not confused here, so record without unwinding
            self.errors.append(ParseError.at(equals, "Invalid assignment target."))
        return expr

    def parse_logic_or(self) -> Expr:
        expr = self.parse_logic_and()
        while self.match(TokenType.OR):
            op = self.advance()
            right = self.parse_logic_and()
            expr = LogicalOp(expr, op, right)
        return expr

    def parse_logic_and(self) -> Expr:
        expr = self.parse_equality()
        while self.match(TokenType.AND):
            op = self.advance()
            right = self.parse_equality()
            expr = LogicalOp(expr, op, right)
        return expr

    def parse_equality(self) -> Expr:
        expr = self.parse_comparison()
        while self.match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            op = self.advance()
            right = self.parse_comparison()
            expr = BinaryOp(expr, op, right)
        return expr

    def parse_comparison(self) -> Expr:
        expr = self.parse_term()
        while self.match(TokenType.GREATER, TokenType.GREATER_EQUAL,
                         TokenType.LESS, TokenType.LESS_EQUAL):
            op = self.advance()
            right = self.parse_term()
            expr = BinaryOp(expr, op, right)
        return expr

    def parse_term(self) -> Expr:
        expr = self.parse_factor()
        while self.match(TokenType.MINUS, TokenType.PLUS):
            op = self.advance()
            right = self.parse_factor()
            expr = BinaryOp(expr, op, right)
        return expr

    def parse_factor(self) -> Expr:
        expr = self.parse_unary()
        while self.match(TokenType.STAR, TokenType.SLASH):
            op = self.advance()
            right = self.parse_unary()
            expr = BinaryOp(expr, op, right)
        return expr

    def parse_unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            op = self.advance()
            operand = self.parse_unary()
            return UnaryOp(op, operand)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        token = self.peek()
        if self.match(TokenType.FALSE):
            self.advance()
            return Literal(False)
        if self.match(TokenType.TRUE):
            self.advance()
            return Literal(True)
        if self.match(TokenType.NIL):
            self.advance()
            return Literal(None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            self.advance()
            return Literal(token.literal)
        if self.match(TokenType.IDENTIFIER):
            self.advance()
            return Variable(token)
        if self.match(TokenType.LEFT_PAREN):
            self.advance()
            expr = self.parse_expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise ParseError.at(token, "Expect expression.")


def parse(tokens: List[Token]) -> List[Stmt]:
    """Parse a token list into statements, raising ParseErrors on failure."""
    return Parser(tokens).parse()
