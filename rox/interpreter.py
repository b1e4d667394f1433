"""Tree-walking interpreter for the Rox language.

This module wires the Rox toolchain together: the scanner and parser
produce a list of statements, and `Interpreter` executes them directly
against a chain of `Environment` scopes.

By default (the "legacy" truthiness mode) conditions follow these
rules:

* a number is truthy when it is zero, a string when it is non-empty,
  and `nil` is always falsy;
* `!` has its own table: it negates booleans but applies the same
  zero/non-empty tests to numbers and strings.

Passing `truthiness='standard'` switches to the usual rule where only
`false` and `nil` are falsy and `!` is plain negation.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Union

from .ast import (
    Assign, BinaryOp, Block, Expr, ExprStmt, Grouping, IfStmt, Literal,
    LogicalOp, PrintStmt, Program, Stmt, UnaryOp, VarDecl, Variable,
    WhileStmt,
)
from .environment import Environment
from .errors import RoxRuntimeError
from .log import Log
from .parser import Parser
from .scanner import Scanner
from .tokens import Token, TokenType
from .types import NIL, NilVal, Value, from_literal, is_number, to_string, type_name


TRUTHINESS_MODES = ('legacy', 'standard')

ARITHMETIC_OPS = {TokenType.MINUS, TokenType.PLUS, TokenType.STAR, TokenType.SLASH}
COMPARISON_OPS = {
    TokenType.LESS, TokenType.LESS_EQUAL, TokenType.GREATER,
    TokenType.GREATER_EQUAL, TokenType.EQUAL_EQUAL, TokenType.BANG_EQUAL,
}


class Interpreter:
    """Core interpreter that executes Rox statements.

    Statements run against the innermost scope on `scopes`; blocks push
    a new scope on entry and pop it on exit.
    """
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt',
                 truthiness: str = 'legacy'):
        if truthiness not in TRUTHINESS_MODES:
            raise ValueError(f"unknown truthiness mode {truthiness!r}; expected one of {TRUTHINESS_MODES}")
        self.truthiness = truthiness
        self.global_env = Environment()
        # Innermost scope last
        self.scopes: List[Environment] = [self.global_env]
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None
        self.debug_started = False

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def debug(self, msg: str):
        if self.debug_level <= 0:
            return
        if self.debug_file is None:
            print(msg)
            return
        if self.debug_fp is None:
            # the first open truncates, reopening after close() appends
            mode = 'a' if self.debug_started else 'w'
            self.debug_fp = open(self.debug_file, mode, encoding='utf-8')
            self.debug_started = True
        self.debug_fp.write(msg + '\n')
        self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    @property
    def environment(self) -> Environment:
        return self.scopes[-1]

    @contextmanager
    def scope(self) -> Iterator[Environment]:
        env = Environment(self.environment)
        self.scopes.append(env)
        if self.debug_level >= 3:
            self.debug(f"push scope depth={env.depth()}")
        try:
            yield env
        finally:
            self.scopes.pop()
            if self.debug_level >= 3:
                self.debug(f"pop scope depth={env.depth()}")

    # Public API
    def run(self, program: Union[Program, List[Stmt]]):
        statements = program.body if isinstance(program, Program) else program
        with self:
            self.interpret(statements)

    def interpret(self, statements: List[Stmt]):
        for stmt in statements:
            try:
                self.execute(stmt)
            except RecursionError:
                raise RoxRuntimeError('RecursionError', 'Too much nesting.', None) from None

    def execute(self, node: Stmt):
        if self.debug_level >= 1:
            self.debug(f"execute {type(node).__name__}")
        env = self.environment
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr)
        elif isinstance(node, PrintStmt):
            value = self.evaluate(node.expr)
            print(to_string(value))
        elif isinstance(node, VarDecl):
            value = self.evaluate(node.initializer) if node.initializer is not None else NIL
            env.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name.lexeme}: {type_name(value)} = {to_string(value)}")
        elif isinstance(node, Block):
            self.execute_block(node.statements)
        elif isinstance(node, IfStmt):
            cond = self.evaluate(node.condition)
            truthy = self.is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                self.execute(node.then_branch)
            elif node.else_branch is not None:
                self.execute(node.else_branch)
        elif isinstance(node, WhileStmt):
            while True:
                cond = self.evaluate(node.condition)
                truthy = self.is_truthy(cond)
                if self.debug_level >= 3:
                    self.debug(f"while condition {to_string(cond)} -> {truthy}")
                if not truthy:
                    break
                self.execute(node.body)
        else:
            raise NotImplementedError(f"execute: unexpected node type {type(node)}")
        if self.debug_level >= 1:
            self.debug(f"end {type(node).__name__}")

    def execute_block(self, statements: List[Stmt]):
        with self.scope():
            for stmt in statements:
                self.execute(stmt)

    def evaluate(self, node: Expr) -> Value:
        if isinstance(node, Literal):
            return from_literal(node.value)
        if isinstance(node, Grouping):
            return self.evaluate(node.expression)
        if isinstance(node, Variable):
            return self.environment.get(node.name.lexeme, node.name.line)
        if isinstance(node, Assign):
            value = self.evaluate(node.value)
            self.environment.assign(node.name.lexeme, value, node.name.line)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name.lexeme} = {to_string(value)}")
            return NIL
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand)
            return self.apply_unary_op(node.op, operand)
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, LogicalOp):
            left = self.evaluate(node.left)
            if node.op.kind == TokenType.OR:
                if self.is_truthy(left):
                    return left
            elif not self.is_truthy(left):
                return left
            return self.evaluate(node.right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def is_truthy(self, value: Any) -> bool:
        if self.truthiness == 'standard':
            return not (value is False or isinstance(value, NilVal))
        if isinstance(value, bool):
            return value
        if isinstance(value, float):
            return value == 0.0
        if isinstance(value, str):
            return len(value) > 0
        return False

    def bang(self, value: Any) -> bool:
        if self.truthiness == 'standard':
            return not self.is_truthy(value)
        if isinstance(value, bool):
            return not value
        if isinstance(value, float):
            return value == 0.0
        if isinstance(value, str):
            return len(value) > 0
        return False

    def apply_unary_op(self, op: Token, operand: Value) -> Value:
        if op.kind == TokenType.MINUS:
            if not is_number(operand):
                raise RoxRuntimeError(
                    'TypeError', f"Cannot apply - to a non-number '{to_string(operand)}'", op.line)
            return -operand
        if op.kind == TokenType.BANG:
            return self.bang(operand)
        raise RoxRuntimeError('OperatorError', f"Cannot apply {op.lexeme} to '{to_string(operand)}'", op.line)

    def apply_binary_op(self, op: Token, a: Value, b: Value) -> Value:
        if op.kind in ARITHMETIC_OPS:
            if not (is_number(a) and is_number(b)):
                raise RoxRuntimeError(
                    'TypeError', f"Cannot apply {op.lexeme} to '{to_string(a)}' and '{to_string(b)}'", op.line)
            if op.kind == TokenType.MINUS:
                return a - b
            if op.kind == TokenType.PLUS:
                return a + b
            if op.kind == TokenType.STAR:
                return a * b
            if b == 0.0:
                raise RoxRuntimeError('ZeroDivisionError', 'Cannot divide by zero', op.line)
            return a / b
        if op.kind in COMPARISON_OPS:
            # numeric comparisons only, equality included
            if not (is_number(a) and is_number(b)):
                raise RoxRuntimeError('TypeError', 'Cannot compare non-numbers.', op.line)
            if op.kind == TokenType.LESS:
                return a < b
            if op.kind == TokenType.LESS_EQUAL:
                return a <= b
            if op.kind == TokenType.GREATER:
                return a > b
            if op.kind == TokenType.GREATER_EQUAL:
                return a >= b
            if op.kind == TokenType.EQUAL_EQUAL:
                return a == b
            return a != b
        raise RoxRuntimeError('OperatorError', f"No such operator as {op.lexeme}", op.line)


def parse_program(source: str, log: Optional[Log] = None) -> Program:
    """Scan and parse source text into a Program AST."""
    tokens = Scanner(source, log).scan_tokens()
    return Program(Parser(tokens).parse())


def run_program(source: str, debug_level: int = 0, truthiness: str = 'legacy',
                log: Optional[Log] = None) -> Interpreter:
    """Scan, parse and execute a Rox program from source text.

    Returns the interpreter so callers can inspect the global scope.
    """
    program = parse_program(source, log)
    interpreter = Interpreter(debug_level=debug_level, truthiness=truthiness)
    interpreter.run(program)
    return interpreter
