from typing import List, Optional

from rox.tokens import Token, TokenType


class RoxError(Exception):
    """Base class for every diagnostic raised while running a Rox program."""
    kind = 'Error'

    def __init__(self, message: str, line: Optional[int] = None, where: str = ''):
        super().__init__(message)
        self.message = message
        self.line = line
        self.where = where

    def __str__(self) -> str:
        location = f"line {self.line}" if self.line is not None else "unknown line"
        if self.where:
            location = f"{location} {self.where}"
        return f"{self.kind} at {location}: {self.message}"


class ScanError(RoxError):
    """Raised (or recorded, for recoverable cases) by the scanner."""
    kind = 'ScanError'


class ParseError(RoxError):
    kind = 'ParseError'

    @classmethod
    def at(cls, token: Token, message: str) -> 'ParseError':
        if token.kind == TokenType.EOF:
            return cls(message, token.line, 'at end')
        return cls(message, token.line, f"at '{token.lexeme}'")


class ParseErrors(ParseError):
    """All the parse errors collected from a single parse.

    The first error provides the line and message so the aggregate can
    be reported like any other ParseError; `errors` holds the full list.
    """
    def __init__(self, errors: List[ParseError]):
        first = errors[0]
        message = first.message
        if len(errors) > 1:
            message = f"{message} (and {len(errors) - 1} more)"
        super().__init__(message, first.line, first.where)
        self.errors = errors


class RoxRuntimeError(RoxError):
    """Runtime failure while evaluating a program.

    `name` classifies the failure: NameError, TypeError,
    ZeroDivisionError or OperatorError.
    """
    kind = 'RuntimeError'

    def __init__(self, name: str, message: str, line: Optional[int] = None):
        super().__init__(message, line)
        self.name = name

    def __str__(self) -> str:
        location = f"line {self.line}" if self.line is not None else "unknown line"
        return f"{self.kind} at {location}: {self.name}: {self.message}"
