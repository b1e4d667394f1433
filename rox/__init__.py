# Rox language package
# This package provides a scanner, parser and tree-walking interpreter for Rox.
from .errors import RoxError, ScanError, ParseError, ParseErrors, RoxRuntimeError
from .scanner import scan
from .parser import parse
from .interpreter import run_program, parse_program, Interpreter

__all__ = [
    'scan',
    'parse',
    'run_program',
    'parse_program',
    'Interpreter',
    'RoxError',
    'ScanError',
    'ParseError',
    'ParseErrors',
    'RoxRuntimeError',
]
