"""CLI entry point for the Rox interpreter.

Usage:
    python -m rox [-v|-vv|-vvv] [--truthiness MODE] [--grammar] [program_file]
    python -m rox [-v...] --emit-ast <program_file>
    python -m rox [-v...] --ast <ast_json_file>
    python -m rox --tokens <program_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --truthiness  'legacy' (default) or 'standard' truthiness rules
  --grammar     Parse with the Lark reference grammar
  --emit-ast    Parse the given .rox file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --tokens      Print the scanned tokens of a .rox file, one per line

When no program is given, `source.rox` in the current directory is run.
Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Errors are reported in color on stderr
and the process exits with status 1.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List

from .ast import Program, Stmt
from .ast_json import ast_to_obj, ast_from_obj
from .errors import ParseErrors, RoxError
from .grammar import parse_with_grammar
from .interpreter import TRUTHINESS_MODES, Interpreter
from .log import Log, LogLevel
from .parser import Parser
from .scanner import Scanner

DEFAULT_PROGRAM = 'source.rox'


def read_source(path: str) -> str:
    program_file = Path(path)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def report(log: Log, error: RoxError):
    if isinstance(error, ParseErrors):
        for err in error.errors:
            log.error(str(err))
    else:
        log.error(str(error))


def load_statements(source: str, log: Log, use_grammar: bool) -> List[Stmt]:
    if use_grammar:
        return parse_with_grammar(source)
    tokens = Scanner(source, log).scan_tokens()
    return Parser(tokens).parse()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Rox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--truthiness', choices=TRUTHINESS_MODES, default='legacy',
                        help='truthiness rules for conditions and logical operators')
    parser.add_argument('--grammar', action='store_true', help='parse with the Lark reference grammar')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='ROX_FILE', help='emit AST JSON for the given .rox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--tokens', metavar='ROX_FILE', help='print the tokens of the given .rox file')
    parser.add_argument('program', nargs='?', default=DEFAULT_PROGRAM,
                        help=f'Rox program file to execute (default: {DEFAULT_PROGRAM})')
    args = parser.parse_args(argv)

    log = Log(LogLevel.DEBUG if args.v >= 3 else LogLevel.WARNING)

    try:
        # Token dump mode
        if args.tokens:
            source = read_source(args.tokens)
            for token in Scanner(source, log).scan_tokens():
                print(token)
            return

        # Emit AST mode
        if args.emit_ast:
            program_file = Path(args.emit_ast)
            source = read_source(args.emit_ast)
            ast_program = Program(load_statements(source, log, args.grammar))
            obj = ast_to_obj(ast_program)
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(obj, out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(1)
            with open(ast_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            ast_program = ast_from_obj(data)
            with Interpreter(debug_level=args.v, truthiness=args.truthiness) as interpreter:
                interpreter.run(ast_program)
            return

        # Default: execute source file
        source = read_source(args.program)
        ast_program = Program(load_statements(source, log, args.grammar))
        log.debug(f"parsed {len(ast_program.body)} top-level statements from {args.program}")
        with Interpreter(debug_level=args.v, truthiness=args.truthiness) as interpreter:
            interpreter.run(ast_program)
    except RoxError as e:
        report(log, e)
        sys.exit(1)
    except RecursionError:
        # deeply nested AST JSON fails while loading, before any Rox stage runs
        log.error("Error: program is nested too deeply")
        sys.exit(1)


if __name__ == '__main__':
    main()
