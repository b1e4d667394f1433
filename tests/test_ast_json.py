import json
from pathlib import Path

import pytest

from rox.ast import Literal
from rox.ast_json import ast_from_obj, ast_to_obj
from rox.interpreter import Interpreter, parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


@pytest.mark.parametrize('name', ['program_3.rox', 'program_7.rox', 'program_8.rox'])
def test_json_round_trip_preserves_program(name):
    program = parse_program((EXAMPLES / name).read_text(encoding='utf-8'))
    text = json.dumps(ast_to_obj(program))
    assert ast_from_obj(json.loads(text)) == program


def test_json_shape():
    program = parse_program('var x = 1; print -x;')
    obj = ast_to_obj(program)
    assert obj['type'] == 'Program'
    decl, stmt = obj['body']
    assert decl == {
        'type': 'VarDecl',
        'name': {'kind': 'IDENTIFIER', 'lexeme': 'x', 'line': 1, 'literal': None},
        'initializer': {'type': 'Literal', 'value': 1.0},
    }
    assert stmt['expr']['type'] == 'UnaryOp'
    assert stmt['expr']['op']['kind'] == 'MINUS'


def test_whole_number_literals_load_as_floats():
    node = ast_from_obj({'type': 'Literal', 'value': 3})
    assert node == Literal(3.0)
    assert isinstance(node.value, float)
    assert ast_from_obj({'type': 'Literal', 'value': True}) == Literal(True)


def test_loaded_program_runs(capsys):
    program = parse_program('var i = 0; while (i < 2) { print i; i = i + 1; }')
    loaded = ast_from_obj(json.loads(json.dumps(ast_to_obj(program))))
    Interpreter().run(loaded)
    assert capsys.readouterr().out.strip().split('\n') == ['0', '1']


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'ClassDecl'})
    with pytest.raises(TypeError):
        ast_to_obj(object())
