from pathlib import Path

from rox.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_logical_operands(capsys):
    """`and`/`or` hand back an operand, and `false and (1 / 0)` never divides."""
    with open(EXAMPLES / 'program_8.rox', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['fallback', 'second', 'false', 'rox']
