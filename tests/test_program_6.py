from pathlib import Path

from rox.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_outer_assignment(capsys):
    """Assignments made inside nested blocks update the global binding."""
    with open(EXAMPLES / 'program_6.rox', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == '15'
    assert interp.global_env.values['total'] == 15.0
