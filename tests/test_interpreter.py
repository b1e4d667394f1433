import pytest

from rox.ast import Grouping, PrintStmt
from rox.errors import RoxRuntimeError
from rox.interpreter import Interpreter, parse_program, run_program


def output(capsys):
    return capsys.readouterr().out.strip().split('\n')


@pytest.mark.parametrize('expression, expected', [
    ('1 + 2', '3'),
    ('5 - 7', '-2'),
    ('1.5 * 4', '6'),
    ('1 / 4', '0.25'),
    ('0.1 + 0.2', '0.30000000000000004'),
    ('1000000 * 1000000', '1000000000000'),
    ('-(2 + 3)', '-5'),
])
def test_arithmetic(capsys, expression, expected):
    run_program(f'print {expression};')
    assert output(capsys) == [expected]


@pytest.mark.parametrize('expression, expected', [
    ('1 < 2', 'true'),
    ('2 < 1', 'false'),
    ('2 <= 2', 'true'),
    ('3 <= 2', 'false'),
    ('3 > 2', 'true'),
    ('2 >= 3', 'false'),
    ('2 == 2', 'true'),
    ('2 != 2', 'false'),
    ('1 != 2', 'true'),
])
def test_comparisons(capsys, expression, expected):
    run_program(f'print {expression};')
    assert output(capsys) == [expected]


def test_print_canonical_forms(capsys):
    run_program('print nil; print true; print false; print "raw text"; var unset; print unset;')
    assert output(capsys) == ['nil', 'true', 'false', 'raw text', 'nil']


def test_print_non_ascii_string(capsys):
    run_program('print "naïve café ✓";')
    assert output(capsys) == ['naïve café ✓']


def test_divide_by_zero_is_a_runtime_error(capsys):
    with pytest.raises(RoxRuntimeError) as exc:
        run_program('print "before";\nprint 1 / 0;\nprint "after";')
    assert exc.value.name == 'ZeroDivisionError'
    assert exc.value.message == 'Cannot divide by zero'
    assert exc.value.line == 2
    # output produced before the failure stays visible
    assert output(capsys) == ['before']


@pytest.mark.parametrize('source, message', [
    ('print 1 + "a";', "Cannot apply + to '1' and 'a'"),
    ('print true - 1;', "Cannot apply - to 'true' and '1'"),
    ('print nil * 2;', "Cannot apply * to 'nil' and '2'"),
    ('print "a" / "b";', "Cannot apply / to 'a' and 'b'"),
    ('print -"a";', "Cannot apply - to a non-number 'a'"),
    ('print "a" < 1;', 'Cannot compare non-numbers.'),
    ('print "a" == "a";', 'Cannot compare non-numbers.'),
    ('print true == true;', 'Cannot compare non-numbers.'),
])
def test_type_errors(source, message):
    with pytest.raises(RoxRuntimeError) as exc:
        run_program(source)
    assert exc.value.name == 'TypeError'
    assert exc.value.message == message


def test_bang_table(capsys):
    run_program('print !0; print !1; print !true; print !false; print !""; print !"a"; print !nil;')
    # numbers test for zero and strings for non-empty, as in conditions
    assert output(capsys) == ['true', 'false', 'false', 'true', 'false', 'true', 'false']


def test_legacy_truthiness_in_conditions(capsys):
    source = '''
    if (0) print "zero is truthy"; else print "zero is falsy";
    if (1) print "one is truthy"; else print "one is falsy";
    if ("") print "empty is truthy"; else print "empty is falsy";
    if ("x") print "text is truthy"; else print "text is falsy";
    if (nil) print "nil is truthy"; else print "nil is falsy";
    '''
    run_program(source)
    assert output(capsys) == [
        'zero is truthy', 'one is falsy', 'empty is falsy', 'text is truthy', 'nil is falsy',
    ]


def test_standard_truthiness(capsys):
    source = '''
    if (0) print "zero is truthy"; else print "zero is falsy";
    if ("") print "empty is truthy"; else print "empty is falsy";
    if (nil) print "nil is truthy"; else print "nil is falsy";
    print !0;
    print !nil;
    print !false;
    print 0 or "unused";
    '''
    run_program(source, truthiness='standard')
    assert output(capsys) == [
        'zero is truthy', 'empty is truthy', 'nil is falsy', 'false', 'true', 'true', '0',
    ]


def test_unknown_truthiness_mode():
    with pytest.raises(ValueError):
        Interpreter(truthiness='loose')


def test_logical_short_circuit(capsys):
    run_program('print false and (1 / 0); print true or (1 / 0);')
    assert output(capsys) == ['false', 'true']


def test_logical_evaluates_right_operand_when_needed(capsys):
    run_program('print true and 1 / 2; print false or "right";')
    assert output(capsys) == ['0.5', 'right']


def test_shadowing(capsys):
    run_program('var x = 1; { var x = 2; print x; } print x;')
    assert output(capsys) == ['2', '1']


def test_redeclaration_in_same_scope(capsys):
    run_program('var x = 1; var x = "again"; print x;')
    assert output(capsys) == ['again']


def test_assignment_reaches_outer_scope(capsys):
    run_program('var x = 1; { { x = 3; } } print x;')
    assert output(capsys) == ['3']


def test_assignment_expression_yields_nil(capsys):
    interp = run_program('var a = 1; print a = 2;')
    assert output(capsys) == ['nil']
    assert interp.global_env.values['a'] == 2.0


def test_assignment_to_undefined_variable():
    with pytest.raises(RoxRuntimeError) as exc:
        run_program('y = 1;')
    assert exc.value.name == 'NameError'
    assert exc.value.message == "Cannot assign to undefined variable 'y'"
    assert exc.value.line == 1


def test_undefined_variable():
    with pytest.raises(RoxRuntimeError) as exc:
        run_program('print 1;\n\nprint missing;')
    assert exc.value.name == 'NameError'
    assert exc.value.line == 3
    assert str(exc.value) == (
        "RuntimeError at line 3: NameError: Cannot find the variable 'missing' in the scope")


def test_block_names_are_gone_after_exit(capsys):
    with pytest.raises(RoxRuntimeError) as exc:
        run_program('{ var inner = 1; print inner; } print inner;')
    assert exc.value.name == 'NameError'
    assert output(capsys) == ['1']


def test_scope_stack_is_restored_after_error():
    program = parse_program('{ var a = 1; { var b = 2; print nope; } }')
    interp = Interpreter()
    with pytest.raises(RoxRuntimeError):
        interp.run(program)
    assert interp.scopes == [interp.global_env]
    assert interp.environment is interp.global_env


def test_while_reevaluates_condition(capsys):
    run_program('var i = 0; while (i < 3) { print i; i = i + 1; }')
    assert output(capsys) == ['0', '1', '2']


def test_while_with_false_condition_never_runs(capsys):
    run_program('while (false) print "never"; print "done";')
    assert output(capsys) == ['done']


def test_if_without_else(capsys):
    run_program('if (false) print "no"; print "yes";')
    assert output(capsys) == ['yes']


def test_interpret_keeps_globals_between_calls(capsys):
    interp = Interpreter()
    interp.interpret(parse_program('var total = 1;').body)
    interp.interpret(parse_program('total = total + 1; print total;').body)
    assert output(capsys) == ['2']


def test_debug_trace_written_to_file(tmp_path, capsys):
    debug_file = tmp_path / 'debug.txt'
    program = parse_program('var x = 1; if (x == 1) { x = 2; }')
    interp = Interpreter(debug_level=3, debug_file=str(debug_file))
    interp.run(program)
    trace = debug_file.read_text(encoding='utf-8').splitlines()
    assert 'execute VarDecl' in trace
    assert 'declare x: Number = 1' in trace
    assert 'if condition true -> True' in trace
    assert 'push scope depth=1' in trace
    assert 'assign x = 2' in trace
    assert 'pop scope depth=1' in trace
    assert interp.debug_fp is None


def test_small_fractions_and_negative_zero_print_in_plain_decimal(capsys):
    run_program('print 1 / 100000; print 0.0001 / 10; print -0; print 0.5; print -1 / 400000;')
    assert output(capsys) == ['0.00001', '0.00001', '-0', '0.5', '-0.0000025']


def test_statements_run_in_the_innermost_scope(capsys):
    interp = Interpreter()
    interp.interpret(parse_program('var x = "global";').body)
    with interp.scope() as inner:
        assert interp.environment is inner
        interp.interpret(parse_program('var x = "inner"; print x;').body)
    assert inner.values['x'] == 'inner'
    interp.interpret(parse_program('print x;').body)
    assert output(capsys) == ['inner', 'global']


def test_blocks_push_onto_the_scope_stack(capsys):
    interp = Interpreter()
    depths = []
    original = interp.execute

    def record(node):
        depths.append(len(interp.scopes))
        original(node)

    interp.execute = record
    interp.run(parse_program('print 1; { print 2; { print 3; } }'))
    assert depths == [1, 1, 2, 2, 3]
    assert output(capsys) == ['1', '2', '3']


def test_debug_trace_logs_statement_end(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    Interpreter(debug_level=1, debug_file=str(debug_file)).run(parse_program('{ print 1; }'))
    trace = debug_file.read_text(encoding='utf-8').splitlines()
    assert trace == ['execute Block', 'execute PrintStmt', 'end PrintStmt', 'end Block']


def test_debug_file_opened_lazily_and_closed_by_context_manager(tmp_path, capsys):
    debug_file = tmp_path / 'debug.txt'
    with Interpreter(debug_level=1, debug_file=str(debug_file)) as interp:
        assert interp.debug_fp is None
        assert not debug_file.exists()
        interp.interpret(parse_program('print 1;').body)
        assert interp.debug_fp is not None
    assert interp.debug_fp is None
    assert 'execute PrintStmt' in debug_file.read_text(encoding='utf-8')


def test_too_deep_nesting_at_run_time():
    program = parse_program('print 1;')
    expr = program.body[0].expr
    for _ in range(5000):
        expr = Grouping(expr)
    with pytest.raises(RoxRuntimeError) as exc:
        Interpreter().run([PrintStmt(expr)])
    assert exc.value.name == 'RecursionError'
