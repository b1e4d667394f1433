import pytest

from rox.environment import Environment
from rox.errors import RoxRuntimeError
from rox.types import NIL


def test_define_and_get():
    env = Environment()
    env.define('a', 1.0)
    assert env.get('a') == 1.0


def test_define_overwrites_in_current_scope():
    env = Environment()
    env.define('a', 1.0)
    env.define('a', 'again')
    assert env.get('a') == 'again'


def test_get_walks_enclosing_scopes():
    outer = Environment()
    outer.define('a', 1.0)
    inner = Environment(Environment(outer))
    assert inner.get('a') == 1.0


def test_shadowing_leaves_outer_binding_alone():
    outer = Environment()
    outer.define('x', 1.0)
    inner = Environment(outer)
    inner.define('x', 2.0)
    assert inner.get('x') == 2.0
    assert outer.get('x') == 1.0


def test_assign_updates_the_scope_that_owns_the_name():
    outer = Environment()
    outer.define('count', 0.0)
    inner = Environment(outer)
    inner.assign('count', 5.0)
    assert 'count' not in inner.values
    assert outer.get('count') == 5.0


def test_assignment_is_visible_to_every_holder_of_a_scope():
    shared = Environment()
    shared.define('v', NIL)
    first = Environment(shared)
    second = Environment(shared)
    first.assign('v', 'set from first')
    assert second.get('v') == 'set from first'


def test_get_undefined_raises_name_error():
    env = Environment(Environment())
    with pytest.raises(RoxRuntimeError) as exc:
        env.get('missing', line=7)
    assert exc.value.name == 'NameError'
    assert exc.value.line == 7
    assert exc.value.message == "Cannot find the variable 'missing' in the scope"


def test_assign_never_declares():
    env = Environment()
    with pytest.raises(RoxRuntimeError) as exc:
        env.assign('ghost', 1.0)
    assert exc.value.name == 'NameError'
    assert 'ghost' not in env.values


def test_depth():
    globals_ = Environment()
    assert globals_.depth() == 0
    assert Environment(Environment(globals_)).depth() == 2
