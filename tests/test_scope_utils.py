# tests/test_scope_utils.py
"""
Tests for the ancestor-based scope helpers.
"""

from hiddenfield.scope_utils import (
    in_interface_block,
    in_static_context,
    is_local_variable_def,
)
from hiddenfield.tokens import TokenTypes as T
from tests.conftest import (
    class_def, ctor, field_def, for_loop, interface_def, local, method,
    node, param, static_init, try_catch,
)


class TestIsLocalVariableDef:

    def test_field_is_not_local(self):
        f = field_def("x")
        class_def("A", f)
        assert not is_local_variable_def(f)

    def test_method_body_variable_is_local(self):
        v = local("x")
        method("f", body=[v])
        assert is_local_variable_def(v)

    def test_for_init_variable_is_local(self):
        v = local("i")
        for_loop(init=[v])
        assert is_local_variable_def(v)

    def test_method_parameter_is_not_local(self):
        p = param("x")
        method("f", params=[p])
        assert not is_local_variable_def(p)

    def test_catch_parameter_is_local(self):
        p = param("e")
        try_catch(catch_param=p)
        assert is_local_variable_def(p)

    def test_orphan_is_not_local(self):
        assert not is_local_variable_def(local("x"))


class TestInInterfaceBlock:

    def test_interface_member(self):
        p = param("x")
        interface_def("I", method("f", params=[p]))
        assert in_interface_block(p)

    def test_class_inside_interface_wins(self):
        p = param("x")
        interface_def("I", class_def("C", method("f", params=[p])))
        assert not in_interface_block(p)

    def test_interface_inside_class(self):
        p = param("x")
        class_def("C", interface_def("I", method("f", params=[p])))
        assert in_interface_block(p)

    def test_top_level(self):
        assert not in_interface_block(node(T.COMPILATION_UNIT))


class TestInStaticContext:

    def test_static_method(self):
        v = local("x")
        method("f", mods=["public", "static"], body=[v])
        assert in_static_context(v)

    def test_instance_method(self):
        v = local("x")
        method("f", mods=["public"], body=[v])
        assert not in_static_context(v)

    def test_static_initializer(self):
        v = local("x")
        static_init(v)
        assert in_static_context(v)

    def test_instance_method_of_class_in_static_method(self):
        v = local("x")
        inner = class_def("Local", method("g", body=[v]))
        method("f", mods=["static"], body=[inner])
        assert not in_static_context(v)

    def test_constructor_stops_at_class(self):
        v = local("x")
        inner = class_def("Local", ctor("Local", body=[v]))
        static_init(inner)
        assert not in_static_context(v)
