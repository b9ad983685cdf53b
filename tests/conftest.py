# tests/conftest.py
"""
Shared fixtures and tree-building helpers for the hiddenfield test suite.

The helpers build checkstyle-shaped trees without going through the dump
loader, so the check tests do not depend on the grammar.
"""

from typing import Iterable, Optional

import pytest

from hiddenfield.ast_nodes import DetailAST
from hiddenfield.config import configure
from hiddenfield.hidden_field import HiddenFieldCheck
from hiddenfield.tokens import TokenTypes as T
from hiddenfield.walker import TreeWalker


_MODIFIER_TOKENS = {
    "static": T.LITERAL_STATIC,
    "public": T.LITERAL_PUBLIC,
    "protected": T.LITERAL_PROTECTED,
    "private": T.LITERAL_PRIVATE,
    "final": T.FINAL,
    "abstract": T.ABSTRACT,
}

_TYPE_TOKENS = {
    "void": T.LITERAL_VOID,
    "int": T.LITERAL_INT,
    "boolean": T.LITERAL_BOOLEAN,
}


def node(token_type, *children, text="", line=0, column=0):
    ast = DetailAST(type=token_type, text=text, line=line, column=column)
    for child in children:
        ast.add_child(child)
    return ast


def ident(name, line=0, column=0):
    return node(T.IDENT, text=name, line=line, column=column)


def modifiers(*mods):
    return node(T.MODIFIERS, *[node(_MODIFIER_TOKENS[m]) for m in mods])


def type_(name="int"):
    token = _TYPE_TOKENS.get(name)
    return node(T.TYPE, node(token) if token else ident(name))


def field_def(name, *mods, type_name="int", line=0):
    return node(T.VARIABLE_DEF, modifiers(*mods), type_(type_name),
                ident(name, line=line))


def local(name, type_name="int", line=0, column=8):
    return node(T.VARIABLE_DEF, modifiers(), type_(type_name),
                ident(name, line=line, column=column))


def param(name, type_name="int", line=0, column=20):
    return node(T.PARAMETER_DEF, modifiers(), type_(type_name),
                ident(name, line=line, column=column))


def slist(*statements):
    return node(T.SLIST, *statements)


def parameters(*params):
    return node(T.PARAMETERS, *params)


def method(name, params: Iterable = (), body: Iterable = (), mods=(),
           returns="void", line=0):
    return node(T.METHOD_DEF, modifiers(*mods), type_(returns),
                ident(name, line=line), parameters(*params), slist(*body))


def ctor(name, params: Iterable = (), body: Iterable = (), line=0):
    return node(T.CTOR_DEF, modifiers("public"), ident(name, line=line),
                parameters(*params), slist(*body))


def static_init(*statements):
    return node(T.STATIC_INIT, slist(*statements))


def instance_init(*statements):
    return node(T.INSTANCE_INIT, slist(*statements))


def for_loop(init: Iterable = (), body: Iterable = ()):
    return node(T.LITERAL_FOR, node(T.FOR_INIT, *init), node(T.FOR_CONDITION),
                node(T.FOR_ITERATOR), slist(*body))


def for_each(variable, body: Iterable = ()):
    return node(T.LITERAL_FOR, node(T.FOR_EACH_CLAUSE, variable, ident("items")),
                slist(*body))


def try_catch(body: Iterable = (), catch_param=None, handler: Iterable = ()):
    catch = node(T.LITERAL_CATCH, catch_param or param("e", "Exception"),
                 slist(*handler))
    return node(T.LITERAL_TRY, slist(*body), catch)


def class_def(name, *members, mods=(), line=0):
    return node(T.CLASS_DEF, modifiers(*mods), ident(name, line=line),
                node(T.OBJBLOCK, *members))


def interface_def(name, *members, mods=()):
    return node(T.INTERFACE_DEF, modifiers(*mods), ident(name),
                node(T.OBJBLOCK, *members))


def compilation_unit(*types):
    return node(T.COMPILATION_UNIT, *types)


def run_check(root, check: Optional[HiddenFieldCheck] = None, **properties):
    """Run a (fresh or given) HiddenFieldCheck over ``root``."""
    if check is None:
        check = configure(HiddenFieldCheck(), properties)
    return TreeWalker([check]).process(root, file_name="Test.java")


def hidden_names(violations):
    return [v.args[0] for v in violations]


# ── Dump fixtures ────────────────────────────────────────────────

SHADOW_DUMP = '''
; class Point { int x; void move(int x) { int y; } }
(COMPILATION_UNIT
  (CLASS_DEF @1:0
    (MODIFIERS)
    (IDENT "Point" @1:6)
    (OBJBLOCK
      (VARIABLE_DEF (MODIFIERS) (TYPE (LITERAL_INT)) (IDENT "x" @2:8))
      (METHOD_DEF
        (MODIFIERS)
        (TYPE (LITERAL_VOID))
        (IDENT "move" @3:9)
        (PARAMETERS
          (PARAMETER_DEF (MODIFIERS) (TYPE (LITERAL_INT)) (IDENT "x" @3:18)))
        (SLIST
          (VARIABLE_DEF (MODIFIERS) (TYPE (LITERAL_INT)) (IDENT "y" @4:12)))))))
'''

TWO_TREES_DUMP = '''
(CLASS_DEF (MODIFIERS) (IDENT "A")
  (OBJBLOCK
    (VARIABLE_DEF (MODIFIERS) (TYPE (LITERAL_INT)) (IDENT "a" @2:8))
    (METHOD_DEF (MODIFIERS) (TYPE (LITERAL_VOID)) (IDENT "f")
      (PARAMETERS (PARAMETER_DEF (MODIFIERS) (TYPE (LITERAL_INT)) (IDENT "a" @3:15)))
      (SLIST))))
(CLASS_DEF (MODIFIERS) (IDENT "B")
  (OBJBLOCK
    (METHOD_DEF (MODIFIERS) (TYPE (LITERAL_VOID)) (IDENT "g")
      (PARAMETERS (PARAMETER_DEF (MODIFIERS) (TYPE (LITERAL_INT)) (IDENT "a" @7:15)))
      (SLIST))))
'''


@pytest.fixture
def check():
    return HiddenFieldCheck()


@pytest.fixture
def dump_file(tmp_path):
    path = tmp_path / "Point.ast"
    path.write_text(SHADOW_DUMP, encoding="utf-8")
    return path
