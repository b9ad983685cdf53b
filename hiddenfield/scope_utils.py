# hiddenfield/scope_utils.py
"""Helpers answering scope questions about a node from its ancestors."""

from __future__ import annotations

from hiddenfield.ast_nodes import DetailAST
from hiddenfield.tokens import TokenTypes

# Parents under which a VARIABLE_DEF declares a local variable.
_LOCAL_VARIABLE_PARENTS = frozenset({
    TokenTypes.SLIST,
    TokenTypes.FOR_INIT,
    TokenTypes.FOR_EACH_CLAUSE,
})


def in_interface_block(node: DetailAST) -> bool:
    """True if the nearest enclosing type definition of ``node`` is an interface."""
    for parent in node.ancestors():
        if parent.type is TokenTypes.CLASS_DEF:
            return False
        if parent.type is TokenTypes.INTERFACE_DEF:
            return True
    return False


def is_local_variable_def(node: DetailAST) -> bool:
    """True for a local variable declaration or a catch parameter."""
    parent = node.parent
    if parent is None:
        return False
    if node.type is TokenTypes.VARIABLE_DEF:
        return parent.type in _LOCAL_VARIABLE_PARENTS
    if node.type is TokenTypes.PARAMETER_DEF:
        return parent.type is TokenTypes.LITERAL_CATCH
    return False


def in_static_context(node: DetailAST) -> bool:
    """Is ``node`` inside a static method or a static initializer?

    The search stops at the first method or type definition: an enclosing
    instance method, class or interface means no static context.
    """
    for parent in node.ancestors():
        if parent.type is TokenTypes.STATIC_INIT:
            return True
        if parent.type is TokenTypes.METHOD_DEF:
            mods = parent.find_first_token(TokenTypes.MODIFIERS)
            return mods is not None and mods.branch_contains(
                TokenTypes.LITERAL_STATIC)
        if parent.type in (TokenTypes.CLASS_DEF, TokenTypes.INTERFACE_DEF):
            return False
    return False


__all__ = ["in_interface_block", "is_local_variable_def", "in_static_context"]
