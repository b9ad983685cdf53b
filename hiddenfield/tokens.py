# hiddenfield/tokens.py
"""
Token types for Java-shaped syntax trees.

Only the kinds the tree walker, the dump loader and the hidden-field check
need to tell apart are listed; the enumeration is closed on purpose so the
check's dispatch table can be verified against it.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Dict, Optional


@unique
class TokenTypes(Enum):
    # ── Structural ───────────────────────────────────────────────
    COMPILATION_UNIT = "COMPILATION_UNIT"
    PACKAGE_DEF = "PACKAGE_DEF"
    IMPORT = "IMPORT"
    CLASS_DEF = "CLASS_DEF"
    INTERFACE_DEF = "INTERFACE_DEF"
    OBJBLOCK = "OBJBLOCK"
    EXTENDS_CLAUSE = "EXTENDS_CLAUSE"
    IMPLEMENTS_CLAUSE = "IMPLEMENTS_CLAUSE"

    # ── Members ──────────────────────────────────────────────────
    VARIABLE_DEF = "VARIABLE_DEF"
    METHOD_DEF = "METHOD_DEF"
    CTOR_DEF = "CTOR_DEF"
    STATIC_INIT = "STATIC_INIT"
    INSTANCE_INIT = "INSTANCE_INIT"
    PARAMETERS = "PARAMETERS"
    PARAMETER_DEF = "PARAMETER_DEF"

    # ── Modifiers and types ──────────────────────────────────────
    MODIFIERS = "MODIFIERS"
    LITERAL_STATIC = "LITERAL_STATIC"
    LITERAL_PUBLIC = "LITERAL_PUBLIC"
    LITERAL_PROTECTED = "LITERAL_PROTECTED"
    LITERAL_PRIVATE = "LITERAL_PRIVATE"
    FINAL = "FINAL"
    ABSTRACT = "ABSTRACT"
    TYPE = "TYPE"
    LITERAL_VOID = "LITERAL_VOID"
    LITERAL_INT = "LITERAL_INT"
    LITERAL_BOOLEAN = "LITERAL_BOOLEAN"
    IDENT = "IDENT"

    # ── Statements ───────────────────────────────────────────────
    SLIST = "SLIST"
    EXPR = "EXPR"
    ASSIGN = "ASSIGN"
    LITERAL_RETURN = "LITERAL_RETURN"
    LITERAL_FOR = "LITERAL_FOR"
    FOR_INIT = "FOR_INIT"
    FOR_CONDITION = "FOR_CONDITION"
    FOR_ITERATOR = "FOR_ITERATOR"
    FOR_EACH_CLAUSE = "FOR_EACH_CLAUSE"
    LITERAL_TRY = "LITERAL_TRY"
    LITERAL_CATCH = "LITERAL_CATCH"
    LITERAL_NEW = "LITERAL_NEW"
    ELIST = "ELIST"
    NUM_INT = "NUM_INT"

    @classmethod
    def from_name(cls, name: str) -> Optional["TokenTypes"]:
        """Look up a token type by its name, ``None`` when unknown."""
        return _BY_NAME.get(name)


_BY_NAME: Dict[str, TokenTypes] = {t.value: t for t in TokenTypes}

# Default text for keyword tokens when a dump omits it.
_LITERAL_TEXT: Dict[TokenTypes, str] = {
    TokenTypes.LITERAL_STATIC: "static",
    TokenTypes.LITERAL_PUBLIC: "public",
    TokenTypes.LITERAL_PROTECTED: "protected",
    TokenTypes.LITERAL_PRIVATE: "private",
    TokenTypes.FINAL: "final",
    TokenTypes.ABSTRACT: "abstract",
    TokenTypes.LITERAL_VOID: "void",
    TokenTypes.LITERAL_INT: "int",
    TokenTypes.LITERAL_BOOLEAN: "boolean",
    TokenTypes.LITERAL_RETURN: "return",
    TokenTypes.LITERAL_FOR: "for",
    TokenTypes.LITERAL_TRY: "try",
    TokenTypes.LITERAL_CATCH: "catch",
    TokenTypes.LITERAL_NEW: "new",
}


def default_text(token_type: TokenTypes) -> str:
    """Text a node of ``token_type`` carries when none is given."""
    return _LITERAL_TEXT.get(token_type, "")


__all__ = ["TokenTypes", "default_text"]
