# hiddenfield/ast_nodes.py
"""
Syntax tree nodes consumed by checks.

A ``DetailAST`` is a tagged node: a ``TokenTypes`` kind, the token text, a
source position and ordered children.  Checks only read trees; building
them is the job of the dump loader (``hiddenfield.dump``) or of test
helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from hiddenfield.tokens import TokenTypes, default_text


@dataclass(eq=False)
class DetailAST:
    """A node of the syntax tree.

    Attributes
    ----------
    type     : node kind
    text     : token text (identifier name, keyword, ...)
    line     : 1-based source line, 0 when unknown
    column   : 0-based source column
    parent   : enclosing node, ``None`` for a root
    children : ordered child nodes
    """
    type: TokenTypes
    text: str = ""
    line: int = 0
    column: int = 0
    parent: Optional[DetailAST] = field(default=None, repr=False)
    children: List[DetailAST] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self.text:
            self.text = default_text(self.type)

    # ── Building ─────────────────────────────────────────────────

    def add_child(self, child: DetailAST) -> DetailAST:
        """Append ``child`` and adopt it; returns ``child``."""
        child.parent = self
        self.children.append(child)
        return child

    # ── Navigation ───────────────────────────────────────────────

    @property
    def first_child(self) -> Optional[DetailAST]:
        return self.children[0] if self.children else None

    @property
    def next_sibling(self) -> Optional[DetailAST]:
        if self.parent is None:
            return None
        siblings = self.parent.children
        for i, node in enumerate(siblings):
            if node is self:
                return siblings[i + 1] if i + 1 < len(siblings) else None
        return None

    @property
    def child_count(self) -> int:
        return len(self.children)

    def iter_children(self) -> Iterator[DetailAST]:
        return iter(self.children)

    def child_count_of(self, token_type: TokenTypes) -> int:
        """Number of direct children of the given kind."""
        return sum(1 for c in self.children if c.type is token_type)

    def find_first_token(self, token_type: TokenTypes) -> Optional[DetailAST]:
        """First direct child of the given kind, or ``None``."""
        for child in self.children:
            if child.type is token_type:
                return child
        return None

    def branch_contains(self, token_type: TokenTypes) -> bool:
        """True if this node or any descendant has the given kind."""
        stack = [self]
        while stack:
            node = stack.pop()
            if node.type is token_type:
                return True
            stack.extend(node.children)
        return False

    def ancestors(self) -> Iterator[DetailAST]:
        """Enclosing nodes, innermost first."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def __str__(self) -> str:
        return f"{self.type.value}[{self.line}x{self.column}] {self.text!r}"


__all__ = ["DetailAST"]
