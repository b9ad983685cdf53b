"""
hiddenfield/dump.py: load syntax trees from S-expression AST dumps.

The walker and the checks never read source code; they consume trees
produced elsewhere.  This module reads the textual dump format those trees
are exchanged in::

    ; comments run to the end of the line
    (COMPILATION_UNIT
      (CLASS_DEF @1:0
        (MODIFIERS (LITERAL_PUBLIC))
        (IDENT "Point" @1:13)
        (OBJBLOCK
          (VARIABLE_DEF (MODIFIERS) (TYPE (LITERAL_INT)) (IDENT "x" @2:8)))))

A node is ``(`` TOKEN_NAME, then optionally a quoted text and an
``@line:column`` position (in either order), then child nodes, then ``)``.
Keyword tokens default their text to the keyword (``LITERAL_STATIC`` →
``static``).  A dump may hold several top-level trees.

Parsing and tree building recurse once per nesting level, so the
interpreter's recursion limit is raised for the duration of a load to fit
the deepest tree in the dump.  Trees nested deeper than ``MAX_NESTING``
levels are rejected with ``TreeDumpError`` before parsing starts.

Depends on:
    - parsimonious (PEG parser)
"""

from __future__ import annotations

import logging
import re
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from parsimonious.exceptions import IncompleteParseError, ParseError, VisitationError
from parsimonious.grammar import Grammar
from parsimonious.nodes import Node, NodeVisitor

from hiddenfield.ast_nodes import DetailAST
from hiddenfield.errors import ErrorCodes, TreeDumpError
from hiddenfield.tokens import TokenTypes

_log = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  PART 1: DUMP GRAMMAR (Parsimonious PEG)
# ═══════════════════════════════════════════════════════════════════

DUMP_GRAMMAR = Grammar(r'''
    forest      = ws node*
    node        = lparen kind attr* node* rparen

    attr        = text / position
    text        = ~r'"(?:[^"\\]|\\.)*"' ws
    position    = "@" ~r"[0-9]+" ":" ~r"[0-9]+" ws
    kind        = ~r"[A-Za-z_][A-Za-z0-9_]*" ws

    lparen      = "(" ws
    rparen      = ")" ws
    ws          = ~r"(\s|;[^\n]*)*"
''')

_ESCAPE = re.compile(r"\\(.)")

# Strings and comments are matched whole so their parentheses do not count.
_NESTING_TOKEN = re.compile(r'"(?:[^"\\]|\\.)*"|;[^\n]*|[()]')

MAX_NESTING = 1000

# Upper bound on interpreter frames one nesting level costs while parsing
# and while building the tree.
_FRAMES_PER_LEVEL = 8


def _items(visited: Any) -> List[Any]:
    """Results of a repetition; an empty one is visited as its bare node."""
    return visited if isinstance(visited, list) else []


def _line_col(full_text: str, pos: int) -> Tuple[int, int]:
    line = full_text.count("\n", 0, pos) + 1
    column = pos - (full_text.rfind("\n", 0, pos) + 1) + 1
    return line, column


def _max_nesting(text: str, source: str) -> int:
    """Deepest parenthesis nesting in ``text``; too deep raises."""
    depth = deepest = 0
    for match in _NESTING_TOKEN.finditer(text):
        token = match.group()
        if token == "(":
            depth += 1
            if depth > MAX_NESTING:
                line, column = _line_col(text, match.start())
                raise TreeDumpError(
                    f"tree nested more than {MAX_NESTING} levels deep",
                    code=ErrorCodes.DUMP_TOO_DEEP,
                    source=source, line=line, column=column,
                )
            deepest = max(deepest, depth)
        elif token == ")":
            depth -= 1
    return deepest


# ═══════════════════════════════════════════════════════════════════
#  PART 2: TREE BUILDER (Parse Tree → DetailAST)
# ═══════════════════════════════════════════════════════════════════

class DumpTreeBuilder(NodeVisitor):
    """Transforms the parsimonious parse tree into ``DetailAST`` nodes."""

    grammar = DUMP_GRAMMAR
    unwrapped_exceptions = (TreeDumpError, RecursionError)

    def __init__(self, source: str = "<string>") -> None:
        self.source = source

    def generic_visit(self, node: Node, visited_children: List[Any]) -> Any:
        return visited_children or node

    def visit_forest(self, node: Node, visited_children: List[Any]) -> List[DetailAST]:
        _, trees = visited_children
        return _items(trees)

    def visit_node(self, node: Node, visited_children: List[Any]) -> DetailAST:
        _, token_type, attrs, children, _ = visited_children
        text = ""
        line = column = 0
        for key, value in _items(attrs):
            if key == "text":
                text = value
            else:
                line, column = value
        ast = DetailAST(type=token_type, text=text, line=line, column=column)
        for child in _items(children):
            ast.add_child(child)
        return ast

    def visit_attr(self, node: Node, visited_children: List[Any]) -> Tuple[str, Any]:
        return visited_children[0]

    def visit_text(self, node: Node, visited_children: List[Any]) -> Tuple[str, str]:
        raw = node.children[0].text
        return ("text", _ESCAPE.sub(r"\1", raw[1:-1]))

    def visit_position(
        self, node: Node, visited_children: List[Any]
    ) -> Tuple[str, Tuple[int, int]]:
        _, line, _, column, _ = node.children
        return ("position", (int(line.text), int(column.text)))

    def visit_kind(self, node: Node, visited_children: List[Any]) -> TokenTypes:
        name = node.children[0].text
        token_type = TokenTypes.from_name(name)
        if token_type is None:
            line, column = _line_col(node.full_text, node.start)
            raise TreeDumpError(
                f"unknown token name {name!r}",
                code=ErrorCodes.DUMP_UNKNOWN_TOKEN,
                source=self.source,
                line=line,
                column=column,
            )
        return token_type


# ═══════════════════════════════════════════════════════════════════
#  PART 3: PUBLIC API
# ═══════════════════════════════════════════════════════════════════

def load_trees(text: str, source: str = "<string>") -> List[DetailAST]:
    """Parse every top-level tree in ``text``.

    Raises
    ------
    TreeDumpError
        on malformed input, an unknown token name or a tree nested more
        than ``MAX_NESTING`` levels deep.
    """
    depth = _max_nesting(text, source)
    sys_limit = sys.getrecursionlimit()
    needed = sys_limit + depth * _FRAMES_PER_LEVEL
    _log.debug("%s: nesting depth %d", source, depth)
    sys.setrecursionlimit(needed)
    try:
        trees = _parse(text, source)
    except RecursionError as exc:
        raise TreeDumpError(
            "tree nested too deeply",
            code=ErrorCodes.DUMP_TOO_DEEP, source=source,
        ) from exc
    finally:
        sys.setrecursionlimit(sys_limit)
    _log.debug("%s: loaded %d tree(s)", source, len(trees))
    return trees


def _parse(text: str, source: str) -> List[DetailAST]:
    try:
        parse_tree = DUMP_GRAMMAR.parse(text)
    except IncompleteParseError as exc:
        raise TreeDumpError(
            "unexpected text after the last complete tree",
            source=source, line=exc.line(), column=exc.column(),
        ) from exc
    except ParseError as exc:
        raise TreeDumpError(
            "malformed tree dump",
            source=source, line=exc.line(), column=exc.column(),
        ) from exc
    try:
        return DumpTreeBuilder(source).visit(parse_tree)
    except VisitationError as exc:
        raise TreeDumpError(f"cannot build tree: {exc}", source=source) from exc


def load_tree(text: str, source: str = "<string>") -> DetailAST:
    """Parse a dump holding exactly one tree."""
    trees = load_trees(text, source)
    if len(trees) != 1:
        raise TreeDumpError(
            f"expected exactly one tree, found {len(trees)}", source=source,
        )
    return trees[0]


def load_file(path: Union[str, Path], encoding: Optional[str] = "utf-8") -> List[DetailAST]:
    """Read and parse the dump file at ``path``."""
    p = Path(path)
    try:
        text = p.read_text(encoding=encoding)
    except UnicodeDecodeError as exc:
        raise TreeDumpError(
            f"cannot decode dump as {encoding}: {exc.reason}",
            code=ErrorCodes.DUMP_ENCODING,
            source=str(p),
        ) from exc
    return load_trees(text, source=str(p))


__all__ = [
    "DUMP_GRAMMAR",
    "MAX_NESTING",
    "DumpTreeBuilder",
    "load_trees",
    "load_tree",
    "load_file",
]
