# hiddenfield/walker.py
"""
Depth-first tree walker that drives checks.

For each tree the walker

  1. indexes every check by the token kinds it currently asks for
     (``Check.registered_tokens()``) and calls ``begin_tree`` on it,
  2. walks the tree depth-first, calling ``visit_token`` on the way down
     and ``leave_token`` on the way up for registered kinds,
  3. calls ``finish_tree`` on every check,

and returns the violations logged during the walk.  The walk is iterative
so deeply nested trees do not hit the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Tuple

from hiddenfield.api import Check, Violation
from hiddenfield.ast_nodes import DetailAST
from hiddenfield.tokens import TokenTypes

_log = logging.getLogger(__name__)


class TreeWalker:
    """
    Runs a set of checks over syntax trees.

    Usage
    -----
    >>> walker = TreeWalker([HiddenFieldCheck()])
    >>> for violation in walker.process(root, file_name="Foo.java"):
    ...     print(violation.to_gcc_format())
    """

    def __init__(self, checks: Iterable[Check] = ()) -> None:
        self._checks: List[Check] = []
        self._by_token: Dict[TokenTypes, List[Check]] = defaultdict(list)
        for check in checks:
            self.register(check)

    @property
    def checks(self) -> Sequence[Check]:
        return tuple(self._checks)

    def register(self, check: Check) -> None:
        """Add ``check``; its tokens are read again for every tree."""
        self._checks.append(check)
        _log.debug("registered %r", check)

    def _index_tokens(self) -> None:
        self._by_token.clear()
        for check in self._checks:
            for token in check.registered_tokens():
                self._by_token[token].append(check)

    def process(self, root: DetailAST, file_name: str = "") -> List[Violation]:
        """Walk one tree and return its violations, check by check."""
        t0 = time.monotonic()
        self._index_tokens()
        for check in self._checks:
            check.clear_violations()
            check.file_name = file_name
            check.begin_tree(root)

        visited = self._walk(root)

        violations: List[Violation] = []
        for check in self._checks:
            check.finish_tree(root)
            violations.extend(check.violations)

        elapsed_ms = (time.monotonic() - t0) * 1000.0
        _log.info("%s: %d node(s), %d violation(s) in %.1fms",
                  file_name or "<tree>", visited, len(violations), elapsed_ms)
        return violations

    def process_all(
        self,
        trees: Iterable[DetailAST],
        file_name: str = "",
    ) -> List[Violation]:
        """Process several independent trees from the same file."""
        violations: List[Violation] = []
        for root in trees:
            violations.extend(self.process(root, file_name=file_name))
        return violations

    def _walk(self, root: DetailAST) -> int:
        visited = 0
        stack: List[Tuple[DetailAST, bool]] = [(root, False)]
        while stack:
            node, leaving = stack.pop()
            checks = self._by_token.get(node.type, ())
            if leaving:
                for check in checks:
                    check.leave_token(node)
                continue
            visited += 1
            for check in checks:
                check.visit_token(node)
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))
        return visited


__all__ = ["TreeWalker"]
