"""
hiddenfield: a hidden-field check for Java-shaped syntax trees
==============================================================

Reports every local variable or parameter whose name shadows a field of
the enclosing class (or of an enclosing class, following Java's static
and instance visibility rules).

Modules
-------
tokens
    Closed enumeration of node kinds.
ast_nodes
    ``DetailAST``, the syntax tree node checks consume.
api
    ``Check`` base class, ``Violation`` and the check registry.
frames
    ``FieldFrame`` and ``ScopeStack``: field visibility per class level.
hidden_field
    ``HiddenFieldCheck`` itself.
walker
    ``TreeWalker``, the depth-first driver.
config
    String-property configuration of checks.
dump
    S-expression AST dump loader.

Quick start
-----------
>>> from hiddenfield import HiddenFieldCheck, TreeWalker, load_tree
>>> check = HiddenFieldCheck()
>>> check.set_ignore_setter(True)
>>> violations = TreeWalker([check]).process(load_tree(text))
"""

from __future__ import annotations

import logging
from typing import List

__version__ = "0.1.0"
__license__ = "MIT"

_log = logging.getLogger(__name__)
_log.addHandler(logging.NullHandler())

from hiddenfield.api import (  # noqa: E402
    DEFAULT_REGISTRY,
    Check,
    CheckRegistry,
    SeverityLevel,
    Violation,
)
from hiddenfield.ast_nodes import DetailAST  # noqa: E402
from hiddenfield.config import CheckConfig, configure, create_check  # noqa: E402
from hiddenfield.dump import load_file, load_tree, load_trees  # noqa: E402
from hiddenfield.errors import (  # noqa: E402
    ConfigurationError,
    ContractViolation,
    HiddenFieldError,
    TreeDumpError,
)
from hiddenfield.frames import FieldFrame, ScopeStack  # noqa: E402
from hiddenfield.hidden_field import HiddenFieldCheck  # noqa: E402
from hiddenfield.tokens import TokenTypes  # noqa: E402
from hiddenfield.walker import TreeWalker  # noqa: E402

__all__: List[str] = [
    "Check",
    "CheckConfig",
    "CheckRegistry",
    "ConfigurationError",
    "ContractViolation",
    "DEFAULT_REGISTRY",
    "DetailAST",
    "FieldFrame",
    "HiddenFieldCheck",
    "HiddenFieldError",
    "ScopeStack",
    "SeverityLevel",
    "TokenTypes",
    "TreeDumpError",
    "TreeWalker",
    "Violation",
    "configure",
    "create_check",
    "load_file",
    "load_tree",
    "load_trees",
]
