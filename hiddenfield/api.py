"""
hiddenfield/api.py
══════════════════

The check API: the contract between the tree walker and individual checks.

Architecture
────────────

  ┌──────────────────────────────────────────────────────┐
  │                     TreeWalker                       │
  │   begin_tree ─▶ visit_token / leave_token ─▶ finish  │
  └───────────────────────────┬──────────────────────────┘
                              │ registered token types
  ┌───────────────────────────▼──────────────────────────┐
  │                        Check                         │
  │   default / acceptable / required tokens             │
  │   severity, message bundle, log() ─▶ Violation       │
  └──────────────────────────────────────────────────────┘

Each check declares three token sets:

  1. **default tokens**: registered when ``tokens`` is not configured
  2. **acceptable tokens**: what ``tokens`` may be configured to
  3. **required tokens**: always registered, whatever ``tokens`` says

License: MIT (same as hiddenfield).
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    ClassVar,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Optional,
    Tuple,
    Type,
    Union,
)

from hiddenfield.ast_nodes import DetailAST
from hiddenfield.errors import ConfigurationError, ErrorCodes
from hiddenfield.tokens import TokenTypes

_log = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════════
#  PART 1: VIOLATION MODEL
# ═════════════════════════════════════════════════════════════════════════

class SeverityLevel(Enum):
    """Severity attached to the violations of a check."""
    IGNORE = "ignore"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def parse(cls, value: Union[str, "SeverityLevel"]) -> "SeverityLevel":
        if isinstance(value, SeverityLevel):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            choices = ", ".join(s.value for s in cls)
            raise ConfigurationError(
                f"unknown severity {value!r}",
                code=ErrorCodes.INVALID_VALUE,
                prop="severity",
                value=value,
                hint=f"expected one of {choices}",
            ) from exc


@dataclass(frozen=True)
class Violation:
    """A single finding reported by a check.

    Attributes
    ----------
    line       : line of the offending node
    column     : column of the offending node
    key        : message key in the check's bundle (e.g. "hidden.field")
    args       : message arguments
    message    : rendered message text
    severity   : SeverityLevel
    check_name : name of the reporting check
    file       : file the tree came from, "" when unknown
    """
    line: int
    column: int
    key: str
    args: Tuple[Any, ...]
    message: str
    severity: SeverityLevel = SeverityLevel.ERROR
    check_name: str = ""
    file: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "severity": self.severity.value,
            "key": self.key,
            "args": list(self.args),
            "message": self.message,
            "check": self.check_name,
        }

    def to_json_str(self) -> str:
        return json.dumps(self.to_dict())

    def to_gcc_format(self) -> str:
        """file:line:col: severity: message [key]"""
        return (
            f"{self.file}:{self.line}:{self.column}: "
            f"{self.severity.value}: {self.message} [{self.key}]"
        )


# ═════════════════════════════════════════════════════════════════════════
#  PART 2: CHECK BASE CLASS
# ═════════════════════════════════════════════════════════════════════════

TokenSpec = Union[str, TokenTypes]


def _as_token(spec: TokenSpec) -> TokenTypes:
    if isinstance(spec, TokenTypes):
        return spec
    token = TokenTypes.from_name(spec.strip())
    if token is None:
        raise ConfigurationError(
            f"unknown token {spec!r}",
            code=ErrorCodes.UNACCEPTABLE_TOKEN,
            prop="tokens",
            value=spec,
        )
    return token


class Check(ABC):
    """
    Abstract base class for tree checks.

    Lifecycle (driven by ``TreeWalker``)
    ───────────────────────────────────
      1. ``begin_tree(root)``: once per tree, before any node
      2. ``visit_token(node)``: pre-order, registered kinds only
      3. ``leave_token(node)``: post-order, registered kinds only
      4. ``finish_tree(root)``: once per tree, after the last node

    Subclass Contract
    ─────────────────
      - Override ``name`` and ``messages``
      - Implement ``get_default_tokens()``
      - Override the lifecycle methods you need
    """

    name: ClassVar[str] = "base-check"
    description: ClassVar[str] = ""
    messages: ClassVar[Dict[str, str]] = {}

    def __init__(self) -> None:
        self._violations: List[Violation] = []
        self._tokens: Optional[FrozenSet[TokenTypes]] = None
        self._severity: SeverityLevel = SeverityLevel.ERROR
        self.file_name: str = ""

    # ── Token sets ───────────────────────────────────────────────

    @abstractmethod
    def get_default_tokens(self) -> FrozenSet[TokenTypes]:
        ...

    def get_acceptable_tokens(self) -> FrozenSet[TokenTypes]:
        return self.get_default_tokens()

    def get_required_tokens(self) -> FrozenSet[TokenTypes]:
        return frozenset()

    def set_tokens(self, tokens: Iterable[TokenSpec]) -> None:
        """Restrict the check to ``tokens`` (a subset of acceptable tokens)."""
        acceptable = self.get_acceptable_tokens()
        chosen = set()
        for spec in tokens:
            token = _as_token(spec)
            if token not in acceptable:
                raise ConfigurationError(
                    f"token {token.value} is not acceptable for {self.name}",
                    code=ErrorCodes.UNACCEPTABLE_TOKEN,
                    prop="tokens",
                    value=token.value,
                    hint="acceptable: " + ", ".join(
                        sorted(t.value for t in acceptable)),
                )
            chosen.add(token)
        self._tokens = frozenset(chosen)

    @property
    def tokens(self) -> FrozenSet[TokenTypes]:
        """Configured tokens, or the defaults when none were configured."""
        if self._tokens is None:
            return self.get_default_tokens()
        return self._tokens

    def registered_tokens(self) -> FrozenSet[TokenTypes]:
        """Token kinds the walker must deliver to this check."""
        return self.tokens | self.get_required_tokens()

    # ── Severity ─────────────────────────────────────────────────

    @property
    def severity(self) -> SeverityLevel:
        return self._severity

    def set_severity(self, severity: Union[str, SeverityLevel]) -> None:
        self._severity = SeverityLevel.parse(severity)

    # ── Lifecycle ────────────────────────────────────────────────

    def begin_tree(self, root: DetailAST) -> None:
        """Called before any node of a new tree is visited."""

    def visit_token(self, node: DetailAST) -> None:
        """Called when entering a node of a registered kind."""

    def leave_token(self, node: DetailAST) -> None:
        """Called when leaving a node of a registered kind."""

    def finish_tree(self, root: DetailAST) -> None:
        """Called after the last node of a tree was left."""

    # ── Reporting ────────────────────────────────────────────────

    @property
    def violations(self) -> List[Violation]:
        return list(self._violations)

    def clear_violations(self) -> None:
        self._violations.clear()

    def log(self, node: DetailAST, key: str, *args: Any) -> None:
        """Record a violation at ``node``."""
        template = self.messages.get(key, key)
        violation = Violation(
            line=node.line,
            column=node.column,
            key=key,
            args=tuple(args),
            message=template.format(*args),
            severity=self._severity,
            check_name=self.name,
            file=self.file_name,
        )
        _log.debug("%s: %s", self.name, violation.to_gcc_format())
        self._violations.append(violation)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} '{self.name}'>"


# ═════════════════════════════════════════════════════════════════════════
#  PART 3: CHECK REGISTRY
# ═════════════════════════════════════════════════════════════════════════

class CheckRegistry:
    """
    Registry of check classes, keyed by module name.

    Usage
    -----
    >>> registry = CheckRegistry()
    >>> registry.register(HiddenFieldCheck)
    >>> registry.get_by_name("HiddenField")
    <class 'hiddenfield.hidden_field.HiddenFieldCheck'>
    """

    def __init__(self) -> None:
        self._checks: Dict[str, Type[Check]] = {}

    def register(self, check_cls: Type[Check]) -> Type[Check]:
        """Register a check class; usable as a class decorator."""
        self._checks[check_cls.name] = check_cls
        return check_cls

    def get_by_name(self, name: str) -> Optional[Type[Check]]:
        return self._checks.get(name)

    @property
    def names(self) -> List[str]:
        return sorted(self._checks.keys())


DEFAULT_REGISTRY = CheckRegistry()


__all__ = [
    "SeverityLevel",
    "Violation",
    "Check",
    "CheckRegistry",
    "DEFAULT_REGISTRY",
]
