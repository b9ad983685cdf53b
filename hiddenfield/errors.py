# hiddenfield/errors.py
"""
Error types for the hidden-field check and its supporting framework.

Error Hierarchy:
────────────────
┌──────────────────────────────────────────────────────────────────┐
│  HiddenFieldError (base)                                         │
│  ├── ConfigurationError  - bad property value, invalid pattern   │
│  ├── ContractViolation   - malformed tree / unbalanced scopes    │
│  └── TreeDumpError       - unreadable AST dump                   │
└──────────────────────────────────────────────────────────────────┘

Error Codes:
────────────
  - HF-1xxx: configuration
  - HF-2xxx: tree contract
  - HF-3xxx: dump loading

Violations found by a check are not errors; they are reported through
``Check.log`` and never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ErrorCode:
    """A stable, documented error identifier."""
    code: str
    title: str

    def __str__(self) -> str:
        return self.code


class ErrorCodes:
    INVALID_PATTERN = ErrorCode("HF-1001", "invalid ignore pattern")
    UNACCEPTABLE_TOKEN = ErrorCode("HF-1002", "token not acceptable")
    INVALID_VALUE = ErrorCode("HF-1003", "invalid property value")
    UNKNOWN_PROPERTY = ErrorCode("HF-1004", "unknown property")
    UNKNOWN_CHECK = ErrorCode("HF-1005", "unknown check")

    MISSING_CHILD = ErrorCode("HF-2001", "required child node missing")
    UNBALANCED_SCOPE = ErrorCode("HF-2002", "scope stack unbalanced")
    UNEXPECTED_TOKEN = ErrorCode("HF-2003", "token not handled by check")

    DUMP_SYNTAX = ErrorCode("HF-3001", "malformed tree dump")
    DUMP_UNKNOWN_TOKEN = ErrorCode("HF-3002", "unknown token name")
    DUMP_TOO_DEEP = ErrorCode("HF-3003", "tree nested too deeply")
    DUMP_ENCODING = ErrorCode("HF-3004", "dump file is not valid text")


class HiddenFieldError(Exception):
    """Base exception for all hiddenfield errors."""

    default_code: ErrorCode = ErrorCodes.INVALID_VALUE

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.hint = hint

    def __str__(self) -> str:
        text = f"[{self.code}] {self.message}"
        if self.hint:
            text += f" (hint: {self.hint})"
        return text


class ConfigurationError(HiddenFieldError):
    """A check property could not be applied.

    Raised at configuration time, before any tree is processed.
    """

    default_code = ErrorCodes.INVALID_VALUE

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        prop: str = "",
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code=code, **kwargs)
        self.prop = prop
        self.value = value


class ContractViolation(HiddenFieldError):
    """The tree handed to a check breaks the tree builder's contract."""

    default_code = ErrorCodes.MISSING_CHILD

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        node: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code=code, **kwargs)
        self.node = node


class TreeDumpError(HiddenFieldError):
    """An AST dump could not be turned into a tree."""

    default_code = ErrorCodes.DUMP_SYNTAX

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        source: str = "<string>",
        line: int = 0,
        column: int = 0,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code=code, **kwargs)
        self.source = source
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"{self.source}:{self.line}:{self.column}: {super().__str__()}"


__all__ = [
    "ErrorCode",
    "ErrorCodes",
    "HiddenFieldError",
    "ConfigurationError",
    "ContractViolation",
    "TreeDumpError",
]
