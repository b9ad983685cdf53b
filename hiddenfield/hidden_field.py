"""
hiddenfield/hidden_field.py
═══════════════════════════

Checks that a local variable or a parameter does not shadow a field that
is defined in the same class, or in an enclosing class.

Configuration examples (module properties)::

    HiddenField                                   # defaults
    HiddenField  tokens=VARIABLE_DEF              # locals only
    HiddenField  ignoreSetter=true                # skip setXyz(xyz) params
    HiddenField  ignoreConstructorParameter=true  # skip ctor params
    HiddenField  ignoreFormat=^ignore             # skip names matching

How fields are tracked
──────────────────────
On entering a CLASS_DEF the check opens a frame on its ``ScopeStack`` and
records every field declared directly in the class body, split into
static and instance names.  On leaving it the frame is closed again.  A
declaration hides a field when

  * a static field of that name is visible from the current frame, or
  * the declaration is not in a static method / static initializer and an
    instance field of that name is visible (instance visibility ends at
    the nearest static nested class).

Declarations inside interfaces are never checked.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, ClassVar, Dict, FrozenSet, Optional, Pattern

from hiddenfield.api import DEFAULT_REGISTRY, Check
from hiddenfield.ast_nodes import DetailAST
from hiddenfield.errors import ConfigurationError, ContractViolation, ErrorCodes
from hiddenfield.frames import FieldFrame, ScopeStack
from hiddenfield.scope_utils import (
    in_interface_block,
    in_static_context,
    is_local_variable_def,
)
from hiddenfield.tokens import TokenTypes

_log = logging.getLogger(__name__)

MSG_KEY = "hidden.field"


def _is_static(node: DetailAST) -> bool:
    mods = node.find_first_token(TokenTypes.MODIFIERS)
    return mods is not None and mods.branch_contains(TokenTypes.LITERAL_STATIC)


def _ident_of(node: DetailAST) -> DetailAST:
    ident = node.find_first_token(TokenTypes.IDENT)
    if ident is None:
        raise ContractViolation(
            f"{node.type.value} at line {node.line} has no IDENT child",
            node=node,
        )
    return ident


def setter_name_for(name: str) -> str:
    """Property setter name for field ``name``: ``xyz`` → ``setXyz``."""
    return "set" + name[:1].upper() + name[1:]


@DEFAULT_REGISTRY.register
class HiddenFieldCheck(Check):
    """Reports locals and parameters that hide a field."""

    name: ClassVar[str] = "HiddenField"
    description: ClassVar[str] = (
        "Local variable or parameter shadows a field of the enclosing class"
    )
    messages: ClassVar[Dict[str, str]] = {MSG_KEY: "'{0}' hides a field."}

    def __init__(self) -> None:
        super().__init__()
        self._frames = ScopeStack()
        self._ignore_format: Optional[Pattern[str]] = None
        self._ignore_setter = False
        self._ignore_constructor_parameter = False
        self._on_visit: Dict[TokenTypes, Callable[[DetailAST], None]] = {
            TokenTypes.CLASS_DEF: self._enter_class,
            TokenTypes.VARIABLE_DEF: self._process_variable,
            TokenTypes.PARAMETER_DEF: self._process_variable,
        }
        self._on_leave: Dict[TokenTypes, Callable[[DetailAST], None]] = {
            TokenTypes.CLASS_DEF: self._leave_class,
            TokenTypes.VARIABLE_DEF: lambda node: None,
            TokenTypes.PARAMETER_DEF: lambda node: None,
        }

    # ── Token sets ───────────────────────────────────────────────

    def get_default_tokens(self) -> FrozenSet[TokenTypes]:
        return frozenset({
            TokenTypes.VARIABLE_DEF,
            TokenTypes.PARAMETER_DEF,
            TokenTypes.CLASS_DEF,
        })

    def get_acceptable_tokens(self) -> FrozenSet[TokenTypes]:
        return frozenset({
            TokenTypes.VARIABLE_DEF,
            TokenTypes.PARAMETER_DEF,
        })

    def get_required_tokens(self) -> FrozenSet[TokenTypes]:
        return frozenset({TokenTypes.CLASS_DEF})

    # ── Properties ───────────────────────────────────────────────

    def set_ignore_format(self, fmt: Optional[str]) -> None:
        """Ignore declarations whose name matches ``fmt``; empty disables.

        An invalid pattern raises ``ConfigurationError`` and leaves the
        previously configured pattern untouched.
        """
        if not fmt:
            self._ignore_format = None
            return
        try:
            self._ignore_format = re.compile(fmt)
        except re.error as exc:
            raise ConfigurationError(
                f"unable to parse {fmt}",
                code=ErrorCodes.INVALID_PATTERN,
                prop="ignoreFormat",
                value=fmt,
                hint=str(exc),
            ) from exc

    @property
    def ignore_format(self) -> Optional[Pattern[str]]:
        return self._ignore_format

    def set_ignore_setter(self, ignore_setter: bool) -> None:
        self._ignore_setter = ignore_setter

    def set_ignore_constructor_parameter(self, ignore: bool) -> None:
        self._ignore_constructor_parameter = ignore

    # ── Lifecycle ────────────────────────────────────────────────

    def begin_tree(self, root: DetailAST) -> None:
        self._frames.reset()

    def visit_token(self, node: DetailAST) -> None:
        self._dispatch(self._on_visit, node)(node)

    def leave_token(self, node: DetailAST) -> None:
        self._dispatch(self._on_leave, node)(node)

    def finish_tree(self, root: DetailAST) -> None:
        if self._frames.depth:
            _log.warning(
                "%s: %d class scope(s) still open at end of tree",
                self.name, self._frames.depth,
            )

    def _dispatch(
        self,
        table: Dict[TokenTypes, Callable[[DetailAST], None]],
        node: DetailAST,
    ) -> Callable[[DetailAST], None]:
        handler = table.get(node.type)
        if handler is None:
            raise ContractViolation(
                f"{self.name} cannot handle {node.type.value}",
                code=ErrorCodes.UNEXPECTED_TOKEN,
                node=node,
            )
        return handler

    # ── Field collection ─────────────────────────────────────────

    def _enter_class(self, node: DetailAST) -> None:
        frame = self._frames.enter_scope(_is_static(node))
        self._collect_fields(node, frame)

    def _leave_class(self, node: DetailAST) -> None:
        self._frames.leave_scope()

    def _collect_fields(self, class_node: DetailAST, frame: FieldFrame) -> None:
        """Record the fields declared directly in ``class_node``'s body."""
        obj_block = class_node.find_first_token(TokenTypes.OBJBLOCK)
        if obj_block is None:
            raise ContractViolation(
                f"CLASS_DEF at line {class_node.line} has no OBJBLOCK",
                node=class_node,
            )
        for child in obj_block.iter_children():
            if child.type is not TokenTypes.VARIABLE_DEF:
                continue
            name = _ident_of(child).text
            if _is_static(child):
                frame.add_static_field(name)
            else:
                frame.add_instance_field(name)

    # ── Shadow detection ─────────────────────────────────────────

    def _process_variable(self, node: DetailAST) -> None:
        if in_interface_block(node):
            return
        if not (is_local_variable_def(node)
                or node.type is TokenTypes.PARAMETER_DEF):
            return
        ident = _ident_of(node)
        name = ident.text
        hides = (
            self._frames.contains_static_field(name)
            or (not in_static_context(node)
                and self._frames.contains_instance_field(name))
        )
        if (hides
                and not self.is_ignored_name(name)
                and not self.is_ignored_setter_param(node, name)
                and not self.is_ignored_constructor_param(node)):
            self.log(ident, MSG_KEY, name)

    # ── Exemptions ───────────────────────────────────────────────

    def is_ignored_name(self, name: str) -> bool:
        """True if ``name`` matches the configured ignore format."""
        return (self._ignore_format is not None
                and self._ignore_format.search(name) is not None)

    def is_ignored_setter_param(self, node: DetailAST, name: str) -> bool:
        """True if ``node`` is the parameter of a setter and setters are ignored.

        The setter for field ``xyz`` is named ``setXyz``, takes exactly one
        parameter and returns ``void``.
        """
        if node.type is not TokenTypes.PARAMETER_DEF or not self._ignore_setter:
            return False
        parameters = node.parent
        if (parameters is None
                or parameters.child_count_of(TokenTypes.PARAMETER_DEF) != 1):
            return False
        method = parameters.parent
        if method is None or method.type is not TokenTypes.METHOD_DEF:
            return False
        if _ident_of(method).text != setter_name_for(name):
            return False
        type_node = method.find_first_token(TokenTypes.TYPE)
        return (type_node is not None
                and type_node.branch_contains(TokenTypes.LITERAL_VOID))

    def is_ignored_constructor_param(self, node: DetailAST) -> bool:
        """True if ``node`` is a constructor parameter and those are ignored."""
        if (node.type is not TokenTypes.PARAMETER_DEF
                or not self._ignore_constructor_parameter):
            return False
        parameters = node.parent
        constructor = parameters.parent if parameters is not None else None
        return constructor is not None and constructor.type is TokenTypes.CTOR_DEF


__all__ = ["HiddenFieldCheck", "MSG_KEY", "setter_name_for"]
