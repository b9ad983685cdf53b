# hiddenfield/frames.py
"""
Field frames and the scope stack used by the hidden-field check.

One ``FieldFrame`` exists per open class definition and records the names
of the static and instance fields declared directly in that class.  The
``ScopeStack`` owns the frames in a list; a frame refers to its enclosing
frame by index, so the chain is a tree path and never a cycle.

Lookup rules
────────────
  - Instance fields are visible up to, and including, the nearest frame
    opened by a static nested class.  Outer instance state is out of reach
    from a static nested class.
  - Static fields are visible all the way to the root, whatever the static
    flags along the way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set

from hiddenfield.errors import ContractViolation, ErrorCodes

_log = logging.getLogger(__name__)


@dataclass
class FieldFrame:
    """Field names declared at one class nesting level."""
    is_static_scope: bool
    parent: Optional[int] = None
    instance_fields: Set[str] = field(default_factory=set)
    static_fields: Set[str] = field(default_factory=set)

    def add_instance_field(self, name: str) -> None:
        self.instance_fields.add(name)

    def add_static_field(self, name: str) -> None:
        self.static_fields.add(name)


class ScopeStack:
    """Cursor over the chain of frames for the classes currently open.

    The stack always holds a synthetic root frame (static scope, no
    fields) standing for the compilation unit.  ``reset()`` must be called
    before each independent tree; it discards whatever a previous walk
    left behind.
    """

    def __init__(self) -> None:
        self._frames: List[FieldFrame] = []
        self.reset()

    def reset(self) -> None:
        """Drop every frame and install a fresh root frame."""
        self._frames = [FieldFrame(is_static_scope=True, parent=None)]

    @property
    def current(self) -> FieldFrame:
        return self._frames[-1]

    @property
    def depth(self) -> int:
        """Number of class scopes currently open (the root is not counted)."""
        return len(self._frames) - 1

    def enter_scope(self, is_static_scope: bool) -> FieldFrame:
        """Open a new empty frame under the current one and make it current."""
        frame = FieldFrame(
            is_static_scope=is_static_scope,
            parent=len(self._frames) - 1,
        )
        self._frames.append(frame)
        _log.debug("enter scope depth=%d static=%s", self.depth, is_static_scope)
        return frame

    def leave_scope(self) -> None:
        """Close the current frame, making its parent current again."""
        if self.current.parent is None:
            raise ContractViolation(
                "leave_scope() without a matching enter_scope()",
                code=ErrorCodes.UNBALANCED_SCOPE,
            )
        self._frames.pop()
        _log.debug("leave scope depth=%d", self.depth)

    def _chain(self) -> Iterator[FieldFrame]:
        index: Optional[int] = len(self._frames) - 1
        while index is not None:
            frame = self._frames[index]
            yield frame
            index = frame.parent

    def contains_instance_field(self, name: str) -> bool:
        """Is ``name`` an instance field visible from the current frame?"""
        for frame in self._chain():
            if name in frame.instance_fields:
                return True
            if frame.is_static_scope:
                return False
        return False

    def contains_static_field(self, name: str) -> bool:
        """Is ``name`` a static field of the current or any enclosing frame?"""
        return any(name in frame.static_fields for frame in self._chain())


__all__ = ["FieldFrame", "ScopeStack"]
