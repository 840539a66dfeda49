"""
binding/arena.py

Per-editor storage for the detached value buffers the property binder
creates, and the write-back records evaluated when the editor is accepted.

Parameters created by the binder edit a buffer, never the live property.
A write-back is plain data (target, field, buffer handle, converter); it
looks its buffer up by handle when it runs, so a released buffer turns the
write-back into a no-op instead of a dangling reference.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional

from PyQt6.QtCore import QObject

from params.base import ValueSlot

log = logging.getLogger(__name__)


class BufferArena:
    """Owns value buffers keyed by integer handles."""

    def __init__(self):
        self._buffers: Dict[int, ValueSlot] = {}
        self._next_handle = 0

    def allocate(self, value: Any) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._buffers[handle] = ValueSlot(value)
        return handle

    def slot(self, handle: int) -> ValueSlot:
        """Return the buffer for *handle*; KeyError once released."""
        return self._buffers[handle]

    def release(self, handle: int) -> None:
        self._buffers.pop(handle, None)

    def release_all(self) -> None:
        self._buffers.clear()

    def __contains__(self, handle: int) -> bool:
        return handle in self._buffers

    def __len__(self) -> int:
        return len(self._buffers)

    def __iter__(self) -> Iterator[int]:
        return iter(self._buffers)


@dataclass(frozen=True)
class WriteBack:
    """Copy one buffer into one property of *target* when the editor is accepted.

    Attributes:
        target: Object owning the property.
        field: Property or attribute name.
        handle: Buffer handle in the editor's arena.
        convert: Maps the buffer value to the property's value type.
    """
    target: Any
    field: str
    handle: int
    convert: Optional[Callable[[Any], Any]] = None

    def run(self, arena: BufferArena) -> bool:
        """Write the buffer into the property; returns False when skipped."""
        if self.handle not in arena:
            log.debug("Buffer for %s released, skipping write-back", self.field)
            return False
        value = arena.slot(self.handle).value
        try:
            if self.convert is not None:
                value = self.convert(value)
            if isinstance(self.target, QObject):
                self.target.setProperty(self.field, value)
            else:
                setattr(self.target, self.field, value)
        except (TypeError, ValueError, AttributeError) as e:
            log.warning("Write-back of %s failed: %s", self.field, e)
            return False
        return True
