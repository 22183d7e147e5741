"""Per-statement execution context and its output buffer."""

from __future__ import annotations

from typing import Any

from rmlite.defs import BUFFER_LENGTH

__all__ = ["Context"]


class Context:
    """Carries the managers, the current transaction and the reply text of a statement."""

    def __init__(
        self,
        lock_mgr: Any = None,
        log_mgr: Any = None,
        txn: Any = None,
        capacity: int = BUFFER_LENGTH,
    ) -> None:
        self.lock_mgr = lock_mgr
        self.log_mgr = log_mgr
        self.txn = txn
        self.capacity = capacity
        self.ellipsis = False
        self._parts: list[str] = []
        self._offset = 0

    @property
    def offset(self) -> int:
        """Number of characters written so far."""
        return self._offset

    def emit(self, text: str) -> None:
        """Append text to the reply."""
        self._parts.append(text)
        self._offset += len(text)

    def text(self) -> str:
        """Return everything written so far."""
        return "".join(self._parts)