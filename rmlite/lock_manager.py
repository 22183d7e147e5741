"""Multi-granularity two-phase locking with a no-wait policy."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum

from rmlite.defs import Rid
from rmlite.transaction import Transaction
from rmlite.txn_defs import (
    AbortReason,
    LockDataId,
    LockDataType,
    TransactionAbortException,
    TransactionState,
)

__all__ = ["LockMode", "GroupLockMode", "LockManager"]


class LockMode(Enum):
    SHARED = "S"
    EXCLUSIVE = "X"
    INTENTION_SHARED = "IS"
    INTENTION_EXCLUSIVE = "IX"
    S_IX = "SIX"


class GroupLockMode(Enum):
    """The strongest mode granted on an object."""

    NON_LOCK = "NON_LOCK"
    IS = "IS"
    IX = "IX"
    S = "S"
    X = "X"
    SIX = "SIX"


# Each mode expressed as the set of elementary rights it grants; a mode covers
# another when its rights are a superset.
_RIGHTS = {
    LockMode.INTENTION_SHARED: frozenset({"is"}),
    LockMode.INTENTION_EXCLUSIVE: frozenset({"is", "ix"}),
    LockMode.SHARED: frozenset({"is", "s"}),
    LockMode.S_IX: frozenset({"is", "ix", "s"}),
    LockMode.EXCLUSIVE: frozenset({"is", "ix", "s", "x"}),
}

_COMPATIBLE = {
    LockMode.INTENTION_SHARED: frozenset(
        {LockMode.INTENTION_SHARED, LockMode.INTENTION_EXCLUSIVE, LockMode.SHARED, LockMode.S_IX}
    ),
    LockMode.INTENTION_EXCLUSIVE: frozenset(
        {LockMode.INTENTION_SHARED, LockMode.INTENTION_EXCLUSIVE}
    ),
    LockMode.SHARED: frozenset({LockMode.INTENTION_SHARED, LockMode.SHARED}),
    LockMode.S_IX: frozenset({LockMode.INTENTION_SHARED}),
    LockMode.EXCLUSIVE: frozenset(),
}

_GROUP_OF = {
    LockMode.INTENTION_SHARED: GroupLockMode.IS,
    LockMode.INTENTION_EXCLUSIVE: GroupLockMode.IX,
    LockMode.SHARED: GroupLockMode.S,
    LockMode.S_IX: GroupLockMode.SIX,
    LockMode.EXCLUSIVE: GroupLockMode.X,
}

# Weakest first, so the first mode that covers a set of rights is the least upper bound.
_BY_STRENGTH = sorted(_RIGHTS, key=lambda mode: len(_RIGHTS[mode]))


def _join(*modes: LockMode) -> LockMode:
    needed = frozenset().union(*(_RIGHTS[mode] for mode in modes))
    return next(mode for mode in _BY_STRENGTH if needed <= _RIGHTS[mode])


@dataclass
class _LockRequest:
    txn_id: int
    lock_mode: LockMode
    granted: bool = False


@dataclass
class _LockRequestQueue:
    requests: list[_LockRequest] = field(default_factory=list)
    group_lock_mode: GroupLockMode = GroupLockMode.NON_LOCK

    def refresh_group_mode(self) -> None:
        granted = [req.lock_mode for req in self.requests if req.granted]
        self.group_lock_mode = _GROUP_OF[_join(*granted)] if granted else GroupLockMode.NON_LOCK


class LockManager:
    """Grants table and record locks; a conflicting request aborts at once."""

    def __init__(self) -> None:
        self._latch = threading.Lock()
        self._lock_table: dict[LockDataId, _LockRequestQueue] = {}

    def lock_shared_on_record(self, txn: Transaction, rid: Rid, tab_fd: int) -> bool:
        return self._lock(txn, LockDataId(tab_fd, LockDataType.RECORD, rid), LockMode.SHARED)

    def lock_exclusive_on_record(self, txn: Transaction, rid: Rid, tab_fd: int) -> bool:
        return self._lock(txn, LockDataId(tab_fd, LockDataType.RECORD, rid), LockMode.EXCLUSIVE)

    def lock_shared_on_table(self, txn: Transaction, tab_fd: int) -> bool:
        return self._lock(txn, LockDataId(tab_fd, LockDataType.TABLE), LockMode.SHARED)

    def lock_exclusive_on_table(self, txn: Transaction, tab_fd: int) -> bool:
        return self._lock(txn, LockDataId(tab_fd, LockDataType.TABLE), LockMode.EXCLUSIVE)

    def lock_IS_on_table(self, txn: Transaction, tab_fd: int) -> bool:  # noqa: N802
        return self._lock(txn, LockDataId(tab_fd, LockDataType.TABLE), LockMode.INTENTION_SHARED)

    def lock_IX_on_table(self, txn: Transaction, tab_fd: int) -> bool:  # noqa: N802
        return self._lock(
            txn, LockDataId(tab_fd, LockDataType.TABLE), LockMode.INTENTION_EXCLUSIVE
        )

    def unlock(self, txn: Transaction, lock_data_id: LockDataId) -> bool:
        """Release the transaction's lock on an object; False if it held none."""
        with self._latch:
            queue = self._lock_table.get(lock_data_id)
            if queue is None:
                return False
            remaining = [req for req in queue.requests if req.txn_id != txn.txn_id]
            if len(remaining) == len(queue.requests):
                return False
            queue.requests = remaining
            queue.refresh_group_mode()
            if not queue.requests:
                del self._lock_table[lock_data_id]
            txn.lock_set.discard(lock_data_id)
            if txn.state == TransactionState.GROWING:
                txn.state = TransactionState.SHRINKING
            return True

    def _lock(self, txn: Transaction, lock_data_id: LockDataId, mode: LockMode) -> bool:
        if txn.state == TransactionState.SHRINKING:
            raise TransactionAbortException(txn.txn_id, AbortReason.LOCK_ON_SHIRINKING)
        if txn.state == TransactionState.DEFAULT:
            txn.state = TransactionState.GROWING
        with self._latch:
            queue = self._lock_table.setdefault(lock_data_id, _LockRequestQueue())
            own = next((req for req in queue.requests if req.txn_id == txn.txn_id), None)
            others = [
                req.lock_mode
                for req in queue.requests
                if req.granted and req.txn_id != txn.txn_id
            ]
            if own is not None:
                if _RIGHTS[mode] <= _RIGHTS[own.lock_mode]:
                    return True
                upgraded = _join(own.lock_mode, mode)
                if any(other not in _COMPATIBLE[upgraded] for other in others):
                    raise TransactionAbortException(txn.txn_id, AbortReason.UPGRADE_CONFLICT)
                own.lock_mode = upgraded
            else:
                if any(other not in _COMPATIBLE[mode] for other in others):
                    if not queue.requests:
                        del self._lock_table[lock_data_id]
                    raise TransactionAbortException(
                        txn.txn_id, AbortReason.DEADLOCK_PREVENTION
                    )
                queue.requests.append(_LockRequest(txn.txn_id, mode, granted=True))
            queue.refresh_group_mode()
            txn.lock_set.add(lock_data_id)
            return True