"""A single database transaction and the state it accumulates."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any

from rmlite.defs import INVALID_LSN, INVALID_TIMESTAMP
from rmlite.txn_defs import IsolationLevel, LockDataId, TransactionState, WriteRecord

__all__ = ["Transaction"]


class Transaction:
    """Holds a transaction's identity, phase, writes and locks."""

    def __init__(
        self,
        txn_id: int,
        isolation_level: IsolationLevel = IsolationLevel.SERIALIZABLE,
    ) -> None:
        self.txn_id = txn_id
        self.isolation_level = isolation_level
        self.state = TransactionState.DEFAULT
        # True for an explicit BEGIN ... COMMIT block, False for a single statement.
        self.txn_mode = False
        self.start_ts = INVALID_TIMESTAMP
        self.prev_lsn = INVALID_LSN
        self.thread_id = threading.get_ident()
        self.write_set: deque[WriteRecord] = deque()
        self.lock_set: set[LockDataId] = set()
        self.index_latch_page_set: deque[Any] = deque()
        self.index_deleted_page_set: deque[Any] = deque()

    def append_write_record(self, write_record: WriteRecord) -> None:
        self.write_set.append(write_record)

    def append_index_deleted_page(self, page: Any) -> None:
        self.index_deleted_page_set.append(page)

    def append_index_latch_page(self, page: Any) -> None:
        self.index_latch_page_set.append(page)

    def __repr__(self) -> str:
        return f"Transaction(txn_id={self.txn_id}, state={self.state.name})"