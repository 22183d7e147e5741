"""Starts, commits and aborts transactions and keeps the transaction table."""

from __future__ import annotations

import itertools
import threading
from collections.abc import Callable
from enum import Enum
from typing import Any

from rmlite.defs import INVALID_TXN_ID
from rmlite.errors import InternalError
from rmlite.lock_manager import LockManager
from rmlite.transaction import Transaction
from rmlite.txn_defs import TransactionState, WriteRecord

__all__ = ["ConcurrencyMode", "TransactionManager"]


class ConcurrencyMode(Enum):
    TWO_PHASE_LOCKING = 0
    BASIC_TO = 1


class TransactionManager:
    """Hands out transaction ids and drives transactions through their life cycle.

    ``undo_write`` is called with each write record, newest first, when a
    transaction aborts; it is where the storage layer reverts the change.
    """

    def __init__(
        self,
        lock_manager: LockManager,
        sm_manager: Any = None,
        concurrency_mode: ConcurrencyMode = ConcurrencyMode.TWO_PHASE_LOCKING,
        undo_write: Callable[[WriteRecord], None] | None = None,
    ) -> None:
        self.lock_manager = lock_manager
        self.sm_manager = sm_manager
        self.concurrency_mode = concurrency_mode
        self.txn_map: dict[int, Transaction] = {}
        self._undo_write = undo_write
        self._next_txn_id = itertools.count()
        self._next_timestamp = itertools.count()
        self._latch = threading.Lock()

    def begin(self, txn: Transaction | None = None) -> Transaction:
        """Start ``txn``, or a new transaction if none is given, and register it."""
        with self._latch:
            if txn is None:
                txn = Transaction(next(self._next_txn_id))
            txn.start_ts = next(self._next_timestamp)
            self.txn_map[txn.txn_id] = txn
        return txn

    def commit(self, txn: Transaction) -> None:
        """Make the transaction's writes permanent and release its locks."""
        txn.write_set.clear()
        self._release_locks(txn)
        txn.state = TransactionState.COMMITTED

    def abort(self, txn: Transaction) -> None:
        """Roll back the transaction's writes, newest first, and release its locks."""
        while txn.write_set:
            record = txn.write_set.pop()
            if self._undo_write is not None:
                self._undo_write(record)
        self._release_locks(txn)
        txn.state = TransactionState.ABORTED

    def get_transaction(self, txn_id: int) -> Transaction | None:
        """Return the registered transaction, or None for the invalid id."""
        if txn_id == INVALID_TXN_ID:
            return None
        with self._latch:
            txn = self.txn_map.get(txn_id)
        if txn is None:
            raise InternalError(f"unknown transaction {txn_id}")
        if txn.thread_id != threading.get_ident():
            raise InternalError(f"transaction {txn_id} belongs to another thread")
        return txn

    def _release_locks(self, txn: Transaction) -> None:
        for lock_data_id in list(txn.lock_set):
            self.lock_manager.unlock(txn, lock_data_id)
        txn.lock_set.clear()
        txn.index_latch_page_set.clear()
        txn.index_deleted_page_set.clear()