import threading

import pytest

from rmlite.defs import INVALID_TXN_ID, Rid
from rmlite.errors import InternalError
from rmlite.lock_manager import LockManager
from rmlite.transaction import Transaction
from rmlite.transaction_manager import ConcurrencyMode, TransactionManager
from rmlite.txn_defs import TransactionState, WriteRecord, WType


@pytest.fixture
def lock_manager():
    return LockManager()


@pytest.fixture
def manager(lock_manager):
    return TransactionManager(lock_manager)


def test_default_mode_is_two_phase_locking(manager):
    assert manager.concurrency_mode is ConcurrencyMode.TWO_PHASE_LOCKING


def test_begin_assigns_distinct_ids_and_registers(manager):
    first = manager.begin()
    second = manager.begin()
    assert first.txn_id != second.txn_id
    assert second.start_ts > first.start_ts
    assert manager.get_transaction(first.txn_id) is first
    assert manager.get_transaction(second.txn_id) is second


def test_begin_existing_transaction(manager):
    txn = Transaction(42)
    assert manager.begin(txn) is txn
    assert manager.get_transaction(42) is txn


def test_invalid_id_gives_none(manager):
    assert manager.get_transaction(INVALID_TXN_ID) is None


def test_unknown_id_raises(manager):
    with pytest.raises(InternalError):
        manager.get_transaction(1000)


def test_transaction_of_other_thread_raises(manager):
    started = []
    worker = threading.Thread(target=lambda: started.append(manager.begin()))
    worker.start()
    worker.join()
    with pytest.raises(InternalError):
        manager.get_transaction(started[0].txn_id)


def test_commit_releases_locks(manager, lock_manager):
    txn = manager.begin()
    lock_manager.lock_exclusive_on_table(txn, 5)
    txn.append_write_record(WriteRecord(WType.INSERT_TUPLE, "t", Rid(1, 0)))
    manager.commit(txn)
    assert txn.state is TransactionState.COMMITTED
    assert txn.lock_set == set()
    assert len(txn.write_set) == 0
    other = manager.begin()
    assert lock_manager.lock_exclusive_on_table(other, 5)


def test_abort_undoes_writes_newest_first(lock_manager):
    undone = []
    manager = TransactionManager(lock_manager, undo_write=undone.append)
    txn = manager.begin()
    lock_manager.lock_IX_on_table(txn, 5)
    first = WriteRecord(WType.INSERT_TUPLE, "t", Rid(1, 0))
    second = WriteRecord(WType.UPDATE_TUPLE, "t", Rid(1, 0), b"old")
    txn.append_write_record(first)
    txn.append_write_record(second)
    manager.abort(txn)
    assert undone == [second, first]
    assert txn.state is TransactionState.ABORTED
    assert txn.lock_set == set()
    other = manager.begin()
    assert lock_manager.lock_exclusive_on_table(other, 5)