# rmlite

rmlite holds the in-memory building blocks of a small relational database
engine. It uses only the standard library.

| Module | Contents |
| --- | --- |
| `rmlite.defs` | `Rid`, `ColType`, `coltype2str`, the abstract `RecScan` cursor, and system constants such as `PAGE_SIZE` and `BUFFER_LENGTH` |
| `rmlite.errors` | `RMDBError` and the errors derived from it |
| `rmlite.common` | `TabCol`, `Value`, `CompOp`, `Condition`, `SetClause` |
| `rmlite.context` | `Context`: the per-statement context and its bounded reply text |
| `rmlite.record_printer` | `RecordPrinter`: writes result rows as a fixed-width ASCII table |
| `rmlite.txn_defs` | `TransactionState`, `IsolationLevel`, `WType`, `WriteRecord`, `LockDataType`, `LockDataId`, `AbortReason`, `TransactionAbortException` |
| `rmlite.transaction` | `Transaction` |
| `rmlite.lock_manager` | `LockMode`, `GroupLockMode`, `LockManager` |
| `rmlite.transaction_manager` | `ConcurrencyMode`, `TransactionManager` |

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Printing a result set

```python
from rmlite.context import Context
from rmlite.record_printer import RecordPrinter

ctx = Context()
printer = RecordPrinter(2)
printer.print_separator(ctx)
printer.print_record(["id", "name"], ctx)
printer.print_separator(ctx)
printer.print_record(["1", "alice"], ctx)
printer.print_separator(ctx)
RecordPrinter.print_record_count(1, ctx)
print(ctx.text())
```

Each column is 16 characters wide, with the text right-aligned. Text longer
than that is cut to 13 characters and then `...` is added. A `Context` holds at
most `capacity` characters (8192 by default, `BUFFER_LENGTH`). The printer keeps
40 of them free for the count line. When a piece of output would not fit, it
and everything printed after it is dropped, and the count line starts with
`... ...`. `RecordPrinter` raises `ValueError` if it is given zero columns. It
also raises `ValueError` if a row has the wrong number of cells.

## Values

```python
from rmlite.common import Value

v = Value()
v.set_str("abc")
v.init_raw(8)   # v.raw == b"abc\x00\x00\x00\x00\x00"
```

`init_raw` encodes INT and FLOAT values as 4 little-endian bytes. Strings are
encoded as UTF-8 and padded with zero bytes. Any other length for INT or
FLOAT, a second call, or a value with no type raises `InternalError`. A string
longer than the given length raises `StringOverflowError`.

## Errors

Every error derives from `rmlite.errors.RMDBError`. Its message starts with
`Error: `.

```python
from rmlite.errors import TableNotFoundError

try:
    raise TableNotFoundError("orders")
except TableNotFoundError as exc:
    print(exc)   # Error: Table not found: orders
```

## Transactions and locks

`LockManager` grants IS, IX, S, SIX and X locks on tables, and S and X locks on
records. Records are named by a `Rid` together with a table's file number. A
request that conflicts with another transaction's lock does not wait. It
raises `TransactionAbortException` straight away:

- `DEADLOCK_PREVENTION` for a new request
- `UPGRADE_CONFLICT` when a held lock cannot be strengthened

Locking follows two phases. The first `unlock` moves a growing transaction
into `SHRINKING`. Any lock asked for after that raises `LOCK_ON_SHIRINKING`.

```python
from rmlite.defs import Rid
from rmlite.lock_manager import LockManager
from rmlite.transaction_manager import TransactionManager
from rmlite.txn_defs import TransactionAbortException

locks = LockManager()
tm = TransactionManager(locks)
t1 = tm.begin()
t2 = tm.begin()

locks.lock_IX_on_table(t1, 3)
locks.lock_exclusive_on_record(t1, Rid(1, 0), 3)
try:
    locks.lock_shared_on_table(t2, 3)   # S conflicts with t1's IX
except TransactionAbortException as exc:
    print(exc.info(), end="")           # Transaction 1 aborted for deadlock prevention
    tm.abort(t2)
tm.commit(t1)
```

`TransactionManager` handles each stage of a transaction:

- `begin()` gives a new transaction the next id and start timestamp and
  records it in `txn_map`. It can also register an existing `Transaction`.
- `commit()` clears the write set, releases every lock and marks the
  transaction `COMMITTED`.
- `abort()` passes each `WriteRecord` to the optional `undo_write` callback,
  newest first. It then releases the locks and marks the transaction
  `ABORTED`.
- `get_transaction()` returns `None` for `INVALID_TXN_ID`. It raises
  `InternalError` when the id is unknown or when the transaction belongs to
  another thread.

## What rmlite does not do

rmlite has no storage layer:

- no disk manager
- no buffer pool or page replacer
- no record files or indexes

It has no SQL parser, planner or executors, no write-ahead log or recovery,
and no server or command-line program. `abort()` reverts changes only through
the `undo_write` callback that you supply. Without one, the write records are
simply discarded.