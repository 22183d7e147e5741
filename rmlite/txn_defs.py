"""Transaction states, write records, lock identifiers and abort exceptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

from rmlite.defs import Rid

__all__ = [
    "TransactionState",
    "IsolationLevel",
    "WType",
    "WriteRecord",
    "LockDataType",
    "LockDataId",
    "AbortReason",
    "TransactionAbortException",
]

_NO_RID = Rid(-1, -1)
_MASK64 = (1 << 64) - 1


class TransactionState(Enum):
    DEFAULT = 0
    GROWING = 1
    SHRINKING = 2
    COMMITTED = 3
    ABORTED = 4


class IsolationLevel(Enum):
    READ_UNCOMMITTED = 0
    REPEATABLE_READ = 1
    READ_COMMITTED = 2
    SERIALIZABLE = 3


class WType(IntEnum):
    INSERT_TUPLE = 0
    DELETE_TUPLE = 1
    UPDATE_TUPLE = 2


@dataclass
class WriteRecord:
    """A write made by a transaction, kept so that it can be rolled back.

    Inserts carry only the rid; deletes and updates also carry the old record image.
    """

    wtype: WType
    tab_name: str
    rid: Rid
    record: bytes | None = field(default=None)


class LockDataType(IntEnum):
    TABLE = 0
    RECORD = 1


@dataclass(frozen=True, eq=False)
class LockDataId:
    """Identifies a lockable object: a whole table or a single record of it."""

    fd: int
    type: LockDataType
    rid: Rid = _NO_RID

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", LockDataType(self.type))
        if self.type == LockDataType.TABLE:
            if self.rid != _NO_RID:
                raise ValueError("a table lock does not name a record")
        elif self.rid == _NO_RID:
            raise ValueError("a record lock needs a record id")

    def key(self) -> int:
        """Return the 64-bit signed key that identifies this object."""
        if self.type == LockDataType.TABLE:
            return self.fd
        value = (
            (int(self.type) << 63)
            | (self.fd << 31)
            | (self.rid.page_no << 16)
            | self.rid.slot_no
        ) & _MASK64
        return value - (1 << 64) if value >= 1 << 63 else value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LockDataId):
            return NotImplemented
        return self.type == other.type and self.fd == other.fd and self.rid == other.rid

    def __hash__(self) -> int:
        return hash(self.key())


class AbortReason(Enum):
    LOCK_ON_SHIRINKING = 0
    UPGRADE_CONFLICT = 1
    DEADLOCK_PREVENTION = 2


class TransactionAbortException(Exception):
    """Raised when a transaction must be rolled back."""

    def __init__(self, txn_id: int, abort_reason: AbortReason) -> None:
        self.txn_id = txn_id
        self.abort_reason = abort_reason
        super().__init__(self.info())

    def info(self) -> str:
        """Return the human-readable explanation sent back to the client."""
        if self.abort_reason == AbortReason.LOCK_ON_SHIRINKING:
            return (
                f"Transaction {self.txn_id} aborted because it cannot request locks "
                "on SHRINKING phase\n"
            )
        if self.abort_reason == AbortReason.UPGRADE_CONFLICT:
            return (
                f"Transaction {self.txn_id} aborted because another transaction "
                "is waiting for upgrading\n"
            )
        if self.abort_reason == AbortReason.DEADLOCK_PREVENTION:
            return f"Transaction {self.txn_id} aborted for deadlock prevention\n"
        return "Transaction aborted\n"