"""Basic identifiers, column types and system-wide constants."""

from __future__ import annotations

import abc
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum

__all__ = [
    "BUFFER_LENGTH",
    "INVALID_FRAME_ID",
    "INVALID_PAGE_ID",
    "INVALID_TXN_ID",
    "INVALID_TIMESTAMP",
    "INVALID_LSN",
    "HEADER_PAGE_ID",
    "PAGE_SIZE",
    "BUFFER_POOL_SIZE",
    "LOG_BUFFER_SIZE",
    "BUCKET_SIZE",
    "LOG_FILE_NAME",
    "REPLACER_TYPE",
    "DB_META_NAME",
    "Rid",
    "ColType",
    "coltype2str",
    "RecScan",
]

BUFFER_LENGTH = 8192

INVALID_FRAME_ID = -1
INVALID_PAGE_ID = -1
INVALID_TXN_ID = -1
INVALID_TIMESTAMP = -1
INVALID_LSN = -1
HEADER_PAGE_ID = 0
PAGE_SIZE = 4096
BUFFER_POOL_SIZE = 65536
LOG_BUFFER_SIZE = 1024 * PAGE_SIZE
BUCKET_SIZE = 50

LOG_FILE_NAME = "db.log"
REPLACER_TYPE = "LRU"
DB_META_NAME = "db.meta"


@dataclass(frozen=True)
class Rid:
    """Record identifier: page number and slot number within the page."""

    page_no: int
    slot_no: int


class ColType(IntEnum):
    TYPE_INT = 0
    TYPE_FLOAT = 1
    TYPE_STRING = 2


_COLTYPE_NAMES = {
    ColType.TYPE_INT: "INT",
    ColType.TYPE_FLOAT: "FLOAT",
    ColType.TYPE_STRING: "STRING",
}


def coltype2str(type: ColType | int) -> str:  # noqa: A002
    """Return the SQL name of a column type; raise ValueError for unknown types."""
    return _COLTYPE_NAMES[ColType(type)]


class RecScan(abc.ABC):
    """A cursor over record identifiers."""

    @abc.abstractmethod
    def next(self) -> None:
        """Advance to the next record."""

    @abc.abstractmethod
    def is_end(self) -> bool:
        """Return True once the scan is exhausted."""

    @abc.abstractmethod
    def rid(self) -> Rid:
        """Return the identifier of the current record."""

    def __iter__(self) -> Iterator[Rid]:
        while not self.is_end():
            yield self.rid()
            self.next()