"""Renders result rows as a bounded ASCII table into a context."""

from __future__ import annotations

from collections.abc import Sequence

from rmlite.context import Context

__all__ = ["RECORD_COUNT_LENGTH", "RecordPrinter"]

# Space kept free at the end of the buffer for the record count line.
RECORD_COUNT_LENGTH = 40


def _write(context: Context, text: str, *, mark_ellipsis: bool = True) -> None:
    fits = context.offset + RECORD_COUNT_LENGTH + len(text) < context.capacity
    if not context.ellipsis and fits:
        context.emit(text)
    elif mark_ellipsis:
        context.ellipsis = True


class RecordPrinter:
    """Formats rows of ``num_cols`` columns, each 16 characters wide."""

    COL_WIDTH = 16

    def __init__(self, num_cols: int) -> None:
        if num_cols <= 0:
            raise ValueError("a table needs at least one column")
        self.num_cols = num_cols

    def print_separator(self, context: Context) -> None:
        for _ in range(self.num_cols):
            _write(context, "+" + "-" * (self.COL_WIDTH + 2))
        _write(context, "+\n")

    def print_record(self, rec_str: Sequence[str], context: Context) -> None:
        if len(rec_str) != self.num_cols:
            raise ValueError(f"expected {self.num_cols} columns, got {len(rec_str)}")
        for col in rec_str:
            if len(col) > self.COL_WIDTH:
                col = col[: self.COL_WIDTH - 3] + "..."
            _write(context, f"| {col:>{self.COL_WIDTH}} ")
        _write(context, "|\n", mark_ellipsis=False)

    @staticmethod
    def print_record_count(num_rec: int, context: Context) -> None:
        text = "... ...\n" if context.ellipsis else ""
        text += f"Total record(s): {num_rec}\n"
        context.emit(text)