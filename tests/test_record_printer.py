import pytest

from rmlite.context import Context
from rmlite.record_printer import RecordPrinter


def test_separator_two_columns():
    ctx = Context()
    RecordPrinter(2).print_separator(ctx)
    assert ctx.text() == "+------------------+------------------+\n"


def test_record_is_right_aligned():
    ctx = Context()
    RecordPrinter(2).print_record(["1", "abc"], ctx)
    assert ctx.text() == "|                1 |              abc |\n"


def test_long_column_is_truncated():
    ctx = Context()
    value = "abcdefghijklmnopqrst"
    RecordPrinter(1).print_record([value], ctx)
    assert ctx.text() == "| " + value[:13] + "..." + " |\n"


def test_record_and_separator_lines_have_equal_width():
    ctx_sep = Context()
    ctx_rec = Context()
    printer = RecordPrinter(3)
    printer.print_separator(ctx_sep)
    printer.print_record(["x", "yy", "a" * 30], ctx_rec)
    assert len(ctx_sep.text()) == len(ctx_rec.text())


def test_record_count_without_ellipsis():
    ctx = Context()
    RecordPrinter.print_record_count(3, ctx)
    assert ctx.text() == "Total record(s): 3\n"


def test_small_buffer_sets_ellipsis():
    ctx = Context(capacity=60)
    printer = RecordPrinter(1)
    printer.print_separator(ctx)
    assert ctx.ellipsis is True
    assert ctx.text() == "+" + "-" * 18
    RecordPrinter.print_record_count(0, ctx)
    assert ctx.text().endswith("... ...\nTotal record(s): 0\n")


def test_output_stays_bounded_with_many_rows():
    ctx = Context()
    printer = RecordPrinter(2)
    printer.print_separator(ctx)
    for i in range(1000):
        printer.print_record([str(i), "row"], ctx)
    printer.print_separator(ctx)
    assert ctx.ellipsis is True
    before = ctx.offset
    assert before < ctx.capacity
    RecordPrinter.print_record_count(1000, ctx)
    assert ctx.text().endswith("... ...\nTotal record(s): 1000\n")
    assert ctx.offset <= ctx.capacity


def test_zero_columns_rejected():
    with pytest.raises(ValueError):
        RecordPrinter(0)


def test_wrong_column_count_rejected():
    ctx = Context()
    with pytest.raises(ValueError):
        RecordPrinter(2).print_record(["only one"], ctx)
    assert ctx.text() == ""