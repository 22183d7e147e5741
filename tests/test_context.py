from rmlite.context import Context
from rmlite.defs import BUFFER_LENGTH


def test_new_context_is_empty():
    ctx = Context()
    assert ctx.text() == ""
    assert ctx.offset == 0
    assert ctx.ellipsis is False
    assert ctx.capacity == BUFFER_LENGTH


def test_emit_appends_and_advances_offset():
    ctx = Context()
    ctx.emit("abc")
    ctx.emit("de\n")
    assert ctx.text() == "abcde\n"
    assert ctx.offset == len("abcde\n")


def test_managers_are_kept():
    lock_mgr, log_mgr, txn = object(), object(), object()
    ctx = Context(lock_mgr, log_mgr, txn, capacity=100)
    assert ctx.lock_mgr is lock_mgr
    assert ctx.log_mgr is log_mgr
    assert ctx.txn is txn
    assert ctx.capacity == 100