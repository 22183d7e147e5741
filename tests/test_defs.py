import pytest

from rmlite.defs import ColType, RecScan, Rid, coltype2str


class ListScan(RecScan):
    def __init__(self, rids):
        self._rids = list(rids)
        self._pos = 0

    def next(self):
        self._pos += 1

    def is_end(self):
        return self._pos >= len(self._rids)

    def rid(self):
        return self._rids[self._pos]


def test_rid_equality():
    assert Rid(1, 2) == Rid(1, 2)
    assert not (Rid(1, 2) == Rid(2, 1))
    assert Rid(1, 2) != Rid(1, 3)


def test_rid_is_hashable():
    rids = {Rid(1, 2), Rid(1, 2), Rid(3, 4)}
    assert len(rids) == 2


def test_rid_is_immutable():
    rid = Rid(0, 0)
    with pytest.raises(AttributeError):
        rid.page_no = 5
    assert rid.page_no == 0
    assert rid == Rid(0, 0)


@pytest.mark.parametrize(
    "col_type,name",
    [(ColType.TYPE_INT, "INT"), (ColType.TYPE_FLOAT, "FLOAT"), (ColType.TYPE_STRING, "STRING")],
)
def test_coltype2str(col_type, name):
    assert coltype2str(col_type) == name
    assert coltype2str(int(col_type)) == name


def test_coltype2str_rejects_unknown():
    with pytest.raises(ValueError):
        coltype2str(7)


def test_rec_scan_is_abstract():
    with pytest.raises(TypeError):
        RecScan()


def test_rec_scan_iteration_yields_all_rids():
    rids = [Rid(1, 0), Rid(1, 1), Rid(2, 0)]
    assert list(ListScan(rids)) == rids


def test_rec_scan_manual_protocol():
    scan = ListScan([Rid(5, 6)])
    assert not scan.is_end()
    assert scan.rid() == Rid(5, 6)
    scan.next()
    assert scan.is_end()
    assert list(scan) == []