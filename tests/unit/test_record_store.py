from __future__ import annotations

import pytest

from conftest import FIXED_TRACKING_REF, make_records
from src.errors import EmptyExportError, RecordIndexError
from src.models.manifest_record import ManifestRecord
from src.services.record_store import RecordStore


def _line_numbers(store: RecordStore) -> list[str]:
    return [r.line_number for r in store.records]


def _isbns(store: RecordStore) -> list[str]:
    return [r.isbn for r in store.records]


def test_new_store_is_empty():
    store = RecordStore()
    assert len(store) == 0
    assert store.has_data is False
    assert store.records == ()
    assert store.suggested_filename() is None


def test_replace_all_drops_prior_content():
    store = RecordStore(make_records(4, reference="OLD"))
    store.replace_all(make_records(2, reference="NEW"))
    assert len(store) == 2
    assert {r.reference for r in store.records} == {"NEW"}
    assert store.has_data is True


def test_replace_all_renumbers_input():
    records = make_records(3)
    shuffled = [records[2], records[0], records[1]]
    store = RecordStore()
    store.replace_all(shuffled)
    assert _line_numbers(store) == ["00001", "00002", "00003"]
    assert _isbns(store) == [records[2].isbn, records[0].isbn, records[1].isbn]


@pytest.mark.parametrize("k", [0, 2, 4])
def test_delete_at_renumbers_without_gaps(k):
    records = make_records(5)
    store = RecordStore(records)
    removed = store.delete_at(k)

    assert removed.isbn == records[k].isbn
    assert len(store) == 4
    assert _line_numbers(store) == ["00001", "00002", "00003", "00004"]
    assert records[k].isbn not in _isbns(store)


def test_delete_at_out_of_range_leaves_store_unchanged():
    store = RecordStore(make_records(3))
    before = store.records
    with pytest.raises(RecordIndexError) as e:
        store.delete_at(5)
    assert e.value.index == 5
    assert e.value.length == 3
    assert store.records == before


def test_delete_at_negative_index_rejected():
    store = RecordStore(make_records(3))
    with pytest.raises(IndexError):
        store.delete_at(-1)
    assert len(store) == 3


def test_delete_at_on_empty_store():
    with pytest.raises(RecordIndexError, match="store is empty"):
        RecordStore().delete_at(0)


def test_delete_many_uses_pre_deletion_positions():
    records = make_records(5)
    store = RecordStore(records)
    deleted = store.delete_many({1, 3})

    assert deleted == 2
    assert _isbns(store) == [records[0].isbn, records[2].isbn, records[4].isbn]
    assert _line_numbers(store) == ["00001", "00002", "00003"]


def test_delete_many_accepts_any_iterable_and_duplicates():
    store = RecordStore(make_records(5))
    assert store.delete_many([4, 0, 4]) == 2
    assert _line_numbers(store) == ["00001", "00002", "00003"]


def test_delete_many_empty_selection_is_noop():
    store = RecordStore(make_records(3))
    before = store.records
    assert store.delete_many(set()) == 0
    assert store.records == before


def test_delete_many_out_of_range_deletes_nothing():
    store = RecordStore(make_records(3))
    before = store.records
    with pytest.raises(RecordIndexError):
        store.delete_many({0, 7})
    assert store.records == before


def test_delete_many_all_records():
    store = RecordStore(make_records(3))
    assert store.delete_many(range(3)) == 3
    assert store.has_data is False


def test_clear():
    store = RecordStore(make_records(3))
    store.clear()
    assert len(store) == 0
    assert store.has_data is False


def test_serialize_field_order_no_header():
    store = RecordStore(make_records(2))
    text = store.serialize()
    assert text.split("\n") == [
        f"R1,00001,9780000000000,26112024,DPD,1,1,{FIXED_TRACKING_REF}",
        f"R1,00002,9780000000001,26112024,DPD,2,1,{FIXED_TRACKING_REF}",
    ]
    assert not text.endswith("\n")


def test_serialize_is_idempotent():
    store = RecordStore(make_records(4))
    assert store.serialize() == store.serialize()


def test_serialize_after_delete_reflects_new_numbers():
    store = RecordStore(make_records(3))
    store.delete_at(0)
    lines = store.serialize().split("\n")
    assert [line.split(",")[1] for line in lines] == ["00001", "00002"]


def test_serialize_empty_raises():
    with pytest.raises(EmptyExportError):
        RecordStore().serialize()


def test_serialize_does_not_escape_delimiters():
    rec = ManifestRecord("A,B", "00001", "", "26112024", "DPD", "1", "1", "T")
    assert RecordStore([rec]).serialize() == "A,B,00001,,26112024,DPD,1,1,T"


def test_suggested_filename_uses_first_reference():
    store = RecordStore(make_records(2, reference="ORD-77"))
    assert store.suggested_filename() == "T1.MORD-77.PBS"
    custom = RecordStore(make_records(1, reference="X"), filename_template="{reference}.csv")
    assert custom.suggested_filename() == "X.csv"


def test_records_view_is_read_only():
    store = RecordStore(make_records(2))
    view = store.records
    assert isinstance(view, tuple)
    with pytest.raises(AttributeError):
        view[0].line_number = "00009"


def test_suggested_filename_replaces_path_separators():
    assert RecordStore(make_records(1, reference="PO/77")).suggested_filename() == "T1.MPO_77.PBS"
    assert RecordStore(make_records(1, reference="..\\x")).suggested_filename() == "T1.M.._x.PBS"
    assert RecordStore(make_records(1, reference="../x")).suggested_filename() == "T1.M.._x.PBS"


def test_suggested_filename_ignores_other_braces():
    store = RecordStore(make_records(1, reference="R1"), filename_template="{x}-{reference}.PBS")
    assert store.suggested_filename() == "{x}-R1.PBS"
