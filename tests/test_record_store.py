import pytest

from rosterline.services.record_store import (
    InMemoryRecordStore,
    RecordNotFoundError,
    StaleRecordError,
    sort_records,
)


def test_create_assigns_id_and_revision(store):
    record = store.create("shifts", {"staff_member": "staff-1"})

    assert len(record["id"]) == 15
    assert record["created"] == record["updated"]
    assert store.get("shifts", record["id"])["staff_member"] == "staff-1"


def test_get_missing_record(store):
    with pytest.raises(RecordNotFoundError):
        store.get("shifts", "nope")


def test_update_bumps_revision(store):
    record = store.create("shifts", {"status": "scheduled"})
    updated = store.update("shifts", record["id"], {"status": "confirmed"},
                           expected_updated=record["updated"])

    assert updated["status"] == "confirmed"
    assert updated["updated"] != record["updated"]
    assert updated["created"] == record["created"]


def test_update_with_stale_revision_is_refused(store):
    record = store.create("shifts", {"status": "scheduled"})
    store.update("shifts", record["id"], {"status": "confirmed"})

    with pytest.raises(StaleRecordError):
        store.update("shifts", record["id"], {"status": "cancelled"},
                     expected_updated=record["updated"])
    assert store.get("shifts", record["id"])["status"] == "confirmed"


def test_update_cannot_overwrite_bookkeeping_fields(store):
    record = store.create("shifts", {"status": "scheduled"})
    updated = store.update("shifts", record["id"], {"id": "other", "created": "x"})
    assert updated["id"] == record["id"]
    assert updated["created"] == record["created"]


def test_list_filters(store):
    store.create("shifts", {"staff_member": "staff-1", "break_duration": 30})
    store.create("shifts", {"staff_member": "staff-2", "break_duration": 60})

    assert len(store.list("shifts")) == 2
    assert len(store.list("shifts", {"staff_member": "staff-2"})) == 1
    assert len(store.list("shifts", {"break_duration": "30"})) == 1
    assert len(store.list("shifts", lambda r: r["break_duration"] > 0)) == 2
    assert store.list("staff") == []


def test_list_returns_copies(store):
    record = store.create("shifts", {"status": "scheduled"})
    store.list("shifts")[0]["status"] = "tampered"
    assert store.get("shifts", record["id"])["status"] == "scheduled"


def test_sort_records():
    records = [
        {"date": "2024-01-16", "start": "09:00"},
        {"date": "2024-01-15", "start": "17:00"},
        {"date": "2024-01-15", "start": "09:00"},
    ]
    assert sort_records(records, "date,start") == [records[2], records[1], records[0]]
    assert sort_records(records, "-date,start") == [records[0], records[2], records[1]]
    assert sort_records(records, None) == records


def test_separate_stores_do_not_share_data():
    first = InMemoryRecordStore()
    first.create("shifts", {})
    assert InMemoryRecordStore().list("shifts") == []


def test_sort_records_compares_numbers_as_numbers():
    records = [{"break_duration": 10}, {"break_duration": 9}, {"break_duration": None}, {}]

    ascending = sort_records(records, "break_duration")
    assert [r.get("break_duration") for r in ascending] == [9, 10, None, None]

    descending = sort_records(records, "-break_duration")
    assert [r.get("break_duration") for r in descending] == [10, 9, None, None]
