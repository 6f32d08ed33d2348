import sqlite3
from datetime import date, datetime

import pytest

from planboard.persistence import SqliteTaskStore, TaskStore


@pytest.fixture
def store(tmp_path):
    s = SqliteTaskStore(tmp_path / "todo.db")
    assert s.init() is True
    yield s
    s.deinit()


def test_task_store_is_abstract():
    with pytest.raises(TypeError):
        TaskStore()


def test_init_creates_tables(tmp_path):
    path = tmp_path / "todo.db"
    s = SqliteTaskStore(path)
    assert s.init() is True
    s.deinit()
    with sqlite3.connect(path) as conn:
        names = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert {"fields", "months", "dates"} <= names


def test_init_fails_for_unreachable_path(tmp_path):
    s = SqliteTaskStore(tmp_path / "missing" / "dir" / "todo.db")
    assert s.init() is False
    assert s.is_open is False


def test_field_round_trip(store):
    assert store.add_field("work", "/plans/work.md") is True
    assert store.get_field_path("work") == "/plans/work.md"
    assert store.get_all_fields() == {"work": "/plans/work.md"}


def test_add_field_replaces(store):
    store.add_field("work", "/a.md")
    store.add_field("work", "/b.md")
    assert store.get_field_path("work") == "/b.md"
    assert store.all_fields() == ["work"]


def test_update_field_only_existing(store):
    assert store.update_field("ghost", "/x.md") is False
    store.add_field("work", "/a.md")
    assert store.update_field("work", "/c.md") is True
    assert store.get_field_path("work") == "/c.md"


def test_remove_field_succeeds_even_when_missing(store):
    assert store.remove_field("ghost") is True
    store.add_field("work", "/a.md")
    assert store.remove_field("work") is True
    assert store.get_field_path("work") is None


def test_all_fields_sorted(store):
    for name in ["zeta", "alpha", "mid"]:
        store.add_field(name, f"/{name}.md")
    assert store.all_fields() == ["alpha", "mid", "zeta"]


def test_month_round_trip(store):
    assert store.add_month(202405, "/m.md") is True
    assert store.get_month_path(202405) == "/m.md"
    assert store.month_exists(202405) is True
    assert store.month_exists(202406) is False
    assert store.get_all_months() == {202405: "/m.md"}


def test_update_and_remove_month(store):
    assert store.update_month(202401, "/x.md") is False
    store.add_month(202401, "/a.md")
    assert store.update_month(202401, "/b.md") is True
    assert store.get_month_path(202401) == "/b.md"
    assert store.remove_month(202401) is True
    assert store.get_month_path(202401) is None


def test_all_months_sorted_and_clear(store):
    for m in [202412, 202401, 202406]:
        store.add_month(m, f"/{m}.md")
    assert store.all_months() == [202401, 202406, 202412]
    assert store.clear_months() is True
    assert store.all_months() == []


def test_date_round_trip(store):
    day = date(2024, 3, 9)
    assert store.add_date(day, "/d.md") is True
    assert store.get_date_path(day) == "/d.md"
    assert store.get_all_dates() == {day: "/d.md"}


def test_dates_stored_as_iso_text(tmp_path):
    path = tmp_path / "todo.db"
    with SqliteTaskStore(path) as s:
        s.add_date(date(2024, 3, 9), "/d.md")
    with sqlite3.connect(path) as conn:
        rows = conn.execute("SELECT date FROM dates").fetchall()
    assert rows == [("2024-03-09",)]


def test_datetime_key_treated_as_date(store):
    store.add_date(datetime(2024, 1, 2, 15, 30), "/d.md")
    assert store.get_date_path(date(2024, 1, 2)) == "/d.md"


def test_update_and_remove_date(store):
    day = date(2024, 1, 1)
    assert store.update_date(day, "/x.md") is False
    store.add_date(day, "/a.md")
    assert store.update_date(day, "/b.md") is True
    assert store.get_date_path(day) == "/b.md"
    assert store.remove_date(day) is True
    assert store.get_date_path(day) is None


def test_all_dates_sorted(store):
    days = [date(2024, 5, 1), date(2023, 12, 31), date(2024, 1, 15)]
    for d in days:
        store.add_date(d, "/p.md")
    assert store.all_dates() == sorted(days)


def test_invalid_date_rows_skipped(tmp_path):
    path = tmp_path / "todo.db"
    with SqliteTaskStore(path) as s:
        s.add_date(date(2024, 2, 2), "/ok.md")
    with sqlite3.connect(path) as conn:
        conn.execute("INSERT INTO dates(date, path) VALUES('not-a-date', '/bad.md')")
    with SqliteTaskStore(path) as s:
        assert s.all_dates() == [date(2024, 2, 2)]
        assert s.get_all_dates() == {date(2024, 2, 2): "/ok.md"}


def test_reads_on_closed_store_are_empty(tmp_path):
    path = tmp_path / "todo.db"
    s = SqliteTaskStore(path)
    s.init()
    s.add_field("work", "/a.md")
    s.add_month(202401, "/m.md")
    assert s.deinit() is True
    assert s.get_field_path("work") is None
    assert s.get_all_fields() == {}
    assert s.all_fields() == []
    assert s.month_exists(202401) is False
    assert s.all_months() == []


def test_write_reopens_closed_store(tmp_path):
    s = SqliteTaskStore(tmp_path / "todo.db")
    s.init()
    s.deinit()
    assert s.add_field("work", "/a.md") is True
    assert s.is_open is True
    assert s.get_field_path("work") == "/a.md"
    s.deinit()


def test_data_persists_across_instances(tmp_path):
    path = tmp_path / "todo.db"
    with SqliteTaskStore(path) as s:
        s.add_field("study", "/s.md")
        s.add_month(202409, "/m.md")
    with SqliteTaskStore(path) as s:
        assert s.get_all_fields() == {"study": "/s.md"}
        assert s.get_all_months() == {202409: "/m.md"}
    assert s.is_open is False