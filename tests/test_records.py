from datetime import date, datetime

import pytest

from planboard.records import TaskRecord, TaskRecordings


def test_record_path_is_mutable():
    record = TaskRecord("a.md")
    record.task_file_path = "b.md"
    assert record.task_file_path == "b.md"


@pytest.mark.parametrize("key", ["work", 202405, date(2024, 5, 1)])
def test_register_and_get(key):
    recordings = TaskRecordings()
    record = TaskRecord("plan.md")
    recordings.register(key, record)
    assert recordings.get(key) is record


def test_unknown_key_gives_none():
    recordings = TaskRecordings()
    assert recordings.get("work") is None
    assert recordings.get(202405) is None
    assert recordings.get(date(2024, 5, 1)) is None


def test_key_kinds_are_kept_apart():
    recordings = TaskRecordings()
    recordings.register("202405", TaskRecord("field.md"))
    recordings.register(202405, TaskRecord("month.md"))
    assert recordings.get("202405").task_file_path == "field.md"
    assert recordings.get(202405).task_file_path == "month.md"


def test_register_replaces():
    recordings = TaskRecordings()
    recordings.register("work", TaskRecord("old.md"))
    recordings.register("work", TaskRecord("new.md"))
    assert recordings.get("work").task_file_path == "new.md"


def test_remove_reports_presence():
    recordings = TaskRecordings()
    day = date(2024, 5, 1)
    recordings.register(day, TaskRecord("day.md"))
    assert recordings.remove(day) is True
    assert recordings.get(day) is None
    assert recordings.remove(day) is False


def test_datetime_key_maps_to_its_date():
    recordings = TaskRecordings()
    recordings.register(date(2024, 5, 1), TaskRecord("day.md"))
    assert recordings.get(datetime(2024, 5, 1, 9, 30)).task_file_path == "day.md"


@pytest.mark.parametrize("key", [1.5, True, None, ("a",)])
def test_unsupported_key_raises(key):
    with pytest.raises(TypeError):
        TaskRecordings().register(key, TaskRecord("x.md"))