# tests/test_task_store.py

from __future__ import annotations

import json
import os
from datetime import date
from pathlib import Path

import pytest

from taskkeeper.errors import LoadFailure, SaveFailure, TaskNotFoundError
from taskkeeper.tasks.task_models import Task, TaskSize, TaskStatus, set_status
from taskkeeper.tasks.task_store import LoadStatus, TaskStore


def test_missing_file_loads_empty_without_error(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    store = TaskStore(path)

    assert store.list_all() == []
    assert store.load_status == LoadStatus.MISSING
    assert store.last_load_error is None
    assert not path.exists()


def test_add_appends_in_order_and_persists(tmp_path: Path, make_task) -> None:
    path = tmp_path / "tasks.json"
    store = TaskStore(path)
    a, b = make_task("A"), make_task("B")

    assert store.add_task(a) is True
    assert path.exists()
    assert store.add_task(b) is True

    assert store.list_all() == [a, b]
    assert TaskStore(path).list_all() == [a, b]


def test_duplicates_are_allowed(store: TaskStore, make_task) -> None:
    store.add_task(make_task("same"))
    store.add_task(make_task("same"))

    assert len(store.list_all()) == 2


def test_list_in_progress_sorted_by_due_date_and_stable(store: TaskStore, make_task) -> None:
    late = make_task("late", due=date(2024, 3, 1), status=TaskStatus.IN_PROGRESS)
    early1 = make_task("early1", due=date(2024, 1, 5), status=TaskStatus.IN_PROGRESS)
    other = make_task("other", due=date(2024, 1, 1), status=TaskStatus.NOT_STARTED)
    early2 = make_task("early2", due=date(2024, 1, 5), status=TaskStatus.IN_PROGRESS)
    for t in (late, early1, other, early2):
        store.add_task(t)

    assert [t.name for t in store.list_in_progress()] == ["early1", "early2", "late"]


def test_list_completed_sorted_by_due_date_and_stable(store: TaskStore, make_task) -> None:
    b = make_task("b", due=date(2024, 2, 2), status=TaskStatus.DONE, completed=date(2024, 1, 1))
    a = make_task("a", due=date(2024, 2, 1), status=TaskStatus.DONE, completed=date(2024, 1, 3))
    c = make_task("c", due=date(2024, 2, 2), status=TaskStatus.DONE, completed=date(2024, 1, 2))
    wip = make_task("wip", due=date(2024, 1, 1), status=TaskStatus.IN_PROGRESS)
    for t in (b, a, wip, c):
        store.add_task(t)

    done = store.list_completed()

    assert [t.name for t in done] == ["a", "b", "c"]
    assert all(t.completion_date is not None for t in done)


def test_list_created_after_is_strict_and_keeps_insertion_order(store: TaskStore, make_task) -> None:
    cutoff = date(2024, 1, 10)
    store.add_task(make_task("later2", created=date(2024, 1, 20)))
    store.add_task(make_task("same_day", created=cutoff))
    store.add_task(make_task("before", created=date(2024, 1, 9)))
    store.add_task(make_task("later1", created=date(2024, 1, 11)))

    assert [t.name for t in store.list_created_after(cutoff)] == ["later2", "later1"]


def test_remove_drops_task_and_persists(tmp_path: Path, make_task) -> None:
    path = tmp_path / "tasks.json"
    store = TaskStore(path)
    a, b, c = make_task("A"), make_task("B"), make_task("C")
    for t in (a, b, c):
        store.add_task(t)

    assert store.remove_task(b) is True

    assert store.list_all() == [a, c]
    assert b not in TaskStore(path).list_all()
    assert len(TaskStore(path)) == 2


def test_remove_prefers_the_identical_duplicate(store: TaskStore, make_task) -> None:
    first, second = make_task("dup"), make_task("dup")
    store.add_task(first)
    store.add_task(second)

    store.remove_task(second)

    remaining = store.list_all()
    assert len(remaining) == 1
    assert remaining[0] is first


def test_remove_missing_task_is_a_noop(tmp_path: Path, make_task) -> None:
    path = tmp_path / "tasks.json"
    store = TaskStore(path)
    store.add_task(make_task("kept"))
    before = path.read_text("utf-8")
    os.utime(path, (0, 0))

    with pytest.raises(TaskNotFoundError):
        store.remove_task(make_task("stranger"))

    assert [t.name for t in store.list_all()] == ["kept"]
    assert path.read_text("utf-8") == before
    assert path.stat().st_mtime == 0


def test_replace_task_swaps_in_place_and_persists(tmp_path: Path, make_task) -> None:
    path = tmp_path / "tasks.json"
    store = TaskStore(path)
    a = make_task("A", status=TaskStatus.IN_PROGRESS)
    b = make_task("B")
    store.add_task(a)
    store.add_task(b)

    done = set_status(a, TaskStatus.DONE, today=date(2024, 1, 7))
    assert store.replace_task(a, done) is True

    assert store.list_all() == [done, b]
    assert TaskStore(path).list_completed() == [done]


def test_replace_missing_task_raises(store: TaskStore, make_task) -> None:
    with pytest.raises(TaskNotFoundError):
        store.replace_task(make_task("ghost"), make_task("new"))


def test_round_trip_preserves_every_field(tmp_path: Path, make_task) -> None:
    path = tmp_path / "tasks.json"
    tasks = [
        make_task("a", subject="Math", due=date(2024, 1, 10), size=TaskSize.SMALL),
        make_task(
            "b",
            subject="CS",
            due=date(2024, 1, 5),
            status=TaskStatus.DONE,
            size=TaskSize.LARGE,
            completed=date(2024, 1, 4),
        ),
        make_task("c ünïcode", subject="", status=TaskStatus.IN_PROGRESS, created=date(2023, 5, 6)),
    ]
    store = TaskStore(path, autoload=False)

    assert store.save(tasks) is True

    reloaded = TaskStore(path)
    assert reloaded.load_status == LoadStatus.LOADED
    assert reloaded.list_all() == tasks
    assert reloaded.load() == tasks


def test_file_format_is_versioned_json(tmp_path: Path, make_task) -> None:
    path = tmp_path / "tasks.json"
    store = TaskStore(path)
    store.add_task(make_task("a", status=TaskStatus.DONE, completed=date(2024, 2, 1)))

    doc = json.loads(path.read_text("utf-8"))

    assert doc["version"] == 1
    assert doc["tasks"][0]["status"] == "done"
    assert doc["tasks"][0]["completion_date"] == "2024-02-01"
    assert doc["tasks"][0]["due_date"] == "2024-01-10"


@pytest.mark.parametrize(
    "content",
    [
        b"\x00\x01garbage\xff",
        b'{"version": 1, "tasks": [{"name": "trunc',
        b"[]",
        b"[" * 100000,
        b'{"version": 99, "tasks": []}',
        b'{"version": 1, "tasks": [{"name": "a"}]}',
        b'{"version": 1, "tasks": [{"name": "a", "subject": "s", "due_date": "2024-01-01",'
        b' "creation_date": "2024-01-01", "completion_date": null, "status": "weird", "size": "small"}]}',
        b'{"version": 1, "tasks": [{"name": "a", "subject": "s", "due_date": "2024-01-01",'
        b' "creation_date": "2024-01-01", "completion_date": null, "status": "done", "size": "small"}]}',
    ],
)
def test_corrupt_file_loads_empty_and_is_left_untouched(tmp_path: Path, content: bytes) -> None:
    path = tmp_path / "tasks.json"
    path.write_bytes(content)

    store = TaskStore(path)

    assert store.list_all() == []
    assert store.load_status == LoadStatus.FAILED
    assert isinstance(store.last_load_error, LoadFailure)
    assert store.last_load_error.path == path
    assert path.read_bytes() == content


def test_save_after_corrupt_load_overwrites_file(tmp_path: Path, make_task) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("not json", "utf-8")
    store = TaskStore(path)

    store.add_task(make_task("fresh"))

    assert [t.name for t in TaskStore(path).list_all()] == ["fresh"]


def test_save_failure_is_reported_and_memory_kept(tmp_path: Path, make_task) -> None:
    # Parent "directory" is a regular file, so the write fails.
    blocker = tmp_path / "blocker"
    blocker.write_text("", "utf-8")
    store = TaskStore(blocker / "tasks.json")
    task = make_task("unsaved")

    assert store.add_task(task) is False

    assert store.list_all() == [task]
    assert isinstance(store.last_save_error, SaveFailure)


def test_successful_save_clears_previous_save_error(tmp_path: Path, make_task) -> None:
    store = TaskStore(tmp_path / "tasks.json")
    store.last_save_error = SaveFailure(store.path, "disk full")

    store.add_task(make_task())

    assert store.last_save_error is None


def test_save_leaves_no_temp_file(tmp_path: Path, make_task) -> None:
    store = TaskStore(tmp_path / "tasks.json")
    store.add_task(make_task())

    assert sorted(p.name for p in tmp_path.iterdir()) == ["tasks.json"]


def test_scenario_in_progress_then_done(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.json")
    a = Task(
        name="A",
        subject="Math",
        due_date=date(2024, 1, 10),
        status=TaskStatus.NOT_STARTED,
        size=TaskSize.SMALL,
    )
    b = Task(
        name="B",
        subject="CS",
        due_date=date(2024, 1, 5),
        status=TaskStatus.IN_PROGRESS,
        size=TaskSize.LARGE,
    )
    store.add_task(a)
    store.add_task(b)

    assert store.list_in_progress() == [b]

    changed_on = date.today()
    b_done = set_status(b, TaskStatus.DONE)
    store.replace_task(b, b_done)

    completed = store.list_completed()
    assert completed == [b_done]
    assert completed[0].completion_date == changed_on
    assert store.list_in_progress() == []
