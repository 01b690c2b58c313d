"""Task operations: append order, moves, edits and owner-only mutations."""

import pytest

from taskboard import boards, columns, tasks
from taskboard.errors import NotFound, Unauthenticated


@pytest.fixture
def board_id(store, alice):
    return boards.create_board(store, alice, "Sprint")


@pytest.fixture
def lanes(store, alice, board_id):
    """Default columns keyed by name."""
    return {c.name: c.id for c in columns.list_columns(store, alice, board_id)}


def by_id(store, user_id, board_id):
    return {t.id: t for t in tasks.list_tasks(store, user_id, board_id)}


def test_create_appends_at_count(store, alice, board_id, lanes):
    first = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "One")
    second = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "Two")
    other = tasks.create_task(store, alice, board_id, lanes["DONE"], "Elsewhere")

    found = by_id(store, alice, board_id)
    assert found[first].order == 0
    assert found[second].order == 1
    assert found[other].order == 0


def test_create_records_owner_and_description(store, alice, board_id, lanes):
    task_id = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "Fix bug", "Stack trace attached")

    task = by_id(store, alice, board_id)[task_id]
    assert task.user_id == alice
    assert task.board_id == board_id
    assert task.column_id == lanes["BACKLOG"]
    assert task.description == "Stack trace attached"


def test_description_is_optional(store, alice, board_id, lanes):
    task_id = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "Fix bug")

    assert by_id(store, alice, board_id)[task_id].description is None


def test_create_on_foreign_board_is_not_found(store, bob, board_id, lanes):
    with pytest.raises(NotFound):
        tasks.create_task(store, bob, board_id, lanes["BACKLOG"], "Sneaky")


def test_create_in_missing_column_is_not_found(store, alice, board_id, lanes):
    with pytest.raises(NotFound) as exc:
        tasks.create_task(store, alice, board_id, max(lanes.values()) + 1000, "Lost")
    assert exc.value.message == "Column not found"
    assert tasks.list_tasks(store, alice, board_id) == []


def test_create_requires_identity(store, board_id, lanes):
    with pytest.raises(Unauthenticated):
        tasks.create_task(store, None, board_id, lanes["BACKLOG"], "Anon")


def test_list_foreign_board_is_empty(store, alice, bob, board_id, lanes):
    tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "Private")

    assert tasks.list_tasks(store, bob, board_id) == []
    assert tasks.list_tasks(store, None, board_id) == []


def test_update_changes_only_supplied_fields(store, alice, board_id, lanes):
    task_id = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "Draft", "Notes")

    tasks.update_task(store, alice, task_id, title="Final")
    task = by_id(store, alice, board_id)[task_id]
    assert (task.title, task.description) == ("Final", "Notes")

    tasks.update_task(store, alice, task_id, description="Rewritten")
    task = by_id(store, alice, board_id)[task_id]
    assert (task.title, task.description) == ("Final", "Rewritten")


def test_update_with_no_fields_is_a_no_op(store, alice, board_id, lanes):
    task_id = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "Same")

    tasks.update_task(store, alice, task_id)

    assert by_id(store, alice, board_id)[task_id].title == "Same"


def test_move_overwrites_column_and_order(store, alice, board_id, lanes):
    task_id = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "Fix bug")

    tasks.move_task(store, alice, task_id, lanes["DONE"], 7)

    task = by_id(store, alice, board_id)[task_id]
    assert task.column_id == lanes["DONE"]
    assert task.order == 7


def test_move_does_not_renumber_siblings(store, alice, board_id, lanes):
    a = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "A")
    b = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "B")

    # Both end up at order 0 in the same column.
    tasks.move_task(store, alice, b, lanes["BACKLOG"], 0)

    found = by_id(store, alice, board_id)
    assert found[a].order == 0
    assert found[b].order == 0


def test_move_to_missing_column_is_not_found(store, alice, board_id, lanes):
    task_id = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "Fix bug")

    with pytest.raises(NotFound):
        tasks.move_task(store, alice, task_id, max(lanes.values()) + 1000, 0)
    assert by_id(store, alice, board_id)[task_id].column_id == lanes["BACKLOG"]


def test_foreign_task_mutations_are_not_found(store, alice, bob, board_id, lanes):
    task_id = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "Mine")

    with pytest.raises(NotFound):
        tasks.update_task(store, bob, task_id, title="Theirs")
    with pytest.raises(NotFound):
        tasks.move_task(store, bob, task_id, lanes["DONE"], 0)
    with pytest.raises(NotFound):
        tasks.remove_task(store, bob, task_id)

    task = by_id(store, alice, board_id)[task_id]
    assert (task.title, task.column_id) == ("Mine", lanes["BACKLOG"])


def test_anonymous_mutations_are_unauthenticated(store, alice, board_id, lanes):
    task_id = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "Mine")

    with pytest.raises(Unauthenticated):
        tasks.update_task(store, None, task_id, title="x")
    with pytest.raises(Unauthenticated):
        tasks.move_task(store, None, task_id, lanes["DONE"], 0)
    with pytest.raises(Unauthenticated):
        tasks.remove_task(store, None, task_id)


def test_remove_is_not_idempotent(store, alice, board_id, lanes):
    task_id = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "Once")
    tasks.remove_task(store, alice, task_id)

    assert tasks.list_tasks(store, alice, board_id) == []
    with pytest.raises(NotFound):
        tasks.remove_task(store, alice, task_id)


def test_sprint_scenario(store, alice):
    board_id = boards.create_board(store, alice, "Sprint")
    lanes = {c.name: c.id for c in columns.list_columns(store, alice, board_id)}
    assert list(lanes) == ["BACKLOG", "IN PROGRESS", "DONE"]

    fix = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "Fix bug")
    docs = tasks.create_task(store, alice, board_id, lanes["BACKLOG"], "Write docs")
    found = by_id(store, alice, board_id)
    assert found[fix].order == 0
    assert found[docs].order == 1

    tasks.move_task(store, alice, fix, lanes["IN PROGRESS"], 0)

    listed = tasks.list_tasks(store, alice, board_id)
    in_progress = [(t.title, t.order) for t in listed if t.column_id == lanes["IN PROGRESS"]]
    backlog = [(t.title, t.order) for t in listed if t.column_id == lanes["BACKLOG"]]
    assert in_progress == [("Fix bug", 0)]
    assert backlog == [("Write docs", 1)]
