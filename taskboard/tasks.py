from loguru import logger

from .errors import NotFound
from .guard import find_owned_board, owned_board, owned_task, require_user


def list_tasks(store, user_id, board_id):
    """All tasks on the board sorted by order.

    Order is only meaningful within a column; callers regroup by column_id.
    """
    with store.transaction() as tx:
        if find_owned_board(tx, board_id, user_id) is None:
            return []
        return tx.tasks_for_board(board_id)


def create_task(store, user_id, board_id, column_id, title, description=None):
    """Append a task to a column and return its id.

    The column is not required to belong to ``board_id``.
    """
    require_user(user_id)
    with store.transaction() as tx:
        owned_board(tx, board_id, user_id, for_update=True)
        # Lock order is board, then column.
        if tx.get_column(column_id, for_update=True) is None:
            raise NotFound("Column not found")
        task = tx.insert_task(
            board_id,
            column_id,
            user_id,
            title,
            description,
            tx.count_tasks(column_id),
        )
    logger.info("Created task {} in column {} at order {}", task.id, column_id, task.order)
    return task.id


def update_task(store, user_id, task_id, title=None, description=None):
    require_user(user_id)
    changes = {}
    if title is not None:
        changes["title"] = title
    if description is not None:
        changes["description"] = description
    with store.transaction() as tx:
        owned_task(tx, task_id, user_id)
        if changes:
            tx.update_task(task_id, changes)
    logger.info("Updated task {} ({})", task_id, ", ".join(changes) or "no changes")


def move_task(store, user_id, task_id, column_id, order):
    """Put a task in ``column_id`` at ``order``.

    Both values are taken as given: sibling orders are not renumbered and the
    column may belong to another board, so ranks in a column can repeat or
    leave gaps.
    """
    require_user(user_id)
    with store.transaction() as tx:
        task = owned_task(tx, task_id, user_id)
        tx.update_task(task_id, {"column_id": column_id, "order": order})
    logger.info(
        "Moved task {} from column {} to column {} at order {}",
        task_id,
        task.column_id,
        column_id,
        order,
    )


def remove_task(store, user_id, task_id):
    require_user(user_id)
    with store.transaction() as tx:
        owned_task(tx, task_id, user_id)
        tx.delete_task(task_id)
    logger.info("Removed task {}", task_id)
