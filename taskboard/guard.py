"""Authorization guard.

Writes call :func:`require_user` first so an anonymous caller fails with
Unauthenticated. Reads use :func:`find_owned_board` and degrade to empty
results. Missing and foreign entities raise the same NotFound.
"""

from .errors import NotFound, Unauthenticated


def require_user(user_id):
    if user_id is None:
        raise Unauthenticated()
    return user_id


def find_owned_board(tx, board_id, user_id, for_update=False):
    """The board if ``user_id`` owns it, else None."""
    if user_id is None:
        return None
    board = tx.get_board(board_id, for_update=for_update)
    if board is None or board.user_id != user_id:
        return None
    return board


def owned_board(tx, board_id, user_id, for_update=False):
    board = find_owned_board(tx, board_id, user_id, for_update=for_update)
    if board is None:
        raise NotFound("Board not found")
    return board


def owned_column(tx, column_id, user_id):
    """A column whose board belongs to ``user_id``.

    Locks the board row, then the column row.
    """
    column = tx.get_column(column_id)
    if column is None or find_owned_board(tx, column.board_id, user_id, for_update=True) is None:
        raise NotFound("Column not found")
    column = tx.get_column(column_id, for_update=True)
    if column is None:
        raise NotFound("Column not found")
    return column


def owned_task(tx, task_id, user_id):
    """A task created by ``user_id``; board ownership is not consulted."""
    task = tx.get_task(task_id)
    if task is None or task.user_id != user_id:
        raise NotFound("Task not found")
    return task
