from loguru import logger

from .guard import find_owned_board, owned_board, require_user
from .models import DEFAULT_COLUMNS


def list_boards(store, user_id):
    """Boards owned by the caller, newest first. Anonymous callers get []."""
    if user_id is None:
        return []
    with store.transaction() as tx:
        return tx.boards_for_user(user_id)


def get_board(store, user_id, board_id):
    with store.transaction() as tx:
        return find_owned_board(tx, board_id, user_id)


def create_board(store, user_id, name):
    """Create a board seeded with the default BACKLOG / IN PROGRESS / DONE columns.

    Returns the new board id.
    """
    require_user(user_id)
    with store.transaction() as tx:
        board = tx.insert_board(name, user_id)
        for order, column_name in enumerate(DEFAULT_COLUMNS):
            tx.insert_column(board.id, column_name, order)
    logger.info("Created board {} for user {}", board.id, user_id)
    return board.id


def remove_board(store, user_id, board_id):
    """Delete a board with its tasks and columns, children first, in one transaction.

    Tasks sitting in the board's columns are removed too, even when they were
    moved there from another board.
    """
    require_user(user_id)
    with store.transaction() as tx:
        owned_board(tx, board_id, user_id, for_update=True)
        column_ids = [c.id for c in tx.columns_for_board(board_id)]
        n_tasks = tx.delete_tasks_for_board(board_id)
        for column_id in column_ids:
            n_tasks += tx.delete_tasks_for_column(column_id)
        n_columns = tx.delete_columns_for_board(board_id)
        tx.delete_board(board_id)
    logger.info(
        "Removed board {} ({} columns, {} tasks) for user {}",
        board_id,
        n_columns,
        n_tasks,
        user_id,
    )
