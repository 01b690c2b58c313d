from loguru import logger

from .guard import find_owned_board, owned_board, owned_column, require_user


def list_columns(store, user_id, board_id):
    with store.transaction() as tx:
        if find_owned_board(tx, board_id, user_id) is None:
            return []
        return tx.columns_for_board(board_id)


def create_column(store, user_id, board_id, name):
    """Append a column to the board and return its id.

    The new order is the number of columns on the board right now. After a
    non-last column was removed this can equal a surviving column's order.
    """
    require_user(user_id)
    with store.transaction() as tx:
        # Row lock on the board serializes concurrent appends.
        owned_board(tx, board_id, user_id, for_update=True)
        column = tx.insert_column(board_id, name, tx.count_columns(board_id))
    logger.info("Created column {} on board {} at order {}", column.id, board_id, column.order)
    return column.id


def remove_column(store, user_id, column_id):
    require_user(user_id)
    with store.transaction() as tx:
        column = owned_column(tx, column_id, user_id)
        n_tasks = tx.delete_tasks_for_column(column_id)
        tx.delete_column(column_id)
    logger.info("Removed column {} ({} tasks) from board {}", column_id, n_tasks, column.board_id)
