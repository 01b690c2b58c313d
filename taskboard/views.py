from .guard import find_owned_board


def board_view(store, user_id, board_id):
    """Board with its columns in order, each holding its tasks in order.

    Returns None unless the caller owns the board. Tasks pointing at a column
    outside the board are left out.
    """
    with store.transaction() as tx:
        board = find_owned_board(tx, board_id, user_id)
        if board is None:
            return None
        columns = tx.columns_for_board(board_id)
        tasks = tx.tasks_for_board(board_id)

    lanes = {column.id: dict(column.to_dict(), tasks=[]) for column in columns}
    for task in tasks:
        lane = lanes.get(task.column_id)
        if lane is not None:
            lane["tasks"].append(task.to_dict())
    return {
        "board": board.to_dict(),
        "columns": [lanes[column.id] for column in columns],
    }
