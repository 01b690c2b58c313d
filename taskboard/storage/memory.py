"""In-process backend with the same transactional contract as PostgreSQL.

Transactions are serialized by one re-entrant lock and work on the live
tables. The first write in a transaction snapshots the tables, and the
snapshot is restored if the block raises; read-only transactions copy
nothing. Ids come from per-table counters that, like database sequences, are
not rolled back.
"""

import copy
import itertools
import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime, timezone

from ..errors import Conflict, NotFound
from ..models import Board, Column, Task, User

TASK_UPDATABLE = ("title", "description", "column_id", "order")


def _now():
    return datetime.now(timezone.utc)


class MemoryStore:
    def __init__(self):
        self._lock = threading.RLock()
        self._tables = {"users": {}, "boards": {}, "columns": {}, "tasks": {}}
        self._ids = {name: itertools.count(1) for name in self._tables}

    @contextmanager
    def transaction(self):
        with self._lock:
            tx = MemoryTransaction(self._tables, self._ids)
            try:
                yield tx
            except BaseException:
                if tx.snapshot is not None:
                    for name, rows in tx.snapshot.items():
                        self._tables[name].clear()
                        self._tables[name].update(rows)
                raise


class MemoryTransaction:
    def __init__(self, tables, ids):
        self.users = tables["users"]
        self.boards = tables["boards"]
        self.columns = tables["columns"]
        self.tasks = tables["tasks"]
        self.snapshot = None
        self._tables = tables
        self._ids = ids

    def _next_id(self, table):
        return next(self._ids[table])

    def _begin_write(self):
        if self.snapshot is None:
            self.snapshot = copy.deepcopy(self._tables)

    # ---- Users ----

    def insert_user(self, email, password_hash, is_guest=False):
        self._begin_write()
        if email is not None and self.find_user_by_email(email) is not None:
            raise Conflict("Email already registered")
        user = User(
            id=self._next_id("users"),
            email=email,
            password_hash=password_hash,
            is_guest=is_guest,
            created_at=_now(),
        )
        self.users[user.id] = user
        return replace(user)

    def get_user(self, user_id):
        user = self.users.get(user_id)
        return replace(user) if user else None

    def find_user_by_email(self, email):
        for user in self.users.values():
            if user.email == email:
                return replace(user)
        return None

    # ---- Boards ----

    def insert_board(self, name, user_id):
        self._begin_write()
        board = Board(id=self._next_id("boards"), name=name, user_id=user_id, created_at=_now())
        self.boards[board.id] = board
        return replace(board)

    def get_board(self, board_id, for_update=False):
        board = self.boards.get(board_id)
        return replace(board) if board else None

    def boards_for_user(self, user_id):
        boards = [b for b in self.boards.values() if b.user_id == user_id]
        boards.sort(key=lambda b: (b.created_at, b.id), reverse=True)
        return [replace(b) for b in boards]

    def delete_board(self, board_id):
        self._begin_write()
        self.boards.pop(board_id, None)

    # ---- Columns ----

    def insert_column(self, board_id, name, order):
        self._begin_write()
        column = Column(
            id=self._next_id("columns"),
            name=name,
            board_id=board_id,
            order=order,
            created_at=_now(),
        )
        self.columns[column.id] = column
        return replace(column)

    def get_column(self, column_id, for_update=False):
        column = self.columns.get(column_id)
        return replace(column) if column else None

    def columns_for_board(self, board_id):
        columns = [c for c in self.columns.values() if c.board_id == board_id]
        columns.sort(key=lambda c: (c.order, c.id))
        return [replace(c) for c in columns]

    def count_columns(self, board_id):
        return sum(1 for c in self.columns.values() if c.board_id == board_id)

    def delete_column(self, column_id):
        self._begin_write()
        self.columns.pop(column_id, None)

    def delete_columns_for_board(self, board_id):
        self._begin_write()
        doomed = [cid for cid, c in self.columns.items() if c.board_id == board_id]
        for cid in doomed:
            del self.columns[cid]
        return len(doomed)

    # ---- Tasks ----

    def insert_task(self, board_id, column_id, user_id, title, description, order):
        self._begin_write()
        if column_id not in self.columns:
            raise NotFound("Column not found")
        task = Task(
            id=self._next_id("tasks"),
            title=title,
            description=description,
            column_id=column_id,
            board_id=board_id,
            user_id=user_id,
            order=order,
            created_at=_now(),
        )
        self.tasks[task.id] = task
        return replace(task)

    def get_task(self, task_id):
        task = self.tasks.get(task_id)
        return replace(task) if task else None

    def tasks_for_board(self, board_id):
        tasks = [t for t in self.tasks.values() if t.board_id == board_id]
        tasks.sort(key=lambda t: (t.order, t.id))
        return [replace(t) for t in tasks]

    def count_tasks(self, column_id):
        return sum(1 for t in self.tasks.values() if t.column_id == column_id)

    def update_task(self, task_id, changes):
        self._begin_write()
        task = self.tasks.get(task_id)
        if task is None:
            return None
        if "column_id" in changes and changes["column_id"] not in self.columns:
            raise NotFound("Column not found")
        for key in TASK_UPDATABLE:
            if key in changes:
                setattr(task, key, changes[key])
        return replace(task)

    def delete_task(self, task_id):
        self._begin_write()
        self.tasks.pop(task_id, None)

    def delete_tasks_for_board(self, board_id):
        self._begin_write()
        doomed = [tid for tid, t in self.tasks.items() if t.board_id == board_id]
        for tid in doomed:
            del self.tasks[tid]
        return len(doomed)

    def delete_tasks_for_column(self, column_id):
        self._begin_write()
        doomed = [tid for tid, t in self.tasks.items() if t.column_id == column_id]
        for tid in doomed:
            del self.tasks[tid]
        return len(doomed)
