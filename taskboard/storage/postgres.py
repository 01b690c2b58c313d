"""PostgreSQL backend. One connection per transaction, schema from ``migrations/``."""

from contextlib import contextmanager

import psycopg2
import psycopg2.errors
import psycopg2.extras

from ..errors import Conflict, NotFound
from ..models import Board, Column, Task, User

USER_FIELDS = "id, email, password_hash, is_guest, created_at"
BOARD_FIELDS = "id, name, user_id, created_at"
COLUMN_FIELDS = 'id, name, board_id, "order", created_at'
TASK_FIELDS = 'id, title, description, column_id, board_id, user_id, "order", created_at'

TASK_UPDATABLE = ("title", "description", "column_id", "order")


class PostgresStore:
    def __init__(self, connection_params):
        self.connection_params = connection_params

    def connect(self):
        return psycopg2.connect(**self.connection_params)

    @contextmanager
    def transaction(self):
        conn = self.connect()
        cur = conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor)
        try:
            yield PostgresTransaction(cur)
            conn.commit()
        except BaseException:
            conn.rollback()
            raise
        finally:
            cur.close()
            conn.close()


class PostgresTransaction:
    def __init__(self, cur):
        self.cur = cur

    def _one(self, cls, sql, params):
        self.cur.execute(sql, params)
        row = self.cur.fetchone()
        return cls(**row) if row else None

    def _all(self, cls, sql, params):
        self.cur.execute(sql, params)
        return [cls(**row) for row in self.cur.fetchall()]

    # ---- Users ----

    def insert_user(self, email, password_hash, is_guest=False):
        try:
            return self._one(
                User,
                f"INSERT INTO users (email, password_hash, is_guest) VALUES (%s, %s, %s) "
                f"RETURNING {USER_FIELDS}",
                (email, password_hash, is_guest),
            )
        except psycopg2.errors.UniqueViolation:
            raise Conflict("Email already registered")

    def get_user(self, user_id):
        return self._one(User, f"SELECT {USER_FIELDS} FROM users WHERE id = %s", (user_id,))

    def find_user_by_email(self, email):
        return self._one(User, f"SELECT {USER_FIELDS} FROM users WHERE email = %s", (email,))

    # ---- Boards ----

    def insert_board(self, name, user_id):
        return self._one(
            Board,
            f"INSERT INTO boards (name, user_id) VALUES (%s, %s) RETURNING {BOARD_FIELDS}",
            (name, user_id),
        )

    def get_board(self, board_id, for_update=False):
        sql = f"SELECT {BOARD_FIELDS} FROM boards WHERE id = %s"
        if for_update:
            sql += " FOR UPDATE"
        return self._one(Board, sql, (board_id,))

    def boards_for_user(self, user_id):
        return self._all(
            Board,
            f"SELECT {BOARD_FIELDS} FROM boards WHERE user_id = %s "
            "ORDER BY created_at DESC, id DESC",
            (user_id,),
        )

    def delete_board(self, board_id):
        self.cur.execute("DELETE FROM boards WHERE id = %s", (board_id,))

    # ---- Columns ----

    def insert_column(self, board_id, name, order):
        return self._one(
            Column,
            f'INSERT INTO board_columns (board_id, name, "order") VALUES (%s, %s, %s) '
            f"RETURNING {COLUMN_FIELDS}",
            (board_id, name, order),
        )

    def get_column(self, column_id, for_update=False):
        sql = f"SELECT {COLUMN_FIELDS} FROM board_columns WHERE id = %s"
        if for_update:
            sql += " FOR UPDATE"
        return self._one(Column, sql, (column_id,))

    def columns_for_board(self, board_id):
        return self._all(
            Column,
            f'SELECT {COLUMN_FIELDS} FROM board_columns WHERE board_id = %s ORDER BY "order", id',
            (board_id,),
        )

    def count_columns(self, board_id):
        self.cur.execute("SELECT COUNT(*) AS n FROM board_columns WHERE board_id = %s", (board_id,))
        return self.cur.fetchone()["n"]

    def delete_column(self, column_id):
        self.cur.execute("DELETE FROM board_columns WHERE id = %s", (column_id,))

    def delete_columns_for_board(self, board_id):
        self.cur.execute("DELETE FROM board_columns WHERE board_id = %s", (board_id,))
        return self.cur.rowcount

    # ---- Tasks ----

    def insert_task(self, board_id, column_id, user_id, title, description, order):
        try:
            return self._one(
                Task,
                "INSERT INTO tasks (board_id, column_id, user_id, title, description, \"order\") "
                f"VALUES (%s, %s, %s, %s, %s, %s) RETURNING {TASK_FIELDS}",
                (board_id, column_id, user_id, title, description, order),
            )
        except psycopg2.errors.ForeignKeyViolation:
            raise NotFound("Column not found")

    def get_task(self, task_id):
        return self._one(Task, f"SELECT {TASK_FIELDS} FROM tasks WHERE id = %s", (task_id,))

    def tasks_for_board(self, board_id):
        return self._all(
            Task,
            f'SELECT {TASK_FIELDS} FROM tasks WHERE board_id = %s ORDER BY "order", id',
            (board_id,),
        )

    def count_tasks(self, column_id):
        self.cur.execute("SELECT COUNT(*) AS n FROM tasks WHERE column_id = %s", (column_id,))
        return self.cur.fetchone()["n"]

    def update_task(self, task_id, changes):
        fields = []
        values = []
        for key in TASK_UPDATABLE:
            if key in changes:
                fields.append(f'"{key}" = %s')
                values.append(changes[key])
        if not fields:
            return self.get_task(task_id)
        values.append(task_id)
        try:
            return self._one(
                Task,
                f"UPDATE tasks SET {', '.join(fields)} WHERE id = %s RETURNING {TASK_FIELDS}",
                values,
            )
        except psycopg2.errors.ForeignKeyViolation:
            raise NotFound("Column not found")

    def delete_task(self, task_id):
        self.cur.execute("DELETE FROM tasks WHERE id = %s", (task_id,))

    def delete_tasks_for_board(self, board_id):
        self.cur.execute("DELETE FROM tasks WHERE board_id = %s", (board_id,))
        return self.cur.rowcount

    def delete_tasks_for_column(self, column_id):
        self.cur.execute("DELETE FROM tasks WHERE column_id = %s", (column_id,))
        return self.cur.rowcount
