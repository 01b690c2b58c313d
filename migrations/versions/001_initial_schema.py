"""Users, boards, columns and tasks

Revision ID: 001
Revises:
Create Date: 2026-10-12

"""
from alembic import op

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id SERIAL PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    """)
    op.execute("""
        CREATE TABLE IF NOT EXISTS boards (
            id SERIAL PRIMARY KEY,
            name TEXT NOT NULL,
            user_id INTEGER NOT NULL REFERENCES users(id),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS boards_user_id_idx ON boards (user_id)")
    # No ON DELETE CASCADE: removals delete children explicitly, tasks first.
    op.execute("""
        CREATE TABLE IF NOT EXISTS board_columns (
            id SERIAL PRIMARY KEY,
            name TEXT NOT NULL,
            board_id INTEGER NOT NULL REFERENCES boards(id),
            "order" INTEGER NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    """)
    op.execute(
        "CREATE INDEX IF NOT EXISTS board_columns_board_id_idx ON board_columns (board_id)"
    )
    op.execute("""
        CREATE TABLE IF NOT EXISTS tasks (
            id SERIAL PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT,
            column_id INTEGER NOT NULL REFERENCES board_columns(id),
            board_id INTEGER NOT NULL REFERENCES boards(id),
            user_id INTEGER NOT NULL REFERENCES users(id),
            "order" INTEGER NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS tasks_column_id_idx ON tasks (column_id)")
    op.execute("CREATE INDEX IF NOT EXISTS tasks_board_id_idx ON tasks (board_id)")
    op.execute("CREATE INDEX IF NOT EXISTS tasks_user_id_idx ON tasks (user_id)")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS tasks")
    op.execute("DROP TABLE IF EXISTS board_columns")
    op.execute("DROP TABLE IF EXISTS boards")
    op.execute("DROP TABLE IF EXISTS users")
