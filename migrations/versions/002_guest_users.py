"""Guest users without credentials

Revision ID: 002
Revises: 001
Create Date: 2026-10-14

"""
from alembic import op

revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("ALTER TABLE users ADD COLUMN IF NOT EXISTS is_guest BOOLEAN NOT NULL DEFAULT FALSE")
    op.execute("ALTER TABLE users ALTER COLUMN email DROP NOT NULL")
    op.execute("ALTER TABLE users ALTER COLUMN password_hash DROP NOT NULL")


def downgrade() -> None:
    guest_boards = "SELECT b.id FROM boards b JOIN users u ON u.id = b.user_id WHERE u.is_guest"
    op.execute(f"DELETE FROM tasks WHERE board_id IN ({guest_boards})")
    op.execute(f"DELETE FROM board_columns WHERE board_id IN ({guest_boards})")
    op.execute(f"DELETE FROM boards WHERE id IN ({guest_boards})")
    op.execute("DELETE FROM users WHERE is_guest")
    op.execute("ALTER TABLE users ALTER COLUMN password_hash SET NOT NULL")
    op.execute("ALTER TABLE users ALTER COLUMN email SET NOT NULL")
    op.execute("ALTER TABLE users DROP COLUMN IF EXISTS is_guest")
