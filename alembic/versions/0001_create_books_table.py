from alembic import op
import sqlalchemy as sa


revision = "0001_create_books"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "books",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.Text()),
        sa.Column("author", sa.Text()),
        sa.Column("year", sa.Integer()),
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    op.drop_table("books")
