"""Documents table for users, profiles and posts.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""

from alembic import op


# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # One row per aggregate; nested collections live inside body
    op.execute("""
        CREATE TABLE documents (
            collection TEXT NOT NULL,
            id TEXT NOT NULL,
            body JSONB NOT NULL,
            created_at TIMESTAMPTZ DEFAULT now(),
            updated_at TIMESTAMPTZ DEFAULT now(),
            PRIMARY KEY (collection, id)
        );
    """)

    # Containment filters (body @> ...)
    op.execute("""
        CREATE INDEX idx_documents_body ON documents USING GIN (body jsonb_path_ops);
    """)

    # Unique fields. Index names are parsed back into field names by
    # PostgresStore, so keep the documents_<collection>_<field>_key shape.
    op.execute("""
        CREATE UNIQUE INDEX documents_users_email_key
        ON documents ((body ->> 'email'))
        WHERE collection = 'users';
    """)

    op.execute("""
        CREATE UNIQUE INDEX documents_profiles_handle_key
        ON documents ((body ->> 'handle'))
        WHERE collection = 'profiles';
    """)

    op.execute("""
        CREATE UNIQUE INDEX documents_profiles_user_key
        ON documents ((body ->> 'user'))
        WHERE collection = 'profiles';
    """)


def downgrade():
    op.execute("DROP TABLE IF EXISTS documents;")
