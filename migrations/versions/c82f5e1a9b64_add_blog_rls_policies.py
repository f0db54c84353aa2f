"""add_blog_rls_policies

Revision ID: c82f5e1a9b64
Revises: 4b7e2c91d0a3
Create Date: 2026-03-02 11:40:03.907116

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "c82f5e1a9b64"
down_revision: str | Sequence[str] | None = "4b7e2c91d0a3"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Add Row Level Security policies mirroring the API's ownership rules.

    The FastAPI backend connects with a role that bypasses RLS and enforces
    authorship itself. These policies apply to direct Supabase client access.
    """
    for table in ["profiles", "posts", "comments"]:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")

    # --- Profiles ---
    op.execute("""
        CREATE POLICY profiles_select ON profiles
            FOR SELECT USING (true);
    """)
    op.execute("""
        CREATE POLICY profiles_insert ON profiles
            FOR INSERT WITH CHECK (id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY profiles_update ON profiles
            FOR UPDATE USING (id = (SELECT auth.uid()));
    """)

    # --- Posts ---
    # SELECT: posts are public
    op.execute("""
        CREATE POLICY posts_select ON posts
            FOR SELECT USING (true);
    """)
    # INSERT: only as yourself
    op.execute("""
        CREATE POLICY posts_insert ON posts
            FOR INSERT WITH CHECK (author_id = (SELECT auth.uid()));
    """)
    # UPDATE/DELETE: only the author
    op.execute("""
        CREATE POLICY posts_update ON posts
            FOR UPDATE USING (author_id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY posts_delete ON posts
            FOR DELETE USING (author_id = (SELECT auth.uid()));
    """)

    # --- Comments (append-only) ---
    op.execute("""
        CREATE POLICY comments_select ON comments
            FOR SELECT USING (true);
    """)
    op.execute("""
        CREATE POLICY comments_insert ON comments
            FOR INSERT WITH CHECK (author_id = (SELECT auth.uid()));
    """)


def downgrade() -> None:
    """Remove blog RLS policies."""
    policies = [
        ("comments_insert", "comments"),
        ("comments_select", "comments"),
        ("posts_delete", "posts"),
        ("posts_update", "posts"),
        ("posts_insert", "posts"),
        ("posts_select", "posts"),
        ("profiles_update", "profiles"),
        ("profiles_insert", "profiles"),
        ("profiles_select", "profiles"),
    ]
    for policy_name, table_name in policies:
        op.execute(f"DROP POLICY IF EXISTS {policy_name} ON {table_name};")

    for table in ["comments", "posts", "profiles"]:
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY;")
