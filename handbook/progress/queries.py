"""Raw SQL for progress writes.

The statement is portable between PostgreSQL and SQLite (>= 3.24), both of
which implement ``ON CONFLICT ... DO UPDATE`` against the unique key.
"""

UPSERT_PROGRESS_QUERY = """
INSERT INTO user_progress (user_id, scope, item_id, status, created_at, updated_at)
VALUES (:user_id, :scope, :item_id, :status, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
ON CONFLICT (user_id, scope, item_id)
DO UPDATE SET
    status = EXCLUDED.status,
    updated_at = CURRENT_TIMESTAMP
"""
