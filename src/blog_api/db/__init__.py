"""
blog_api.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Entities are soft-deleted: every repository read filters on `deleted_at IS NULL`.
