"""
blog_api.services

Service-layer package.

Responsibilities:
- Own transaction boundaries and persistence decisions.
- Enforce cross-document reference checks.
- Report domain failures as `Outcome` values.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable with a real session on SQLite.
