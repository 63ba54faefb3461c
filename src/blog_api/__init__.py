"""
blog_api

Top-level package for the blog platform backend.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Imported by the app factory for the OpenAPI version; no other side effects.
