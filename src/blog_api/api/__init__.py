"""
blog_api.api

HTTP layer for the blog API.

Responsibilities:
- FastAPI app factory and router modules.
- Dependency wiring, request validation and the error envelope.
"""

# Package marker.
