"""
blog_api.api.validators

Rule sets applied by the routers, one tuple per operation.
"""

from __future__ import annotations

from blog_api.api.validation import any_of, body, path

TITLE_MSG = "Title must be between 1 and 100 characters"
POST_CONTENT_MSG = "Content must be between 1 and 5000 characters"
GENRE_MSG = "Genre must be between 1 and 20 characters"
COMMENT_CONTENT_MSG = "Content must be between 1 and 100 characters"
USER_ID_MSG = "Invalid user ID format"
POST_ID_MSG = "Invalid post ID format"
COMMENT_ID_MSG = "Invalid comment ID format"
NAME_MSG = "Name must be between 1 and 50 characters"
EMAIL_MSG = "Invalid email format"
PASSWORD_MSG = "Password must be between 6 and 100 characters"

POST_CREATE = (
    body("title", length=(1, 100), message=TITLE_MSG),
    body("content", length=(1, 5000), message=POST_CONTENT_MSG),
    body("author", object_id=True, message=USER_ID_MSG),
    body("genre", length=(1, 20), message=GENRE_MSG),
)

POST_UPDATE = (
    body("title", length=(1, 100), message=TITLE_MSG, optional=True),
    body("genre", length=(1, 20), message=GENRE_MSG, optional=True),
    body("content", length=(1, 5000), message=POST_CONTENT_MSG, optional=True),
    any_of(
        "title", "genre", "content", message="At least one of title, genre, content is required"
    ),
)

COMMENT_CREATE = (
    body("content", length=(1, 100), message=COMMENT_CONTENT_MSG),
    body("author", object_id=True, message=USER_ID_MSG),
    body("post", object_id=True, message=POST_ID_MSG),
)

COMMENT_UPDATE = (body("content", length=(1, 100), message=COMMENT_CONTENT_MSG),)

USER_CREATE = (
    body("name", length=(1, 50), message=NAME_MSG),
    body("email", email=True, message=EMAIL_MSG),
    body("password", length=(6, 100), message=PASSWORD_MSG, trim=False),
)

USER_UPDATE = (
    body("name", length=(1, 50), message=NAME_MSG, optional=True),
    body("email", email=True, message=EMAIL_MSG, optional=True),
    body("password", length=(6, 100), message=PASSWORD_MSG, optional=True, trim=False),
    any_of(
        "name", "email", "password", message="At least one of name, email, password is required"
    ),
)

LOGIN = (
    body("email", email=True, message=EMAIL_MSG),
    body("password", length=(1, 100), message="Password is required", trim=False),
)

POST_ID = (path("post_id", message=POST_ID_MSG),)
COMMENT_ID = (path("comment_id", message=COMMENT_ID_MSG),)
USER_ID = (path("user_id", message=USER_ID_MSG),)
