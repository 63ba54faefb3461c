"""
blog_api.api.__main__

Entrypoint for running the API via `python -m blog_api.api`.

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from blog_api.api.app import create_app
from blog_api.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
