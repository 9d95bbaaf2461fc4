"""Serving the built front-end bundle."""

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse

from studio_api.errors import NotFound

logger = logging.getLogger(__name__)

API_NOT_FOUND = "API endpoint not found"

FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def is_api_path(path: str) -> bool:
    path = path.lstrip("/")
    return path == "api" or path.startswith("api/")


def mount_frontend(app: FastAPI, directory: str | Path) -> None:
    """Serve files from ``directory``, falling back to index.html for client-side routes.

    Must be called after every API router is included: the fallback matches any path.
    Unmatched API paths get a JSON 404 whatever the method; only GET and HEAD
    receive files or the index document.
    """
    root = Path(directory).resolve()
    index = root / "index.html"
    if not index.is_file():
        raise RuntimeError(
            f"Could not find the build directory: {root}, make sure to build the client first"
        )

    @app.api_route("/{full_path:path}", methods=FALLBACK_METHODS, include_in_schema=False)
    async def serve_frontend(full_path: str, request: Request):
        if is_api_path(full_path):
            raise NotFound(API_NOT_FOUND)
        if request.method not in ("GET", "HEAD"):
            raise NotFound()

        if full_path and "\x00" not in full_path:
            candidate = (root / full_path).resolve()
            if candidate.is_relative_to(root) and candidate.is_file():
                return FileResponse(candidate)

        return FileResponse(index)

    logger.info(f"Serving front-end bundle from {root}")
