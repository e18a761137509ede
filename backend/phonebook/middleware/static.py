"""
Phonebook Backend — Static Files Middleware
============================================

What:  Serves the frontend build (settings.static_dir) ahead of the API routes.
How:   For GET/HEAD requests, maps the URL path onto the static directory.
       If that names a file (or a directory with an index.html), the file is
       returned; otherwise the request continues to the router untouched.

Security:
    The resolved path must stay inside the static root, so "../" segments
    can never reach files outside it.

A missing static directory disables the middleware entirely.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import FileResponse, Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class StaticFilesMiddleware(BaseHTTPMiddleware):

    SERVED_METHODS = {"GET", "HEAD"}

    def __init__(self, app: ASGIApp, directory: Union[str, Path]):
        super().__init__(app)
        root = Path(directory).resolve()
        self.root: Optional[Path] = root if root.is_dir() else None
        if self.root is None:
            logger.info("Static directory %s not found; static serving disabled", root)

    def resolve(self, url_path: str) -> Optional[Path]:
        """Static file for `url_path`, or None when nothing should be served."""
        if self.root is None:
            return None
        try:
            candidate = (self.root / url_path.lstrip("/")).resolve()
        except (OSError, ValueError):
            return None

        if candidate != self.root and self.root not in candidate.parents:
            logger.warning("Refusing static path outside root: %s", url_path)
            return None

        if candidate.is_dir():
            candidate = candidate / "index.html"
        return candidate if candidate.is_file() else None

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method in self.SERVED_METHODS:
            path = self.resolve(request.url.path)
            if path is not None:
                return FileResponse(path)
        return await call_next(request)
