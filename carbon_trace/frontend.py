"""
Static Front-end Serving

- ``public/`` is served at ``/`` in every mode
- in production the prebuilt single-page app in ``build/`` is served too,
  and unknown non-API paths fall back to ``build/index.html``
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse

from carbon_trace.core.config import Settings

logger = logging.getLogger(__name__)


def _resolve_file(root: Path, relative: str) -> Optional[Path]:
    """Find ``relative`` under ``root`` without escaping it."""
    root = root.resolve()
    candidate = (root / relative).resolve()

    if not candidate.is_relative_to(root):
        return None
    if candidate.is_dir():
        candidate = candidate / "index.html"
    return candidate if candidate.is_file() else None


def register_frontend(app: FastAPI, settings: Settings) -> None:
    """
    Add the catch-all GET route for static files.

    Must be called after the API routers so it never shadows them.
    """
    roots = [Path(settings.public_directory)]
    spa_index = None

    if settings.is_production:
        build_dir = Path(settings.build_directory)
        roots.append(build_dir)
        spa_index = build_dir / "index.html"
        logger.info(f"Serving front-end build from {build_dir.resolve()}")

    roots = [root for root in roots if root.is_dir()]

    if not roots and spa_index is None:
        return

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str) -> FileResponse:
        if full_path == "api" or full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")

        for root in roots:
            found = _resolve_file(root, full_path)
            if found:
                return FileResponse(found)

        if spa_index is not None and spa_index.is_file():
            return FileResponse(spa_index)

        raise HTTPException(status_code=404, detail="Not Found")
