from pathlib import Path
from typing import Optional
from urllib.parse import unquote

from starlette.responses import FileResponse


class StaticAssets:
    """Pre-built client assets served ahead of the rendered pages."""

    def __init__(self, directory: Path, index: str = "index.html", max_age: int = 31536000):
        self.directory = Path(directory).resolve()
        self.index = index
        self.max_age = max_age

    def lookup(self, url_path: str) -> Optional[Path]:
        if not self.directory.is_dir():
            return None
        relative = unquote(url_path).lstrip("/")
        candidate = (self.directory / relative).resolve()
        if candidate != self.directory and self.directory not in candidate.parents:
            return None
        if candidate.is_dir():
            candidate = candidate / self.index
        return candidate if candidate.is_file() else None

    def response(self, path: Path) -> FileResponse:
        return FileResponse(
            path, headers={"Cache-Control": f"public, max-age={self.max_age}"}
        )
