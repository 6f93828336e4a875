import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

ARTICLE_SUFFIX = ".md"
PREVIEW_LINES = 4
PREVIEW_MARKER = "..."


class ArticleError(Exception):
    """Base class for article store failures."""


class ArticleNotFound(ArticleError):
    pass


class ArticleReadError(ArticleError):
    pass


class ArticleDirectoryError(ArticleError):
    pass


@dataclass
class ArticlePreview:
    file_name: str
    content: str
    published_at: Optional[datetime] = None


def make_preview(text: str, lines: int = PREVIEW_LINES, marker: str = PREVIEW_MARKER) -> str:
    """Return the first ``lines`` lines of ``text``, right-trimmed, plus ``marker``.

    The marker is appended unconditionally, so short articles keep all of
    their lines and still end with it.
    """
    head = "\n".join(text.split("\n")[:lines])
    return head.rstrip() + marker


def _read_text(path: Path) -> str:
    # newline="" keeps \r\n as written on disk; invalid bytes become U+FFFD
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read()


def _is_plain_name(name: str) -> bool:
    if not name or name.startswith("."):
        return False
    return not any(c in name for c in ("/", "\\", "\x00"))


class ArticleStore:
    """Read-only view over a directory of markdown articles.

    Nothing is cached: every call goes back to the filesystem. Only files
    that ``read`` accepts by name are listed.
    """

    def __init__(self, articles_dir: Path):
        self.articles_dir = Path(articles_dir)

    def _article_names(self) -> List[str]:
        try:
            with os.scandir(self.articles_dir) as it:
                return sorted(
                    e.name[: -len(ARTICLE_SUFFIX)]
                    for e in it
                    if e.name.endswith(ARTICLE_SUFFIX)
                    and _is_plain_name(e.name[: -len(ARTICLE_SUFFIX)])
                    and e.is_file()
                )
        except OSError as e:
            raise ArticleDirectoryError(str(e)) from e

    def list_previews(self) -> List[ArticlePreview]:
        previews = []
        for name in self._article_names():
            path = self.path_for(name)
            try:
                text = _read_text(path)
                mtime = path.stat().st_mtime
            except OSError as e:
                logger.warning("Skipping unreadable article %s: %s", path, e)
                continue
            previews.append(
                ArticlePreview(
                    file_name=name,
                    content=make_preview(text),
                    published_at=datetime.fromtimestamp(mtime),
                )
            )
        return previews

    def path_for(self, name: str) -> Path:
        if not _is_plain_name(name):
            raise ArticleNotFound(name)
        return self.articles_dir / f"{name}{ARTICLE_SUFFIX}"

    def read(self, name: str) -> str:
        path = self.path_for(name)
        try:
            return _read_text(path)
        except (FileNotFoundError, NotADirectoryError, IsADirectoryError) as e:
            raise ArticleNotFound(name) from e
        except OSError as e:
            raise ArticleReadError(f"{path}: {e}") from e
