import logging
from typing import List
from urllib.parse import quote

import requests

from backend.articles import ArticleNotFound, ArticlePreview, ArticleStore

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 60


class LocalContentSource:
    """Content source backed by the in-process article store."""

    def __init__(self, store: ArticleStore):
        self.store = store

    def list_previews(self) -> List[ArticlePreview]:
        return self.store.list_previews()

    def get_article(self, name: str) -> str:
        return self.store.read(name)


class HttpContentSource:
    """Content source that talks to a Content API over HTTP.

    ``base_url`` is the API root, e.g. ``http://localhost:4000/api``.
    """

    def __init__(self, base_url: str, timeout: int = REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str) -> requests.Response:
        url = f"{self.base_url}{path}"
        r = requests.get(url, timeout=self.timeout)
        if r.status_code == 404:
            raise ArticleNotFound(path)
        if r.status_code >= 400:
            raise RuntimeError(f"GET {path} failed: {r.status_code} {r.text}")
        logger.debug("GET %s -> %s", url, r.status_code)
        return r

    def list_previews(self) -> List[ArticlePreview]:
        data = self._get("/articles").json()
        return [
            ArticlePreview(file_name=item["fileName"], content=item["content"])
            for item in data
        ]

    def get_article(self, name: str) -> str:
        r = self._get(f"/articles/{quote(name, safe='')}")
        return r.content.decode("utf-8")
