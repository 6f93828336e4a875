"""Server-rendered pages: the article list and the article detail view."""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from backend.articles import ArticleNotFound
from frontend.markdown_utils import extract_title, render_trusted

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
SITE_TITLE = "Blog"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
router = APIRouter()


@dataclass
class PreviewView:
    file_name: str
    content: Markup
    published_at: Optional[datetime] = None


@dataclass
class ArticleView:
    name: str
    title: Optional[str]
    content: Markup


def get_content_source(request: Request):
    return request.app.state.content_source


def resolve_article_previews(source) -> List[PreviewView]:
    return [
        PreviewView(
            file_name=p.file_name,
            content=render_trusted(p.content),
            published_at=p.published_at,
        )
        for p in source.list_previews()
    ]


def resolve_article(source, name: str) -> ArticleView:
    text = source.get_article(name)
    return ArticleView(name=name, title=extract_title(text), content=render_trusted(text))


def canonical_url(request: Request) -> str:
    """Absolute URL of the page from the request protocol, Host header and path."""
    host = request.headers.get("host") or request.url.netloc
    url = f"{request.url.scheme}://{host}{request.url.path}"
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return url


def render_page(request: Request, name: str, context: dict, status_code: int = 200):
    context = {
        "site_title": SITE_TITLE,
        "base_href": request.scope.get("root_path", "").rstrip("/") + "/",
        "canonical_url": canonical_url(request),
        **context,
    }
    return templates.TemplateResponse(request, name, context, status_code=status_code)


def not_found_page(request: Request, message: str):
    return render_page(request, "not_found.html", {"message": message}, status_code=404)


@router.get("/", response_class=HTMLResponse)
def home(request: Request, source=Depends(get_content_source)):
    articles = resolve_article_previews(source)
    return render_page(request, "home.html", {"articles": articles})


@router.get("/article/{name}", response_class=HTMLResponse)
def article_detail(name: str, request: Request, source=Depends(get_content_source)):
    try:
        article = resolve_article(source, name)
    except ArticleNotFound:
        logger.info("Article not found: %s", name)
        return not_found_page(request, "Article not found")
    return render_page(request, "article.html", {"article": article})


# Registered last by the app factory so it only sees unmatched paths.
fallback_router = APIRouter()


@fallback_router.get("/{path:path}", response_class=HTMLResponse)
def page_not_found(path: str, request: Request):
    return not_found_page(request, "Page not found")
