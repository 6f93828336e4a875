import logging
from typing import List, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from backend.articles import (
    ArticleDirectoryError,
    ArticleNotFound,
    ArticleReadError,
    ArticleStore,
)
from backend.config import Settings
from backend.schemas import ArticlePreviewOut, ErrorOut
from frontend.api_client import HttpContentSource, LocalContentSource
from frontend.static_files import StaticAssets
from frontend.views import fallback_router, router as pages_router

logger = logging.getLogger(__name__)

api_router = APIRouter(prefix="/api")


def get_store(request: Request) -> ArticleStore:
    return request.app.state.store


@api_router.get(
    "/articles",
    response_model=List[ArticlePreviewOut],
    responses={500: {"model": ErrorOut}},
)
def list_articles(store: ArticleStore = Depends(get_store)):
    try:
        previews = store.list_previews()
    except ArticleDirectoryError as e:
        logger.error("Error scanning directory: %s", e)
        return JSONResponse(status_code=500, content={"error": "Unable to scan directory"})
    return [ArticlePreviewOut(file_name=p.file_name, content=p.content) for p in previews]


@api_router.get("/articles/{name}", response_class=PlainTextResponse)
def get_article(name: str, store: ArticleStore = Depends(get_store)):
    try:
        text = store.read(name)
    except ArticleNotFound:
        return PlainTextResponse("Article not found", status_code=404)
    except ArticleReadError as e:
        logger.warning("Unable to read article %s: %s", name, e)
        return PlainTextResponse("Unable to read article", status_code=500)
    return Response(content=text, media_type="text/markdown; charset=utf-8")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application; without ``settings`` they are read from the environment.

    No app is created at import time. Serve it with ``md-blog`` or
    ``uvicorn backend.main:create_app --factory``.
    """
    settings = settings or Settings.from_env()

    app = FastAPI(title="md-blog")
    app.state.settings = settings
    app.state.store = ArticleStore(settings.articles_dir)
    if settings.api_url:
        app.state.content_source = HttpContentSource(settings.api_url)
    else:
        app.state.content_source = LocalContentSource(app.state.store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    assets = StaticAssets(
        settings.browser_dist_dir,
        index=settings.static_index,
        max_age=settings.static_max_age,
    )
    app.state.assets = assets

    @app.middleware("http")
    async def serve_static_assets(request: Request, call_next):
        path = request.url.path
        if request.method in ("GET", "HEAD") and not path.startswith("/api/") and path != "/api":
            asset = assets.lookup(path)
            if asset is not None:
                return assets.response(asset)
        return await call_next(request)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Error rendering %s", request.url.path, exc_info=exc)
        return PlainTextResponse("Internal Server Error", status_code=500)

    app.include_router(api_router)
    app.include_router(pages_router)
    app.include_router(fallback_router)
    return app


def run() -> None:
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)
    logger.info("Server listening on http://localhost:%s", settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
