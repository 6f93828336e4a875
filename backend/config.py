import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

BASE_DIR = Path(__file__).resolve().parents[1]

DEFAULT_PORT = 4000
ONE_YEAR_SECONDS = 365 * 24 * 60 * 60


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    articles_dir: Path = BASE_DIR / "articles"
    browser_dist_dir: Path = BASE_DIR / "frontend" / "static"
    static_index: str = "index.html"
    static_max_age: int = ONE_YEAR_SECONDS
    api_url: Optional[str] = None
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment (and a ``.env`` file if present)."""
        load_dotenv()
        defaults = cls()
        origins = os.getenv("CORS_ORIGINS")
        return cls(
            host=os.getenv("HOST", defaults.host),
            port=int(os.getenv("PORT", defaults.port)),
            articles_dir=Path(os.getenv("ARTICLES_DIR", defaults.articles_dir)),
            browser_dist_dir=Path(
                os.getenv("BROWSER_DIST_DIR", defaults.browser_dist_dir)
            ),
            static_index=os.getenv("STATIC_INDEX", defaults.static_index),
            static_max_age=int(os.getenv("STATIC_MAX_AGE", defaults.static_max_age)),
            api_url=os.getenv("API_URL") or None,
            cors_origins=(
                [o.strip() for o in origins.split(",") if o.strip()]
                if origins
                else defaults.cors_origins
            ),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        )
