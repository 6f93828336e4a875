import sys
import pathlib
import pytest

base_dir = pathlib.Path(__file__).resolve().parents[1]
sys.path.append(str(base_dir))

import backend.config as config
from backend.config import Settings

ENV_KEYS = [
    "HOST",
    "PORT",
    "ARTICLES_DIR",
    "BROWSER_DIST_DIR",
    "STATIC_INDEX",
    "STATIC_MAX_AGE",
    "API_URL",
    "CORS_ORIGINS",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda *a, **kw: False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env()
    assert settings.port == 4000
    assert settings.articles_dir == base_dir / "articles"
    assert settings.static_max_age == 365 * 24 * 60 * 60
    assert settings.static_index == "index.html"
    assert settings.api_url is None
    assert settings.cors_origins == ["*"]


def test_env_overrides(clean_env, tmp_path):
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("ARTICLES_DIR", str(tmp_path))
    clean_env.setenv("API_URL", "http://localhost:8080/api")
    clean_env.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()
    assert settings.port == 8080
    assert settings.articles_dir == tmp_path
    assert settings.api_url == "http://localhost:8080/api"
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.log_level == "DEBUG"


def test_invalid_port(clean_env):
    clean_env.setenv("PORT", "not-a-number")
    with pytest.raises(ValueError):
        Settings.from_env()


def test_run_builds_app_from_env(clean_env, tmp_path):
    import backend.main as main

    clean_env.setenv("PORT", "5055")
    clean_env.setenv("ARTICLES_DIR", str(tmp_path))
    captured = {}

    def fake_run(app, host=None, port=None, **kwargs):
        captured["app"] = app
        captured["host"] = host
        captured["port"] = port

    clean_env.setattr(main.uvicorn, "run", fake_run)
    main.run()

    assert captured["port"] == 5055
    assert captured["host"] == "0.0.0.0"
    assert captured["app"].state.store.articles_dir == tmp_path


def test_importing_main_builds_no_app():
    import backend.main as main

    assert not hasattr(main, "app")
    assert callable(main.create_app)
