import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent


def _bool_env(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _list_env(name: str) -> list[str]:
    raw = os.getenv(name, "")
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _engine_options(uri: str) -> dict[str, object]:
    options: dict[str, object] = {"pool_pre_ping": True}
    if uri.startswith("sqlite:"):
        options["connect_args"] = {"check_same_thread": False}
    return options


class Config:
    APP_NAME = "file-api"
    TESTING = False
    DEBUG = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
        default_sqlite_path = PROJECT_ROOT / "instance" / "file_api.db"
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{default_sqlite_path}")
        self.SQLALCHEMY_DATABASE_URI = self.DATABASE_URL
        self.SQLALCHEMY_TRACK_MODIFICATIONS = False
        self.SQLALCHEMY_ENGINE_OPTIONS = _engine_options(self.SQLALCHEMY_DATABASE_URI)
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

        # Storage backend
        self.STORAGE_ROOT = os.getenv("STORAGE_ROOT", str(PROJECT_ROOT / "data" / "storage"))
        self.STORAGE_URL = os.getenv("STORAGE_URL", "/storage")
        self.MAX_CONTENT_LENGTH = _int_env("MAX_CONTENT_LENGTH", 64 * 1024 * 1024)

        # Routing
        self.ROUTE_PREFIX = os.getenv("ROUTE_PREFIX", "/api")
        self.ROUTE_MIDDLEWARE = _list_env("ROUTE_MIDDLEWARE")

        # Presentation
        self.APP_TZ = os.getenv("APP_TZ", "UTC")
        self.SLUG_LANGUAGE = os.getenv("SLUG_LANGUAGE", "en")
        self.FOLDER_LIST_LIMIT = _int_env("FOLDER_LIST_LIMIT", 10)
        self.FOLDER_LIST_MAX_LIMIT = _int_env("FOLDER_LIST_MAX_LIMIT", 100)
        self.EXPOSE_OPERATION_ERRORS = _bool_env("EXPOSE_OPERATION_ERRORS", True)

        self.APP_VERSION = os.getenv("APP_VERSION", "dev")
        self.DEBUG = _bool_env("DEBUG", self.DEBUG)


class DevelopmentConfig(Config):
    DEBUG = True

    def __init__(self) -> None:
        super().__init__()
        self.DEBUG = True


class ProductionConfig(Config):
    DEBUG = False

    def __init__(self) -> None:
        super().__init__()
        self.DEBUG = False


class TestingConfig(Config):
    TESTING = True
    DEBUG = False

    def __init__(self) -> None:
        super().__init__()
        self.DEBUG = False
        self.DATABASE_URL = "sqlite:///:memory:"
        self.SQLALCHEMY_DATABASE_URI = self.DATABASE_URL
        self.SQLALCHEMY_ENGINE_OPTIONS = _engine_options(self.SQLALCHEMY_DATABASE_URI)
        self.LOG_LEVEL = "WARNING"


def load_config(env: str | None = None) -> Config:
    env_name = (env or os.getenv("APP_ENV") or os.getenv("FLASK_ENV") or "production").lower()

    if env is None and env_name in {"prod", "production"}:
        db_url_env = os.getenv("DATABASE_URL", "")
        running_ci = os.getenv("CI", "").lower() in {"true", "1"}
        if not running_ci and (not db_url_env or db_url_env.startswith("sqlite:")):
            env_name = "development"
    if env_name in {"test", "testing"}:
        cfg: Config = TestingConfig()
    elif env_name in {"prod", "production"}:
        cfg = ProductionConfig()
    elif env_name in {"dev", "development"}:
        cfg = DevelopmentConfig()
    else:
        cfg = Config()

    cfg.SQLALCHEMY_DATABASE_URI = cfg.DATABASE_URL
    cfg.SQLALCHEMY_ENGINE_OPTIONS = _engine_options(cfg.SQLALCHEMY_DATABASE_URI)

    if (
        env_name in {"prod", "production"}
        and cfg.SQLALCHEMY_DATABASE_URI.startswith("sqlite:")
        and os.getenv("CI", "").lower() not in {"true", "1"}
    ):
        raise RuntimeError("DATABASE_URL is not set for production (sqlite detected)")

    return cfg
