# config.py
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DB_PATH = os.path.join(BASE_DIR, "board.sqlite3")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{key} must be a boolean, got {raw!r}")


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def _database_url(env: Mapping[str, str]) -> str:
    """DATABASE_URL wins, then DB_* (PostgreSQL), then the local SQLite file."""
    url = env.get("DATABASE_URL")
    if url:
        return url
    host = env.get("DB_HOST")
    if not host:
        return f"sqlite+aiosqlite:///{DB_PATH}"
    user = quote_plus(env.get("DB_USER", ""))
    password = quote_plus(env.get("DB_PASS", ""))
    credentials = f"{user}:{password}@" if user else ""
    port = _env_int(env, "DB_PORT", 5432)
    name = env.get("DB_NAME", "board")
    return f"postgresql+asyncpg://{credentials}{host}:{port}/{name}"


@dataclass(frozen=True)
class Settings:
    node_env: str = "development"
    port: int = 3000
    host: str = "0.0.0.0"
    api_prefix: str = "/api"
    enable_swagger: bool = True

    database_url: str = f"sqlite+aiosqlite:///{DB_PATH}"

    # 비밀번호 해시 (1단계 keyed digest -> 2단계 bcrypt)
    hash_algorithm: str = "sha2"
    hash_digest_length: int = 256
    bcrypt_rounds: int = 12
    password_pepper: str = ""

    log_level: str = "info"
    log_to_file: bool = False
    log_file: str = "./logs/app.log"
    log_error_file: str = "./logs/error.log"
    enable_request_logging: bool = True

    rate_limit_max: int = 100
    rate_limit_window_seconds: int = 60
    body_limit_bytes: int = 10 * 1024 * 1024
    keep_alive_timeout: int = 30
    cors_origins: Tuple[str, ...] = ("*",)

    @property
    def is_development(self) -> bool:
        return self.node_env == "development"

    @property
    def swagger_enabled(self) -> bool:
        return self.enable_swagger and self.is_development

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        origins = tuple(
            o.strip() for o in env.get("CORS_ORIGINS", "*").split(",") if o.strip()
        ) or ("*",)
        return cls(
            node_env=env.get("NODE_ENV", "development"),
            port=_env_int(env, "PORT", 3000),
            host=env.get("HOST", "0.0.0.0"),
            api_prefix=env.get("API_PREFIX", "/api"),
            enable_swagger=_env_bool(env, "ENABLE_SWAGGER", True),
            database_url=_database_url(env),
            hash_algorithm=env.get("HASH_ALGORITHM", "sha2"),
            hash_digest_length=_env_int(env, "HASH_DIGEST_LENGTH", 256),
            bcrypt_rounds=_env_int(env, "BCRYPT_ROUNDS", 12),
            password_pepper=env.get("PASSWORD_PEPPER", ""),
            log_level=env.get("LOG_LEVEL", "info"),
            log_to_file=_env_bool(env, "LOG_TO_FILE", False),
            log_file=env.get("LOG_FILE", "./logs/app.log"),
            log_error_file=env.get("LOG_ERROR_FILE", "./logs/error.log"),
            enable_request_logging=_env_bool(env, "ENABLE_REQUEST_LOGGING", True),
            rate_limit_max=_env_int(env, "RATE_LIMIT_MAX", 100),
            rate_limit_window_seconds=_env_int(env, "RATE_LIMIT_WINDOW_SECONDS", 60),
            body_limit_bytes=_env_int(env, "BODY_LIMIT_BYTES", 10 * 1024 * 1024),
            keep_alive_timeout=_env_int(env, "KEEP_ALIVE_TIMEOUT", 30),
            cors_origins=origins,
        )
