# routescope/config.py
"""
Lightweight config loader that does NOT depend on pydantic/BaseSettings.
Reads environment variables (and .env if present) and exposes a `settings` object.

The core never reads `settings` implicitly: RouteScopeCore takes a Settings
instance as a constructor argument, so tests can build their own.
"""

from pathlib import Path
from typing import List
from dotenv import load_dotenv
import os

# Load .env from project root if present
dotenv_path = Path(__file__).resolve().parents[1] / ".env"
if dotenv_path.exists():
    load_dotenv(dotenv_path)


def _path_from_env(var: str, default: Path) -> Path:
    val = os.getenv(var)
    if val:
        return Path(val)
    return default


def _bool_from_env(var: str, default: str) -> bool:
    return os.getenv(var, default).lower() in ("1", "true", "yes", "on")


def _list_from_env(var: str, default: str) -> List[str]:
    raw = os.getenv(var, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    # App
    APP_NAME: str = os.getenv("APP_NAME", "RouteScope")
    DEBUG: bool = _bool_from_env("DEBUG", "false")
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR: Path = _path_from_env("LOG_DIR", Path.cwd() / "logs")
    LOG_TO_FILE: bool = _bool_from_env("LOG_TO_FILE", "false")

    # Recomputation scheduler
    CACHE_TTL_SECONDS: float = float(os.getenv("CACHE_TTL_SECONDS", "300"))
    DEBOUNCE_MS: int = int(os.getenv("DEBOUNCE_MS", "300"))
    ENABLE_CACHE: bool = _bool_from_env("ENABLE_CACHE", "true")

    # Editor-facing projections
    ENABLE_CODELENS: bool = _bool_from_env("ENABLE_CODELENS", "true")

    # Route-registration vocabulary
    APP_HANDLE_NAMES: List[str] = _list_from_env("APP_HANDLE_NAMES", "app,server")
    APP_FACTORY_NAMES: List[str] = _list_from_env("APP_FACTORY_NAMES", "express")
    ROUTER_FACTORY_NAME: str = os.getenv("ROUTER_FACTORY_NAME", "Router")
    MOUNT_METHOD_NAME: str = os.getenv("MOUNT_METHOD_NAME", "use")

    # Editor integration origins (dev)
    CORS_ORIGINS: List[str] = _list_from_env(
        "CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000",
    )


# single settings instance
settings = Settings()
