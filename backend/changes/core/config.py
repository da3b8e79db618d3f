"""
changes — Configuration
Loads .env automatically, then reads all settings from environment variables.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(_env_path)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ServerConfig:
    """HTTP service bind address."""
    host: str
    port: int
    debug: bool


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""
    log_level: str
    max_input_bytes: int
    server: ServerConfig


def _int_env(name: str, default: str, errors: list[str]) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        errors.append(f"{name}={raw!r} is not an integer")
        return int(default)


def _load_config() -> tuple[AppConfig, list[str]]:
    errors: list[str] = []
    cfg = AppConfig(
        log_level=os.getenv("CHANGES_LOG_LEVEL", "INFO").upper(),
        max_input_bytes=_int_env("CHANGES_MAX_INPUT_BYTES", str(1024 * 1024), errors),
        server=ServerConfig(
            host=os.getenv("APP_HOST", "0.0.0.0"),
            port=_int_env("APP_PORT", "8000", errors),
            debug=os.getenv("APP_DEBUG", "false").lower() == "true",
        ),
    )
    return cfg, errors


def _validate_config(cfg: AppConfig, errors: list[str]) -> None:
    """Fail fast on settings the parser or service cannot run with."""
    if cfg.log_level not in LOG_LEVELS:
        errors.append(f"CHANGES_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
    if cfg.max_input_bytes <= 0:
        errors.append("CHANGES_MAX_INPUT_BYTES must be positive")
    if not 0 < cfg.server.port < 65536:
        errors.append("APP_PORT must be between 1 and 65535")
    if errors:
        print(
            f"\n  ERROR: Invalid configuration: {'; '.join(errors)}\n"
            f"  Check your environment or backend/.env.\n",
            file=sys.stderr,
        )
        sys.exit(1)


settings, _errors = _load_config()
_validate_config(settings, _errors)
