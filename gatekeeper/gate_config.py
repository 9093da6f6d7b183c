"""
GATE CONFIG
===========
Centralized gate settings loaded from environment.
"""

# FLOW:
# - Read env vars once and expose GATE_SETTINGS.
# HOW:
# - Loads the active .env file with python-dotenv, then reads env vars
#   with helpers that fall back to defaults on malformed values.

from __future__ import annotations

import logging
import os

import dotenv


def get_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"true", "1", "yes", "on"}


def get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def get_str(name: str, default: str = "") -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip()


def _env_name() -> str:
    env = os.getenv("APP_ENV", "").strip().lower()
    if env in {"prod", "production"}:
        return ".env.production"
    return ".env.localhost"


def _env_path() -> str:
    root = os.path.dirname(os.path.dirname(__file__))
    return os.path.join(root, _env_name())


def _redirect_status(value: int) -> int:
    if 300 <= value <= 399:
        return value
    return 302


def _context_path(value: str) -> str:
    value = value.rstrip("/")
    if value and not value.startswith("/"):
        value = "/" + value
    return value


def load_settings() -> dict:
    dotenv.load_dotenv(_env_path())
    return {
        "GATE_ENABLED": get_bool("GATE_ENABLED", True),
        "GATE_CONTEXT_PATH": _context_path(get_str("GATE_CONTEXT_PATH")),
        "GATE_REDIRECT_STATUS": _redirect_status(get_int("GATE_REDIRECT_STATUS", 302)),
        "GATE_AUTH_ERROR_PARAM": get_str("GATE_AUTH_ERROR_PARAM") or "auth_error",
        "GATE_DEBUG": get_bool("GATE_DEBUG", False),
        "GATE_LOG_FILE": get_str("GATE_LOG_FILE") or os.path.join("logs", "gate.log"),
        "GATE_LOG_LEVEL": (get_str("GATE_LOG_LEVEL") or "INFO").upper(),
        "SESSION_SECRET_KEY": get_str("SESSION_SECRET_KEY") or "change-this-secret",
        "PROMETHEUS_ENABLED": get_bool("PROMETHEUS_ENABLED", True),
    }


GATE_SETTINGS = load_settings()

if os.getenv("APP_ENV_LOG", "false").lower() == "true":
    logging.getLogger("gatekeeper.env").info("Active env file: %s", _env_path())
