"""
Runtime configuration for the SnipeRank backend.

Values are read from the environment, with a .env file in the backend root
loaded first via python-dotenv:

ANTHROPIC_API_KEY=your_real_key_here
PAGESPEED_API_KEY=optional_google_key

Credentials are read at call time so they can change without a restart.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() not in {"", "0", "false", "no", "off"}


CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "").strip() or "claude-3-5-sonnet-latest"
CLAUDE_FRIENDLY_MODEL = os.getenv("CLAUDE_FRIENDLY_MODEL", "").strip() or "claude-3-haiku-20240307"
CLAUDE_MAX_TOKENS = int(os.getenv("CLAUDE_MAX_TOKENS", "3600"))
CLAUDE_FRIENDLY_MAX_TOKENS = int(os.getenv("CLAUDE_FRIENDLY_MAX_TOKENS", "2000"))
CLAUDE_TEMPERATURE = float(os.getenv("CLAUDE_TEMPERATURE", "0.3"))
CLAUDE_TIMEOUT_SECONDS = float(os.getenv("CLAUDE_TIMEOUT_SECONDS", "30"))

FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "15"))
PAGESPEED_TIMEOUT_SECONDS = float(os.getenv("PAGESPEED_TIMEOUT_SECONDS", "30"))

EXPOSE_DIAGNOSTIC_SNIPPETS = _env_flag("EXPOSE_DIAGNOSTIC_SNIPPETS")
SNIPPET_MAX_CHARS = 600

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()] or ["*"]


def get_anthropic_api_key() -> str:
    return os.getenv("ANTHROPIC_API_KEY", "").strip()


def get_pagespeed_api_key() -> str:
    return os.getenv("PAGESPEED_API_KEY", "").strip()
