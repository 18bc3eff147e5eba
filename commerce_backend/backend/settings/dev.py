# backend/settings/dev.py
"""
PATH: backend/settings/dev.py

LOCAL DEVELOPMENT SETTINGS
Safe + convenient defaults (SQLite file database, verbose sale logging).
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, env  # explicit for Ruff (F405)

DEBUG = True

LOG_LEVEL = (env("LOG_LEVEL", default="DEBUG") or "DEBUG").strip().upper()
LOGGING["loggers"]["sales"]["level"] = LOG_LEVEL
LOGGING["loggers"]["inventory"]["level"] = LOG_LEVEL
