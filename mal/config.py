from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional


# Defaults
_DEFAULT_PROMPT = "user> "
_DEFAULT_HISTORY_FILE = Path.home() / ".mal_history"
_DEFAULT_LOG_LEVEL = "WARNING"


def get_prompt() -> str:
    return os.environ.get("MAL_PROMPT", _DEFAULT_PROMPT)


def get_history_file() -> Optional[Path]:
    """History file for the REPL. MAL_HISTORY_FILE="" turns history off."""
    raw = os.environ.get("MAL_HISTORY_FILE")
    if raw is None:
        return _DEFAULT_HISTORY_FILE
    raw = raw.strip()
    return Path(raw).expanduser() if raw else None


def get_log_level() -> int:
    raw = os.environ.get("MAL_LOG_LEVEL", _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    # getLevelName maps unknown names to "Level <name>"
    return level if isinstance(level, int) else logging.WARNING
