from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    calendar_id: str
    google_token_file: str
    log_level: int = logging.INFO


def get_log_level() -> int:
    name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        logging.warning("Invalid LOG_LEVEL %s, falling back to INFO", name)
        return logging.INFO
    return level


def get_settings() -> Settings:
    settings = Settings(
        calendar_id=os.getenv("CALENDAR_ID", "primary"),
        google_token_file=os.getenv("GOOGLE_TOKEN_FILE", "token.json"),
        log_level=get_log_level(),
    )
    if not Path(settings.google_token_file).exists():
        logging.warning("GOOGLE_TOKEN_FILE %s does not exist", settings.google_token_file)
    return settings
