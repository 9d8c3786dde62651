"""
Configuration for the grade calculator app.

Settings come from environment variables (or a .env file next to the app).
Unset or malformed values fall back to the defaults below.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass
class AppConfig:
    """UI and logging settings."""
    page_title: str = "Canvas Grade Calculator"
    log_level: str = "WARNING"
    display_decimals: int = 2
    default_target: float = 90.0

    def is_valid(self) -> bool:
        known_level = isinstance(logging.getLevelName(self.log_level), int)
        return known_level and self.display_decimals >= 0


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


def load_config() -> AppConfig:
    """Build an AppConfig from the environment."""
    load_dotenv()
    return AppConfig(
        page_title=os.getenv("GRADE_CALC_PAGE_TITLE", AppConfig.page_title),
        log_level=os.getenv("GRADE_CALC_LOG_LEVEL", AppConfig.log_level).upper(),
        display_decimals=_env_int("GRADE_CALC_DISPLAY_DECIMALS", AppConfig.display_decimals),
        default_target=_env_float("GRADE_CALC_DEFAULT_TARGET", AppConfig.default_target),
    )
