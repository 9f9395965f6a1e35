"""
Game Configuration for Detective Quest

Fixed game constants live in a frozen dataclass so they can be passed around
and overridden in tests without touching module globals. Runtime settings
(debug logging, alternative case file) come from environment variables,
which may be supplied through a .env file loaded by the entry point.
"""

import os
from dataclasses import dataclass
from typing import Optional


# Environment variable names
DEBUG_ENV_VAR = "DETECTIVE_DEBUG"
CASE_FILE_ENV_VAR = "DETECTIVE_CASE_FILE"

TRUTHY_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GameConfig:
    """
    Fixed constants for the investigation.

    Attributes:
        hash_table_size: Number of buckets in the suspect index (prime).
        guilty_threshold: Matching clues needed for a guilty verdict.
    """
    hash_table_size: int = 101
    guilty_threshold: int = 2


GAME_CONFIG = GameConfig()


def is_debug_enabled() -> bool:
    """Return True if DETECTIVE_DEBUG is set to a truthy value."""
    return os.environ.get(DEBUG_ENV_VAR, "").strip().lower() in TRUTHY_VALUES


def get_case_file_path() -> Optional[str]:
    """Return the case file named by DETECTIVE_CASE_FILE, if any."""
    path = os.environ.get(CASE_FILE_ENV_VAR, "").strip()
    return path or None
