"""
Runtime settings for FileSense.

Settings come from environment variables; a .env file in the working
directory is loaded first if python-dotenv finds one.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

ENV_DEFAULT_FOLDER = "FILESENSE_DEFAULT_FOLDER"
ENV_LOG_LEVEL = "FILESENSE_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    default_folder: str
    log_level: str = DEFAULT_LOG_LEVEL


def default_folder() -> str:
    """$HOME/Downloads, or /Users when HOME isn't set."""
    home = os.environ.get("HOME")
    if home:
        return os.path.join(home, "Downloads")
    return "/Users"


def load_settings(load_env_file: bool = True) -> Settings:
    """
    Read settings from the environment.

    Args:
        load_env_file: Also read a .env file (existing variables win).
    """
    if load_env_file:
        load_dotenv()

    return Settings(
        default_folder=os.environ.get(ENV_DEFAULT_FOLDER) or default_folder(),
        log_level=(os.environ.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
    )
