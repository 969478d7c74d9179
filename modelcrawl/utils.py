"""Shared utility functions."""
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def get_project_root() -> Path:
    """
    Get the project root directory.

    Returns:
        Path to project root
    """
    return Path(__file__).parent.parent


def get_config_path(filename: str = None) -> Path:
    """
    Get path to config directory or file.

    Args:
        filename: Optional config filename

    Returns:
        Path to config directory or specific config file
    """
    config_dir = get_project_root() / "config"
    if filename:
        return config_dir / filename
    return config_dir


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, value, default)
        return default


class Config:
    """Configuration constants."""

    # Traversal profiles
    PROFILES_PATH = Path(os.getenv("MODELCRAWL_PROFILES", str(get_config_path("profiles.yaml"))))

    # Depth used by profiles that do not set one (-1 = unbounded)
    DEFAULT_DEPTH = _int_env("MODELCRAWL_DEFAULT_DEPTH", -1)

    # Logging
    LOG_LEVEL = os.getenv("MODELCRAWL_LOG_LEVEL", "WARNING")


def configure_logging(level: str = None) -> logging.Logger:
    """
    Set the level of the package logger.

    Handlers are left to the host application.

    Args:
        level: Level name; defaults to Config.LOG_LEVEL

    Returns:
        The "modelcrawl" logger
    """
    logger = logging.getLogger("modelcrawl")
    logger.setLevel((level or Config.LOG_LEVEL).upper())
    return logger
