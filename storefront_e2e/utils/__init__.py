"""Utility helpers for configuration, logging and artifact paths."""

from .config import Settings, get_directory_from_env, load_settings
from .logging_utils import configure_logging, get_logger
from .path_utils import artifact_dir_for, sanitize_node_id, verify_path_exists

__all__ = [
    "Settings",
    "artifact_dir_for",
    "configure_logging",
    "get_directory_from_env",
    "get_logger",
    "load_settings",
    "sanitize_node_id",
    "verify_path_exists",
]
