"""Configuration, error types and process lifecycle."""

from .config import AppConfig
from .errors import (
    ConfigError,
    ConnectionFailure,
    LifecycleError,
    MovieSearchError,
    QueryFailure,
)
from .lifecycle import LifecycleManager, LifecycleState

__all__ = [
    "AppConfig",
    "ConfigError",
    "ConnectionFailure",
    "LifecycleError",
    "LifecycleManager",
    "LifecycleState",
    "MovieSearchError",
    "QueryFailure",
]
