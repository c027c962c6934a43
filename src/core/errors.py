"""Error taxonomy shared by the search service and the API layer."""

from __future__ import annotations


class MovieSearchError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(MovieSearchError):
    """Configuration could not be resolved at startup."""


class ConnectionFailure(MovieSearchError):
    """The database connection could not be established. Fatal at startup."""


class QueryFailure(MovieSearchError):
    """A query against the movies collection failed."""


class LifecycleError(MovieSearchError):
    """An invalid lifecycle state transition was requested."""
