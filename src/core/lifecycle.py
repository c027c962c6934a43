"""Process lifecycle: connect at startup, close once at shutdown.

    UNINITIALIZED -> CONNECTING -> READY -> SHUTTING_DOWN -> CLOSED
                          \\---------------------------------> CLOSED  (connection failure)

CLOSED is terminal. Any other transition raises LifecycleError.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, FrozenSet, Optional

from src.database.mongo_client import MongoConnection, open_connection

from .config import AppConfig
from .errors import ConnectionFailure, LifecycleError

logger = logging.getLogger(__name__)


class LifecycleState(str, Enum):
    uninitialized = "uninitialized"
    connecting = "connecting"
    ready = "ready"
    shutting_down = "shutting_down"
    closed = "closed"


_TRANSITIONS: Dict[LifecycleState, FrozenSet[LifecycleState]] = {
    LifecycleState.uninitialized: frozenset({LifecycleState.connecting}),
    LifecycleState.connecting: frozenset({LifecycleState.ready, LifecycleState.closed}),
    LifecycleState.ready: frozenset({LifecycleState.shutting_down}),
    LifecycleState.shutting_down: frozenset({LifecycleState.closed}),
    LifecycleState.closed: frozenset(),
}

Connector = Callable[[AppConfig], MongoConnection]


class LifecycleManager:
    def __init__(self, config: AppConfig, connector: Optional[Connector] = None) -> None:
        self.config = config
        self._connector = connector or open_connection
        self._state = LifecycleState.uninitialized
        self._connection: Optional[MongoConnection] = None
        self._was_ready = False

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is LifecycleState.ready

    @property
    def was_ready(self) -> bool:
        """True once a connection has been established, even after shutdown."""
        return self._was_ready

    @property
    def connection(self) -> MongoConnection:
        if self._connection is None or not self.is_ready:
            raise LifecycleError(f"No usable connection in state {self._state.value!r}")
        return self._connection

    def _transition(self, target: LifecycleState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise LifecycleError(
                f"Invalid lifecycle transition {self._state.value!r} -> {target.value!r}"
            )
        logger.debug(f"Lifecycle {self._state.value} -> {target.value}")
        self._state = target

    def connect(self) -> MongoConnection:
        """Open the database connection. Raises ConnectionFailure (no retry)."""

        self._transition(LifecycleState.connecting)
        try:
            connection = self._connector(self.config)
        except Exception as exc:
            self._transition(LifecycleState.closed)
            logger.error(f"✗ MongoDB connection error: {exc}")
            if isinstance(exc, ConnectionFailure):
                raise
            raise ConnectionFailure(str(exc)) from exc

        self._connection = connection
        self._transition(LifecycleState.ready)
        self._was_ready = True
        return connection

    def shutdown(self) -> None:
        """Release the connection. Safe to call again once CLOSED."""

        if self._state is LifecycleState.closed:
            return
        self._transition(LifecycleState.shutting_down)
        logger.info("⏹ Shutting down gracefully...")
        try:
            if self._connection is not None:
                self._connection.close()
        finally:
            self._connection = None
            self._transition(LifecycleState.closed)
