"""Run the movie search API with uvicorn.

    python -m src.main

Exit codes: 0 after a clean shutdown (SIGINT/SIGTERM), 1 when the config is
invalid, the database is unreachable or the listen socket cannot be bound.
"""

from __future__ import annotations

import contextlib
import logging
import signal
import threading
from typing import Iterator

import uvicorn

from src.api.app import configure_logging, create_app
from src.core.config import AppConfig
from src.core.errors import ConfigError
from src.core.lifecycle import LifecycleState

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class GracefulServer(uvicorn.Server):
    """uvicorn server that treats SIGINT/SIGTERM as a normal shutdown.

    The stock server re-raises the captured signal once serving stops, which
    would kill the process instead of letting ``main`` return 0.
    """

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        if threading.current_thread() is not threading.main_thread():
            yield
            return
        previous = {sig: signal.signal(sig, self.handle_exit) for sig in SHUTDOWN_SIGNALS}
        try:
            yield
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)


def main() -> int:
    try:
        config = AppConfig.from_env()
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"✗ Invalid configuration: {e}")
        return 1

    configure_logging(config)
    app = create_app(config)
    lifecycle = app.state.lifecycle

    server = GracefulServer(
        uvicorn.Config(app, host=config.host, port=config.port, lifespan="on")
    )
    try:
        server.run()
        failed = not server.started
    except SystemExit as e:
        # uvicorn exits on a failed lifespan startup (3) or a failed bind (1)
        failed = e.code not in (None, 0)

    if not failed:
        return 0

    if not lifecycle.was_ready:
        logger.error("✗ Failed to start server: MongoDB is unreachable")
    else:
        logger.error(f"✗ Failed to start server: could not listen on {config.host}:{config.port}")
        # The lifespan already connected; release it since shutdown never ran.
        if lifecycle.state is LifecycleState.ready:
            lifecycle.shutdown()
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
