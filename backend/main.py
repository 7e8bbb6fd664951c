import os
import sys
import logging
import threading
import uvicorn

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

if os.environ.get("DEBUG", "0") == "1":
    logging.getLogger().setLevel(logging.DEBUG)

from api import create_app
from config import Config, get_config
from use_cases.shutdown import ShutdownCoordinator

# uvicorn force-closes connections at shutdown_timeout; the watcher waits a
# little longer so a stop that uses the full budget still counts as clean.
LISTENER_STOP_MARGIN = 1.0


def graceful_shutdown(
    server: uvicorn.Server,
    coordinator: ShutdownCoordinator,
    stopped: threading.Event,
    timeout: float,
) -> bool:
    """Wait for /shutdown, then for the last pending job, then stop the listener.

    Returns False when the listener did not stop within ``timeout`` seconds.
    """
    coordinator.wait_for_shutdown_request()
    logger.info("Server is shutting down...")

    coordinator.wait_until_drained()
    logger.info("Pending jobs drained, stopping listener")

    server.should_exit = True
    if not stopped.wait(timeout):
        logger.critical(f"Could not gracefully shutdown the server within {timeout:.0f}s")
        return False
    return True


def _watch_shutdown(server, coordinator, stopped, timeout):
    if not graceful_shutdown(server, coordinator, stopped, timeout + LISTENER_STOP_MARGIN):
        os._exit(1)


def serve(app, cfg: Config) -> int:
    """Run the server until a drained shutdown completes. Returns the exit code."""
    server = uvicorn.Server(uvicorn.Config(
        app,
        host=cfg.host,
        port=cfg.port,
        timeout_keep_alive=cfg.keep_alive_timeout,
        timeout_graceful_shutdown=int(cfg.shutdown_timeout),
        log_level="debug" if cfg.debug else "info",
    ))
    stopped = threading.Event()
    watcher = threading.Thread(
        target=_watch_shutdown,
        args=(server, app.state.coordinator, stopped, cfg.shutdown_timeout),
        name="graceful-shutdown",
        daemon=True,
    )
    watcher.start()

    logger.info(f"Server is ready to handle requests at {cfg.host}:{cfg.port}")
    try:
        server.run()
    except SystemExit as e:
        # uvicorn exits with status 1 when the socket cannot be bound
        logger.critical(f"Could not listen on {cfg.host}:{cfg.port}: exit status {e.code}")
        return 1
    finally:
        stopped.set()

    if not server.started:
        logger.critical(f"Could not listen on {cfg.host}:{cfg.port}")
        return 1

    logger.info("Server stopped")
    return 0


config = get_config()
app = create_app(config)

if __name__ == "__main__":
    sys.exit(serve(app, config))
