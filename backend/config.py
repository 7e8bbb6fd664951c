import os
import logging
from typing import Dict, Any

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_SHUTDOWN_TIMEOUT = 30.0
DEFAULT_KEEP_ALIVE_TIMEOUT = 15


class Config:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self.host = os.environ.get("HOST", DEFAULT_HOST)
        self.port = int(os.environ.get("PORT", DEFAULT_PORT))
        self.debug = os.environ.get("DEBUG", "0") == "1"
        self.shutdown_timeout = float(os.environ.get("SHUTDOWN_TIMEOUT", DEFAULT_SHUTDOWN_TIMEOUT))
        self.keep_alive_timeout = int(os.environ.get("KEEP_ALIVE_TIMEOUT", DEFAULT_KEEP_ALIVE_TIMEOUT))

    @classmethod
    def reload(cls) -> "Config":
        """Drop the cached instance and re-read the environment."""
        cls._instance = None
        return cls()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "shutdown_timeout": self.shutdown_timeout,
            "keep_alive_timeout": self.keep_alive_timeout,
        }


def get_config() -> Config:
    return Config()


def create_infra_adapters(cfg: Config):
    """Create the local infrastructure adapters.

    Jobs always run on their own thread; submission must return before the
    hashing delay starts.
    """
    from adapters.local.memory_job_store import InMemoryJobStore
    from adapters.local.thread_job import ThreadJobAdapter
    from adapters.local.log_progress import LogProgressAdapter

    adapters = {
        "job_store": InMemoryJobStore(),
        "job_queue": ThreadJobAdapter(),
        "progress": LogProgressAdapter(),
    }

    logger.info(f"Infra adapters: {', '.join(type(v).__name__ for v in adapters.values())}")
    return adapters
