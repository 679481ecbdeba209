"""Environment-driven settings shared by the CLI and the web server."""

import logging
import os
from dataclasses import dataclass


@dataclass
class Settings:
    host: str = "127.0.0.1"
    port: int = 5000
    max_sessions: int = 1000
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.environ.get("CHAINCALC_HOST", cls.host),
            port=int(os.environ.get("CHAINCALC_PORT", cls.port)),
            max_sessions=int(os.environ.get("CHAINCALC_MAX_SESSIONS", cls.max_sessions)),
            log_level=os.environ.get("CHAINCALC_LOG_LEVEL", cls.log_level).upper(),
        )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
