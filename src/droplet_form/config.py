"""Runtime settings read from the environment"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TOKEN_ENV = "DO_TOKEN"
DEFAULT_WAIT_TIMEOUT = 300.0  # seconds
DEFAULT_POLL_INTERVAL = 5.0  # seconds
DEFAULT_MAX_POLL_FAILURES = 3


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass
class Settings:
    """Knobs for the submission; CLI options override the environment defaults"""

    token_env: str = DEFAULT_TOKEN_ENV
    wait_timeout: float = DEFAULT_WAIT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    max_poll_failures: int = DEFAULT_MAX_POLL_FAILURES
    log_file: Path | None = None
    debug: bool = False

    @classmethod
    def from_env(cls) -> Settings:
        log_file = os.getenv("DROPLET_FORM_LOG", "").strip()
        return cls(
            wait_timeout=_env_float("DROPLET_FORM_WAIT_TIMEOUT", DEFAULT_WAIT_TIMEOUT),
            poll_interval=_env_float("DROPLET_FORM_POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
            log_file=Path(log_file).expanduser() if log_file else None,
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )

    def read_token(self) -> str:
        """API token from the environment, empty when unset"""
        return os.getenv(self.token_env, "").strip()
