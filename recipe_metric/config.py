from __future__ import annotations

import logging
import os
from dataclasses import dataclass


ENV_PREFIX = "RECIPE_METRIC_"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class Config:
    host: str = "127.0.0.1"
    port: int = 8787
    log_level: str = "INFO"
    # None means no timeout, same as a bare requests.get
    fetch_timeout_s: float | None = None
    user_agent: str | None = None

    @staticmethod
    def load_from_env(environ: dict[str, str] | None = None) -> "Config":
        env = os.environ if environ is None else environ
        defaults = Config()

        port = _env(env, "PORT")
        timeout = _env(env, "FETCH_TIMEOUT")

        return Config(
            host=_env(env, "HOST") or defaults.host,
            port=_to_number(int, "PORT", port) if port else defaults.port,
            log_level=(_env(env, "LOG_LEVEL") or defaults.log_level).upper(),
            fetch_timeout_s=_to_number(float, "FETCH_TIMEOUT", timeout) if timeout else None,
            user_agent=_env(env, "USER_AGENT"),
        )


def _env(env, key: str) -> str | None:
    val = env.get(ENV_PREFIX + key)
    if val is None or not val.strip():
        return None
    return val.strip()


def _to_number(kind, key: str, val: str):
    try:
        return kind(val)
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{key} must be a number, got {val!r}") from None


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
