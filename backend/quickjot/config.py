from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


@dataclass(frozen=True)
class Settings:
    data_dir: Path = field(default=DEFAULT_DATA_DIR)
    log_level: str = "INFO"
    api_url: str = "http://127.0.0.1:8000"
    alloc_max_attempts: int = 10
    request_timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.alloc_max_attempts < 1:
            raise ValueError("alloc_max_attempts must be >= 1")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_dir=Path(_getenv_str("APP_DATA_DIR", str(DEFAULT_DATA_DIR))),
            log_level=_getenv_str("LOG_LEVEL", "INFO").upper(),
            api_url=_getenv_str("QUICKJOT_API_URL", "http://127.0.0.1:8000"),
            alloc_max_attempts=_getenv_int("ALLOC_MAX_ATTEMPTS", 10),
            request_timeout=_getenv_float("QUICKJOT_TIMEOUT_SECONDS", 10.0),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
