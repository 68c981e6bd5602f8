"""Runtime configuration read from the environment.

Values come from ``os.environ`` after ``load_dotenv()`` has merged a local
``.env`` file. :func:`get_settings` re-reads the environment on every call so
tests can monkeypatch variables freely.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_OVERSAMPLING", "Settings", "get_export_root", "get_settings"]

DEFAULT_OVERSAMPLING = 4
DEFAULT_DOCX_TIMEOUT = 30.0
DEFAULT_DOCX_ENDPOINT = "http://localhost:8000/api"


@dataclass(frozen=True)
class Settings:
    docx_endpoint: str
    docx_timeout: float
    oversampling: int
    export_dir: Path
    log_level: str


def get_export_root() -> Path:
    """Return the directory downloads are written to."""
    env_root = os.getenv("CV_STUDIO_EXPORT_DIR")
    if env_root:
        return Path(env_root).expanduser().resolve()

    project_root = Path(__file__).resolve().parents[2]
    return project_root / "exports"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return default


def get_settings() -> Settings:
    oversampling = int(_env_float("CV_STUDIO_OVERSAMPLING", DEFAULT_OVERSAMPLING))
    return Settings(
        docx_endpoint=os.getenv("CV_STUDIO_DOCX_ENDPOINT", DEFAULT_DOCX_ENDPOINT).rstrip("/"),
        docx_timeout=_env_float("CV_STUDIO_DOCX_TIMEOUT", DEFAULT_DOCX_TIMEOUT),
        oversampling=max(1, oversampling),
        export_dir=get_export_root(),
        log_level=os.getenv("CV_STUDIO_LOG_LEVEL", "INFO").upper(),
    )
