from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from core.config import BACKEND_DIR


_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(level: str | int | None, *, environment: str) -> int:
    """Explicit ``level`` (name or number) wins; otherwise INFO in production, DEBUG elsewhere."""

    if level is None or level == "":
        env = (environment or "development").lower().strip()
        return logging.INFO if env == "production" else logging.DEBUG
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(
    *,
    environment: str,
    level: str | int | None = None,
    log_dir: str | Path | None = None,
) -> int:
    """Configure application logging and return the effective level.

    - Dev: console logs.
    - Prod: console + rotating ``wizard.log`` under ``log_dir`` (default
      ``backend/logs``).

    When the root logger already has handlers (a second app in one process,
    the CLI under pytest) they are kept and only the level is applied.
    """

    effective = resolve_level(level, environment=environment)
    root = logging.getLogger()

    if root.handlers:
        root.setLevel(effective)
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

        console = logging.StreamHandler()
        console.setFormatter(formatter)
        handlers: list[logging.Handler] = [console]

        if (environment or "").lower().strip() == "production":
            logs_dir = Path(log_dir) if log_dir else Path(BACKEND_DIR) / "logs"
            logs_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                logs_dir / "wizard.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

        logging.basicConfig(level=effective, handlers=handlers)

    for name in _SERVER_LOGGERS:
        logging.getLogger(name).setLevel(effective)
    return effective
