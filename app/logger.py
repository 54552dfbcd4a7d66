# =============================================================================
# File: logger.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import logging
import os
from typing import Dict, Optional, Tuple

# Values set by configure_logging() win over the environment defaults.
_CONFIGURED: Dict[str, Optional[str]] = {"log_dir": None, "log_file": None, "level": None}
_CREATED: Dict[str, Tuple[Optional[str], Optional[str]]] = {}


def get_logger(
    name: str = "linguaspark",
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
) -> logging.Logger:
    _CREATED[name] = (log_file, log_dir)
    log_dir = log_dir or _CONFIGURED["log_dir"] or os.getenv("LINGUASPARK_LOG_PATH", "logs")
    log_file = log_file or _CONFIGURED["log_file"] or "linguaspark.log"
    if not os.path.exists(log_dir):
        os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.abspath(os.path.join(log_dir, log_file))

    logger = logging.getLogger(f"linguaspark.{name}" if name != "linguaspark" else name)
    level = _CONFIGURED["level"] or os.getenv("LINGUASPARK_LOG_LEVEL", "INFO")
    logger.setLevel(level.upper())
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Console handler
    if not any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in logger.handlers
    ):
        ch = logging.StreamHandler()
        ch.setFormatter(formatter)
        logger.addHandler(ch)

    # File handler; a reconfigured path replaces the old one.
    for h in list(logger.handlers):
        if isinstance(h, logging.FileHandler) and h.baseFilename != log_path:
            logger.removeHandler(h)
            h.close()
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger


def configure_logging(
    folder: Optional[str] = None,
    app_log_file: Optional[str] = None,
    level: Optional[str] = None,
) -> None:
    """Apply the ``logging`` settings section to existing and future loggers."""
    _CONFIGURED["log_dir"] = folder or None
    _CONFIGURED["log_file"] = app_log_file or None
    _CONFIGURED["level"] = level.upper() if level else None
    for name, (log_file, log_dir) in list(_CREATED.items()):
        get_logger(name, log_file, log_dir)
