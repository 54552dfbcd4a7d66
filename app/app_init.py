# =============================================================================
# File: app_init.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import os

from app.config.config_loader import ConfigLoader
from app.logger import configure_logging, get_logger

logger = get_logger("app_init")

APP_SETTINGS = ConfigLoader.get_app_settings()

configure_logging(
    folder=APP_SETTINGS.logging.folder,
    app_log_file=APP_SETTINGS.logging.app_log_file,
    level=APP_SETTINGS.logging.level,
)

logger.info(f"Environment: {os.getenv('LINGUASPARK_API_ENV', 'Production')}")
