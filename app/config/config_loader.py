# =============================================================================
# File: config_loader.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import json
import os
from typing import Any, Dict, Optional

from pydantic import ValidationError

from app.config.appsettings import AppSettings
from app.exceptions import InvalidConfigError, MissingConfigError
from app.logger import get_logger
from app.utils.log_sanitizer import sanitize_for_log

logger = get_logger("config_loader")


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


class ConfigLoader:
    __appsettings: Optional[AppSettings] = None

    @staticmethod
    def get_app_settings(config_dir: Optional[str] = None) -> AppSettings:
        """
        Loads AppSettings from appsettings.json and environment-specific override in the same folder.
        Performs a deep merge for nested config sections, then applies environment variables.
        """
        data = ConfigLoader._load_config_data("appsettings.json", True, config_dir)
        try:
            settings = AppSettings(**data)
        except ValidationError as e:
            logger.error("Invalid appsettings: %s", sanitize_for_log(str(e)))
            raise InvalidConfigError(f"Invalid appsettings: {e}")

        env = os.getenv("LINGUASPARK_API_ENV", "Production")
        settings.app.is_production = env.lower() in ["production", "enterprise"]
        settings.app.debug = _env_flag("APP_DEBUG_MODE", settings.app.debug)

        settings.server.host = os.getenv(
            "SERVER_HOST", os.getenv("IP", settings.server.host)
        )
        settings.server.port = int(
            os.getenv("SERVER_PORT", os.getenv("PORT", settings.server.port))
        )

        settings.models.models_dir = os.getenv("MODELS_DIR", settings.models.models_dir)
        settings.models.preload_artifacts = _env_flag(
            "LINGUASPARK_PRELOAD_ARTIFACTS", settings.models.preload_artifacts
        )

        settings.engine.init_timeout_seconds = float(
            os.getenv(
                "LINGUASPARK_ENGINE_INIT_TIMEOUT", settings.engine.init_timeout_seconds
            )
        )
        if settings.engine.init_timeout_seconds <= 0:
            raise InvalidConfigError("LINGUASPARK_ENGINE_INIT_TIMEOUT must be positive")

        # An API key switches authentication on; no key means open access.
        api_key = os.getenv("API_KEY", settings.security.api_key or "")
        settings.security.api_key = api_key or None

        cors_origins = os.getenv("LINGUASPARK_CORS_ORIGINS")
        if cors_origins:
            settings.app.cors_origins = [
                origin.strip() for origin in cors_origins.split(",") if origin.strip()
            ]

        settings.logging.folder = os.getenv("LINGUASPARK_LOG_PATH", settings.logging.folder)
        settings.logging.level = os.getenv(
            "LINGUASPARK_LOG_LEVEL", settings.logging.level
        ).upper()

        ConfigLoader.__appsettings = settings
        ConfigLoader._validate_paths()
        return settings

    @staticmethod
    def _validate_paths():
        """Report on (but never require) the models directory."""
        settings = ConfigLoader.__appsettings
        models_dir = settings.models.models_dir
        if not os.path.exists(models_dir):
            logger.warning(
                "Models directory does not exist: %s (no models will be discovered)",
                sanitize_for_log(models_dir),
            )
        elif not os.path.isdir(models_dir):
            logger.warning(
                "Models path is not a directory: %s", sanitize_for_log(models_dir)
            )
        else:
            logger.info("Validated models directory: %s", sanitize_for_log(models_dir))

    @staticmethod
    def _load_config_data(
        config_file_name: str,
        check_env_file: bool = False,
        config_dir: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Loads a config file and merges with environment-specific override if present.
        Performs a deep merge for nested config sections.
        """
        base_dir = config_dir or os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, config_file_name)

        logger.debug(f"Loading config from {config_file_name}")

        def deep_update(d, u):
            for k, v in u.items():
                if isinstance(v, dict) and isinstance(d.get(k), dict):
                    deep_update(d[k], v)
                else:
                    d[k] = v

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, FileNotFoundError) as e:
            logger.error("Config file not accessible: %s", sanitize_for_log(config_path))
            raise MissingConfigError(f"Cannot access config file {config_file_name}: {e}")
        except (json.JSONDecodeError, ValueError) as e:
            logger.error("Invalid config format in %s", sanitize_for_log(config_path))
            raise InvalidConfigError(f"Config file format error: {e}")

        # Merge environment-specific config if requested and it exists (deep merge)
        if check_env_file:
            env = os.getenv("LINGUASPARK_API_ENV", "Production")
            name, ext = os.path.splitext(config_file_name)
            env_file = f"{name}.{env.lower()}{ext}"
            env_path = os.path.join(base_dir, env_file)
            logger.debug(f"Loading config from {env_file}")
            try:
                with open(env_path, "r", encoding="utf-8") as f:
                    env_data = json.load(f)
                deep_update(data, env_data)
            except (OSError, FileNotFoundError):
                logger.debug(
                    f"Environment-specific config file not found: {env_file}. Using base config."
                )
            except (json.JSONDecodeError, ValueError) as e:
                logger.error(
                    "Invalid environment config format in %s: %s",
                    sanitize_for_log(env_file),
                    sanitize_for_log(str(e)),
                )
                raise InvalidConfigError(f"Environment config format error: {e}")

        return data
