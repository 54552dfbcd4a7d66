# =============================================================================
# File: appsettings.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import List, Optional

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    name: str = Field(default="LinguaSpark")
    description: str = Field(
        default="Translation service backed by swappable language-pair engines"
    )
    version: str = Field(default="0.1.0")
    is_production: bool = Field(default=True)
    debug: bool = Field(default=False)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class ServerConfig(BaseModel):
    type: str = Field(default="uvicorn")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000)
    keepalive_timeout: int = Field(default=5)
    graceful_timeout: int = Field(default=10)


class ModelsConfig(BaseModel):
    models_dir: str = Field(default="./models")
    preload_artifacts: bool = Field(default=True)
    hub_language: str = Field(default="en")
    allowed_model_dirs: List[str] = Field(default_factory=list)


class EngineConfig(BaseModel):
    runtime: str = Field(default="bergamot")
    init_timeout_seconds: float = Field(default=30.0, gt=0)


class ActivityLogConfig(BaseModel):
    retention_seconds: float = Field(default=20 * 60, gt=0)
    max_entries: int = Field(default=1000, ge=1)
    excerpt_chars: int = Field(default=500, ge=1)
    default_limit: int = Field(default=50, ge=1)
    max_limit: int = Field(default=200, ge=1)


class SecurityConfig(BaseModel):
    api_key: Optional[str] = Field(default=None)


class LoggingConfig(BaseModel):
    folder: str = Field(default="logs")
    app_log_file: str = Field(default="linguaspark.log")
    level: str = Field(default="INFO")


class AppSettings(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    models: ModelsConfig = Field(default_factory=ModelsConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    activity_log: ActivityLogConfig = Field(default_factory=ActivityLogConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
