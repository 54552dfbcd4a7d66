# =============================================================================
# File: model_response.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ModelInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(..., description="Canonical pair key, e.g. 'en-zh'.")
    from_lang: str = Field(..., alias="from")
    to_lang: str = Field(..., alias="to")


class ModelListResponse(BaseModel):
    models: List[ModelInfo] = Field(default_factory=list)


class RegisterModelResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(True)
    key: str
    from_lang: str = Field(..., alias="from")
    to_lang: str = Field(..., alias="to")
    already_registered: bool = Field(False, alias="alreadyRegistered")
    message: Optional[str] = Field(None)
