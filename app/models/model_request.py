# =============================================================================
# File: model_request.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterModelRequest(BaseModel):
    """
    Register a language-pair model directory for on-demand loading.
    """

    model_config = ConfigDict(populate_by_name=True)

    from_lang: Optional[str] = Field(None, alias="from", description="Source language code.")
    to_lang: Optional[str] = Field(None, alias="to", description="Target language code.")
    model_dir: Optional[str] = Field(
        None,
        alias="modelDir",
        description="Directory holding the model files. Defaults to <models_dir>/<from>-<to>.",
    )
