# =============================================================================
# File: state.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from fastapi import Depends, Request

from app.app_state import TranslationState


def get_translation_state(request: Request) -> TranslationState:
    """The process-wide state created by the application lifespan."""
    return request.app.state.translation


# Module-level default to avoid function-call defaults in signatures (flake8 B008)
STATE_DEP = Depends(get_translation_state)
