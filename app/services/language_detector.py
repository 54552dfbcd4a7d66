# =============================================================================
# File: language_detector.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import re

from langdetect import DetectorFactory, LangDetectException
from langdetect import detect as _langdetect

from app.logger import get_logger
from app.utils.language_codes import normalize
from app.utils.log_sanitizer import sanitize_for_log

logger = get_logger("language_detector")

# langdetect is randomized unless seeded.
DetectorFactory.seed = 0

DEFAULT_LANGUAGE = "en"
MIN_DETECT_LENGTH = 3

_KANA = re.compile(r"[\u3040-\u309f\u30a0-\u30ff]")
_HANGUL = re.compile(r"[\uac00-\ud7af]")
_CJK = re.compile(r"[\u4e00-\u9fff]")


def _script_guess(text: str) -> str:
    if _KANA.search(text):
        return "ja"
    if _HANGUL.search(text):
        return "ko"
    if _CJK.search(text):
        return "zh"
    return DEFAULT_LANGUAGE


def detect(text: str) -> str:
    """Best-effort source language for ``text``; never raises."""
    if not text or len(text.strip()) < MIN_DETECT_LENGTH:
        return DEFAULT_LANGUAGE
    try:
        code = normalize(_langdetect(text))
    except LangDetectException as e:
        logger.debug("Language detection failed: %s", sanitize_for_log(str(e)))
        return _script_guess(text)
    return code or _script_guess(text)
