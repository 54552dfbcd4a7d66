# =============================================================================
# File: language_codes.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Language code normalization.

Canonical codes are the cache keys used by the model registry and the pivot
router, so every code coming from a caller goes through `normalize` first.
"""
import re
from typing import Dict, Optional

TRADITIONAL_CHINESE = "zh-Hant"

# Canonical form: a 2-3 letter primary subtag, optionally with a script subtag.
CANONICAL_CODE = re.compile(r"^[a-z]{2,3}(-[A-Z][a-z]{3})?$")

LANGUAGE_ALIASES: Dict[str, str] = {
    "zh": "zh",
    "zh-cn": "zh",
    "zh-sg": "zh",
    "zh-hans": "zh",
    "cmn": "zh",
    "chinese": "zh",
    "zh-tw": TRADITIONAL_CHINESE,
    "zh-hk": TRADITIONAL_CHINESE,
    "zh-mo": TRADITIONAL_CHINESE,
    "zh-hant": TRADITIONAL_CHINESE,
    "cht": TRADITIONAL_CHINESE,
    "en-us": "en",
    "en-gb": "en",
    "en-au": "en",
    "en-ca": "en",
    "en-nz": "en",
    "en-ie": "en",
    "en-za": "en",
    "en-jm": "en",
    "en-bz": "en",
    "en-tt": "en",
    "ja-jp": "ja",
    "jp": "ja",
    "ko-kr": "ko",
    "kr": "ko",
}

# Script variants that share the base language's model files.
MODEL_KEY_ALIASES: Dict[str, str] = {
    TRADITIONAL_CHINESE: "zh",
    "zh-Hans": "zh",
}

# Display names accepted by the HCFY-compatible surface.
LANGUAGE_NAMES: Dict[str, str] = {
    "中文(简体)": "zh",
    "中文(繁体)": TRADITIONAL_CHINESE,
    "简体中文": "zh",
    "繁体中文": TRADITIONAL_CHINESE,
    "english": "en",
    "chinese": "zh",
    "japanese": "ja",
    "korean": "ko",
    "french": "fr",
    "german": "de",
    "spanish": "es",
    "russian": "ru",
    "portuguese": "pt",
    "英语": "en",
    "日语": "ja",
    "韩语": "ko",
    "法语": "fr",
    "德语": "de",
    "西班牙语": "es",
    "俄语": "ru",
    "葡萄牙语": "pt",
}

DISPLAY_NAMES: Dict[str, str] = {
    "zh": "中文(简体)",
    TRADITIONAL_CHINESE: "中文(繁体)",
    "en": "英语",
    "ja": "日语",
    "ko": "韩语",
    "fr": "法语",
    "de": "德语",
    "es": "西班牙语",
    "ru": "俄语",
    "pt": "葡萄牙语",
}


def normalize(code: Optional[str]) -> str:
    """Map a locale or alias string to its canonical language code.

    Total: unknown input degrades to its primary subtag, and empty input
    to the empty string.
    """
    if not code:
        return ""

    normalized = code.strip().lower().replace("_", "-")
    if normalized in LANGUAGE_ALIASES:
        return LANGUAGE_ALIASES[normalized]

    primary = normalized.split("-", 1)[0].strip()
    if primary in LANGUAGE_ALIASES:
        return LANGUAGE_ALIASES[primary]

    return primary


def is_valid_code(code: str) -> bool:
    return bool(code) and CANONICAL_CODE.match(code) is not None


def model_code(code: str) -> str:
    """Return the code whose model files serve `code` (script variants collapse)."""
    return MODEL_KEY_ALIASES.get(code, code)


def pair_key(source: str, target: str) -> str:
    return f"{source}-{target}"


def code_from_name(name: Optional[str]) -> str:
    """Resolve a localized display name (e.g. ``"英语"``) to a canonical code."""
    if not name:
        return ""
    stripped = name.strip()
    code = LANGUAGE_NAMES.get(stripped) or LANGUAGE_NAMES.get(stripped.lower())
    return normalize(code or stripped)


def display_name(code: str) -> str:
    return DISPLAY_NAMES.get(code, code)
