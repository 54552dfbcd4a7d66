# =============================================================================
# File: log_sanitizer.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import re
from typing import Any

_UNSAFE_CHARS = re.compile(r"[\r\n\t\x00-\x1f\x7f-\x9f]")


def sanitize_for_log(value: Any, max_length: int = 200) -> str:
    """
    Sanitize input for safe logging by replacing control characters.

    Args:
        value: Input value to sanitize (language codes, paths, text excerpts)
        max_length: Longer values are cut and suffixed with "..."

    Returns:
        str: Sanitized string safe for logging
    """
    if value is None:
        return "None"

    sanitized = _UNSAFE_CHARS.sub("_", str(value))

    # Limit length to prevent log flooding
    if len(sanitized) > max_length:
        sanitized = sanitized[: max_length - 3] + "..."

    return sanitized
