# =============================================================================
# File: path_validator.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import re
from pathlib import Path
from typing import Iterable, Union

from app.exceptions import UnsafePathError
from app.logger import get_logger
from app.utils.log_sanitizer import sanitize_for_log

logger = get_logger("path_validator")

# Dangerous path patterns
DANGEROUS_PATTERNS = [
    r"\.\.",  # Parent directory traversal
    r"~",  # Home directory
    r"\$",  # Environment variables
    r"%",  # Windows environment variables
    r"\\\\",  # UNC paths
]

COMPILED_PATTERNS = [re.compile(pattern) for pattern in DANGEROUS_PATTERNS]

MAX_PATH_LENGTH = 4096


def validate_safe_path(
    path: Union[str, Path], base_dirs: Iterable[Union[str, Path]]
) -> str:
    """
    Validate that ``path`` lies within one of ``base_dirs``.

    Relative paths are taken relative to the first base directory.

    Returns:
        str: The resolved absolute path.

    Raises:
        UnsafePathError: If the path is malformed or escapes every base directory.
    """
    raw = str(path)
    for pattern in COMPILED_PATTERNS:
        if pattern.search(raw):
            logger.warning("Rejected model path %s", sanitize_for_log(raw))
            raise UnsafePathError(f"Dangerous path pattern detected: {raw}")
    if len(raw) > MAX_PATH_LENGTH:
        raise UnsafePathError("Path too long")

    bases = [Path(base) for base in base_dirs]
    if not bases:
        raise UnsafePathError("No permitted base directory configured")

    try:
        candidate = Path(raw)
        if not candidate.is_absolute():
            candidate = bases[0] / candidate
        resolved = candidate.resolve()
        for base in bases:
            base = base.resolve()
            if not base.exists():
                continue
            try:
                resolved.relative_to(base)
            except ValueError:
                continue
            return str(resolved)
    except OSError as e:
        raise UnsafePathError(f"Cannot access path: {e}")

    logger.warning("Rejected model path outside permitted roots: %s", sanitize_for_log(raw))
    raise UnsafePathError(f"Path is outside the permitted model directories: {raw}")

