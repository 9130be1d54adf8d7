from __future__ import annotations

import glob
import logging
import os

from shipper.exceptions import PatternError

logger = logging.getLogger(__name__)

def _check_pattern(pattern: str) -> None:
    # glob silently treats a malformed class as a literal; reject it instead
    if not pattern:
        raise PatternError(pattern, "empty pattern")
    if "\x00" in pattern:
        raise PatternError(pattern, "embedded NUL byte")

    i = 0
    while i < len(pattern):
        if pattern[i] == "[":
            j = i + 1
            if j < len(pattern) and pattern[j] == "!":
                j += 1
            if j < len(pattern) and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise PatternError(pattern, f"unterminated character class at offset {i}")
            i = close
        i += 1

def discover_files(pattern: str, max_files: int) -> list[str]:
    """Return at most ``max_files`` regular files matching ``pattern``, in lexical order."""
    _check_pattern(pattern)
    try:
        matches = glob.glob(pattern, include_hidden=True)
    except (OSError, ValueError) as e:
        raise PatternError(pattern, str(e)) from e

    files = sorted(p for p in matches if os.path.isfile(p))
    if len(files) > max_files:
        logger.info("Found %d files, limiting batch to %d", len(files), max_files)
        files = files[:max_files]
    return files
