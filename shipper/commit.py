from __future__ import annotations

import logging
import os
from typing import Iterable

from shipper.models import FileIssue

logger = logging.getLogger(__name__)

def commit_batch(paths: Iterable[str]) -> tuple[list[str], list[FileIssue]]:
    """Delete every shipped file, continuing past individual failures.

    Must only be called after the batch was acknowledged. Synchronous so a
    cycle deadline can never cancel it half way.
    """
    deleted: list[str] = []
    failures: list[FileIssue] = []
    for path in paths:
        try:
            os.remove(path)
        except OSError as e:
            logger.error("Error deleting file %s: %s", path, e)
            failures.append(FileIssue(path=path, reason=str(e)))
            continue
        logger.info("Deleted file %s", path)
        deleted.append(path)
    return deleted, failures
