from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from shipper.models import FileIssue, LoadedDocument
from shipper.payload import encode_json

logger = logging.getLogger(__name__)

def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")

def parse_document(raw: bytes) -> dict[str, Any]:
    """Parse raw file content as a single JSON object."""
    data = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    # out-of-range numbers (1e400 -> inf) and lone surrogates parse but cannot be shipped
    encode_json(data)
    return data

def load_documents(paths: Iterable[str]) -> tuple[list[LoadedDocument], list[FileIssue]]:
    loaded: list[LoadedDocument] = []
    skipped: list[FileIssue] = []

    for path in paths:
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            logger.warning("Error reading file %s: %s", path, e)
            skipped.append(FileIssue(path=path, reason=f"read: {e}"))
            continue

        try:
            document = parse_document(raw)
        except ValueError as e:
            # UnicodeDecodeError and JSONDecodeError are both ValueErrors
            logger.warning("Error unmarshalling file %s: %s", path, e)
            skipped.append(FileIssue(path=path, reason=f"parse: {e}"))
            continue

        loaded.append(LoadedDocument(path=path, document=document))

    return loaded, skipped
