from __future__ import annotations

import json
from typing import Any, Sequence

from shipper.exceptions import PayloadError

ENVELOPE_KEY = "data"

def encode_json(value: Any) -> bytes:
    """Strict UTF-8 JSON encoding; raises ValueError or TypeError for what the wire cannot carry."""
    return json.dumps(value, ensure_ascii=False, allow_nan=False).encode("utf-8")

def build_payload(documents: Sequence[dict[str, Any]]) -> bytes:
    """Wrap documents in the ``{"data": [...]}`` envelope and encode as UTF-8 JSON."""
    envelope = {ENVELOPE_KEY: list(documents)}
    try:
        return encode_json(envelope)
    except (TypeError, ValueError) as e:
        raise PayloadError(str(e)) from e
