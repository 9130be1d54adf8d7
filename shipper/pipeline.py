from __future__ import annotations

import logging
from typing import Optional

from shipper.commit import commit_batch
from shipper.delivery import DeliveryClient
from shipper.discovery import discover_files
from shipper.exceptions import PatternError, PayloadError, RequestBuildError
from shipper.loader import load_documents
from shipper.models import CycleOutcome, Settings
from shipper.payload import build_payload

logger = logging.getLogger(__name__)

async def run_cycle(settings: Settings, client: Optional[DeliveryClient] = None) -> CycleOutcome:
    """Run one discover -> load -> build -> send -> commit cycle.

    Cycle-level errors are logged and returned as an ``aborted`` outcome;
    nothing below the cycle escapes. Files are deleted only when the
    endpoint answered 200, and only the ones that made it into the payload.
    """
    try:
        files = discover_files(settings.path_pattern, settings.max_files)
    except PatternError as e:
        logger.error("Error reading files: %s", e)
        return CycleOutcome(status="aborted", error=str(e))

    if not files:
        logger.info("No files to process.")
        return CycleOutcome(status="no_files")

    loaded, skipped = load_documents(files)
    if not loaded:
        logger.info("No valid data to send.")
        return CycleOutcome(status="no_valid_data", discovered=len(files), skipped_files=skipped)

    batch = [item.path for item in loaded]
    outcome = CycleOutcome(
        status="aborted",
        discovered=len(files),
        loaded=len(loaded),
        skipped_files=skipped,
    )

    try:
        body = build_payload([item.document for item in loaded])
    except PayloadError as e:
        logger.error("Error marshalling payload: %s", e)
        outcome.error = str(e)
        return outcome

    client = client or DeliveryClient(settings)
    logger.info("Sending %d documents (%d bytes) to %s", len(batch), len(body), client.endpoint)
    try:
        delivered = await client.send(body)
    except RequestBuildError as e:
        logger.error("%s", e)
        outcome.error = str(e)
        return outcome

    if not delivered:
        outcome.status = "delivery_failed"
        return outcome

    deleted, failures = commit_batch(batch)
    outcome.status = "committed"
    outcome.deleted = len(deleted)
    outcome.delete_failures = failures
    return outcome
