from __future__ import annotations

import logging
from typing import Optional
import httpx

from shipper.exceptions import RequestBuildError
from shipper.models import Settings

logger = logging.getLogger(__name__)

ACCEPT = "application/vnd.airbox.v1+json"
CONTENT_TYPE = "application/json"

def build_headers(api_token: str, server_key: str) -> dict[str, str]:
    return {
        "Accept": ACCEPT,
        "Content-Type": CONTENT_TYPE,
        "Authorization": f"Bearer {api_token}",
        "X-Server-Key": server_key,
    }

class DeliveryClient:
    """POSTs a serialized payload to the configured endpoint.

    ``send`` returns True only for an HTTP 200. Transport errors and any other
    status are logged and reported as False. A request that cannot be built
    at all raises ``RequestBuildError``. Nothing is retried here.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.endpoint = settings.api_endpoint
        self.timeout = settings.request_timeout
        self.headers = build_headers(settings.api_token, settings.server_key)
        self._transport = transport

    async def send(self, body: bytes) -> bool:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport, follow_redirects=False) as client:
            try:
                request = client.build_request("POST", self.endpoint, content=body, headers=self.headers)
            except (httpx.InvalidURL, httpx.UnsupportedProtocol, ValueError, TypeError) as e:
                raise RequestBuildError(str(e)) from e

            try:
                resp = await client.send(request)
            except httpx.UnsupportedProtocol as e:
                raise RequestBuildError(str(e)) from e
            except httpx.HTTPError as e:
                logger.error("Error sending request to %s: %s", self.endpoint, e)
                return False

        if resp.status_code != httpx.codes.OK:
            logger.error("Received non-OK response: %d", resp.status_code)
            return False

        logger.info("Payload successfully sent.")
        return True
