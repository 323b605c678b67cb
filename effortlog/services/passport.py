from __future__ import annotations

import json
import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import DecodeError, UpstreamError
from ..schemas.user import PassportRecord

logger = logging.getLogger(__name__)


class PassportLookup:
    """Blocking client for the external passport-info service.

    One instance is created per process by ``create_app`` and closed on
    shutdown; it keeps a pooled ``httpx.Client`` underneath.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 6.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self._client = httpx.Client(timeout=httpx.Timeout(timeout), transport=transport)

    def fetch(self, series: str, number: str) -> PassportRecord:
        if not self.base_url:
            raise UpstreamError("Passport service is not configured")
        params = {"passportSerie": series, "passportNumber": number}
        try:
            response = self._client.get(self.base_url, params=params)
        except httpx.HTTPError as exc:
            logger.error("Passport service request failed: %s", exc)
            raise UpstreamError(f"Failed to get user info from passport service: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            logger.error(
                "Passport service returned an error",
                extra={"extra_data": {"status": response.status_code}},
            )
            raise UpstreamError(
                f"Failed to get user info from passport service: HTTP {response.status_code}"
            )

        try:
            return PassportRecord.model_validate(response.json())
        except (json.JSONDecodeError, PydanticValidationError) as exc:
            raise DecodeError(f"Failed parsing user info from passport service: {exc}") from exc

    def close(self) -> None:
        self._client.close()
