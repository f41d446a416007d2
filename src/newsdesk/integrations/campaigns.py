"""Email campaign service client (Plunk campaigns API)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Sequence

    from newsdesk.config import CampaignConfig

logger = logging.getLogger(__name__)


class CampaignServiceError(Exception):
    """The campaign service answered with a non-success status."""

    def __init__(self, action: str, status_code: int, reason: str) -> None:
        super().__init__(f"Failed to {action} campaign: {status_code} {reason}")
        self.action = action
        self.status_code = status_code
        self.reason = reason


class CampaignClient:
    """Create and send email campaigns."""

    def __init__(
        self, config: CampaignConfig, *, http_client: httpx.AsyncClient | None = None
    ) -> None:
        self._config = config
        self._http = http_client or httpx.AsyncClient(timeout=30)
        self._owns_http = http_client is None

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
        }

    def _url(self, path: str) -> str:
        return f"{self._config.api_url.rstrip('/')}/{path}"

    async def create_campaign(self, subject: str, body: str, recipients: Sequence[str]) -> str:
        """Create an HTML campaign and return its id."""
        response = await self._http.post(
            self._url("campaigns"),
            headers=self._headers,
            json={
                "subject": subject,
                "body": body,
                "recipients": list(recipients),
                "style": "HTML",
            },
        )
        if not response.is_success:
            raise CampaignServiceError("create", response.status_code, response.reason_phrase)
        campaign_id = str(response.json()["id"])
        logger.info("Campaign created — id=%s recipients=%d", campaign_id, len(recipients))
        return campaign_id

    async def send_campaign(self, campaign_id: str) -> None:
        """Send a previously created campaign immediately."""
        response = await self._http.post(
            self._url("campaigns/send"),
            headers=self._headers,
            json={"id": campaign_id, "live": True, "delay": 0},
        )
        if not response.is_success:
            raise CampaignServiceError("send", response.status_code, response.reason_phrase)
        logger.info("Campaign sent — id=%s", campaign_id)
