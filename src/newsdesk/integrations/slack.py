"""Slack Web API client — directory lookups and message delivery."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from newsdesk.models.directory import DisplayInfo

if TYPE_CHECKING:
    from newsdesk.config import SlackConfig

logger = logging.getLogger(__name__)

_NOT_FOUND_ERRORS = {"user_not_found", "channel_not_found", "users_not_found"}


class SlackAPIError(Exception):
    """Slack answered with ``ok: false`` or a non-success HTTP status."""

    def __init__(self, method: str, error: str) -> None:
        super().__init__(f"Slack {method} failed: {error}")
        self.method = method
        self.error = error

    @property
    def is_not_found(self) -> bool:
        return self.error in _NOT_FOUND_ERRORS


class SlackClient:
    """Thin async wrapper over the Slack Web API methods the workflow uses."""

    def __init__(
        self, config: SlackConfig, *, http_client: httpx.AsyncClient | None = None
    ) -> None:
        self._config = config
        self._http = http_client or httpx.AsyncClient(timeout=10)
        self._owns_http = http_client is None

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _call(
        self,
        method: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        url = f"{self._config.api_url.rstrip('/')}/{method}"
        headers = {"Authorization": f"Bearer {self._config.bot_token}"}
        if json is not None:
            response = await self._http.post(url, headers=headers, json=json)
        else:
            response = await self._http.get(url, headers=headers, params=params)

        if response.status_code >= 400:
            raise SlackAPIError(method, f"HTTP {response.status_code}")
        data = response.json()
        if not data.get("ok"):
            raise SlackAPIError(method, data.get("error", "unknown_error"))
        return data

    async def resolve_user(self, user_id: str) -> DisplayInfo | None:
        """Look up a user's display details. Returns None when the user does not exist."""
        try:
            data = await self._call("users.info", params={"user": user_id})
        except SlackAPIError as exc:
            if exc.is_not_found:
                return None
            raise
        user = data.get("user") or {}
        profile = user.get("profile") or {}
        return DisplayInfo(
            user_id=user_id,
            name=user.get("name") or user_id,
            display_name=profile.get("display_name") or "",
            real_name=profile.get("real_name") or user.get("real_name") or "",
            image_url=profile.get("image_original") or profile.get("image_192"),
        )

    async def resolve_channel(self, channel_id: str) -> str | None:
        """Look up a channel's name. Returns None when the channel does not exist."""
        try:
            data = await self._call("conversations.info", params={"channel": channel_id})
        except SlackAPIError as exc:
            if exc.is_not_found:
                return None
            raise
        return (data.get("channel") or {}).get("name")

    async def post_message(
        self,
        channel: str,
        payload: dict[str, Any],
        *,
        username: str | None = None,
        icon_url: str | None = None,
    ) -> str:
        """Post a message and return its timestamp id."""
        body: dict[str, Any] = {"channel": channel, **payload}
        if username:
            body["username"] = username
        if icon_url:
            body["icon_url"] = icon_url
        data = await self._call("chat.postMessage", json=body)
        logger.debug("Message posted — channel=%s ts=%s", channel, data.get("ts"))
        return str(data.get("ts", ""))
