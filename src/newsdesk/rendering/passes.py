"""Reference resolution passes — rewrite reference tokens at send time.

Passes run one after another, each over the previous pass's output. Inside a
pass every distinct token is resolved once and the lookups run concurrently.
A token that cannot be resolved stays in the markup untouched.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from newsdesk.models.directory import DisplayInfo

logger = logging.getLogger(__name__)

USER_TOKEN = re.compile(r"<@([A-Z0-9]+)>")
CHANNEL_TOKEN = re.compile(r"<#([A-Z0-9]+)(?:\|[^>]*)?>")
_UNSAFE = re.compile(r"[<>]")


class DirectoryClient(Protocol):
    """Lookup collaborator used to resolve reference tokens."""

    async def resolve_user(self, user_id: str) -> DisplayInfo | None: ...

    async def resolve_channel(self, channel_id: str) -> str | None: ...


@dataclass(frozen=True)
class ResolutionPass:
    """One named rewrite over a single class of token."""

    name: str
    pattern: re.Pattern[str]
    resolve: Callable[[DirectoryClient, str], Awaitable[str | None]]

    async def apply(self, markup: str, lookup: DirectoryClient) -> str:
        ids = list(dict.fromkeys(match.group(1) for match in self.pattern.finditer(markup)))
        if not ids:
            return markup

        results = await asyncio.gather(
            *(self.resolve(lookup, ref_id) for ref_id in ids), return_exceptions=True
        )
        resolved: dict[str, str] = {}
        for ref_id, result in zip(ids, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(
                    "Reference lookup failed — pass=%s id=%s error=%r", self.name, ref_id, result
                )
            elif not result:
                logger.warning("Reference not found — pass=%s id=%s", self.name, ref_id)
            else:
                resolved[ref_id] = _sanitize(result)

        def substitute(match: re.Match[str]) -> str:
            return resolved.get(match.group(1), match.group(0))

        return self.pattern.sub(substitute, markup)


def _sanitize(text: str) -> str:
    # Resolved text must never look like a token again.
    return _UNSAFE.sub("", text).strip()


async def _resolve_user(lookup: DirectoryClient, user_id: str) -> str | None:
    info = await lookup.resolve_user(user_id)
    return info.label if info else None


async def _resolve_channel(lookup: DirectoryClient, channel_id: str) -> str | None:
    name = await lookup.resolve_channel(channel_id)
    return f"#{name}" if name else None


CHANNEL_PASS = ResolutionPass("channels", CHANNEL_TOKEN, _resolve_channel)
MENTION_PASS = ResolutionPass("mentions", USER_TOKEN, _resolve_user)
DEFAULT_PASSES: tuple[ResolutionPass, ...] = (CHANNEL_PASS, MENTION_PASS)


async def run_passes(
    markup: str,
    lookup: DirectoryClient,
    passes: Sequence[ResolutionPass] = DEFAULT_PASSES,
) -> str:
    """Run every pass over ``markup`` in order and return the resolved text."""
    for resolution_pass in passes:
        markup = await resolution_pass.apply(markup, lookup)
    return markup
