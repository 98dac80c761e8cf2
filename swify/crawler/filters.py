"""Request interception for scraping pages."""

from __future__ import annotations

from collections.abc import Collection
from enum import Enum
from typing import Any

ASSET_RESOURCE_TYPES = frozenset({"image", "stylesheet", "font", "media"})
TEXT_ONLY_RESOURCE_TYPES = ASSET_RESOURCE_TYPES | {"script"}


class InterceptDecision(str, Enum):
    ABORT = "abort"
    CONTINUE = "continue"


def classify_request(resource_type: str, blocked: Collection[str]) -> InterceptDecision:
    """Decide whether a sub-resource request should be aborted."""
    if resource_type in blocked:
        return InterceptDecision.ABORT
    return InterceptDecision.CONTINUE


async def install_request_filter(
    page: Any,
    blocked: Collection[str] = ASSET_RESOURCE_TYPES,
) -> None:
    """
    Abort requests whose resource type is in ``blocked``.

    Must be awaited before the first ``page.goto``; requests issued before
    the route exists are not intercepted.
    """
    blocked_types = frozenset(blocked)

    async def _handle(route: Any, request: Any) -> None:
        if classify_request(request.resource_type, blocked_types) is InterceptDecision.ABORT:
            await route.abort()
            return
        await route.continue_()

    await page.route("**/*", _handle)
