# salesboard/core/notifications.py
"""
Outbound Slack messages. Fire-and-forget: a failed post is logged and never
affects the request that triggered it.
"""
from __future__ import annotations

import logging

import httpx

from salesboard.core.config import settings

logger = logging.getLogger(__name__)

SLACK_TIMEOUT_SECONDS = 5.0


def sale_message(profile_name: str, revenue: int) -> str:
    return f"{profile_name} har genomfört en försäljning på {revenue} SEK 🎉"


def level_up_message(profile_name: str, level: int) -> str:
    return f"{profile_name} har precis gått upp till level {level} 🎉"


async def post_to_slack(text: str, webhook_url: str | None = None) -> bool:
    url = webhook_url or settings.SLACK_WEBHOOK_URL
    if not url:
        logger.debug("SLACK_WEBHOOK_URL is not set, skipping notification")
        return False

    try:
        async with httpx.AsyncClient(timeout=SLACK_TIMEOUT_SECONDS) as client:
            resp = await client.post(url, json={"text": text})
            resp.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Slack notification failed: %s", e)
        return False

    return True
