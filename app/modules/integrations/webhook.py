"""Outbound workflow-automation webhook (Workato) for note events.

Delivery is fire-and-forget: failures are logged and never raised, so a
broken integration cannot fail the request that triggered it.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

NOTE_CREATED = "note_created"


def build_note_created_payload(
    *,
    note_id: int,
    content: str,
    user_id: int,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return {
        "noteId": note_id,
        "content": content,
        "userId": user_id,
        "timestamp": timestamp,
        "action": NOTE_CREATED,
    }


class WebhookClient:
    """Posts note events to the configured webhook URL."""

    def __init__(
        self,
        *,
        url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        cfg = settings.webhook
        self.url = url if url is not None else cfg.url
        self.api_token = api_token if api_token is not None else cfg.api_token
        self.timeout = timeout if timeout is not None else cfg.timeout_seconds
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def notify_note_created(
        self, *, note_id: int, content: str, user_id: int
    ) -> bool:
        """Send a ``note_created`` event. Returns True on a 2xx response."""
        if not self.enabled:
            logger.debug("Webhook URL not configured; skipping note %s", note_id)
            return False

        payload = build_note_created_payload(
            note_id=note_id, content=content, user_id=user_id
        )
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.post(
                    self.url, json=payload, headers=self._headers()
                )
        except httpx.HTTPError as e:
            logger.error(
                "Webhook integration error for note %s: %s",
                note_id,
                e,
                extra={"user_id": user_id},
            )
            return False

        if resp.is_success:
            return True

        logger.error(
            "Webhook integration failed for note %s (%s): %s",
            note_id,
            resp.status_code,
            resp.text,
            extra={"user_id": user_id},
        )
        return False
