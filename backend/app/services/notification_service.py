"""Approval/rejection email collaborator client.

Delivery happens out of band behind an HTTP webhook. Every call is best effort:
failures are retried a bounded number of times, logged, and never raised to
the moderation flow that triggered them.
"""

import logging
import time
from typing import Any, Dict, Optional

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class ApprovalNotifier:
    def __init__(
        self,
        *,
        webhook_url: Optional[str] = None,
        api_key: Optional[str] = None,
        enabled: Optional[bool] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_seconds: float = 0.5,
    ):
        self.webhook_url = str(webhook_url if webhook_url is not None else settings.NOTIFICATION_WEBHOOK_URL).strip()
        self.api_key = api_key if api_key is not None else settings.NOTIFICATION_API_KEY
        self.enabled = settings.NOTIFICATION_ENABLED if enabled is None else enabled
        self.timeout = float(timeout if timeout is not None else settings.NOTIFICATION_TIMEOUT_SECONDS)
        self.max_retries = max(0, int(max_retries if max_retries is not None else settings.NOTIFICATION_MAX_RETRIES))
        self.backoff_seconds = backoff_seconds

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _post(self, payload: Dict[str, Any]) -> None:
        response = httpx.post(
            self.webhook_url,
            headers=self._headers(),
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()

    def _is_retryable(self, exc: Exception) -> bool:
        if isinstance(exc, httpx.HTTPStatusError):
            return exc.response.status_code in RETRYABLE_STATUS
        return isinstance(exc, httpx.TransportError)

    def send(
        self,
        *,
        recipient: Optional[str],
        name: str,
        status: str,
        profile: Optional[Dict[str, Any]] = None,
        reason: Optional[str] = None,
    ) -> bool:
        """Deliver a decision notice. Returns True when the webhook accepted it."""
        if not self.enabled or not self.webhook_url:
            return False
        if not recipient:
            logger.warning("[notify] skipped %s notice for %r: no recipient email", status, name)
            return False

        payload: Dict[str, Any] = {"email": recipient, "name": name, "status": status}
        if profile is not None:
            payload["profile"] = profile
        if reason is not None:
            payload["reason"] = reason

        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                self._post(payload)
                return True
            except Exception as exc:
                if attempt < attempts and self._is_retryable(exc):
                    logger.info("[notify] attempt %s/%s failed for %s: %s", attempt, attempts, recipient, exc)
                    time.sleep(self.backoff_seconds * attempt)
                    continue
                logger.warning("[notify] %s notice to %s not delivered: %s", status, recipient, exc)
                return False
        return False


def get_notifier() -> ApprovalNotifier:
    return ApprovalNotifier()
