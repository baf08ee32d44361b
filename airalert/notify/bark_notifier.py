"""
Bark push-notification sender.

Posts a fixed-shape JSON payload to {BARK_BASE_URL}/{BARK_KEY}. Best-effort:
transport failures are logged and dropped, nothing is returned.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

import httpx

from airalert.config import Settings

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass(frozen=True)
class NotificationPayload:
    """Bark request body. Only title and body vary per alert."""
    title: str
    body: str
    badge: int = 1
    sound: str = "minuet"
    icon: str = "https://aqicn.org/images/logo/regular.png"
    group: str = "Weather"
    url: str = "https://air.juniortree.com"

    def to_dict(self) -> dict:
        return asdict(self)


class BarkNotifier:
    def __init__(self, settings: Settings, http: Optional[httpx.Client] = None):
        self._settings = settings
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(timeout=settings.request_timeout)

    @property
    def endpoint(self) -> str:
        return f"{self._settings.bark_base_url}/{self._settings.bark_key}"

    def notify(self, title: str, body: str) -> None:
        """Send one push notification. Never raises on transport errors."""
        payload = NotificationPayload(title=title, body=body)
        try:
            resp = self._http.post(
                self.endpoint,
                json=payload.to_dict(),
                headers={"Content-Type": CONTENT_TYPE},
            )
        except httpx.TimeoutException:
            logger.error("Bark push timed out: %s", title)
            return
        except httpx.RequestError as e:
            logger.error("Bark push failed: %s", e)
            return

        if resp.is_success:
            logger.info("Bark push sent (%s): status=%d", title, resp.status_code)
        else:
            logger.warning("Bark push rejected (%s): status=%d", title, resp.status_code)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()
