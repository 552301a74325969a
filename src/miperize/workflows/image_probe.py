"""Remote image dimension probing (aiohttp GET + Pillow header decode)."""

from __future__ import annotations

import asyncio
import io
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

import aiohttp
from PIL import Image

from .errors import ProbeFailure
from .miperize_config import ProbeSettings

logger = logging.getLogger(__name__)

Dimensions = Tuple[int, int]
Decoder = Callable[[bytes], Dimensions]


def decode_dimensions(body: bytes) -> Dimensions:
    """Return ``(width, height)`` read from the image header in ``body``."""

    with Image.open(io.BytesIO(body)) as image:
        width, height = image.size
    return int(width), int(height)


class ProbeStatus(str, Enum):
    UNRESOLVED = "unresolved"
    PROBING = "probing"
    RESOLVED = "resolved"


@dataclass
class ImageProbe:
    """Lifecycle of a single dimension lookup.

    ``resolve`` is the completion latch: only the first outcome is recorded,
    later ones (a stale response after a timeout, say) are ignored.
    """

    url: str
    status: ProbeStatus = ProbeStatus.UNRESOLVED
    width: Optional[int] = None
    height: Optional[int] = None
    failure: Optional[str] = None

    def start(self) -> None:
        if self.status is not ProbeStatus.UNRESOLVED:
            raise RuntimeError(f"probe for {self.url} already {self.status.value}")
        self.status = ProbeStatus.PROBING

    def resolve(
        self,
        dimensions: Optional[Dimensions] = None,
        failure: Optional[str] = None,
    ) -> bool:
        if self.status is ProbeStatus.RESOLVED:
            return False
        self.status = ProbeStatus.RESOLVED
        if dimensions is not None and failure is None:
            self.width, self.height = dimensions
        else:
            self.failure = failure or "unknown"
        return True

    @property
    def ok(self) -> bool:
        return self.status is ProbeStatus.RESOLVED and self.failure is None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"url": self.url, "status": self.status.value}
        if self.ok:
            payload["width"] = self.width
            payload["height"] = self.height
        if self.failure:
            payload["failure"] = self.failure
        return payload


class ImageProber:
    """Fetch a remote image and read its intrinsic size.

    Stateless apart from its settings, so one instance is shared by every call
    of an engine. The HTTP session belongs to the calling transform.
    """

    def __init__(
        self,
        settings: Optional[ProbeSettings] = None,
        decoder: Optional[Decoder] = None,
    ) -> None:
        self.settings = settings or ProbeSettings.from_env()
        self.decoder: Decoder = decoder or decode_dimensions

    def client_timeout(self) -> aiohttp.ClientTimeout:
        # Inactivity timeout on the socket, not a total deadline.
        return aiohttp.ClientTimeout(
            total=None,
            sock_connect=self.settings.timeout,
            sock_read=self.settings.timeout,
        )

    def open_session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(timeout=self.client_timeout())

    async def probe(
        self,
        url: str,
        session: aiohttp.ClientSession,
        call_id: Optional[str] = None,
    ) -> ImageProbe:
        probe = ImageProbe(url=url)
        probe.start()
        logger.debug("Probing image size for %s [call %s]", url, call_id)
        try:
            dimensions = await self._fetch_dimensions(url, session)
        except ProbeFailure as exc:
            probe.resolve(failure=exc.reason)
            logger.warning("Image probe failed for %s: %s [call %s]", url, exc.reason, call_id)
        else:
            probe.resolve(dimensions=dimensions)
        return probe

    async def _fetch_body(self, url: str, session: aiohttp.ClientSession) -> bytes:
        try:
            async with session.get(
                url,
                headers={"User-Agent": self.settings.user_agent},
                timeout=self.client_timeout(),
            ) as resp:
                if resp.status != 200:
                    logger.debug("Image probe for %s answered %s", url, resp.status)
                return await resp.read()
        except asyncio.TimeoutError as exc:
            raise ProbeFailure("timeout", url) from exc
        except (aiohttp.ClientError, ValueError) as exc:
            raise ProbeFailure(f"transport: {exc}", url) from exc

    async def _fetch_dimensions(self, url: str, session: aiohttp.ClientSession) -> Dimensions:
        body = await self._fetch_body(url, session)
        try:
            width, height = self.decoder(body)
        except Exception as exc:
            raise ProbeFailure(f"decode: {exc}", url) from exc
        return int(width), int(height)


__all__ = [
    "Decoder",
    "Dimensions",
    "ImageProbe",
    "ImageProber",
    "ProbeStatus",
    "decode_dimensions",
]
