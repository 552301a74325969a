"""Per-call state for a single transform."""

from __future__ import annotations

import uuid
from typing import List, Optional

import aiohttp

from .image_probe import ImageProbe, ImageProber


class TransformContext:
    """Correlation token, HTTP session and probe log of one transform call.

    A context is created for every public call and never shared, so probes
    from concurrent calls cannot see each other's results. The session is
    opened on the first probe and closed by ``aclose`` (or ``async with``).
    """

    def __init__(self, prober: ImageProber, call_id: Optional[str] = None) -> None:
        self.call_id = call_id or uuid.uuid4().hex
        self.prober = prober
        self.probes: List[ImageProbe] = []
        self._session: Optional[aiohttp.ClientSession] = None

    async def probe_image(self, url: str) -> ImageProbe:
        if self._session is None:
            self._session = self.prober.open_session()
        probe = await self.prober.probe(url, self._session, call_id=self.call_id)
        self.probes.append(probe)
        return probe

    @property
    def session_open(self) -> bool:
        return self._session is not None and not self._session.closed

    async def aclose(self) -> None:
        session, self._session = self._session, None
        if session is not None:
            await session.close()

    async def __aenter__(self) -> "TransformContext":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
