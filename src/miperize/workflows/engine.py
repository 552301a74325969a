"""Engine entry points: parse, walk, deliver."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .context import TransformContext
from .errors import ConstructionError
from .image_probe import ImageProbe, ImageProber
from .markup import parse_markup
from .miperize_config import ProbeSettings, build_config
from .rules import RuleEngine
from .transformer import TreeWalker

logger = logging.getLogger(__name__)

Markup = Union[str, bytes]
Callback = Callable[[Optional[BaseException], Optional[str]], Any]


@dataclass
class TransformResult:
    """Outcome of one transform call."""

    html: str
    call_id: str
    probes: List[ImageProbe] = field(default_factory=list)

    @property
    def failed_probes(self) -> List[ImageProbe]:
        return [probe for probe in self.probes if not probe.ok]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "call_id": self.call_id,
            "html": self.html,
            "probes": [probe.to_dict() for probe in self.probes],
            "probes_failed": len(self.failed_probes),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


class Miperize:
    """Rewrite HTML into MIP framework markup.

    One engine may serve many concurrent calls: the config is read-only and
    every call parses into its own tree with its own ``TransformContext``.
    """

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        *,
        probe_settings: Optional[ProbeSettings] = None,
        prober: Optional[ImageProber] = None,
    ) -> None:
        self.config = build_config(options)
        self.prober = prober or ImageProber(probe_settings)
        self.rules = RuleEngine(self.config)
        self.walker = TreeWalker(self.rules)

    async def transform_document(self, html: Markup) -> TransformResult:
        context = TransformContext(self.prober)
        logger.debug("Transform %s started", context.call_id)
        soup = parse_markup(html, call_id=context.call_id)
        async with context:
            rendered = await self.walker.walk(soup.contents, context)
        logger.debug(
            "Transform %s finished (%d probes, %d failed)",
            context.call_id,
            len(context.probes),
            sum(1 for probe in context.probes if not probe.ok),
        )
        return TransformResult(html=rendered, call_id=context.call_id, probes=context.probes)

    async def miperize(self, html: Markup) -> str:
        result = await self.transform_document(html)
        return result.html

    def transform(self, html: Markup, callback: Callback) -> "asyncio.Task[TransformResult]":
        """Schedule a transform and report through ``callback(error, html)``.

        The callback runs exactly once. ``error`` is only set for input the
        parser rejects; image probe failures degrade single elements instead.
        Must be called from a running event loop.
        """

        if not callable(callback):
            raise ConstructionError("No callback provided")
        loop = asyncio.get_running_loop()
        task = loop.create_task(self.transform_document(html))
        task.add_done_callback(partial(_deliver, callback))
        return task

    def transform_sync(self, html: Markup) -> str:
        return asyncio.run(self.miperize(html))


def _deliver(callback: Callback, task: "asyncio.Task[TransformResult]") -> None:
    if task.cancelled():
        callback(asyncio.CancelledError(), None)
        return
    error = task.exception()
    if error is not None:
        callback(error, None)
        return
    callback(None, task.result().html)


async def miperize(html: Markup, options: Optional[Mapping[str, Any]] = None) -> str:
    return await Miperize(options).miperize(html)


__all__ = ["Miperize", "TransformResult", "miperize"]
