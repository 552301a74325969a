"""Per-tag rewrite rules (img, iframe, audio, everything else)."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Mapping
from urllib.parse import urlparse

from bs4.element import PageElement, Tag

from ..core.keys import (
    K_HEIGHT,
    K_LAYOUT,
    K_SANDBOX,
    K_SRC,
    K_WIDTH,
    TAG_AUDIO,
    TAG_IFRAME,
    TAG_IMG,
    TAG_MIP_ANIM,
    TAG_MIP_AUDIO,
    TAG_MIP_IFRAME,
    TAG_MIP_IMG,
)
from .context import TransformContext
from .layout import apply_layout
from .schemes import use_secure_scheme

Rule = Callable[[Tag, TransformContext], Awaitable[None]]


def is_remote_url(src: str) -> bool:
    try:
        parsed = urlparse(src)
    except ValueError:
        # e.g. an unterminated IPv6 host; handled like any other local path.
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


class RuleEngine:
    """Decide, per element, the framework tag name and its attributes.

    ``apply`` runs once per node when the walker enters it and mutates the
    tag in place; the walker owns the node for that visit.
    """

    def __init__(self, config: Mapping[str, Any]) -> None:
        self.config = config
        self._rules: Dict[str, Rule] = {
            TAG_IMG: self._rewrite_img,
            TAG_IFRAME: self._rewrite_iframe,
            TAG_AUDIO: self._rewrite_audio,
        }

    async def apply(self, node: PageElement, context: TransformContext) -> None:
        if not isinstance(node, Tag):
            return
        rule = self._rules.get(node.name, self._rewrite_default)
        await rule(node, context)

    def _tag_defaults(self, name: str, fallback: str) -> Mapping[str, Any]:
        return self.config.get(name) or self.config.get(fallback) or {}

    async def _rewrite_img(self, tag: Tag, context: TransformContext) -> None:
        src = tag.get(K_SRC)
        if not src or not self.config.get(TAG_MIP_IMG):
            return
        tag.name = TAG_MIP_ANIM if src.endswith(".gif") else TAG_MIP_IMG
        defaults = self._tag_defaults(tag.name, TAG_MIP_IMG)

        if tag.get(K_WIDTH) and tag.get(K_HEIGHT) and tag.get(K_LAYOUT):
            use_secure_scheme(tag)
            return

        if is_remote_url(src):
            probe = await context.probe_image(src)
            if not probe.ok:
                # Unsized framework images fail validation; fall back to a plain img.
                tag.name = TAG_IMG
                return
            tag[K_WIDTH] = str(probe.width)
            tag[K_HEIGHT] = str(probe.height)
        else:
            for key in (K_WIDTH, K_HEIGHT):
                if defaults.get(key) is not None:
                    tag[key] = str(defaults[key])
        apply_layout(tag, defaults.get(K_LAYOUT))
        use_secure_scheme(tag)

    async def _rewrite_iframe(self, tag: Tag, context: TransformContext) -> None:
        if not tag.get(K_SRC) or not self.config.get(TAG_MIP_IFRAME):
            return
        tag.name = TAG_MIP_IFRAME
        defaults = self.config[TAG_MIP_IFRAME]
        for key in (K_WIDTH, K_HEIGHT):
            if not tag.get(key) and defaults.get(key) is not None:
                tag[key] = str(defaults[key])
        apply_layout(tag, defaults.get(K_LAYOUT))
        if K_SANDBOX not in tag.attrs and defaults.get(K_SANDBOX):
            tag[K_SANDBOX] = defaults[K_SANDBOX]
        use_secure_scheme(tag)

    async def _rewrite_audio(self, tag: Tag, context: TransformContext) -> None:
        tag.name = TAG_MIP_AUDIO
        use_secure_scheme(tag)

    async def _rewrite_default(self, tag: Tag, context: TransformContext) -> None:
        use_secure_scheme(tag)


__all__ = ["RuleEngine", "is_remote_url"]
