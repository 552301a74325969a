"""Miperize defaults (framework tag attributes, probe headers, timeouts).

Centralizes static defaults so the rule engine has no embedded magic numbers.
Callers override tag defaults through the ``options`` mapping given to
``Miperize`` and probe settings through ``ProbeSettings`` or the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ..core.keys import (
    K_HEIGHT,
    K_LAYOUT,
    K_SANDBOX,
    K_WIDTH,
    LAYOUT_RESPONSIVE,
    TAG_MIP_ANIM,
    TAG_MIP_IFRAME,
    TAG_MIP_IMG,
)
from .errors import ConfigError

DEFAULTS: Dict[str, Dict[str, Any]] = {
    TAG_MIP_IMG: {
        K_LAYOUT: LAYOUT_RESPONSIVE,
        K_WIDTH: 600,
        K_HEIGHT: 400,
    },
    TAG_MIP_ANIM: {
        K_LAYOUT: LAYOUT_RESPONSIVE,
        K_WIDTH: 600,
        K_HEIGHT: 400,
    },
    TAG_MIP_IFRAME: {
        K_LAYOUT: LAYOUT_RESPONSIVE,
        K_WIDTH: 600,
        K_HEIGHT: 400,
        K_SANDBOX: "allow-script allow-same-origin",
    },
}

# Some origins (e.g. Cloudflare-fronted CDNs) reject requests without a UA.
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; miperize)"
DEFAULT_PROBE_TIMEOUT = 5.0
MIN_PROBE_TIMEOUT = 0.1

ENV_PROBE_TIMEOUT = "MIPERIZE_PROBE_TIMEOUT"
ENV_USER_AGENT = "MIPERIZE_USER_AGENT"


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new dict with ``overrides`` merged recursively over ``base``."""

    merged: Dict[str, Any] = {key: value for key, value in base.items()}
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    return value


def build_config(options: Optional[Mapping[str, Any]] = None) -> Mapping[str, Any]:
    """Deep-merge caller options over :data:`DEFAULTS` into a read-only mapping.

    Keys are framework tag names. A tag entry set to a falsy value disables
    the rewrite for that tag. Unknown keys are kept as-is.
    """

    if options is None:
        options = {}
    if not isinstance(options, Mapping):
        raise ConfigError(f"options must be a mapping, got {type(options).__name__}")
    return _freeze(deep_merge(DEFAULTS, options))


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass(frozen=True)
class ProbeSettings:
    """Parameters for remote image dimension probes."""

    timeout: float = DEFAULT_PROBE_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        timeout = max(MIN_PROBE_TIMEOUT, _float_env(ENV_PROBE_TIMEOUT, DEFAULT_PROBE_TIMEOUT))
        user_agent = (os.getenv(ENV_USER_AGENT) or "").strip() or DEFAULT_USER_AGENT
        return cls(timeout=timeout, user_agent=user_agent)


__all__ = [
    "DEFAULTS",
    "DEFAULT_USER_AGENT",
    "DEFAULT_PROBE_TIMEOUT",
    "ENV_PROBE_TIMEOUT",
    "ENV_USER_AGENT",
    "ProbeSettings",
    "build_config",
    "deep_merge",
]
