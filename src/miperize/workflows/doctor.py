"""Diagnostics for the ``miperize doctor`` command."""

from __future__ import annotations

import importlib
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .miperize_config import ENV_PROBE_TIMEOUT, ENV_USER_AGENT, ProbeSettings

# (import name, distribution, what breaks without it)
_DEPENDENCIES = (
    ("aiohttp", "aiohttp", "remote images cannot be probed"),
    ("bs4", "beautifulsoup4", "markup cannot be parsed"),
    ("PIL", "Pillow", "image dimensions cannot be decoded"),
)


def _module_version(module_name: str) -> Optional[str]:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    return str(getattr(module, "__version__", "unknown"))


def _dependency_check(module_name: str, dist_name: str, impact: str) -> Dict[str, Any]:
    version = _module_version(module_name)
    if version is None:
        return {
            "name": dist_name,
            "status": "missing",
            "detail": impact,
            "remedy": f"pip install {dist_name}",
        }
    return {"name": dist_name, "status": "ok", "detail": f"version {version}"}


def _probe_setting_checks(settings: ProbeSettings) -> List[Dict[str, Any]]:
    return [
        {
            "name": ENV_PROBE_TIMEOUT,
            "status": "set" if os.getenv(ENV_PROBE_TIMEOUT) else "default",
            "value": os.getenv(ENV_PROBE_TIMEOUT),
            "detail": f"effective probe timeout {settings.timeout:g}s",
        },
        {
            "name": ENV_USER_AGENT,
            "status": "set" if os.getenv(ENV_USER_AGENT) else "default",
            "value": os.getenv(ENV_USER_AGENT),
            "detail": f"effective user agent {settings.user_agent!r}",
        },
    ]


def build_doctor_report() -> Dict[str, Any]:
    dependencies = [_dependency_check(*entry) for entry in _DEPENDENCIES]
    return {
        "generated_at": datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z"),
        "ok": all(check["status"] == "ok" for check in dependencies),
        "dependencies": dependencies,
        "probe_settings": _probe_setting_checks(ProbeSettings.from_env()),
    }


def format_doctor_report(report: Dict[str, Any]) -> str:
    lines = [f"Miperize doctor ({report.get('generated_at')})", "", "Dependencies:"]
    for check in report.get("dependencies", []):
        lines.append(f"  {check['name']}: {check['status']} - {check['detail']}")
        if check.get("remedy"):
            lines.append(f"    remedy: {check['remedy']}")
    lines.extend(["", "Probe settings:"])
    for check in report.get("probe_settings", []):
        source = f"{check['status']} ({check['value']})" if check.get("value") else check["status"]
        lines.append(f"  {check['name']}: {source} - {check['detail']}")
    return "\n".join(lines) + "\n"


__all__ = ["build_doctor_report", "format_doctor_report"]
