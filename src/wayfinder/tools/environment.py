"""Project and host details reported by the ``env`` action."""

from __future__ import annotations

import json
import logging
import os
import platform
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import psutil

from wayfinder.config import (
    PROJECT_CONFIG_FILENAME,
    PROJECT_MARKER_FILES,
    SAFE_ENVIRONMENT_VARIABLES,
)

LOGGER = logging.getLogger(__name__)

_GIB = 1024**3


def _gib(value: float) -> float:
    return round(value / _GIB, 2)


def _utc_now() -> str:
    return datetime.now(tz=timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def project_details(working_dir: Path) -> dict[str, Any]:
    """Read ``.chara.json`` and report which common project files exist."""
    config_path = working_dir / PROJECT_CONFIG_FILENAME
    details: dict[str, Any]
    if not config_path.is_file():
        details = {
            "hasCharaConfig": False,
            "message": f"{PROJECT_CONFIG_FILENAME} file not found. Run initialization to create project configuration.",
        }
    else:
        try:
            config = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            LOGGER.warning("Failed to read %s: %s", config_path, exc)
            details = {
                "hasCharaConfig": False,
                "error": f"Failed to read {PROJECT_CONFIG_FILENAME}: {exc}",
            }
        else:
            if not isinstance(config, dict):
                config = {}
            details = {"hasCharaConfig": True, "dev": config.get("dev"), "info": config.get("info")}

    details["files"] = {
        key: any((working_dir / name).exists() for name in names)
        for key, names in PROJECT_MARKER_FILES.items()
    }
    return details


def system_details() -> dict[str, Any]:
    """Return host, memory and CPU facts; memory and uptime are omitted if unavailable."""
    details: dict[str, Any] = {
        "platform": sys.platform,
        "system": platform.system(),
        "architecture": platform.machine(),
        "release": platform.release(),
        "hostname": platform.node(),
        "cpu": {
            "model": platform.processor() or "Unknown",
            "cores": psutil.cpu_count(logical=True) or os.cpu_count() or 0,
        },
        "pythonVersion": platform.python_version(),
    }
    try:
        memory = psutil.virtual_memory()
        details["memory"] = {
            "total": _gib(memory.total),
            "free": _gib(memory.available),
            "used": _gib(memory.total - memory.available),
        }
        details["uptime"] = round((time.time() - psutil.boot_time()) / 3600, 2)
    except (psutil.Error, OSError) as exc:
        LOGGER.debug("Host memory or uptime unavailable: %s", exc)
    return details


def runtime_details() -> dict[str, Any]:
    return {
        "implementation": platform.python_implementation(),
        "pythonVersion": platform.python_version(),
        "processId": os.getpid(),
        "executable": sys.executable,
    }


def safe_environment(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return the allow-listed environment variables that are set and non-empty."""
    source = os.environ if environ is None else environ
    return {key: source[key] for key in SAFE_ENVIRONMENT_VARIABLES if source.get(key)}


def collect_environment_info(
    working_dir: Path,
    *,
    include_system: bool = True,
    include_project: bool = True,
) -> dict[str, Any]:
    """Build the ``env`` payload for ``working_dir``."""
    LOGGER.info("🔧 TOOL CALLED: collect_environment_info(%s)", working_dir)
    result: dict[str, Any] = {
        "operation": "env",
        "workingDirectory": str(working_dir),
        "timestamp": _utc_now(),
    }
    lines = [f"Working directory: {working_dir}"]

    if include_project:
        project = project_details(working_dir)
        result["project"] = project
        present = [key for key, exists in project["files"].items() if exists]
        lines.append(f"Project config ({PROJECT_CONFIG_FILENAME}): {'found' if project['hasCharaConfig'] else 'missing'}")
        lines.append(f"Project files: {', '.join(present) if present else 'none'}")

    if include_system:
        system = system_details()
        result["system"] = system
        result["runtime"] = runtime_details()
        result["environment"] = safe_environment()
        lines.append(f"System: {system['system']} {system['release']} ({system['architecture']})")
        lines.append(f"Python: {system['pythonVersion']}")

    result["formatted"] = "\n".join(lines)
    return result


__all__ = [
    "collect_environment_info",
    "project_details",
    "runtime_details",
    "safe_environment",
    "system_details",
]
