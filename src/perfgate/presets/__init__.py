"""Registry of named assertion presets shipped with the package.

Presets are YAML documents holding an assert config. A preset may name
another preset under ``extends``; the named preset is loaded first and the
rest of the document is deep-merged on top.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from perfgate.utils import deep_merge

logger = logging.getLogger(__name__)

PRESET_PREFIX = "lighthouse:"

_PRESET_DIR = Path(__file__).parent


def available_presets() -> list[str]:
    return sorted(p.stem for p in _PRESET_DIR.glob("*.yaml"))


def get_preset(name: str) -> dict[str, Any]:
    """Return the assert config for preset *name* as a fresh dict.

    Accepts ``lighthouse:<name>`` or a bare ``<name>``. Raises ValueError for
    unknown presets.
    """
    bare_name = name.removeprefix(PRESET_PREFIX)
    path = _PRESET_DIR / f"{bare_name}.yaml"
    if not bare_name or not path.is_file():
        raise ValueError(
            f"Unknown preset '{name}'. Available presets: "
            + ", ".join(PRESET_PREFIX + p for p in available_presets())
        )

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    parent = data.pop("extends", None)
    if parent:
        data = deep_merge(get_preset(parent), data)

    logger.debug(
        f"Loaded preset {bare_name} with {len(data.get('assertions', {}))} assertions"
    )
    return data
