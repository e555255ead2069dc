"""Caption selection from a JSON file of candidate captions."""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path

logger = logging.getLogger(__name__)


def load_captions(path: Path) -> list[str]:
    """Read caption strings from ``path``.

    Accepts ``{"captions": [...]}`` or a bare JSON list. Non-string and blank
    entries are dropped. A missing or unreadable file gives an empty list.
    """
    if not path.exists():
        logger.info("%s not found, using default caption", path.name)
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Error reading %s: %s, using default caption", path.name, exc)
        return []

    if isinstance(data, dict):
        data = data.get("captions")
    if not isinstance(data, list):
        logger.warning("No caption list in %s, using default caption", path.name)
        return []

    captions = [c for c in data if isinstance(c, str) and c.strip()]
    if len(captions) != len(data):
        logger.debug("Skipped %d blank or non-string captions in %s", len(data) - len(captions), path.name)
    return captions


def pick_caption(path: Path, default: str, rng: random.Random | None = None) -> str:
    """Choose one caption uniformly at random, or ``default`` if there are none."""
    captions = load_captions(path)
    if not captions:
        return default
    return (rng or random).choice(captions)
