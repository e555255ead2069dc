"""Intake and completion directories.

A video waiting in the intake directory is pending; once its post has been
created it is moved, name unchanged, to the completion directory.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from reelpost.errors import LocalIOError

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = frozenset({".mp4", ".mov", ".m4v", ".webm"})


def prepare_dirs(*dirs: Path) -> None:
    """Create each directory if it is missing."""
    for d in dirs:
        if d.is_dir():
            continue
        try:
            d.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LocalIOError(f"Cannot create directory {d}: {exc}") from exc
        logger.info("Created %s directory", d)


def list_pending(intake_dir: Path) -> list[Path]:
    """Return the videos in ``intake_dir`` sorted by file name."""
    if not intake_dir.is_dir():
        return []
    return sorted(
        (p for p in intake_dir.iterdir() if p.is_file() and p.suffix.lower() in VIDEO_EXTENSIONS),
        key=lambda p: p.name,
    )


def find_video_file(intake_dir: Path) -> Path | None:
    """Return the first pending video, or None when there is nothing to do."""
    pending = list_pending(intake_dir)
    return pending[0] if pending else None


def move_to_done(video_path: Path, done_dir: Path) -> Path:
    """Move ``video_path`` into ``done_dir`` and return its new path."""
    if not video_path.exists():
        raise LocalIOError(f"Intake file vanished: {video_path}")

    prepare_dirs(done_dir)
    destination = done_dir / video_path.name
    try:
        shutil.move(str(video_path), str(destination))
    except OSError as exc:
        raise LocalIOError(f"Failed to move {video_path} to {done_dir}: {exc}") from exc

    logger.info("Video moved to done folder: %s", destination)
    return destination
