"""reelpost CLI — publish local videos as Instagram reels through Buffer."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from reelpost.config import settings
from reelpost.errors import ReelpostError
from reelpost.intake import list_pending
from reelpost.models import Credentials

logger = logging.getLogger("reelpost")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output, including raw API responses.")
def cli(verbose):
    """reelpost — push one video from the intake folder to Buffer.

    \b
        pipeline.py run             # publish the first pending video
        pipeline.py pending         # list videos waiting in the intake folder
        pipeline.py post FILE       # publish a specific file, no bookkeeping
    """
    _setup_logging(verbose)


@cli.command()
def run():
    """Publish the first pending video and move it to the done folder.

    Exits 0 when the video was posted or nothing was waiting, 1 on any error.
    """
    from reelpost.runner import run_once

    try:
        credentials = Credentials.from_settings(settings)
        moved_to = asyncio.run(run_once(settings, credentials))
    except ReelpostError as exc:
        _fail(exc)

    if moved_to is not None:
        click.echo(f"Published {moved_to.name}, moved to {moved_to.parent}")


@cli.command()
@click.argument("video", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--caption", default=None, help="Post text. Defaults to a random entry from the captions file.")
def post(video, caption):
    """Publish VIDEO without touching the intake/done folders."""
    from reelpost.captions import pick_caption
    from reelpost.runner import post_file

    try:
        credentials = Credentials.from_settings(settings)
        if caption is None:
            caption = pick_caption(Path(settings.captions_path), settings.default_caption)
        logger.info("Selected caption: %s", caption)
        result = asyncio.run(post_file(settings, credentials, video, caption))
    except ReelpostError as exc:
        _fail(exc)

    ids = ", ".join(result.update_ids)
    click.echo(f"Published {video.name}" + (f" (update {ids})" if ids else ""))


@cli.command()
def pending():
    """List videos waiting in the intake folder."""
    intake_dir = Path(settings.intake_dir)
    videos = list_pending(intake_dir)
    if not videos:
        click.echo(f"No videos waiting in {intake_dir}.")
        return

    for v in videos:
        size_mb = v.stat().st_size / 1024 / 1024
        click.echo(f"  {v.name:<50} {size_mb:8.2f} MB")
    click.echo(f"\n{len(videos)} pending. Next up: {videos[0].name}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger().setLevel(level)
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _fail(exc: ReelpostError) -> NoReturn:
    logger.error("Error: %s", exc)
    sys.exit(1)


if __name__ == "__main__":
    cli()
