"""End-to-end tests for a single run over temp intake/done folders."""

from __future__ import annotations

import json

import pytest

from reelpost.config import Settings
from reelpost.errors import RemoteContractError
from reelpost.runner import run_once


@pytest.fixture
def config(tmp_path):
    return Settings(
        _env_file=None,
        intake_dir=str(tmp_path / "uploads"),
        done_dir=str(tmp_path / "done"),
        captions_path=str(tmp_path / "captions.json"),
    )


@pytest.mark.asyncio
async def test_nothing_to_do(config, credentials, fake_buffer, tmp_path):
    moved = await run_once(config, credentials, transport=fake_buffer.transport)

    assert moved is None
    assert fake_buffer.requests == []
    assert (tmp_path / "uploads").is_dir()
    assert (tmp_path / "done").is_dir()


@pytest.mark.asyncio
async def test_successful_run_moves_video(config, credentials, fake_buffer, tmp_path):
    intake = tmp_path / "uploads"
    intake.mkdir()
    (intake / "clip.mp4").write_bytes(b"video-bytes")
    (tmp_path / "captions.json").write_text(json.dumps({"captions": ["A", "B"]}))

    moved = await run_once(config, credentials, transport=fake_buffer.transport)

    assert moved == tmp_path / "done" / "clip.mp4"
    assert moved.read_bytes() == b"video-bytes"
    assert not (intake / "clip.mp4").exists()

    create = fake_buffer.inner_calls()[-1]
    assert create["url"] == "/1/updates/create.json"
    assert create["args"]["media"]["video"]["id"] == "vid_123"
    assert create["args"]["text"] in {"A", "B"}


@pytest.mark.asyncio
async def test_default_caption_without_captions_file(config, credentials, fake_buffer, tmp_path):
    intake = tmp_path / "uploads"
    intake.mkdir()
    (intake / "clip.mp4").write_bytes(b"v")

    await run_once(config, credentials, transport=fake_buffer.transport)

    assert fake_buffer.inner_calls()[-1]["args"]["text"] == "Check out this video!"


@pytest.mark.asyncio
async def test_failed_run_leaves_video_in_intake(config, credentials, fake_buffer, tmp_path):
    intake = tmp_path / "uploads"
    intake.mkdir()
    (intake / "clip.mp4").write_bytes(b"v")
    fake_buffer.presign = (200, {"data": {"s3PreSignedURL": None}})

    with pytest.raises(RemoteContractError):
        await run_once(config, credentials, transport=fake_buffer.transport)

    assert (intake / "clip.mp4").exists()
    assert not (tmp_path / "done" / "clip.mp4").exists()
    assert len(fake_buffer.requests) == 1
