import shutil
import tempfile
from pathlib import Path

import pytest

from adapters.ffmpeg_adapter import FFmpegAdapter, STAGE_BURN, STAGE_COMPOSE, STAGE_PALETTE
from packages.assets.catalog import Asset
from packages.render.captioner import RenderRequest, render_caption
from packages.render.errors import (
    AssetExtractFailed,
    AssetWriteFailed,
    CleanupFailed,
    EncodeStepFailed,
    SubtitleWriteFailed,
    TempDirCreateFailed,
)
from packages.render.schemas import RenderOptions

from fakes import FakeFFmpeg

ASSET = Asset(path="cats/cat.gif", data=b"GIF89a-source")
OPTIONS = RenderOptions(font_size=40, alignment=6, font_name="Impact")


@pytest.fixture
def created_workdirs(monkeypatch):
    created = []
    real_mkdtemp = tempfile.mkdtemp

    def recording_mkdtemp(*args, **kwargs):
        path = real_mkdtemp(*args, **kwargs)
        created.append(Path(path))
        return path

    monkeypatch.setattr("packages.render.captioner.tempfile.mkdtemp", recording_mkdtemp)
    return created


def _request(tmp_path, overwrite=False, asset=ASSET):
    return RenderRequest(
        asset=asset,
        caption_text="nice one",
        options=OPTIONS,
        output_path=tmp_path / "nice_one.gif",
        overwrite=overwrite,
    )


def test_three_steps_in_order(tmp_path, fake_ffmpeg):
    out = render_caption(_request(tmp_path), FFmpegAdapter())
    assert out == tmp_path / "nice_one.gif"
    assert out.read_bytes() == b"GIF89a-rendered"

    burn, palette, compose = [cmd for cmd, _ in fake_ffmpeg.calls]
    assert burn[:3] == ["ffmpeg", "-i", "cat.gif"]
    assert "Fontsize=40,Alignment=6" in burn[burn.index("-vf") + 1]
    assert palette[-1] == "palette.png"
    assert compose[1] == "-n"
    assert compose[-1] == str(tmp_path / "nice_one.gif")


def test_workdir_holds_subtitle_and_asset(tmp_path, monkeypatch):
    fake = FakeFFmpeg()
    seen = {}

    def inspecting_run(cmd, cwd=None, check=False):
        if "ffv1" in cmd:
            seen["srt"] = (cwd / "sub.srt").read_text(encoding="utf-8")
            seen["gif"] = (cwd / "cat.gif").read_bytes()
        return fake(cmd, cwd=cwd, check=check)

    monkeypatch.setattr("adapters.ffmpeg_adapter.subprocess.run", inspecting_run)
    render_caption(_request(tmp_path), FFmpegAdapter())
    assert seen["srt"] == "1\n00:00:00,000 --> 01:00:00,000\nnice one\n\n"
    assert seen["gif"] == b"GIF89a-source"
    assert len(fake.calls) == 3


def test_workdir_removed_on_success(tmp_path, fake_ffmpeg):
    render_caption(_request(tmp_path), FFmpegAdapter())
    assert len(fake_ffmpeg.workdirs) == 1
    assert not any(d.exists() for d in fake_ffmpeg.workdirs)


@pytest.mark.parametrize(
    "marker,stage,steps_run",
    [("ffv1", STAGE_BURN, 1), ("palettegen", STAGE_PALETTE, 2), ("paletteuse", STAGE_COMPOSE, 3)],
)
def test_failed_step_aborts_and_cleans_up(tmp_path, monkeypatch, marker, stage, steps_run):
    fake = FakeFFmpeg(fail_stage_cmd=marker)
    monkeypatch.setattr("adapters.ffmpeg_adapter.subprocess.run", fake)
    with pytest.raises(EncodeStepFailed) as excinfo:
        render_caption(_request(tmp_path), FFmpegAdapter())
    assert excinfo.value.stage == stage
    assert len(fake.calls) == steps_run
    assert not any(d.exists() for d in fake.workdirs)
    assert not (tmp_path / "nice_one.gif").exists()


def test_existing_output_kept_without_overwrite(tmp_path, fake_ffmpeg):
    target = tmp_path / "nice_one.gif"
    target.write_bytes(b"old")
    with pytest.raises(EncodeStepFailed) as excinfo:
        render_caption(_request(tmp_path, overwrite=False), FFmpegAdapter())
    assert excinfo.value.stage == STAGE_COMPOSE
    assert target.read_bytes() == b"old"


def test_existing_output_replaced_with_overwrite(tmp_path, fake_ffmpeg):
    target = tmp_path / "nice_one.gif"
    target.write_bytes(b"old")
    render_caption(_request(tmp_path, overwrite=True), FFmpegAdapter())
    assert target.read_bytes() == b"GIF89a-rendered"


def test_empty_asset_fails_extraction(tmp_path, fake_ffmpeg, created_workdirs):
    with pytest.raises(AssetExtractFailed):
        render_caption(_request(tmp_path, asset=Asset(path="empty.gif", data=b"")), FFmpegAdapter())
    assert fake_ffmpeg.calls == []
    assert len(created_workdirs) == 1
    assert not created_workdirs[0].exists()


def test_subtitle_write_failure_cleans_up(tmp_path, monkeypatch, fake_ffmpeg, created_workdirs):
    def read_only(text, path):
        raise PermissionError("read-only file system")

    monkeypatch.setattr("packages.render.captioner.write_subtitle", read_only)
    with pytest.raises(SubtitleWriteFailed) as excinfo:
        render_caption(_request(tmp_path), FFmpegAdapter())
    assert "failed to write subtitle" in str(excinfo.value)
    assert fake_ffmpeg.calls == []
    assert len(created_workdirs) == 1
    assert not created_workdirs[0].exists()


def test_asset_write_failure_cleans_up(tmp_path, monkeypatch, fake_ffmpeg, created_workdirs):
    def disk_full(path, content):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr("packages.render.captioner.write_private_file", disk_full)
    with pytest.raises(AssetWriteFailed) as excinfo:
        render_caption(_request(tmp_path), FFmpegAdapter())
    assert "failed to write gif" in str(excinfo.value)
    assert fake_ffmpeg.calls == []
    assert len(created_workdirs) == 1
    assert not created_workdirs[0].exists()


def test_tempdir_failure(tmp_path, monkeypatch, fake_ffmpeg):
    def no_tempdir(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("packages.render.captioner.tempfile.mkdtemp", no_tempdir)
    with pytest.raises(TempDirCreateFailed):
        render_caption(_request(tmp_path), FFmpegAdapter())


def test_cleanup_failure_after_success(tmp_path, monkeypatch, fake_ffmpeg):
    real_rmtree = shutil.rmtree

    def broken_rmtree(path, ignore_errors=False, **kwargs):
        real_rmtree(path, ignore_errors=True)
        if not ignore_errors:
            raise OSError("busy")

    monkeypatch.setattr("packages.render.captioner.shutil.rmtree", broken_rmtree)
    with pytest.raises(CleanupFailed):
        render_caption(_request(tmp_path), FFmpegAdapter())


def test_step_error_wins_over_cleanup_error(tmp_path, monkeypatch):
    real_rmtree = shutil.rmtree

    def broken_rmtree(path, ignore_errors=False, **kwargs):
        real_rmtree(path, ignore_errors=True)
        if not ignore_errors:
            raise OSError("busy")

    monkeypatch.setattr("packages.render.captioner.shutil.rmtree", broken_rmtree)
    monkeypatch.setattr("adapters.ffmpeg_adapter.subprocess.run", FakeFFmpeg(fail_stage_cmd="palettegen"))
    with pytest.raises(EncodeStepFailed):
        render_caption(_request(tmp_path), FFmpegAdapter())


def test_dry_run_writes_nothing(tmp_path):
    render_caption(_request(tmp_path), FFmpegAdapter(dry_run=True))
    assert not (tmp_path / "nice_one.gif").exists()
