from pathlib import Path

import pytest

from export_intake.intake.models import (
    ExportLayout,
    ProgressStage,
    ProgressSummary,
    StageTiming,
    UploadPayload,
)


class TestUploadPayload:
    def test_requires_exactly_one_source(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="exactly one"):
            UploadPayload()
        with pytest.raises(ValueError, match="exactly one"):
            UploadPayload(data=b"x", path=tmp_path / "x.zip")

    def test_bytes_payload(self, tmp_path: Path) -> None:
        payload = UploadPayload.from_bytes(b"PK\x03\x04rest")

        assert payload.size == 8
        assert payload.header(4) == b"PK\x03\x04"
        staged = payload.stage(tmp_path / "staged.zip")
        assert staged.read_bytes() == b"PK\x03\x04rest"

    def test_path_payload(self, tmp_path: Path) -> None:
        source = tmp_path / "upload.zip"
        source.write_bytes(b"PK\x05\x06" + b"\x00" * 18)
        payload = UploadPayload.from_path(str(source))

        assert payload.size == 22
        assert payload.header(4) == b"PK\x05\x06"
        staged = payload.stage(tmp_path / "staged.zip")
        assert staged.read_bytes() == source.read_bytes()
        assert source.exists()

    def test_short_header(self) -> None:
        assert UploadPayload.from_bytes(b"P").header(4) == b"P"

    def test_missing_file_raises_on_access(self, tmp_path: Path) -> None:
        payload = UploadPayload.from_path(tmp_path / "gone.zip")

        with pytest.raises(FileNotFoundError):
            payload.size
        with pytest.raises(FileNotFoundError):
            payload.header(4)


class TestExportLayout:
    def test_ensure_creates_both_roots(self, tmp_path: Path) -> None:
        layout = ExportLayout(export_root=tmp_path / "e", media_root=tmp_path / "e" / "media")

        layout.ensure()
        layout.ensure()

        assert layout.export_root.is_dir()
        assert layout.media_root.is_dir()


class TestProgressSummary:
    def test_empty_summary(self) -> None:
        summary = ProgressSummary(total_elapsed_millis=0, stages={})
        assert summary.completed_stages == 0
        assert summary.completion_rate == 0.0

    def test_completion_rate(self) -> None:
        summary = ProgressSummary(
            total_elapsed_millis=10,
            stages={
                ProgressStage.VALIDATING: StageTiming(started_at=0.0, completed=True),
                ProgressStage.EXTRACTING: StageTiming(started_at=1.0, completed=True),
                ProgressStage.ORGANIZING: StageTiming(started_at=2.0),
                ProgressStage.FINALIZING: StageTiming(started_at=3.0),
            },
        )
        assert summary.completed_stages == 2
        assert summary.completion_rate == 50.0
