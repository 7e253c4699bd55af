from pathlib import Path

import pytest

from export_intake.config.settings import Settings
from export_intake.intake.models import ExportLayout


@pytest.fixture()
def intake_settings(tmp_path: Path) -> Settings:
    scratch_root = tmp_path / "scratch"
    scratch_root.mkdir()
    return Settings(
        scratch_root=scratch_root,
        max_upload_bytes=5 * 1024 * 1024,
        max_extracted_bytes=20 * 1024 * 1024,
        max_compression_ratio=100.0,
        max_files_in_archive=50,
        log_level="DEBUG",
    )


@pytest.fixture()
def export_layout(tmp_path: Path) -> ExportLayout:
    root = tmp_path / "exports" / "export-1"
    return ExportLayout(export_root=root, media_root=root / "media")
