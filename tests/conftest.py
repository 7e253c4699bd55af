import io
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

from export_intake.intake.models import ExportLayout, ValidationLimits

ZipBuilder = Callable[[dict[str, bytes | None]], bytes]


def build_zip(members: dict[str, bytes | None], compression: int = zipfile.ZIP_DEFLATED) -> bytes:
    """Build an in-memory ZIP; a ``None`` value creates a directory member."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=compression) as archive:
        for name, content in members.items():
            if content is None:
                archive.writestr(zipfile.ZipInfo(name.rstrip("/") + "/"), b"")
            else:
                archive.writestr(name, content)
    return buf.getvalue()


@pytest.fixture()
def zip_builder() -> ZipBuilder:
    return build_zip


@pytest.fixture()
def wrapped_export_zip() -> bytes:
    """Archive with a single top-level ``export/`` folder around everything."""
    return build_zip(
        {
            "export/": None,
            "export/conversations.json": b"[]",
            "export/audio/x.wav": b"RIFF....WAVEfmt ",
            "export/notes.txt": b"some notes",
        }
    )


@pytest.fixture()
def limits() -> ValidationLimits:
    return ValidationLimits(
        max_upload_bytes=10 * 1024 * 1024,
        max_extracted_bytes=50 * 1024 * 1024,
        max_compression_ratio=100.0,
        max_files=100,
    )


@pytest.fixture()
def layout(tmp_path: Path) -> ExportLayout:
    return ExportLayout(
        export_root=tmp_path / "exports" / "my-export",
        media_root=tmp_path / "exports" / "my-export" / "media",
    )


@pytest.fixture()
def scratch_root(tmp_path: Path) -> Path:
    root = tmp_path / "scratch"
    root.mkdir()
    return root
