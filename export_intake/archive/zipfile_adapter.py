import zipfile
from pathlib import Path

from export_intake.archive.base import BaseArchiveDecoder
from export_intake.intake.exceptions import ExtractionFailedError
from export_intake.intake.models import ExtractedEntry


class ZipfileDecoder(BaseArchiveDecoder):
    """Decodes ZIP archives with the standard library ``zipfile`` module.

    ``ZipFile.extract`` already drops ``..`` and absolute components from the
    names it writes, so the trial extraction cannot land outside
    ``target_dir``. The reported entries keep the raw member names for the
    path checks further down the pipeline.
    """

    def decode(self, archive_path: Path, target_dir: Path) -> list[ExtractedEntry]:
        try:
            with zipfile.ZipFile(archive_path) as archive:
                return [
                    self._extract_member(archive, info, archive_path, target_dir)
                    for info in archive.infolist()
                ]
        except ExtractionFailedError:
            raise
        except Exception as exc:
            raise ExtractionFailedError(f"zipfile extraction failed: {exc}") from exc

    def _extract_member(
        self,
        archive: zipfile.ZipFile,
        info: zipfile.ZipInfo,
        archive_path: Path,
        target_dir: Path,
    ) -> ExtractedEntry:
        if info.flag_bits & 0x1:
            raise ExtractionFailedError(f"encrypted member not supported: {info.filename}")
        written = Path(archive.extract(info, path=target_dir))
        if written.resolve() == archive_path.resolve():
            raise ExtractionFailedError(
                f"member {info.filename!r} overwrote the staged archive"
            )
        return ExtractedEntry(
            relative_path=info.filename.rstrip("/"),
            size_bytes=0 if info.is_dir() else info.file_size,
            is_directory=info.is_dir(),
        )
