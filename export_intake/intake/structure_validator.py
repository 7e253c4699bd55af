from pathlib import Path

from export_intake.archive.base import BaseArchiveDecoder
from export_intake.intake.exceptions import (
    CompressionBombError,
    TooManyFilesError,
    UnsafePathError,
)
from export_intake.intake.models import ExtractedEntry, UploadPayload, ValidationLimits
from export_intake.intake.path_safety import is_safe_path
from export_intake.intake.scratch import ScratchArea
from export_intake.logging.logger import Log


def compression_ratio(entries: list[ExtractedEntry], compressed_size: int) -> float:
    """Total reported entry size divided by the compressed archive size."""
    extracted = sum(entry.size_bytes for entry in entries)
    if compressed_size <= 0:
        return float("inf") if extracted else 0.0
    return extracted / compressed_size


class ArchiveStructureValidator:
    """Trial-extracts an archive into a throwaway scratch area and inspects the entry list.

    Checks run in a fixed order (entry count, compression ratio, member paths)
    and the first failure aborts. The scratch area is gone by the time
    ``validate_structure`` returns or raises.
    """

    STAGING_NAME = ".validate-upload.zip"

    def __init__(
        self,
        decoder: BaseArchiveDecoder,
        limits: ValidationLimits,
        scratch_prefix: str = ScratchArea.DEFAULT_PREFIX,
        scratch_random_bytes: int = ScratchArea.DEFAULT_RANDOM_BYTES,
        scratch_root: Path | None = None,
    ) -> None:
        self._decoder = decoder
        self._limits = limits
        self._scratch_prefix = scratch_prefix
        self._scratch_random_bytes = scratch_random_bytes
        self._scratch_root = scratch_root

    def validate_structure(self, payload: UploadPayload) -> None:
        """Raise on archives that are too big, too dense, or escape their root.

        Raises:
            TooManyFilesError: entry count is above the configured maximum.
            CompressionBombError: extracted/compressed ratio is above the maximum.
            UnsafePathError: an entry path fails ``is_safe_path``.
            ExtractionFailedError: the decoder could not read the archive.
        """
        with ScratchArea.create(
            self._scratch_prefix, self._scratch_random_bytes, self._scratch_root
        ) as scratch:
            staged = payload.stage(scratch.path / self.STAGING_NAME)
            entries = self._decoder.decode(staged, scratch.path)
            self._check_entries(entries, payload.size)

    def _check_entries(self, entries: list[ExtractedEntry], compressed_size: int) -> None:
        if len(entries) > self._limits.max_files:
            raise TooManyFilesError(len(entries), self._limits.max_files)

        ratio = compression_ratio(entries, compressed_size)
        if ratio > self._limits.max_compression_ratio:
            raise CompressionBombError(ratio, self._limits.max_compression_ratio)

        for entry in entries:
            if not is_safe_path(entry.relative_path):
                raise UnsafePathError(entry.relative_path)

        Log.debug(
            f"Archive structure validation passed: {len(entries)} files, {ratio:.0f}:1 ratio"
        )
