from pathlib import Path

from export_intake.archive.base import BaseArchiveDecoder
from export_intake.intake.exceptions import EmptyArchiveError, ExtractedTooLargeError
from export_intake.intake.models import ExtractedEntry, UploadPayload, ValidationLimits
from export_intake.intake.scratch import ScratchArea
from export_intake.intake.upload_validator import UploadValidator
from export_intake.logging.logger import Log


class SecureExtractor:
    """Stages an upload into a scratch area and unpacks it there."""

    STAGING_NAME = ".staged-upload.zip"

    def __init__(
        self,
        decoder: BaseArchiveDecoder,
        upload_validator: UploadValidator,
        limits: ValidationLimits,
    ) -> None:
        self._decoder = decoder
        self._upload_validator = upload_validator
        self._limits = limits

    def extract(
        self,
        payload: UploadPayload,
        scratch: ScratchArea,
        target_dir: Path | None = None,
    ) -> list[ExtractedEntry]:
        """Validate, stage and decode the payload.

        The upload is re-validated here even if an earlier stage already did
        so; callers may reach the extractor directly.

        Raises:
            TooLargeError, InvalidFormatError: upload validation failed.
            ExtractionFailedError: the decoder could not read the archive.
            EmptyArchiveError: the archive produced no entries.
            ExtractedTooLargeError: the summed entry sizes exceed the ceiling.
        """
        self._upload_validator.validate(payload, self._limits.max_upload_bytes)

        staged = payload.stage(scratch.path / self.STAGING_NAME)
        destination = target_dir if target_dir is not None else scratch.path
        destination.mkdir(parents=True, exist_ok=True)
        Log.info(f"Starting archive extraction into {destination}")

        entries = self._decoder.decode(staged, destination)
        if not entries:
            raise EmptyArchiveError()

        total = sum(entry.size_bytes for entry in entries)
        if total > self._limits.max_extracted_bytes:
            raise ExtractedTooLargeError(total, self._limits.max_extracted_bytes)

        Log.info(f"Archive extraction completed: {len(entries)} entries extracted")
        return entries
