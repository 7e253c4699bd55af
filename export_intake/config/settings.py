from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from export_intake.intake.models import ValidationLimits


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    max_upload_bytes: int = Field(default=500 * 1024 * 1024, gt=0)
    max_extracted_bytes: int = Field(default=2 * 1024 * 1024 * 1024, gt=0)
    max_compression_ratio: float = Field(default=100.0, gt=0)
    max_files_in_archive: int = Field(default=10_000, gt=0)

    scratch_root: Path | None = None
    scratch_prefix: str = "dddiver-"
    scratch_random_bytes: int = Field(default=8, gt=0)

    archive_decoder: str = "zipfile"
    marker_filename: str = "conversations.json"
    validate_structure: bool = True
    media_copy_workers: int = Field(default=1, gt=0)

    def limits(self) -> ValidationLimits:
        """Snapshot the configured size and count ceilings."""
        return ValidationLimits(
            max_upload_bytes=self.max_upload_bytes,
            max_extracted_bytes=self.max_extracted_bytes,
            max_compression_ratio=self.max_compression_ratio,
            max_files=self.max_files_in_archive,
        )
