from abc import ABC, abstractmethod
from pathlib import Path

from export_intake.intake.models import ExtractedEntry


class BaseArchiveDecoder(ABC):
    """Contract for all archive decoding adapters."""

    @abstractmethod
    def decode(self, archive_path: Path, target_dir: Path) -> list[ExtractedEntry]:
        """Unpack the archive at ``archive_path`` into ``target_dir``.

        Args:
            archive_path: Staged archive file on local disk.
            target_dir: Existing directory that receives the extracted tree.

        Returns:
            One entry per archive member, in archive order. Paths are the raw
            member names and have not been checked for safety.

        Raises:
            ExtractionFailedError: if decoding fails for any reason.
        """
