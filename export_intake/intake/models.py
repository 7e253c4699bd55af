import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class UploadPayload:
    """Uploaded archive, held either as bytes in memory or as a file on disk."""

    data: bytes | None = None
    path: Path | None = None

    def __post_init__(self) -> None:
        if (self.data is None) == (self.path is None):
            raise ValueError("UploadPayload needs exactly one of 'data' or 'path'")

    @classmethod
    def from_bytes(cls, data: bytes) -> "UploadPayload":
        return cls(data=data)

    @classmethod
    def from_path(cls, path: Path | str) -> "UploadPayload":
        return cls(path=Path(path))

    @property
    def size(self) -> int:
        if self.data is not None:
            return len(self.data)
        return self._file().stat().st_size

    def header(self, length: int) -> bytes:
        """Return at most ``length`` leading bytes without reading the rest."""
        if self.data is not None:
            return self.data[:length]
        with self._file().open("rb") as fh:
            return fh.read(length)

    def stage(self, destination: Path) -> Path:
        """Write (or copy) the payload to ``destination`` and return it."""
        if self.data is not None:
            destination.write_bytes(self.data)
        else:
            shutil.copyfile(self._file(), destination)
        return destination

    def _file(self) -> Path:
        if self.path is None:
            raise ValueError("UploadPayload holds bytes, not a file path")
        return self.path


@dataclass(frozen=True)
class ExtractedEntry:
    """One archive member as reported by the decoder; path is untrusted."""

    relative_path: str
    size_bytes: int
    is_directory: bool = False


@dataclass(frozen=True)
class ValidationLimits:
    max_upload_bytes: int
    max_extracted_bytes: int
    max_compression_ratio: float
    max_files: int


class MediaKind(str, Enum):
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    FILE = "file"
    OTHER = "other"


@dataclass(frozen=True)
class AssetClass:
    """Classification outcome for a single archive path."""

    is_media: bool
    media_kind: MediaKind = MediaKind.OTHER


@dataclass(frozen=True)
class ExportLayout:
    """Final destination trees for one export."""

    export_root: Path
    media_root: Path

    def ensure(self) -> None:
        self.export_root.mkdir(parents=True, exist_ok=True)
        self.media_root.mkdir(parents=True, exist_ok=True)


class ProgressStage(str, Enum):
    INITIALIZING = "initializing"
    VALIDATING = "validating"
    EXTRACTING = "extracting"
    ORGANIZING = "organizing"
    FINALIZING = "finalizing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class ProgressEvent:
    stage: ProgressStage
    percent: float
    message: str
    timestamp_millis: int
    elapsed_millis: int
    stage_elapsed_millis: int


@dataclass
class StageTiming:
    """Wall-clock bookkeeping for one stage of a run."""

    started_at: float
    ended_at: float | None = None
    completed: bool = False


@dataclass
class ProgressSummary:
    total_elapsed_millis: int
    stages: dict[ProgressStage, StageTiming] = field(default_factory=dict)

    @property
    def completed_stages(self) -> int:
        return sum(1 for timing in self.stages.values() if timing.completed)

    @property
    def completion_rate(self) -> float:
        if not self.stages:
            return 0.0
        return self.completed_stages / len(self.stages) * 100
