from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from export_intake.intake.models import ExportLayout, ExtractedEntry, UploadPayload
from export_intake.intake.progress import ProgressReporter
from export_intake.intake.scratch import ScratchArea


@dataclass(slots=True)
class IntakeContext:
    payload: UploadPayload
    layout: ExportLayout
    reporter: ProgressReporter
    scratch: ScratchArea | None = None
    entries: list[ExtractedEntry] = field(default_factory=list)
    marker_path: Path | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: IntakeContext) -> IntakeContext:
        raise NotImplementedError
