from pathlib import Path

from export_intake.archive.factory import ArchiveDecoderFactory
from export_intake.config.settings import Settings
from export_intake.intake.asset_classifier import AssetClassifier
from export_intake.intake.extractor import SecureExtractor
from export_intake.intake.models import ExportLayout, ProgressStage, UploadPayload
from export_intake.intake.progress import ProgressReporter, ProgressSink
from export_intake.intake.relocator import FileRelocator
from export_intake.intake.scratch import ScratchArea
from export_intake.intake.structure_validator import ArchiveStructureValidator
from export_intake.intake.upload_validator import UploadValidator
from export_intake.logging.logger import Log
from export_intake.processor.pipeline import IntakeContext, PipelineStep
from export_intake.processor.steps import (
    ExtractStep,
    FinalizeStep,
    RelocateStep,
    ReportFailureStep,
    ValidateStructureStep,
    ValidateUploadStep,
)


class IntakeProcessor:
    """Runs the intake steps for one upload inside its own scratch area.

    Pipeline: validate upload -> validate structure -> extract -> relocate ->
    finalize. The scratch area is removed on every exit path before the
    result (or the error) reaches the caller.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        failed_step: PipelineStep,
        scratch_prefix: str = ScratchArea.DEFAULT_PREFIX,
        scratch_random_bytes: int = ScratchArea.DEFAULT_RANDOM_BYTES,
        scratch_root: Path | None = None,
    ) -> None:
        self._steps = steps
        self._failed_step = failed_step
        self._scratch_prefix = scratch_prefix
        self._scratch_random_bytes = scratch_random_bytes
        self._scratch_root = scratch_root

    def process(
        self,
        payload: UploadPayload,
        layout: ExportLayout,
        on_progress: ProgressSink | None = None,
    ) -> Path:
        """Ingest ``payload`` into ``layout`` and return the marker file path.

        Any failure, including one before the scratch area exists, is reported
        as ``error`` after the scratch area is gone and then re-raised.
        """
        reporter = ProgressReporter(on_progress)
        reporter.report(ProgressStage.INITIALIZING, 0, "Preparing upload...")
        context = IntakeContext(payload=payload, layout=layout, reporter=reporter)

        try:
            Log.info(f"Processing upload of {payload.size} bytes into {layout.export_root}")
            with ScratchArea.create(
                self._scratch_prefix, self._scratch_random_bytes, self._scratch_root
            ) as scratch:
                context.scratch = scratch
                for step in self._steps:
                    context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc)
            self._failed_step.run(context)
            raise

        if context.marker_path is None:
            raise ValueError("IntakeContext.marker_path must be set by the pipeline steps")
        reporter.report(ProgressStage.COMPLETED, 100, "Upload processing complete")
        return context.marker_path


def build_processor(settings: Settings) -> IntakeProcessor:
    """Build an IntakeProcessor with all collaborators wired from settings."""
    Log.configure(settings.log_level)
    limits = settings.limits()
    decoder = ArchiveDecoderFactory.create(settings)
    upload_validator = UploadValidator(limits.max_upload_bytes)

    steps: list[PipelineStep] = [ValidateUploadStep(upload_validator)]
    if settings.validate_structure:
        steps.append(
            ValidateStructureStep(
                ArchiveStructureValidator(
                    decoder,
                    limits,
                    scratch_prefix=settings.scratch_prefix,
                    scratch_random_bytes=settings.scratch_random_bytes,
                    scratch_root=settings.scratch_root,
                )
            )
        )
    steps += [
        ExtractStep(SecureExtractor(decoder, upload_validator, limits)),
        RelocateStep(
            FileRelocator(
                AssetClassifier(),
                marker_filename=settings.marker_filename,
                media_copy_workers=settings.media_copy_workers,
            )
        ),
        FinalizeStep(settings.marker_filename),
    ]
    return IntakeProcessor(
        steps=steps,
        failed_step=ReportFailureStep(),
        scratch_prefix=settings.scratch_prefix,
        scratch_random_bytes=settings.scratch_random_bytes,
        scratch_root=settings.scratch_root,
    )
