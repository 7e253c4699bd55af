from export_intake.intake.exceptions import MarkerNotFoundError
from export_intake.intake.extractor import SecureExtractor
from export_intake.intake.models import ProgressStage
from export_intake.intake.relocator import FileRelocator
from export_intake.intake.structure_validator import ArchiveStructureValidator
from export_intake.intake.upload_validator import UploadValidator
from export_intake.logging.logger import Log
from export_intake.processor.pipeline import IntakeContext, PipelineStep


class ValidateUploadStep(PipelineStep):
    def __init__(self, upload_validator: UploadValidator) -> None:
        self._upload_validator = upload_validator

    def run(self, context: IntakeContext) -> IntakeContext:
        context.reporter.report(ProgressStage.VALIDATING, 0, "Validating upload...")
        self._upload_validator.validate(context.payload)
        return context


class ValidateStructureStep(PipelineStep):
    def __init__(self, structure_validator: ArchiveStructureValidator) -> None:
        self._structure_validator = structure_validator

    def run(self, context: IntakeContext) -> IntakeContext:
        context.reporter.report(ProgressStage.VALIDATING, 5, "Validating archive structure...")
        self._structure_validator.validate_structure(context.payload)
        return context


class ExtractStep(PipelineStep):
    def __init__(self, extractor: SecureExtractor) -> None:
        self._extractor = extractor

    def run(self, context: IntakeContext) -> IntakeContext:
        if context.scratch is None:
            raise ValueError("IntakeContext.scratch must be set before extraction")
        context.reporter.report(ProgressStage.EXTRACTING, 10, "Extracting archive...")
        context.entries = self._extractor.extract(context.payload, context.scratch)
        Log.info(f"Extracted {len(context.entries)} entries into {context.scratch.path}")
        return context


class RelocateStep(PipelineStep):
    def __init__(self, relocator: FileRelocator) -> None:
        self._relocator = relocator

    def run(self, context: IntakeContext) -> IntakeContext:
        if context.scratch is None:
            raise ValueError("IntakeContext.scratch must be set before relocation")
        context.reporter.report(ProgressStage.ORGANIZING, 50, "Organizing files...")
        context.marker_path = self._relocator.relocate(
            context.scratch.path,
            context.entries,
            context.layout,
        )
        return context


class FinalizeStep(PipelineStep):
    def __init__(self, marker_filename: str) -> None:
        self._marker_filename = marker_filename

    def run(self, context: IntakeContext) -> IntakeContext:
        context.reporter.report(ProgressStage.FINALIZING, 80, "Finalizing organization...")
        if context.marker_path is None:
            raise MarkerNotFoundError(self._marker_filename)
        if not context.marker_path.is_file():
            raise MarkerNotFoundError(
                self._marker_filename,
                f"not found at expected path {context.marker_path}",
            )
        Log.info(f"{self._marker_filename} verified at {context.marker_path}")
        return context


class ReportFailureStep(PipelineStep):
    def run(self, context: IntakeContext) -> IntakeContext:
        Log.exception(f"Archive intake failed: {context.error_message}")
        if context.reporter.is_terminal:
            return context
        try:
            context.reporter.fail(context.error_message)
        except Exception as exc:
            Log.warning(f"Progress sink failed while reporting error: {exc}")
        return context
