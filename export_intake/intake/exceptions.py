from export_intake.intake.sizes import format_size


class IntakeError(Exception):
    """Base exception for all archive intake errors."""


class UploadError(IntakeError):
    """Raised when the uploaded payload itself is unacceptable."""


class TooLargeError(UploadError):
    """Raised when the upload exceeds the configured byte ceiling."""

    def __init__(self, size: int, max_size: int) -> None:
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"File too large: {format_size(size)} (max: {format_size(max_size)})"
        )


class InvalidFormatError(UploadError):
    """Raised when the upload does not start with a known archive signature."""

    def __init__(self, header: bytes) -> None:
        self.header = header
        super().__init__(
            f"Invalid file format - expected ZIP archive (header {header.hex() or 'empty'})"
        )


class StructureError(IntakeError):
    """Raised when the archive contents look hostile."""


class TooManyFilesError(StructureError):
    def __init__(self, count: int, max_files: int) -> None:
        self.count = count
        self.max_files = max_files
        super().__init__(f"Too many files in archive: {count} (max: {max_files})")


class CompressionBombError(StructureError):
    def __init__(self, ratio: float, max_ratio: float) -> None:
        self.ratio = ratio
        self.max_ratio = max_ratio
        super().__init__(
            f"Compression ratio too high: {ratio:.0f}:1 "
            f"(max: {max_ratio:.0f}:1) - possible zip bomb"
        )


class UnsafePathError(StructureError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Suspicious file path detected: {path!r}")


class ExtractionError(IntakeError):
    """Raised when extraction does not produce a usable tree."""


class EmptyArchiveError(ExtractionError):
    def __init__(self) -> None:
        super().__init__("No files found in archive")


class ExtractedTooLargeError(ExtractionError):
    def __init__(self, total: int, max_total: int) -> None:
        self.total = total
        self.max_total = max_total
        super().__init__(
            f"Extracted content too large: {format_size(total)} "
            f"(max: {format_size(max_total)})"
        )


class ExtractionFailedError(ExtractionError):
    """Raised when the archive codec cannot decode the payload."""


class MarkerNotFoundError(IntakeError):
    def __init__(self, filename: str, detail: str = "") -> None:
        self.filename = filename
        message = f"{filename} not found in uploaded archive"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
