from typing import ClassVar

from export_intake.intake.exceptions import InvalidFormatError, TooLargeError
from export_intake.intake.models import UploadPayload
from export_intake.intake.sizes import format_size
from export_intake.logging.logger import Log


class UploadValidator:
    """Cheap gate run before any archive bytes are decoded."""

    SIGNATURES: ClassVar[tuple[bytes, ...]] = (
        b"PK\x03\x04",  # local file header
        b"PK\x05\x06",  # empty archive
        b"PK\x07\x08",  # spanned archive
    )

    def __init__(self, max_bytes: int) -> None:
        self._max_bytes = max_bytes

    def validate(self, payload: UploadPayload, max_bytes: int | None = None) -> None:
        """Check size and magic number.

        Raises:
            TooLargeError: if the payload is larger than ``max_bytes``.
            InvalidFormatError: if no known archive signature prefixes it.
        """
        limit = self._max_bytes if max_bytes is None else max_bytes
        size = payload.size
        if size > limit:
            raise TooLargeError(size, limit)

        header = payload.header(max(len(sig) for sig in self.SIGNATURES))
        if not any(header.startswith(sig) for sig in self.SIGNATURES):
            raise InvalidFormatError(header)

        Log.info(f"Upload validation passed: {format_size(size)}")
