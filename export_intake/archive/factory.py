from typing import ClassVar

from export_intake.archive.base import BaseArchiveDecoder
from export_intake.archive.zipfile_adapter import ZipfileDecoder
from export_intake.config.settings import Settings


class ArchiveDecoderFactory:
    """Creates the correct archive decoder based on settings."""

    ADAPTERS: ClassVar[dict[str, type[BaseArchiveDecoder]]] = {
        "zipfile": ZipfileDecoder,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseArchiveDecoder:
        name = settings.archive_decoder.lower()
        adapter_cls = cls.ADAPTERS.get(name)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown archive decoder '{name}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
