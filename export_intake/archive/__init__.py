from export_intake.archive.base import BaseArchiveDecoder
from export_intake.archive.factory import ArchiveDecoderFactory
from export_intake.archive.zipfile_adapter import ZipfileDecoder

__all__ = ["ArchiveDecoderFactory", "BaseArchiveDecoder", "ZipfileDecoder"]
