import re
from dataclasses import dataclass
from typing import ClassVar

from export_intake.intake.models import AssetClass, MediaKind


@dataclass(frozen=True)
class _Rule:
    pattern: re.Pattern[str]
    kind: MediaKind


class AssetClassifier:
    """Decides whether an archive path is a media asset, first matching rule wins."""

    RULES: ClassVar[tuple[_Rule, ...]] = (
        _Rule(re.compile(r"^file-"), MediaKind.FILE),
        _Rule(re.compile(r"^audio/"), MediaKind.AUDIO),
        _Rule(re.compile(r"^dalle-generations/"), MediaKind.IMAGE),
        _Rule(re.compile(r"\.(jpeg|jpg|png|gif|webp)$", re.IGNORECASE), MediaKind.IMAGE),
        _Rule(re.compile(r"\.(dat|wav|mp3|m4a|ogg)$", re.IGNORECASE), MediaKind.AUDIO),
        _Rule(re.compile(r"\.(mp4|webm|mov)$", re.IGNORECASE), MediaKind.VIDEO),
    )

    NOT_MEDIA: ClassVar[AssetClass] = AssetClass(is_media=False)

    def classify(self, relative_path: str) -> AssetClass:
        for rule in self.RULES:
            if rule.pattern.search(relative_path):
                return AssetClass(is_media=True, media_kind=rule.kind)
        return self.NOT_MEDIA

    def is_media(self, relative_path: str) -> bool:
        return self.classify(relative_path).is_media
