import pytest

from export_intake.intake.asset_classifier import AssetClassifier
from export_intake.intake.models import AssetClass, MediaKind


class TestMediaRules:
    @pytest.mark.parametrize(
        ("path", "kind"),
        [
            ("file-abc123", MediaKind.FILE),
            ("file-abc123.png", MediaKind.FILE),
            ("audio/x.wav", MediaKind.AUDIO),
            ("audio/recording", MediaKind.AUDIO),
            ("dalle-generations/img-1.webp", MediaKind.IMAGE),
            ("dalle-generations/readme.txt", MediaKind.IMAGE),
            ("pics/photo.JPG", MediaKind.IMAGE),
            ("anim.gif", MediaKind.IMAGE),
            ("voice/clip.m4a", MediaKind.AUDIO),
            ("legacy/blob.dat", MediaKind.AUDIO),
            ("clips/movie.mp4", MediaKind.VIDEO),
            ("clips/screen.MOV", MediaKind.VIDEO),
        ],
    )
    def test_classifies_media(self, path: str, kind: MediaKind) -> None:
        result = AssetClassifier().classify(path)
        assert result == AssetClass(is_media=True, media_kind=kind)

    def test_first_matching_rule_wins(self) -> None:
        # prefix rule is checked before the video extension rule
        assert AssetClassifier().classify("audio/talk.mp4").media_kind is MediaKind.AUDIO


class TestNonMedia:
    @pytest.mark.parametrize(
        "path",
        ["conversations.json", "notes.txt", "chat.html", "nested/file-abc", "png"],
    )
    def test_not_media(self, path: str) -> None:
        result = AssetClassifier().classify(path)
        assert result.is_media is False
        assert result.media_kind is MediaKind.OTHER

    def test_is_media_shortcut(self) -> None:
        classifier = AssetClassifier()
        assert classifier.is_media("audio/a.wav") is True
        assert classifier.is_media("user.json") is False


def test_classification_is_idempotent() -> None:
    classifier = AssetClassifier()
    assert classifier.classify("export/a.png") == classifier.classify("export/a.png")
