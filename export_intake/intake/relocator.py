import shutil
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from export_intake.intake.asset_classifier import AssetClassifier
from export_intake.intake.exceptions import MarkerNotFoundError
from export_intake.intake.models import ExportLayout, ExtractedEntry
from export_intake.intake.path_safety import is_safe_path, strip_prefix
from export_intake.logging.logger import Log

_READ_CHUNK = 64 * 1024


def detect_wrapper_folder(entries: Iterable[ExtractedEntry]) -> str | None:
    """Return the single top-level folder that wraps every entry, if there is one.

    A regular file at the archive root means the archive is not wrapped. The
    folder name is itself archive-supplied, so an unsafe one is ignored.
    """
    top_levels: set[str] = set()
    for entry in entries:
        parts = [part for part in entry.relative_path.split("/") if part]
        if not parts:
            continue
        if len(parts) == 1 and not entry.is_directory:
            return None
        top_levels.add(parts[0])
    if len(top_levels) != 1:
        return None
    folder = next(iter(top_levels))
    return folder if is_safe_path(folder) else None


def is_text_file(path: Path) -> bool:
    """True for a non-empty file without NUL bytes."""
    seen_any = False
    with path.open("rb") as fh:
        while chunk := fh.read(_READ_CHUNK):
            seen_any = True
            if b"\x00" in chunk:
                return False
    return seen_any


@dataclass
class RelocationStats:
    moved: int = 0
    copied: int = 0
    skipped: int = 0


class FileRelocator:
    """Moves an extracted archive tree from scratch into the export and media roots.

    Entries are handled in decoder order:

    * the marker file (``conversations.json`` by default) is moved to
      ``export_root/<marker>``; when several entries qualify the last one wins,
    * media assets are copied to ``media_root`` under their unwrapped path,
    * everything else is moved to ``export_root`` under its unwrapped path.

    Unsafe paths and per-entry I/O failures are logged and skipped.
    """

    def __init__(
        self,
        classifier: AssetClassifier,
        marker_filename: str = "conversations.json",
        media_copy_workers: int = 1,
    ) -> None:
        self._classifier = classifier
        self._marker_filename = marker_filename
        self._media_copy_workers = media_copy_workers

    def relocate(
        self,
        scratch_dir: Path,
        entries: list[ExtractedEntry],
        layout: ExportLayout,
    ) -> Path:
        """Relocate ``entries`` and return the final marker file path.

        Raises:
            MarkerNotFoundError: no entry qualified as the marker file.
        """
        layout.ensure()
        wrapper = detect_wrapper_folder(entries)
        Log.debug(f"Wrapper folder: {wrapper!r}")

        stats = RelocationStats()
        marker_path: Path | None = None
        media_jobs: dict[Path, Path] = {}

        for entry in entries:
            if not is_safe_path(entry.relative_path):
                Log.warning(f"Skipping file with dangerous path: {entry.relative_path!r}")
                stats.skipped += 1
                continue

            source = scratch_dir / entry.relative_path

            if self._is_marker_name(entry.relative_path):
                moved = self._move_marker(source, layout.export_root)
                if moved is None:
                    stats.skipped += 1
                else:
                    marker_path = moved
                continue

            if entry.is_directory:
                continue

            relative = strip_prefix(entry.relative_path, wrapper)
            if not is_safe_path(relative):
                Log.warning(f"Skipping file with dangerous relative path: {relative!r}")
                stats.skipped += 1
                continue

            if self._classifier.is_media(relative):
                media_jobs[layout.media_root / relative] = source
            elif self._move(source, layout.export_root / relative):
                stats.moved += 1
            else:
                stats.skipped += 1

        copied = self._copy_media([(src, dst) for dst, src in media_jobs.items()])
        stats.copied += copied
        stats.skipped += len(media_jobs) - copied

        if wrapper:
            self._remove_wrapper(scratch_dir / wrapper)

        Log.info(
            f"Relocated archive: {stats.moved} moved, {stats.copied} media copied, "
            f"{stats.skipped} skipped"
        )
        if marker_path is None:
            raise MarkerNotFoundError(self._marker_filename)
        return marker_path

    def _is_marker_name(self, relative_path: str) -> bool:
        return relative_path.rstrip("/").split("/")[-1] == self._marker_filename

    def _move_marker(self, source: Path, export_root: Path) -> Path | None:
        if source.is_symlink() or not source.is_file():
            Log.warning(f"Ignoring {self._marker_filename} candidate that is not a file: {source}")
            return None
        try:
            if not is_text_file(source):
                Log.warning(f"Ignoring binary or empty {self._marker_filename}: {source}")
                return None
            destination = export_root / self._marker_filename
            shutil.move(str(source), str(destination))
        except OSError as exc:
            Log.warning(f"Failed to move {self._marker_filename} from {source}: {exc}")
            return None
        Log.debug(f"Marker file placed at {destination}")
        return destination

    def _move(self, source: Path, destination: Path) -> bool:
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(source), str(destination))
        except OSError as exc:
            Log.warning(f"Failed to move {source} -> {destination}: {exc}")
            return False
        return True

    def _copy_one(self, job: tuple[Path, Path]) -> bool:
        source, destination = job
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, destination)
        except OSError as exc:
            Log.warning(f"Failed to copy media file {source} -> {destination}: {exc}")
            return False
        Log.debug(f"Copied media file: {source} -> {destination}")
        return True

    def _copy_media(self, jobs: list[tuple[Path, Path]]) -> int:
        if self._media_copy_workers <= 1 or len(jobs) <= 1:
            return sum(self._copy_one(job) for job in jobs)
        with ThreadPoolExecutor(max_workers=self._media_copy_workers) as pool:
            return sum(pool.map(self._copy_one, jobs))

    def _remove_wrapper(self, wrapper_dir: Path) -> None:
        try:
            shutil.rmtree(wrapper_dir)
        except OSError as exc:
            Log.warning(f"Failed to delete wrapper directory {wrapper_dir}: {exc}")
