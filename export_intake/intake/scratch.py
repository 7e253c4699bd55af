import secrets
import shutil
import tempfile
from pathlib import Path
from types import TracebackType

from export_intake.logging.logger import Log


class ScratchArea:
    """Exclusively owned temp directory for a single intake run.

    Created with a random name under the system temp root (or ``root``) and
    removed recursively on ``cleanup``. Removal is best-effort: a directory the
    OS refuses to delete is logged and left behind.
    """

    DEFAULT_PREFIX = "dddiver-"
    DEFAULT_RANDOM_BYTES = 8

    def __init__(self, path: Path) -> None:
        self._path = path
        self._removed = False

    @classmethod
    def create(
        cls,
        prefix: str = DEFAULT_PREFIX,
        random_bytes: int = DEFAULT_RANDOM_BYTES,
        root: Path | None = None,
    ) -> "ScratchArea":
        base = root if root is not None else Path(tempfile.gettempdir())
        path = base / f"{prefix}{secrets.token_hex(random_bytes)}"
        path.mkdir(mode=0o700, parents=True)
        Log.debug(f"Created scratch area {path}")
        return cls(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def removed(self) -> bool:
        return self._removed

    def cleanup(self) -> None:
        """Remove the directory tree; safe to call more than once."""
        if self._removed:
            return
        self._removed = True
        try:
            shutil.rmtree(self._path)
            Log.debug(f"Removed scratch area {self._path}")
        except FileNotFoundError:
            pass
        except OSError as exc:
            Log.warning(f"Failed to cleanup scratch area {self._path}: {exc}")

    def __enter__(self) -> "ScratchArea":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()
