import logging
import sys
from typing import TextIO


class Log:
    """Centralized intake logging; one stdout handler, plain-text format."""

    _logger: logging.Logger = logging.getLogger("export_intake")
    FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and attach the handler once; repeat calls only change the level."""
        cls._logger.setLevel(log_level.upper())
        if cls._logger.handlers:
            return
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(logging.Formatter(cls.FORMAT))
        cls._logger.addHandler(handler)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._emit(logging.DEBUG, message, kwargs)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._emit(logging.INFO, message, kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._emit(logging.WARNING, message, kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._emit(logging.ERROR, message, kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log at ERROR with the active exception's traceback attached."""
        cls._logger.error(message, exc_info=True, extra=kwargs)

    @classmethod
    def _emit(cls, level: int, message: str, extra: dict[str, object]) -> None:
        cls._logger.log(level, message, extra=extra)
