"""Archive member path checks.

Every path that comes out of an archive is attacker-controlled until it has
passed ``is_safe_path``. The check is purely lexical: it never touches the
filesystem, so it gives the same answer for the same string everywhere.
"""

import posixpath
import re

_FORBIDDEN_CHARACTERS = ("\\", "\x00", "\r", "\n")
_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:")


def is_safe_path(relative_path: str) -> bool:
    """Return True if ``relative_path`` stays inside the directory it is relative to."""
    if not relative_path or not isinstance(relative_path, str):
        return False
    if any(char in relative_path for char in _FORBIDDEN_CHARACTERS):
        return False
    if relative_path.startswith("/") or _DRIVE_PREFIX.match(relative_path):
        return False
    if ".." in relative_path.split("/"):
        return False

    normalized = posixpath.normpath(relative_path)
    if normalized in (".", "") or normalized.startswith("/"):
        return False
    return ".." not in normalized.split("/")


def strip_prefix(relative_path: str, folder: str | None) -> str:
    """Drop a leading ``folder/`` from ``relative_path`` when present."""
    if not folder:
        return relative_path
    prefix = f"{folder}/"
    if relative_path.startswith(prefix):
        return relative_path[len(prefix):]
    return relative_path
