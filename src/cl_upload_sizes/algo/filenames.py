"""Output filename derivation for resized images."""

import hashlib
import re
from pathlib import Path

from ..common.errors import SanitizationError

_ILLEGAL_RE = re.compile(r'[/?<>\\:*|"]')
_CONTROL_RE = re.compile(r"[\x00-\x1f\x80-\x9f]")
_RESERVED_RE = re.compile(r"^\.+$")
_WINDOWS_RESERVED_RE = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE)
_WINDOWS_TRAILING_RE = re.compile(r"[. ]+$")

MAX_FILENAME_BYTES = 255


def sanitize_filename(name: str) -> str:
    """
    Strip characters and names that are unsafe on common filesystems.

    The result may be empty when nothing safe remains.
    """
    sanitized = _ILLEGAL_RE.sub("", name)
    sanitized = _CONTROL_RE.sub("", sanitized)
    sanitized = _RESERVED_RE.sub("", sanitized)
    sanitized = _WINDOWS_RESERVED_RE.sub("", sanitized)
    sanitized = _WINDOWS_TRAILING_RE.sub("", sanitized)

    return truncate_utf8(sanitized, MAX_FILENAME_BYTES)


def truncate_utf8(text: str, max_bytes: int) -> str:
    """Cut text to at most max_bytes of UTF-8 without splitting a character."""
    return text.encode("utf-8")[:max_bytes].decode("utf-8", errors="ignore")


def split_filename(filename: str) -> tuple[str, str | None]:
    """
    Split 'photo.final.jpg' into ('photo.final', 'jpg').

    The extension is None when absent. A name with nothing before its only
    dot, such as '.jpg', keeps the whole name as stem.
    """
    stem, dot, extension = filename.rpartition(".")
    if not dot or not extension:
        return filename, None
    return stem or filename, extension


def fallback_stem(filename: str) -> str:
    digest = hashlib.sha256(filename.encode("utf-8")).hexdigest()
    return f"image-{digest[:12]}"


def output_filename(saved_filename: str, width: int, height: int, extension: str) -> str:
    """
    Build '<sanitized stem>-<width>x<height>.<extension>'.

    Raises:
        SanitizationError: If the extension contains anything but ASCII letters and digits
    """
    if not extension or not (extension.isascii() and extension.isalnum()):
        raise SanitizationError(f"Unsafe output extension: {extension!r}")

    suffix = f"-{width}x{height}.{extension}"
    stem, _ = split_filename(saved_filename)

    # The complete name, suffix included, must fit the filesystem limit
    budget = MAX_FILENAME_BYTES - len(suffix.encode("utf-8"))
    name = truncate_utf8(sanitize_filename(stem), budget) or fallback_stem(saved_filename)

    return f"{name}{suffix}"


def resolve_output_path(static_dir: str | Path, filename: str) -> Path:
    """
    Join filename onto static_dir.

    Prevents path traversal: the result must be a direct child of static_dir.
    """
    base = Path(static_dir).expanduser().resolve()
    resolved = (base / filename).resolve()

    if resolved.parent != base:
        raise SanitizationError(f"Output path escapes the static directory: {filename!r}")

    return resolved
