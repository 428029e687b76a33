"""Cover images stored inline as data URLs."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path

from bookrecords.errors import RecordError


def image_to_data_url(file_path: Path, max_bytes: int) -> str:
    """Read an image file into a ``data:`` URL.

    Raises:
        RecordError: If the file is missing, not an image or over ``max_bytes``.
    """
    if not file_path.is_file():
        raise RecordError(f"File not found: {file_path}")
    mime, _ = mimetypes.guess_type(file_path.name)
    if not mime or not mime.startswith("image/"):
        raise RecordError("Not an image file", {"path": str(file_path)})
    size = file_path.stat().st_size
    if size > max_bytes:
        raise RecordError(
            f"Image size should be less than {max_bytes // 1000}KB",
            {"size": size},
        )
    encoded = base64.b64encode(file_path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def data_url_size(data_url: str) -> int:
    """Approximate decoded size in bytes of a base64 ``data:`` URL."""
    header, sep, payload = data_url.partition(",")
    if not sep or not header.endswith(";base64"):
        return len(data_url.encode("utf-8"))
    return len(payload) * 3 // 4 - payload[-2:].count("=")
