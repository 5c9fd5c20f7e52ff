import io
import logging
import struct
from pathlib import Path
from typing import Any, Dict, Optional

import piexif
from PIL import Image, UnidentifiedImageError

from .errors import ExifDecodeError, FileOpenError
from .record import GeoRecord
from .tags import GPS_TAGS, RATIONAL_FIELDS, GpsTag

logger = logging.getLogger(__name__)

IFD_NAMES = ("0th", "Exif", "GPS", "Interop", "1st")

PIEXIF_ERRORS = (
    piexif.InvalidImageDataError,
    ValueError,
    TypeError,
    KeyError,
    IndexError,
    struct.error,
)


def _is_piexif_container(data: bytes) -> bool:
    """True for the containers piexif can parse straight from bytes."""
    return (
        data[:2] == b"\xff\xd8"  # JPEG
        or data[:2] in (b"II", b"MM")  # TIFF
        or (data[:4] == b"RIFF" and data[8:12] == b"WEBP")
        or data[:6] == b"Exif\x00\x00"
    )


def _exif_payload_from_pillow(data: bytes, path: Optional[str]) -> bytes:
    """Pulls the raw EXIF block out of any other format Pillow can identify."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            payload = image.info.get("exif")
            image_format = image.format
    except Image.DecompressionBombError as e:
        raise ExifDecodeError(path, f"image header rejected: {e}") from e
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ExifDecodeError(path, "unsupported or unrecognised format") from e

    if not payload:
        raise ExifDecodeError(path, f"no EXIF segment in {image_format} image")
    if payload[:6] != b"Exif\x00\x00" and payload[:2] not in (b"II", b"MM"):
        payload = b"Exif\x00\x00" + payload
    return payload


def decode_exif(data: bytes, path: Optional[str] = None) -> Dict[str, Any]:
    """
    Decodes an image byte stream into a piexif IFD dictionary.

    Args:
        data: Full contents of the image file.
        path: Only used in error messages.

    Returns:
        {"0th": {...}, "Exif": {...}, "GPS": {...}, ...} keyed by tag id.

    Raises:
        ExifDecodeError: if the stream is not a supported container, has no
            EXIF segment, or the segment is corrupt.
    """
    if not data:
        raise ExifDecodeError(path, "empty file")

    payload = data if _is_piexif_container(data) else _exif_payload_from_pillow(data, path)

    try:
        exif_dict = piexif.load(payload)
    except PIEXIF_ERRORS as e:
        raise ExifDecodeError(path, f"corrupt EXIF data: {e}") from e

    if not any(exif_dict.get(name) for name in IFD_NAMES):
        raise ExifDecodeError(path, "no EXIF segment")
    return exif_dict


def record_from_exif(exif_dict: Dict[str, Any], path: Optional[str] = None) -> GeoRecord:
    """
    Builds a GeoRecord from a decoded tag set.

    Each of the six GPS tags is looked up independently; a tag that is
    missing, or a rational tag without exactly three components, leaves its
    field empty instead of failing the whole record.
    """
    gps_info = exif_dict.get("GPS") or {}
    found: Dict[str, Optional[GpsTag]] = {}

    for name, tag_id in GPS_TAGS.items():
        value = gps_info.get(tag_id)
        if value is None:
            found[name] = None
            continue

        tag = GpsTag(value)
        if name in RATIONAL_FIELDS:
            try:
                if len(tag) != 3:
                    raise ValueError(f"expected 3 components, got {len(tag)}")
                for i in range(3):
                    tag.rat(i)
            except (ValueError, TypeError) as e:
                logger.debug(f"Ignoring GPS tag {name} in {path or '<exif>'}: {e}")
                found[name] = None
                continue
        found[name] = tag

    return GeoRecord(path=str(path) if path is not None else None, **found)


def record_from_file(path) -> GeoRecord:
    """
    Opens an image file, decodes its EXIF and builds a GeoRecord.

    The file handle is closed before returning or raising.

    Raises:
        FileOpenError: if the path cannot be opened or read.
        ExifDecodeError: if the file carries no readable EXIF data.
    """
    path = Path(path)
    try:
        handle = open(path, "rb")
    except OSError as e:
        raise FileOpenError(path, e.strerror or str(e)) from e

    with handle:
        try:
            data = handle.read()
        except OSError as e:
            raise FileOpenError(path, e.strerror or str(e)) from e
        exif_dict = decode_exif(data, path=str(path))

    return record_from_exif(exif_dict, path=str(path))
