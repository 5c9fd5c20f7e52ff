# geophoto/__init__.py

from .aggregate import aggregate, iter_files
from .coordinates import format_decimal, rational, sexagesimal_to_decimal
from .errors import (
    AggregationCancelled,
    ExifDecodeError,
    FileOpenError,
    GeoPhotoError,
    MissingFieldError,
)
from .exif import decode_exif, record_from_exif, record_from_file
from .record import GeoRecord
from .tags import GpsTag

__all__ = [
    "aggregate",
    "iter_files",
    "format_decimal",
    "rational",
    "sexagesimal_to_decimal",
    "AggregationCancelled",
    "ExifDecodeError",
    "FileOpenError",
    "GeoPhotoError",
    "MissingFieldError",
    "decode_exif",
    "record_from_exif",
    "record_from_file",
    "GeoRecord",
    "GpsTag",
]
