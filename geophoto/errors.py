from typing import Iterable, Optional


class GeoPhotoError(Exception):
    """Base class for every error raised by geophoto."""


class FileOpenError(GeoPhotoError):
    """The file could not be opened or read."""

    def __init__(self, path, reason: str = ""):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Could not open {self.path}: {reason}")


class ExifDecodeError(GeoPhotoError):
    """The byte stream is not a readable EXIF container."""

    def __init__(self, path: Optional[str] = None, reason: str = ""):
        self.path = str(path) if path is not None else None
        self.reason = reason
        where = self.path or "<bytes>"
        super().__init__(f"Could not decode EXIF from {where}: {reason}")


class MissingFieldError(GeoPhotoError):
    """A derived value was requested from a record lacking the fields it needs."""

    def __init__(self, fields: Iterable[str]):
        self.fields = tuple(fields)
        super().__init__(f"GeoRecord is missing required field(s): {', '.join(self.fields)}")


class AggregationCancelled(GeoPhotoError):
    """Raised when a directory walk is aborted through its cancel event."""
