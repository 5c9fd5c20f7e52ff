from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict

import piexif

from .coordinates import rational

# GeoRecord field name -> GPS IFD tag id
GPS_TAGS: Dict[str, int] = {
    "latitude": piexif.GPSIFD.GPSLatitude,
    "latitude_ref": piexif.GPSIFD.GPSLatitudeRef,
    "longitude": piexif.GPSIFD.GPSLongitude,
    "longitude_ref": piexif.GPSIFD.GPSLongitudeRef,
    "time_stamp": piexif.GPSIFD.GPSTimeStamp,
    "date_stamp": piexif.GPSIFD.GPSDateStamp,
}

RATIONAL_FIELDS = ("latitude", "longitude", "time_stamp")


@dataclass(frozen=True)
class GpsTag:
    """A single raw GPS tag value as returned by the EXIF decoder."""

    value: Any

    def __len__(self) -> int:
        if isinstance(self.value, (str, bytes)):
            return 0
        try:
            return len(self.value)
        except TypeError:
            return 0

    def rat(self, index: int) -> Fraction:
        """Returns the rational component at ``index``."""
        if len(self) <= index:
            raise IndexError(f"Tag has {len(self)} rational component(s), no index {index}")
        return rational(self.value[index])

    def string_val(self) -> str:
        """Text form of the tag, without the trailing NUL EXIF ASCII values carry."""
        if isinstance(self.value, bytes):
            text = self.value.decode("ascii", errors="replace")
        else:
            text = str(self.value)
        return text.rstrip("\x00").strip()
