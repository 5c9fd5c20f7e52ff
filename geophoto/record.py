import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from fractions import Fraction
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import settings
from .coordinates import format_decimal, sexagesimal_to_decimal
from .errors import MissingFieldError
from .tags import GPS_TAGS, GpsTag

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

COORDINATE_FIELDS = ("latitude", "latitude_ref", "longitude", "longitude_ref")


def _parse_date_stamp(text: str) -> Tuple[int, int, int]:
    """
    Splits a GPSDateStamp ("YYYY:MM:DD") into integers.

    Parsing is lenient: missing or non-numeric parts become 0.
    """
    parts = text.split(":")
    values = []
    lenient = len(parts) != 3
    for part in (parts + ["0", "0", "0"])[:3]:
        try:
            values.append(int(part))
        except ValueError:
            values.append(0)
            lenient = True

    if lenient:
        logger.warning(f"Malformed GPSDateStamp {text!r}, read as {values}")
    return values[0], values[1], values[2]


@dataclass(frozen=True)
class GeoRecord:
    """
    GPS position and GPS time of one photo.

    Every tag is optional so that partial records can be built directly;
    the aggregator is what insists on complete ones.
    """

    latitude: Optional[GpsTag] = None
    latitude_ref: Optional[GpsTag] = None
    longitude: Optional[GpsTag] = None
    longitude_ref: Optional[GpsTag] = None
    time_stamp: Optional[GpsTag] = None
    date_stamp: Optional[GpsTag] = None
    path: Optional[str] = None

    def missing_fields(self, names=tuple(GPS_TAGS)) -> List[str]:
        return [name for name in names if getattr(self, name) is None]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def coordinates(self) -> Tuple[Fraction, Fraction]:
        """
        Exact signed (latitude, longitude) in decimal degrees.

        Raises:
            MissingFieldError: if a coordinate tag or its reference is absent.
        """
        missing = self.missing_fields(COORDINATE_FIELDS)
        if missing:
            raise MissingFieldError(missing)

        latitude = sexagesimal_to_decimal(
            self.latitude.rat(0),
            self.latitude.rat(1),
            self.latitude.rat(2),
            self.latitude_ref.string_val(),
        )
        longitude = sexagesimal_to_decimal(
            self.longitude.rat(0),
            self.longitude.rat(1),
            self.longitude.rat(2),
            self.longitude_ref.string_val(),
        )
        return latitude, longitude

    def decimal_string(self) -> str:
        """Returns "<lat>,<lon>" with fixed precision, e.g. "37.812600,-122.419033"."""
        latitude, longitude = self.coordinates()
        places = settings.DECIMAL_PLACES
        return f"{format_decimal(latitude, places)},{format_decimal(longitude, places)}"

    def timestamp(self) -> Optional[datetime]:
        """
        The GPS date and time as an aware UTC datetime.

        A month outside 1..12 reads as December of the previous year; day
        and time components roll over. Returns None when either tag is absent or the date cannot be
        placed on the calendar.
        """
        if self.time_stamp is None or self.date_stamp is None:
            return None

        year, month, day = _parse_date_stamp(self.date_stamp.string_val())
        try:
            hour, minute, second = (int(self.time_stamp.rat(i)) for i in range(3))
        except (IndexError, TypeError) as e:
            logger.warning(f"Could not read GPSTimeStamp {self.time_stamp.value!r}: {e}")
            return None

        if not 1 <= month <= 12:
            year, month = year - 1, 12
        try:
            return datetime(year, month, 1, tzinfo=timezone.utc) + timedelta(
                days=day - 1, hours=hour, minutes=minute, seconds=second
            )
        except (ValueError, OverflowError) as e:
            logger.warning(f"GPS date {year}:{month}:{day} is outside the calendar: {e}")
            return None

    def unix(self) -> int:
        """Epoch seconds of the GPS timestamp, or 0 when there is none."""
        instant = self.timestamp()
        if instant is None:
            return 0
        return (instant - EPOCH) // timedelta(seconds=1)

    def street_view_url(self) -> str:
        """Street View image lookup URL for the photo's position. No request is made."""
        return (
            f"{settings.STREET_VIEW_URL}?location={self.decimal_string()}"
            f"&size={settings.STREET_VIEW_SIZE}"
            f"&fov={settings.STREET_VIEW_FOV}"
            f"&heading={settings.STREET_VIEW_HEADING}"
            "&sensor=false"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Flat metadata row for export."""
        latitude = longitude = None
        if not self.missing_fields(COORDINATE_FIELDS):
            lat, lon = self.coordinates()
            latitude, longitude = float(lat), float(lon)

        return {
            "FileName": Path(self.path).name if self.path else None,
            "FilePath": self.path,
            "GPSLat": latitude,
            "GPSLong": longitude,
            "GPSDateTime": self.timestamp(),
            "Unix": self.unix(),
        }

