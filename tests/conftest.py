import struct

import piexif
import pytest
from PIL import Image


def gps_ifd(
    latitude=((37, 1), (48, 1), (4536, 100)),
    latitude_ref=b"N",
    longitude=((122, 1), (25, 1), (852, 100)),
    longitude_ref=b"W",
    time_stamp=((14, 1), (30, 1), (0, 1)),
    date_stamp=b"2023:06:15",
):
    """Build a piexif GPS IFD; pass None to leave a tag out."""
    tags = {
        piexif.GPSIFD.GPSLatitude: latitude,
        piexif.GPSIFD.GPSLatitudeRef: latitude_ref,
        piexif.GPSIFD.GPSLongitude: longitude,
        piexif.GPSIFD.GPSLongitudeRef: longitude_ref,
        piexif.GPSIFD.GPSTimeStamp: time_stamp,
        piexif.GPSIFD.GPSDateStamp: date_stamp,
    }
    return {tag: value for tag, value in tags.items() if value is not None}


def write_jpeg(path, gps=None):
    """Save a small JPEG carrying the given GPS IFD."""
    exif_dict = {
        "0th": {piexif.ImageIFD.Make: b"TestCam"},
        "Exif": {},
        "GPS": gps or {},
        "1st": {},
        "thumbnail": None,
    }
    img = Image.new("RGB", (16, 16), color="red")
    img.save(path, "JPEG", exif=piexif.dump(exif_dict))
    return path


@pytest.fixture
def complete_photo(tmp_path):
    """A JPEG with all six GPS tags."""
    return write_jpeg(tmp_path / "complete.jpg", gps_ifd())


@pytest.fixture
def make_photo(tmp_path):
    """Factory writing JPEGs with custom GPS tags under tmp_path."""

    def _make(name, **overrides):
        target = tmp_path / name
        target.parent.mkdir(parents=True, exist_ok=True)
        return write_jpeg(target, gps_ifd(**overrides))

    return _make


@pytest.fixture
def make_gps():
    """Factory for piexif GPS IFDs; overrides as in ``gps_ifd``."""
    return gps_ifd


@pytest.fixture
def oversized_bmp():
    """A bare BMP header declaring 30000x30000 pixels, past Pillow's bomb limit."""
    file_header = struct.pack("<2sIHHI", b"BM", 54, 0, 0, 54)
    info_header = struct.pack("<IiiHHIIiiII", 40, 30000, 30000, 1, 24, 0, 0, 0, 0, 0, 0)
    return file_header + info_header
