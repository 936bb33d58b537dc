"""
Coordinates for uploaded plant photos.

Form fields sent by the browser win; otherwise GPS tags are read from the
image's EXIF block with Pillow.
"""

import io
import logging
from dataclasses import dataclass
from typing import Any, Optional

from PIL import Image, UnidentifiedImageError
from PIL.ExifTags import GPS, IFD

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    @classmethod
    def checked(cls, latitude: float, longitude: float) -> Optional["Coordinates"]:
        """Coordinates when both values are in range, else None."""
        if -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0:
            return cls(latitude, longitude)
        return None


def parse_form_coordinates(latitude: str | None, longitude: str | None) -> Coordinates | None:
    """Parse the optional latitude/longitude form strings."""
    if latitude is None or longitude is None:
        return None
    try:
        lat = float(latitude)
        lon = float(longitude)
    except ValueError:
        logger.warning("Ignoring unparseable coordinates %r, %r", latitude, longitude)
        return None
    if lat != lat or lon != lon:  # NaN
        return None
    return Coordinates.checked(lat, lon)


def _dms_to_degrees(value: Any, ref: Any) -> float:
    degrees, minutes, seconds = (float(v) for v in value)
    result = degrees + minutes / 60.0 + seconds / 3600.0
    if isinstance(ref, bytes):
        ref = ref.decode("ascii", errors="ignore")
    if str(ref).strip().upper() in ("S", "W"):
        result = -result
    return result


def extract_exif_coordinates(image_bytes: bytes) -> Coordinates | None:
    """
    Read GPS coordinates from an image's EXIF block.

    Returns:
        Coordinates, or None when the image has no usable GPS tags
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            gps_ifd = img.getexif().get_ifd(IFD.GPSInfo)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.debug("No EXIF data readable: %s", e)
        return None

    if not gps_ifd:
        return None

    try:
        lat = _dms_to_degrees(gps_ifd[GPS.GPSLatitude], gps_ifd.get(GPS.GPSLatitudeRef, "N"))
        lon = _dms_to_degrees(gps_ifd[GPS.GPSLongitude], gps_ifd.get(GPS.GPSLongitudeRef, "E"))
    except (KeyError, TypeError, ValueError, ZeroDivisionError) as e:
        logger.debug("Incomplete EXIF GPS block: %s", e)
        return None

    return Coordinates.checked(lat, lon)


def resolve_coordinates(
    image_bytes: bytes,
    latitude: str | None = None,
    longitude: str | None = None,
) -> Coordinates | None:
    """Form coordinates when valid, otherwise EXIF GPS, otherwise None."""
    return parse_form_coordinates(latitude, longitude) or extract_exif_coordinates(image_bytes)
