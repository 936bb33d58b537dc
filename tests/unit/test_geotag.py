"""
Test photo coordinates from form fields and EXIF GPS tags.
"""
import io
from fractions import Fraction

import pytest
from PIL import Image
from PIL.ExifTags import GPS, IFD

from herbal_garden.services.geotag import (
    Coordinates,
    _dms_to_degrees,
    extract_exif_coordinates,
    parse_form_coordinates,
    resolve_coordinates,
)


def jpeg_bytes(gps: dict | None = None) -> bytes:
    img = Image.new("RGB", (4, 4), "green")
    exif = img.getexif()
    if gps:
        exif[IFD.GPSInfo] = gps
    buf = io.BytesIO()
    img.save(buf, format="JPEG", exif=exif)
    return buf.getvalue()


BENGALURU_GPS = {
    GPS.GPSLatitudeRef: "N",
    GPS.GPSLatitude: (12.0, 58.0, 12.0),
    GPS.GPSLongitudeRef: "E",
    GPS.GPSLongitude: (77.0, 35.0, 24.0),
}


@pytest.mark.unit
class TestFormCoordinates:
    def test_valid(self):
        assert parse_form_coordinates("12.97", "77.59") == Coordinates(12.97, 77.59)

    @pytest.mark.parametrize(
        "lat,lon",
        [(None, "77"), ("12", None), ("abc", "77"), ("91", "0"), ("0", "-181"), ("nan", "0")],
    )
    def test_rejected(self, lat, lon):
        assert parse_form_coordinates(lat, lon) is None


@pytest.mark.unit
class TestExif:
    def test_dms_conversion(self):
        assert _dms_to_degrees((12, 30, 0), "N") == pytest.approx(12.5)
        assert _dms_to_degrees((Fraction(33), Fraction(52), Fraction(0)), b"S") == pytest.approx(-33.8666667)
        assert _dms_to_degrees((151, 12, 36), "W") == pytest.approx(-151.21)

    def test_not_an_image(self):
        assert extract_exif_coordinates(b"plain text, not a photo") is None

    def test_image_without_gps(self):
        assert extract_exif_coordinates(jpeg_bytes()) is None

    def test_reads_gps_block(self):
        coords = extract_exif_coordinates(jpeg_bytes(BENGALURU_GPS))
        assert coords.latitude == pytest.approx(12.97)
        assert coords.longitude == pytest.approx(77.59)


@pytest.mark.unit
class TestResolve:
    def test_form_wins_over_exif(self):
        assert resolve_coordinates(jpeg_bytes(BENGALURU_GPS), "1.5", "2.5") == Coordinates(1.5, 2.5)

    def test_falls_back_to_exif(self):
        coords = resolve_coordinates(jpeg_bytes(BENGALURU_GPS), "bad", "input")
        assert coords.latitude == pytest.approx(12.97)

    def test_nothing_available(self):
        assert resolve_coordinates(b"\x00\x01") is None
