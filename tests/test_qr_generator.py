"""Tests for QR code rendering and the stamp/NFC targets."""
import base64
import io

from PIL import Image

from app.core.config import get_nfc_url, get_stamp_url
from app.services.qr_generator import (
    generate_qr_code_base64,
    generate_qr_code_png,
    generate_qr_code_svg,
    qr_download_filename,
)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_stamp_and_nfc_urls():
    assert get_stamp_url("cafe-1") == "https://findmeacoffee.in/stamp/cafe-1"
    assert get_nfc_url("cafe-1") == "findmeacoffee://stamp/cafe-1"


def test_png_download_is_scaled_square():
    png = generate_qr_code_png("https://findmeacoffee.in/stamp/cafe-1", size=400)

    assert png.startswith(PNG_SIGNATURE)
    assert Image.open(io.BytesIO(png)).size == (400, 400)


def test_base64_data_url_decodes_to_png():
    data_url = generate_qr_code_base64("https://findmeacoffee.in/stamp/cafe-1")

    prefix = "data:image/png;base64,"
    assert data_url.startswith(prefix)
    assert base64.b64decode(data_url[len(prefix):]).startswith(PNG_SIGNATURE)


def test_svg():
    svg = generate_qr_code_svg("https://findmeacoffee.in/stamp/cafe-1")

    assert isinstance(svg, str)
    assert "<svg" in svg
    assert "<path" in svg


def test_download_filename():
    assert qr_download_filename("Blue Tokai Coffee") == "Blue Tokai Coffee-qr-code.png"
    assert qr_download_filename('Cafe "42"/Delhi') == "Cafe 42Delhi-qr-code.png"
    assert qr_download_filename(None) == "cafe-qr-code.png"
    assert qr_download_filename("???") == "cafe-qr-code.png"
