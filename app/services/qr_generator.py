import io
import base64

import qrcode
import qrcode.image.svg
from PIL import Image


def _build_qr(data: str) -> qrcode.QRCode:
    # High error correction so printed codes survive coffee stains
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)
    return qr


def generate_qr_code_png(data: str, size: int | None = None) -> bytes:
    """Generate a QR code PNG, optionally scaled to a square of ``size`` pixels."""
    img = _build_qr(data).make_image(fill_color="black", back_color="white").get_image()
    if size:
        img = img.convert("RGB").resize((size, size), Image.Resampling.NEAREST)

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def generate_qr_code_base64(data: str) -> str:
    """Generate QR code as base64 data URL."""
    png = generate_qr_code_png(data)
    return f"data:image/png;base64,{base64.b64encode(png).decode()}"


def generate_qr_code_svg(data: str) -> str:
    """Generate QR code as an SVG document."""
    img = _build_qr(data).make_image(image_factory=qrcode.image.svg.SvgPathImage)
    return img.to_string(encoding="unicode")


def qr_download_filename(cafe_name: str | None) -> str:
    name = (cafe_name or "").strip() or "cafe"
    safe = "".join(c if c.isalnum() or c in "-_ " else "" for c in name).strip() or "cafe"
    return f"{safe}-qr-code.png"
