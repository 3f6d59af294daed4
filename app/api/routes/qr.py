from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import Response

from app.core.config import get_nfc_url, get_stamp_url, settings
from app.core.permissions import require_cafe_owner, CafeAccessContext
from app.domain.schemas import NfcTagUpdate, QRSetupResponse
from app.repositories.cafe import CafeRepository
from app.services.qr_generator import (
    generate_qr_code_base64,
    generate_qr_code_png,
    generate_qr_code_svg,
    qr_download_filename,
)

router = APIRouter()


@router.get("/{cafe_id}", response_model=QRSetupResponse)
def get_qr_setup(ctx: CafeAccessContext = Depends(require_cafe_owner)):
    """Get the QR code and NFC link customers use to collect stamps."""
    stamp_url = get_stamp_url(ctx.cafe_id)
    return QRSetupResponse(
        cafe_id=ctx.cafe_id,
        stamp_url=stamp_url,
        nfc_url=get_nfc_url(ctx.cafe_id),
        nfc_tag_id=ctx.cafe.get("nfc_tag_id"),
        qr_code=generate_qr_code_base64(stamp_url),
        qr_code_svg=generate_qr_code_svg(stamp_url),
        stamps_required=ctx.stamps_required,
    )


@router.get("/{cafe_id}/download")
def download_qr_code(ctx: CafeAccessContext = Depends(require_cafe_owner)):
    """Download the printable QR code as a PNG."""
    png = generate_qr_code_png(get_stamp_url(ctx.cafe_id), size=settings.qr_download_size)
    filename = qr_download_filename(ctx.cafe.get("name"))
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.put("/{cafe_id}/nfc")
def save_nfc_tag(
    data: NfcTagUpdate,
    ctx: CafeAccessContext = Depends(require_cafe_owner),
):
    """Save the NFC tag ID used for tracking (blank clears it)."""
    nfc_tag_id = (data.nfc_tag_id or "").strip() or None
    cafe = CafeRepository.update(ctx.cafe_id, nfc_tag_id=nfc_tag_id)
    if not cafe:
        raise HTTPException(status_code=500, detail="Failed to save NFC settings")
    return {"nfc_tag_id": nfc_tag_id, "nfc_url": get_nfc_url(ctx.cafe_id)}
