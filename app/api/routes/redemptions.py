from fastapi import APIRouter, Depends

from app.api.deps import get_clock, get_redemption_verifier
from app.core.clock import Clock
from app.core.config import settings
from app.core.errors import RedemptionError
from app.core.permissions import require_cafe_owner, CafeAccessContext
from app.domain.schemas import (
    RedemptionResponse,
    VerifyRedemptionRequest,
    VerifyRedemptionResponse,
)
from app.services.redemptions import RedemptionVerifier, list_redemptions

router = APIRouter()


@router.get("/{cafe_id}", response_model=list[RedemptionResponse])
def list_cafe_redemptions(
    ctx: CafeAccessContext = Depends(require_cafe_owner),
    clock: Clock = Depends(get_clock),
):
    """Get the latest redemptions at the cafe with their current status."""
    return list_redemptions(ctx.cafe_id, clock, limit=settings.redemption_list_limit)


@router.post("/{cafe_id}/verify", response_model=VerifyRedemptionResponse)
def verify_redemption(
    data: VerifyRedemptionRequest,
    ctx: CafeAccessContext = Depends(require_cafe_owner),
    verifier: RedemptionVerifier = Depends(get_redemption_verifier),
):
    """Verify a customer's redemption code and mark it as claimed.

    Rejections (bad format, unknown, already used, expired) are returned with
    success=False and a message for staff rather than as HTTP errors. On
    success the refreshed redemption list is included.
    """
    try:
        result = verifier.verify(ctx.cafe_id, data.code)
    except RedemptionError as e:
        return VerifyRedemptionResponse(success=False, error=e.code, message=e.message)

    return VerifyRedemptionResponse(
        success=True,
        message=result.message,
        reward_description=result.reward_description,
        redemptions=list_redemptions(
            ctx.cafe_id, verifier.clock, limit=settings.redemption_list_limit
        ),
    )
