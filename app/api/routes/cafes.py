import logging

from fastapi import APIRouter, HTTPException, Depends

from app.domain.schemas import CafeCreate, CafeUpdate, CafeResponse, CafeStats
from app.repositories.cafe import CafeRepository
from app.core.permissions import (
    get_owner_cafe,
    require_cafe_owner,
    CafeAccessContext,
)
from app.core.security import get_current_owner_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=CafeResponse)
def create_cafe(
    data: CafeCreate,
    owner_id: str = Depends(get_current_owner_id),
):
    """Set up the current owner's cafe and loyalty program."""
    if CafeRepository.get_by_owner(owner_id):
        raise HTTPException(status_code=400, detail="You already have a cafe set up")

    cafe = CafeRepository.create(
        owner_id=owner_id,
        name=data.name,
        address=data.address,
        city=data.city,
        stamps_required=data.stamps_required,
        reward_description=data.reward_description,
    )
    if not cafe:
        raise HTTPException(status_code=500, detail="Failed to create cafe")

    logger.info(f"Created cafe {cafe['id']} for owner {owner_id}")
    return CafeResponse(**cafe)


# Static routes MUST come before /{cafe_id} to avoid path conflicts
@router.get("/me", response_model=CafeResponse)
def get_my_cafe(ctx: CafeAccessContext = Depends(get_owner_cafe)):
    """Get the cafe managed by the current owner."""
    return CafeResponse(**ctx.cafe)


@router.get("/{cafe_id}", response_model=CafeResponse)
def get_cafe(ctx: CafeAccessContext = Depends(require_cafe_owner)):
    """Get a cafe by ID (owner only)."""
    return CafeResponse(**ctx.cafe)


@router.put("/{cafe_id}", response_model=CafeResponse)
def update_cafe(
    data: CafeUpdate,
    ctx: CafeAccessContext = Depends(require_cafe_owner),
):
    """Update cafe details and loyalty settings.

    Customers keep their current progress; a new stamps_required applies to
    rewards earned from now on.
    """
    update_data = data.model_dump(exclude_unset=True)
    if not update_data:
        return CafeResponse(**ctx.cafe)

    cafe = CafeRepository.update(ctx.cafe_id, **update_data)
    if not cafe:
        raise HTTPException(status_code=500, detail="Failed to update cafe")
    return CafeResponse(**cafe)


@router.get("/{cafe_id}/stats", response_model=CafeStats)
def get_cafe_stats(ctx: CafeAccessContext = Depends(require_cafe_owner)):
    """Get aggregate loyalty stats for the dashboard."""
    return CafeStats(**CafeRepository.get_stats(ctx.cafe_id))
