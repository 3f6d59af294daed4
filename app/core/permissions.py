from fastapi import Depends, HTTPException, status

from app.core.errors import NoCafeConfiguredError
from app.core.security import get_current_owner_id
from app.repositories.cafe import CafeRepository


class CafeAccessContext:
    """Context object containing the owner id and their cafe."""

    def __init__(self, owner_id: str, cafe: dict):
        self.owner_id = owner_id
        self.cafe = cafe
        self.cafe_id = cafe["id"]
        self.stamps_required = cafe.get("stamps_required", 10)


def get_owner_cafe(owner_id: str = Depends(get_current_owner_id)) -> CafeAccessContext:
    """Resolve the cafe managed by the current owner.

    Raises:
        HTTPException 404 with the NO_CAFE_CONFIGURED message when the owner
        has not completed setup yet.
    """
    cafe = CafeRepository.get_by_owner(owner_id)
    if not cafe:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=NoCafeConfiguredError().message,
        )
    return CafeAccessContext(owner_id=owner_id, cafe=cafe)


def require_cafe_owner(
    cafe_id: str,
    owner_id: str = Depends(get_current_owner_id),
) -> CafeAccessContext:
    """Verify the cafe in the path belongs to the current owner.

    Example:
        @router.get("/{cafe_id}/stats")
        def get_stats(ctx: CafeAccessContext = Depends(require_cafe_owner)):
            # ctx.owner_id, ctx.cafe, ctx.cafe_id available
            pass
    """
    cafe = CafeRepository.get_by_id(cafe_id)
    if not cafe:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Cafe not found"
        )

    if cafe.get("owner_id") != owner_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have access to this cafe"
        )

    return CafeAccessContext(owner_id=owner_id, cafe=cafe)
