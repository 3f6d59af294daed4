from fastapi import APIRouter, Depends

from app.api.deps import get_clock
from app.core.clock import Clock
from app.core.config import settings
from app.core.permissions import require_cafe_owner, CafeAccessContext
from app.domain.schemas import CustomerListResponse
from app.services.customers import load_customers

router = APIRouter()


@router.get("/{cafe_id}", response_model=CustomerListResponse)
def list_customers(
    ctx: CafeAccessContext = Depends(require_cafe_owner),
    clock: Clock = Depends(get_clock),
):
    """Get everyone who collected stamps at the cafe, most recent visit first."""
    customers, stats = load_customers(
        ctx.cafe_id,
        clock,
        window_days=settings.active_customer_window_days,
    )
    return CustomerListResponse(
        stamps_required=ctx.stamps_required,
        customers=customers,
        stats=stats,
    )
