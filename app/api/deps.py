from functools import lru_cache

from fastapi import Depends

from app.core.clock import Clock, SystemClock
from app.core.config import settings
from app.services.identity import IdentityService
from app.services.redemptions import RedemptionVerifier


@lru_cache
def get_clock() -> Clock:
    return SystemClock()


def get_redemption_verifier(clock: Clock = Depends(get_clock)) -> RedemptionVerifier:
    """Get a RedemptionVerifier bound to the request clock."""
    return RedemptionVerifier(clock=clock, code_length=settings.redemption_code_length)


@lru_cache
def get_identity_service() -> IdentityService:
    return IdentityService()
