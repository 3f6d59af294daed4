"""
Redemption code verification.

A redemption is created by the customer app once enough stamps are collected
and is shown to staff as a short code. Its lifecycle:

    pending --verify--> claimed
    pending --time passes expires_at--> expired

``claimed`` is stored (is_claimed / claimed_at); ``expired`` is derived from
the clock on every read and is never written back.
"""
import logging
from dataclasses import dataclass
from datetime import datetime

from app.core.clock import Clock, SystemClock, parse_timestamp
from app.core.errors import (
    AlreadyClaimedError,
    InvalidFormatError,
    RedemptionExpiredError,
    RedemptionNotFoundError,
)
from app.domain.schemas import RedemptionResponse, RedemptionStatus
from app.repositories.redemption import RedemptionRepository

logger = logging.getLogger(__name__)

CODE_LENGTH = 6


def normalize_code(code: str | None) -> str:
    """Codes are case-insensitive and stored uppercase."""
    return (code or "").strip().upper()


def redemption_status(redemption: dict, now: datetime) -> RedemptionStatus:
    """Derive the status of a redemption row at ``now``."""
    if redemption.get("is_claimed"):
        return RedemptionStatus.CLAIMED
    if parse_timestamp(redemption["expires_at"]) < now:
        return RedemptionStatus.EXPIRED
    return RedemptionStatus.PENDING


@dataclass
class VerificationResult:
    redemption_id: str
    redemption_code: str
    reward_description: str
    claimed_at: datetime

    @property
    def message(self) -> str:
        return f"Verified! Give the customer: {self.reward_description}"


class RedemptionVerifier:
    """Verifies and claims redemption codes presented at the counter.

    Several staff devices may verify against the same store at once, so the
    claim is a conditional update: only the caller whose update flips
    is_claimed from false wins; everyone else gets AlreadyClaimedError.
    """

    def __init__(self, repository=RedemptionRepository, clock: Clock | None = None, code_length: int = CODE_LENGTH):
        self.repository = repository
        self.clock = clock or SystemClock()
        self.code_length = code_length

    def verify(self, cafe_id: str, code: str) -> VerificationResult:
        code = normalize_code(code)
        if len(code) != self.code_length:
            raise InvalidFormatError(f"Codes are {self.code_length} characters long.")

        redemption = self.repository.get_by_code(cafe_id, code)
        if not redemption:
            raise RedemptionNotFoundError(details={"code": code})

        # Claimed wins over expired: the claim happened before expiry
        if redemption.get("is_claimed"):
            raise AlreadyClaimedError(details={"redemption_id": redemption["id"]})

        now = self.clock.now()
        if parse_timestamp(redemption["expires_at"]) < now:
            raise RedemptionExpiredError(details={"redemption_id": redemption["id"]})

        updated = self.repository.claim(redemption["id"], now)
        if updated == 0:
            # Another device claimed it between our read and our update
            logger.warning(f"Redemption {redemption['id']} claimed concurrently at cafe {cafe_id}")
            raise AlreadyClaimedError(details={"redemption_id": redemption["id"]})

        logger.info(f"Redemption {redemption['id']} claimed at cafe {cafe_id}")
        return VerificationResult(
            redemption_id=redemption["id"],
            redemption_code=code,
            reward_description=redemption["reward_description"],
            claimed_at=now,
        )


def list_redemptions(
    cafe_id: str,
    clock: Clock,
    limit: int = 50,
    repository=RedemptionRepository,
) -> list[RedemptionResponse]:
    """Latest redemptions for a cafe, read fresh from the store, with derived status."""
    now = clock.now()
    return [
        RedemptionResponse(**row, status=redemption_status(row, now))
        for row in repository.list_for_cafe(cafe_id, limit=limit)
    ]
