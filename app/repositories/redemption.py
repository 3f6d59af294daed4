from datetime import datetime

from database.connection import get_db, with_retry
from app.repositories.projection import project_user_fields


class RedemptionRepository:

    @staticmethod
    @with_retry()
    def list_for_cafe(cafe_id: str, limit: int = 50) -> list[dict]:
        """Get the most recent redemptions for a cafe with the customer's name and phone."""
        db = get_db()
        result = db.table("redemptions").select(
            "*, users(name, phone)"
        ).eq("cafe_id", cafe_id).order("created_at", desc=True).limit(limit).execute()
        rows = result.data if result and result.data else []
        return [project_user_fields(row) for row in rows]

    @staticmethod
    @with_retry()
    def get_by_code(cafe_id: str, redemption_code: str) -> dict | None:
        """Get the latest redemption issued at a cafe with this code."""
        db = get_db()
        result = db.table("redemptions").select("*").eq(
            "cafe_id", cafe_id
        ).eq("redemption_code", redemption_code).order(
            "created_at", desc=True
        ).limit(1).execute()
        return result.data[0] if result and result.data else None

    @staticmethod
    @with_retry()
    def claim(redemption_id: str, claimed_at: datetime) -> int:
        """Mark a redemption as claimed if nobody claimed it yet.

        The update is filtered on is_claimed = false so that two concurrent
        claims cannot both succeed. Returns the number of rows updated (0 or 1).
        """
        db = get_db()
        result = db.table("redemptions").update({
            "is_claimed": True,
            "claimed_at": claimed_at.isoformat(),
        }).eq("id", redemption_id).eq("is_claimed", False).execute()
        return len(result.data) if result and result.data else 0
