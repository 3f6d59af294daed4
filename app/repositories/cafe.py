from database.connection import get_db, with_retry
from app.repositories.projection import first_row

EMPTY_STATS = {
    "total_stamps": 0,
    "total_redemptions": 0,
    "active_customers": 0,
    "stamps_today": 0,
    "stamps_this_week": 0,
    "stamps_this_month": 0,
}


class CafeRepository:

    @staticmethod
    @with_retry()
    def create(
        owner_id: str,
        name: str,
        address: str | None = None,
        city: str | None = None,
        stamps_required: int = 10,
        reward_description: str = "Free coffee",
    ) -> dict | None:
        """Create a cafe owned by the given owner."""
        db = get_db()
        result = db.table("cafes").insert({
            "owner_id": owner_id,
            "name": name,
            "address": address,
            "city": city,
            "stamps_required": stamps_required,
            "reward_description": reward_description,
        }).execute()
        return result.data[0] if result and result.data else None

    @staticmethod
    @with_retry()
    def get_by_id(cafe_id: str) -> dict | None:
        """Get a cafe by ID."""
        db = get_db()
        result = db.table("cafes").select("*").eq("id", cafe_id).limit(1).execute()
        return result.data[0] if result and result.data else None

    @staticmethod
    @with_retry()
    def get_by_owner(owner_id: str) -> dict | None:
        """Get the cafe managed by an owner (first match)."""
        db = get_db()
        result = db.table("cafes").select("*").eq("owner_id", owner_id).limit(1).execute()
        return result.data[0] if result and result.data else None

    @staticmethod
    @with_retry()
    def update(cafe_id: str, **kwargs) -> dict | None:
        """Update a cafe."""
        db = get_db()
        result = db.table("cafes").update(kwargs).eq("id", cafe_id).execute()
        return result.data[0] if result and result.data else None

    @staticmethod
    @with_retry()
    def get_stats(cafe_id: str) -> dict:
        """Get aggregate loyalty stats for the cafe dashboard."""
        db = get_db()
        result = db.rpc("get_cafe_stats", {"p_cafe_id": cafe_id}).execute()
        stats = first_row(result.data) if result else None
        return {**EMPTY_STATS, **(stats or {})}
