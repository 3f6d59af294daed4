from database.connection import get_db, with_retry
from app.repositories.projection import project_user_fields


class StampRepository:

    @staticmethod
    @with_retry()
    def list_for_cafe(cafe_id: str) -> list[dict]:
        """Get every stamp collected at a cafe, newest first, with the customer's name and phone."""
        db = get_db()
        result = db.table("stamps").select(
            "user_id, cafe_id, stamped_at, users(name, phone)"
        ).eq("cafe_id", cafe_id).order("stamped_at", desc=True).execute()
        rows = result.data if result and result.data else []
        return [project_user_fields(row) for row in rows]
