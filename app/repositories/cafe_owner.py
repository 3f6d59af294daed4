from database.connection import get_db, with_retry


class CafeOwnerRepository:

    @staticmethod
    @with_retry()
    def create(owner_id: str, email: str, name: str | None = None, phone: str | None = None) -> dict | None:
        """Create the profile row for a newly signed-up cafe owner."""
        db = get_db()
        data = {
            "id": owner_id,
            "email": email,
        }
        if name:
            data["name"] = name
        if phone:
            data["phone"] = phone
        result = db.table("cafe_owners").insert(data).execute()
        return result.data[0] if result and result.data else None

    @staticmethod
    @with_retry()
    def get_by_id(owner_id: str) -> dict | None:
        """Get a cafe owner profile by auth user ID."""
        db = get_db()
        result = db.table("cafe_owners").select("*").eq("id", owner_id).limit(1).execute()
        return result.data[0] if result and result.data else None


    @staticmethod
    @with_retry()
    def update(owner_id: str, **kwargs) -> dict | None:
        """Update a cafe owner profile."""
        db = get_db()
        result = db.table("cafe_owners").update(kwargs).eq("id", owner_id).execute()
        return result.data[0] if result and result.data else None
