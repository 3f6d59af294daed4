import threading
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_clock
from app.core.clock import FixedClock
from app.core.security import get_current_owner_id
from app.main import app
from app.repositories.cafe import CafeRepository
from app.repositories.redemption import RedemptionRepository
from app.repositories.stamp import StampRepository


OWNER_ID = "owner-1"
OTHER_OWNER_ID = "owner-2"
CAFE_ID = "cafe-1"
NOW = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# In-memory stand-ins for the Supabase tables
# ---------------------------------------------------------------------------

class InMemoryRedemptionStore:
    """Mimics RedemptionRepository, including the conditional claim update."""

    def __init__(self):
        self.rows: dict[str, dict] = {}
        self.users: dict[str, dict] = {}
        self.lookups = 0
        self._lock = threading.Lock()

    def add(self, code: str = "AB12CD", cafe_id: str = CAFE_ID, **fields) -> dict:
        row = {
            "id": f"red-{len(self.rows) + 1}",
            "user_id": "alice",
            "cafe_id": cafe_id,
            "stamps_used": 10,
            "reward_description": "Free coffee",
            "redemption_code": code,
            "is_claimed": False,
            "created_at": (NOW - timedelta(hours=1)).isoformat(),
            "claimed_at": None,
            "expires_at": (NOW + timedelta(days=1)).isoformat(),
        }
        row.update(fields)
        self.rows[row["id"]] = row
        return dict(row)

    def get_by_code(self, cafe_id: str, redemption_code: str) -> dict | None:
        self.lookups += 1
        matches = [
            r for r in self.rows.values()
            if r["cafe_id"] == cafe_id and r["redemption_code"] == redemption_code
        ]
        if not matches:
            return None
        return dict(max(matches, key=lambda r: r["created_at"]))

    def claim(self, redemption_id: str, claimed_at: datetime) -> int:
        with self._lock:
            row = self.rows.get(redemption_id)
            if not row or row["is_claimed"]:
                return 0
            row["is_claimed"] = True
            row["claimed_at"] = claimed_at.isoformat()
            return 1

    def list_for_cafe(self, cafe_id: str, limit: int = 50) -> list[dict]:
        rows = sorted(
            (r for r in self.rows.values() if r["cafe_id"] == cafe_id),
            key=lambda r: r["created_at"],
            reverse=True,
        )[:limit]
        return [
            {
                **r,
                "user_name": self.users.get(r["user_id"], {}).get("name"),
                "user_phone": self.users.get(r["user_id"], {}).get("phone"),
            }
            for r in rows
        ]


def make_cafe(**fields) -> dict:
    cafe = {
        "id": CAFE_ID,
        "owner_id": OWNER_ID,
        "name": "Blue Tokai Coffee",
        "address": "Hauz Khas Village",
        "city": "Delhi",
        "latitude": None,
        "longitude": None,
        "logo_url": None,
        "nfc_tag_id": None,
        "qr_code_url": None,
        "stamps_required": 10,
        "reward_description": "Free Americano",
        "is_active": True,
        "created_at": "2024-01-01T00:00:00+00:00",
    }
    cafe.update(fields)
    return cafe


def stamp_row(user_id: str, stamped_at: str, name: str | None = None, phone: str | None = None) -> dict:
    return {
        "user_id": user_id,
        "cafe_id": CAFE_ID,
        "stamped_at": stamped_at,
        "user_name": name,
        "user_phone": phone,
    }


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def redemption_store(monkeypatch) -> InMemoryRedemptionStore:
    store = InMemoryRedemptionStore()
    monkeypatch.setattr(RedemptionRepository, "get_by_code", store.get_by_code)
    monkeypatch.setattr(RedemptionRepository, "claim", store.claim)
    monkeypatch.setattr(RedemptionRepository, "list_for_cafe", store.list_for_cafe)
    return store


@pytest.fixture
def stamp_rows(monkeypatch) -> list[dict]:
    """Rows returned by StampRepository.list_for_cafe; tests append to it."""
    rows: list[dict] = []
    monkeypatch.setattr(StampRepository, "list_for_cafe", lambda cafe_id: list(rows))
    return rows


@pytest.fixture
def cafes(monkeypatch) -> dict[str, dict]:
    """Cafe table keyed by id, pre-seeded with the test owner's cafe."""
    table = {CAFE_ID: make_cafe()}

    def get_by_owner(owner_id):
        return next((c for c in table.values() if c["owner_id"] == owner_id), None)

    def update(cafe_id, **kwargs):
        if cafe_id not in table:
            return None
        table[cafe_id].update(kwargs)
        return dict(table[cafe_id])

    monkeypatch.setattr(CafeRepository, "get_by_id", lambda cafe_id: table.get(cafe_id))
    monkeypatch.setattr(CafeRepository, "get_by_owner", get_by_owner)
    monkeypatch.setattr(CafeRepository, "update", update)
    return table


@pytest.fixture
def owner_id() -> str:
    return OWNER_ID


@pytest.fixture
def client(clock, owner_id):
    app.dependency_overrides[get_current_owner_id] = lambda: owner_id
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()
