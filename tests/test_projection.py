"""Tests for normalizing PostgREST result shapes."""
from app.repositories.projection import first_row, project_user_fields


class TestProjectUserFields:

    def test_object_relation(self):
        row = {"user_id": "u1", "users": {"name": "Alice", "phone": "+91980000001"}}

        assert project_user_fields(row) == {
            "user_id": "u1",
            "user_name": "Alice",
            "user_phone": "+91980000001",
        }

    def test_list_of_one_relation(self):
        row = {"user_id": "u1", "users": [{"name": "Alice", "phone": None}]}

        projected = project_user_fields(row)

        assert projected["user_name"] == "Alice"
        assert projected["user_phone"] is None
        assert "users" not in projected

    def test_missing_relation(self):
        for users in (None, [], {}):
            projected = project_user_fields({"user_id": "u1", "users": users})
            assert projected["user_name"] is None
            assert projected["user_phone"] is None

    def test_input_row_is_not_mutated(self):
        row = {"user_id": "u1", "users": {"name": "Alice"}}

        project_user_fields(row)

        assert row == {"user_id": "u1", "users": {"name": "Alice"}}


def test_first_row():
    assert first_row([{"total_stamps": 3}]) == {"total_stamps": 3}
    assert first_row({"total_stamps": 3}) == {"total_stamps": 3}
    assert first_row([]) is None
    assert first_row(None) is None
