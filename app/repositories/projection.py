"""
Normalizes the shape of PostgREST results before they reach services.

A joined relation such as ``users(name, phone)`` comes back as an object for
a many-to-one foreign key but as a list (usually of one) when PostgREST
cannot infer cardinality. RPC calls likewise return either a record or a
list of records depending on the function signature.
"""


def _single(value) -> dict | None:
    if isinstance(value, list):
        return value[0] if value else None
    return value or None


def project_user_fields(row: dict, relation: str = "users") -> dict:
    """Flatten a joined user relation into ``user_name`` / ``user_phone``.

    The nested relation is removed from the returned row; the input row is
    left untouched.
    """
    projected = {k: v for k, v in row.items() if k != relation}
    user = _single(row.get(relation))
    projected["user_name"] = user.get("name") if user else None
    projected["user_phone"] = user.get("phone") if user else None
    return projected


def first_row(data) -> dict | None:
    """Return the single record of an RPC result (record or list of records)."""
    return _single(data)
