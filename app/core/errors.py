"""Loyalty domain errors.

Every error carries a stable ``code`` and a message that can be shown to
cafe staff as-is.

Usage:
    try:
        verifier.verify(cafe_id, code)
    except LoyaltyError as e:
        if e.code == "EXPIRED":
            ...
"""


class LoyaltyError(Exception):
    """Base error for loyalty operations."""

    code = "LOYALTY_ERROR"
    default_message = "Something went wrong."

    def __init__(self, message: str | None = None, details: dict | None = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(f"[{self.code}] {self.message}")


class RedemptionError(LoyaltyError):
    """A redemption code could not be verified."""


class InvalidFormatError(RedemptionError):
    code = "INVALID_FORMAT"
    default_message = "Codes are 6 characters long."


class RedemptionNotFoundError(RedemptionError):
    code = "NOT_FOUND"
    default_message = "Invalid code. Please check and try again."


class AlreadyClaimedError(RedemptionError):
    code = "ALREADY_CLAIMED"
    default_message = "This code has already been used."


class RedemptionExpiredError(RedemptionError):
    code = "EXPIRED"
    default_message = "This code has expired."


class NoCafeConfiguredError(LoyaltyError):
    code = "NO_CAFE_CONFIGURED"
    default_message = "No cafe configured. Complete setup first."
