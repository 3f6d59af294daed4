"""
Owner identity via Supabase Auth.

Sign-in and sign-up run on a short-lived client built from the publishable
key; sign-out revokes the session with the service-role admin API.
"""
import logging

from supabase import AuthError

from app.repositories.cafe_owner import CafeOwnerRepository
from database.connection import get_db
from database.supabase_client import create_auth_client

logger = logging.getLogger(__name__)


class IdentityError(Exception):
    """Supabase rejected an auth request."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _session_payload(response) -> dict:
    user = response.user
    session = response.session
    return {
        "user_id": user.id,
        "email": user.email,
        "access_token": session.access_token if session else None,
        "refresh_token": session.refresh_token if session else None,
        "expires_at": session.expires_at if session else None,
    }


class IdentityService:

    def __init__(self, client_factory=create_auth_client, owners=CafeOwnerRepository):
        self.client_factory = client_factory
        self.owners = owners

    def sign_in(self, email: str, password: str) -> dict:
        """Sign an owner in with email and password."""
        client = self.client_factory()
        try:
            response = client.auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as e:
            logger.warning(f"Sign-in failed for {email}: {e.message}")
            raise IdentityError(e.message, status_code=401)
        return _session_payload(response)

    def sign_up(self, email: str, password: str) -> dict:
        """Create an owner account and its cafe_owners profile row."""
        client = self.client_factory()
        try:
            response = client.auth.sign_up({"email": email, "password": password})
        except AuthError as e:
            logger.warning(f"Sign-up failed for {email}: {e.message}")
            raise IdentityError(e.message, status_code=400)

        if not response.user:
            raise IdentityError("Sign-up did not return a user", status_code=400)

        if not self.owners.get_by_id(response.user.id):
            self.owners.create(response.user.id, response.user.email or email)
            logger.info(f"Created cafe owner {response.user.id}")
        return _session_payload(response)

    def sign_out(self, access_token: str) -> None:
        """Revoke the owner's session."""
        try:
            get_db().auth.admin.sign_out(access_token)
        except AuthError as e:
            logger.warning(f"Sign-out failed: {e.message}")
            raise IdentityError(e.message, status_code=400)
