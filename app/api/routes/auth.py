from fastapi import APIRouter, HTTPException, Depends

from app.api.deps import get_identity_service
from app.domain.schemas import (
    AuthSessionResponse,
    CafeOwnerResponse,
    CafeOwnerUpdate,
    SignInRequest,
    SignUpRequest,
)
from app.repositories.cafe_owner import CafeOwnerRepository
from app.core.security import get_current_owner_id, require_bearer_token
from app.services.identity import IdentityError, IdentityService

router = APIRouter()


@router.post("/sign-in", response_model=AuthSessionResponse)
def sign_in(
    data: SignInRequest,
    identity: IdentityService = Depends(get_identity_service),
):
    """Sign a cafe owner in with email and password."""
    try:
        session = identity.sign_in(data.email, data.password)
    except IdentityError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return AuthSessionResponse(**session)


@router.post("/sign-up", response_model=AuthSessionResponse)
def sign_up(
    data: SignUpRequest,
    identity: IdentityService = Depends(get_identity_service),
):
    """Create a cafe owner account.

    The next step for a new owner is cafe setup (POST /cafes).
    """
    try:
        session = identity.sign_up(data.email, data.password)
    except IdentityError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return AuthSessionResponse(**session)


@router.post("/sign-out")
def sign_out(
    token: str = Depends(require_bearer_token),
    identity: IdentityService = Depends(get_identity_service),
):
    """Revoke the current owner session."""
    try:
        identity.sign_out(token)
    except IdentityError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return {"message": "Signed out"}


@router.get("/me", response_model=CafeOwnerResponse)
def get_me(owner_id: str = Depends(get_current_owner_id)):
    """Get the current owner's profile."""
    owner = CafeOwnerRepository.get_by_id(owner_id)
    if not owner:
        raise HTTPException(
            status_code=404,
            detail="Owner profile not found. Please complete registration."
        )
    return CafeOwnerResponse(**owner)


@router.put("/me", response_model=CafeOwnerResponse)
def update_me(
    data: CafeOwnerUpdate,
    owner_id: str = Depends(get_current_owner_id),
):
    """Update the current owner's name and phone."""
    update_data = data.model_dump(exclude_unset=True)
    if not update_data:
        return get_me(owner_id)

    owner = CafeOwnerRepository.update(owner_id, **update_data)
    if not owner:
        raise HTTPException(
            status_code=404,
            detail="Owner profile not found. Please complete registration."
        )
    return CafeOwnerResponse(**owner)
