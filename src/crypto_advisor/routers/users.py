"""Current-user route."""
from fastapi import APIRouter

from crypto_advisor.deps import CurrentIdentity
from crypto_advisor.schemas import IdentityOut, MeResponse

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/me", response_model=MeResponse)
def me(identity: CurrentIdentity) -> MeResponse:
    """Echo the identity carried by the caller's token."""
    return MeResponse(user=IdentityOut(user_id=identity.user_id, email=identity.email))
