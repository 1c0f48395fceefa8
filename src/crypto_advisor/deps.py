"""FastAPI dependencies shared by protected routes."""
import logging
from typing import Annotated

from dependency_injector.wiring import inject
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from crypto_advisor.container import AuthGateDep
from crypto_advisor.security import Identity, UnauthorizedError

logger = logging.getLogger(__name__)

# auto_error=False so a missing header gets the same 401 as a bad token.
_bearer = HTTPBearer(auto_error=False)


def unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


@inject
def get_current_identity(
    auth_gate: AuthGateDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> Identity:
    """Resolve the bearer token to an Identity or fail with 401."""
    token = credentials.credentials if credentials else None
    try:
        return auth_gate.authenticate(token)
    except UnauthorizedError as exc:
        logger.debug("Rejected request: %s", exc.reason)
        raise unauthorized() from exc


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
