"""Signup and login routes. Both return a bearer token."""
import logging

from dependency_injector.wiring import inject
from fastapi import APIRouter, HTTPException, status

from crypto_advisor.container import AuthGateDep, UserStoreDep
from crypto_advisor.schemas import (AuthResponse, LoginRequest, SignupRequest,
                                    UserOut)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@inject
def signup(body: SignupRequest, users: UserStoreDep, auth_gate: AuthGateDep) -> AuthResponse:
    """Create an account. A duplicate email yields 409 (see the app exception handler)."""
    user = users.create_user(body.name, body.email, body.password)
    return AuthResponse(
        message="User created successfully",
        token=auth_gate.issue(user.id, user.email),
        user=UserOut.from_model(user),
    )


@router.post("/login", response_model=AuthResponse)
@inject
def login(body: LoginRequest, users: UserStoreDep, auth_gate: AuthGateDep) -> AuthResponse:
    user = users.verify_credentials(body.email, body.password)
    if user is None:
        logger.info("Failed login attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    return AuthResponse(
        message="Login successful",
        token=auth_gate.issue(user.id, user.email),
        user=UserOut.from_model(user),
    )
