"""Registration, login and the bearer-token dependencies shared by other routers."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.core.security import TokenService, get_token_service
from app.core.store import JsonRecordStore, get_record_store
from app.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserPublic
from app.services.accounts import AccountService

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_account_service(
    store: Annotated[JsonRecordStore, Depends(get_record_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AccountService:
    return AccountService(store, tokens, table=settings.USERS_TABLE)


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str | None:
    """
    Dependency: raw token from `Authorization: Bearer <token>`, or None.

    Verification is left to the services so a missing token and a malformed
    one fail the same way.
    """
    if credentials is None:
        return None
    return credentials.credentials


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    accounts: Annotated[AccountService, Depends(get_account_service)],
) -> UserPublic:
    """Register a new user. Username and email must be unused."""
    return accounts.register(body.username, body.email, body.password)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    accounts: Annotated[AccountService, Depends(get_account_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a bearer token.
    Include the token in the Authorization header as: Bearer <token>
    """
    return accounts.login(body.email, body.password)
