"""
app/api/routers/users_router.py

User registration and login.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_auth_service
from app.api.errors import http_error_from_repository
from app.schemas.users import UserLoginRequest, UserRegisterRequest, UserResponse
from app.services.auth_service import AuthenticationError, AuthService, InvalidCredentialsInputError
from db.repositories.errors import CatalogRepositoryError

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    body: UserRegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """
    Register a viewer account. Raises HTTP 409 if the username is taken.
    """
    try:
        user = auth_service.register_user(
            username=body.username,
            password=body.password,
            email=body.email,
        )
    except InvalidCredentialsInputError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except CatalogRepositoryError as exc:
        raise http_error_from_repository(exc) from exc
    return UserResponse.model_validate(user)


@router.post("/login", response_model=UserResponse)
def login(
    body: UserLoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    try:
        user = auth_service.login(username=body.username, password=body.password)
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    return UserResponse.model_validate(user)
