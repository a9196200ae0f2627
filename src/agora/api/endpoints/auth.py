# src/agora/api/endpoints/auth.py
"""Authentication endpoints for the Agora API."""

from __future__ import annotations

from fastapi import APIRouter, status

from agora.api.dependencies import AuthServiceDep
from agora.schemas import ErrorResponse, LoginRequest, LoginResponse, MessageResponse, RegisterRequest

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}},
)
def register(payload: RegisterRequest, auth: AuthServiceDep) -> MessageResponse:
    """Register a new username/password identity."""
    auth.register(payload.username, payload.password)
    return MessageResponse(message="User created")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}},
)
def login(payload: LoginRequest, auth: AuthServiceDep) -> LoginResponse:
    """Exchange valid credentials for a bearer token."""
    result = auth.login(payload.username, payload.password)
    return LoginResponse(token=result.token, username=result.username, user_id=result.user_id)
