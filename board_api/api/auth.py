from fastapi import APIRouter, Depends

from board_api.dependencies import get_auth_service
from board_api.schemas import (
    ApiResponse, LoginRequest, LoginResponse, RegisterRequest, ResetPasswordRequest,
)
from board_api.services import AuthService

router = APIRouter()


@router.post("/login", response_model=ApiResponse[LoginResponse])
def login(body: LoginRequest, service: AuthService = Depends(get_auth_service)):
    return service.login(body.email, body.password).to_response()


@router.post("/register", response_model=ApiResponse[None])
def register(body: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    return service.register(body.name, body.email, body.password).to_response()


@router.post("/reset-password", response_model=ApiResponse[None])
def reset_password(body: ResetPasswordRequest, service: AuthService = Depends(get_auth_service)):
    return service.reset_password(body.name, body.email, body.new_password).to_response()
