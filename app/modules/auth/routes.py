from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, AnonymousSessionResponse
)
from app.modules.auth.service import AuthService
from app.core.dependencies import get_auth_service, get_current_user_id, RequestContext, PLANS
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.post("/anonymous-session", response_model=AnonymousSessionResponse, status_code=201)
async def create_anonymous_session(
    service: AuthService = Depends(get_auth_service)
):
    """Start an anonymous session; send the id back as X-Session-Id"""
    return service.create_anonymous_session()


@router.get("/me")
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
):
    """Get current authenticated user and their subscription plan."""
    plan = RequestContext(user_type="authenticated", user_id=current_user["id"], user=current_user).plan
    return {**current_user, "plan": plan, "available_plans": list(PLANS)}
