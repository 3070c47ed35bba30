"""
Core dependencies for resolving who is calling: a signed-in user or an anonymous session
"""

from dataclasses import dataclass, field
from fastapi import Depends, Header, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from app.core.errors import authentication_error
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)

PLANS = ("free", "standard", "plus", "premium")


@dataclass
class RequestContext:
    """Caller identity shared by the study guide, rate limit and token routes."""
    user_type: str  # anonymous | authenticated
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    user: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return self.user_type == "authenticated"

    @property
    def identifier(self) -> str:
        return self.user_id if self.is_authenticated else self.session_id

    @property
    def plan(self) -> str:
        # Signed-in users without a subscription are on the standard plan
        default = "standard" if self.is_authenticated else "free"
        plan = (self.user.get("app_metadata") or {}).get("plan", default)
        return plan if plan in PLANS else default


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def get_request_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    x_session_id: Optional[str] = Header(default=None, alias="X-Session-Id"),
    auth_service: AuthService = Depends(get_auth_service)
) -> RequestContext:
    """Bearer token wins; otherwise fall back to the anonymous session header."""
    if credentials and credentials.credentials:
        user_data = auth_service.get_current_user(credentials.credentials)
        return RequestContext(user_type="authenticated", user_id=user_data["id"], user=user_data)
    if x_session_id:
        auth_service.ensure_anonymous_session(x_session_id)
        return RequestContext(user_type="anonymous", session_id=x_session_id)
    raise authentication_error("Sign in or provide an X-Session-Id header")


def get_authenticated_context(context: RequestContext = Depends(get_request_context)) -> RequestContext:
    if not context.is_authenticated:
        raise authentication_error("This action requires a signed-in user")
    return context


def get_client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None
