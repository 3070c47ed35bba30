import hashlib
import time
import uuid
import logging
from datetime import datetime, timedelta, timezone
from supabase import Client
from app.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, AnonymousSessionResponse
)
from app.config.settings import settings
from app.core.errors import AppError, authentication_error
from fastapi import HTTPException
from typing import Dict, Any

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new user using Supabase Auth"""
        try:
            user_metadata = {"language_preference": register_data.language_preference or "en"}
            if register_data.full_name:
                user_metadata["full_name"] = register_data.full_name

            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": user_metadata
                }
            })

            if not auth_response.user:
                raise HTTPException(status_code=400, detail="Failed to register user")

            return RegisterResponse(
                user_id=auth_response.user.id,
                email=auth_response.user.email or register_data.email,
                message="User registered successfully"
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="User already exists")
            raise HTTPException(status_code=500, detail=f"Registration failed: {error_message}")

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
                "created_at": user.created_at,
                "updated_at": user.updated_at
            }
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Logout user using Supabase Auth"""
        try:
            # Supabase tokens are stateless JWTs; drop our cached lookup so the next call re-verifies
            _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False

    def create_anonymous_session(self) -> AnonymousSessionResponse:
        """Start a new anonymous session that expires after the configured TTL."""
        try:
            now = datetime.now(timezone.utc)
            expires_at = now + timedelta(hours=settings.anonymous_session_ttl_hours)
            session_id = str(uuid.uuid4())
            self.supabase.table("anonymous_sessions").insert({
                "session_id": session_id,
                "created_at": now.isoformat(),
                "last_activity": now.isoformat(),
                "expires_at": expires_at.isoformat(),
                "study_guides_count": 0,
                "is_migrated": False,
            }).execute()
            return AnonymousSessionResponse(session_id=session_id, expires_at=expires_at, is_new=True)
        except Exception as e:
            raise AppError("DATABASE_ERROR", f"Failed to create anonymous session: {e}", 500)

    def ensure_anonymous_session(self, session_id: str) -> Dict[str, Any]:
        """Validate an anonymous session id, creating the row on first use.

        Raises AUTHENTICATION_ERROR for malformed or expired sessions.
        """
        try:
            uuid.UUID(session_id)
        except (ValueError, TypeError):
            raise authentication_error("Invalid anonymous session id")

        try:
            now = datetime.now(timezone.utc)
            result = self.supabase.table("anonymous_sessions")\
                .select("session_id, expires_at")\
                .eq("session_id", session_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                expires_at = now + timedelta(hours=settings.anonymous_session_ttl_hours)
                self.supabase.table("anonymous_sessions").insert({
                    "session_id": session_id,
                    "created_at": now.isoformat(),
                    "last_activity": now.isoformat(),
                    "expires_at": expires_at.isoformat(),
                    "study_guides_count": 0,
                    "is_migrated": False,
                }).execute()
                return {"session_id": session_id, "expires_at": expires_at.isoformat()}

            session = result.data
            if session.get("expires_at") and _parse_timestamp(session["expires_at"]) <= now:
                raise authentication_error("Anonymous session expired")

            try:
                self.supabase.table("anonymous_sessions")\
                    .update({"last_activity": now.isoformat()})\
                    .eq("session_id", session_id)\
                    .execute()
            except Exception as e:
                logger.warning(f"Failed to update session activity: {e}")
            return session
        except AppError:
            raise
        except Exception as e:
            raise AppError("DATABASE_ERROR", f"Failed to ensure anonymous session: {e}", 500)
