import hashlib
import threading
import time
from supabase import Client
from fastapi import HTTPException
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

# Identity only, keyed by token hash. Project permissions are never cached;
# the gate re-reads them on every request.
_AUTH_USER_CACHE: Dict[str, tuple] = {}
# get_current_user runs on threadpool workers; every cache access holds this lock
_AUTH_CACHE_LOCK = threading.Lock()
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500

INVALID_TOKEN_DETAIL = "Invalid or expired token"


def _token_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _cached_identity(key: str, now: float) -> Optional[Dict[str, Any]]:
    with _AUTH_CACHE_LOCK:
        entry = _AUTH_USER_CACHE.get(key)
        if entry is None:
            return None
        user_data, expiry = entry
        if now >= expiry:
            _AUTH_USER_CACHE.pop(key, None)
            return None
        return user_data


def _remember_identity(key: str, user_data: Dict[str, Any], now: float) -> None:
    with _AUTH_CACHE_LOCK:
        if len(_AUTH_USER_CACHE) >= _AUTH_CACHE_MAX_SIZE:
            for stale in [k for k, (_, expiry) in _AUTH_USER_CACHE.items() if expiry <= now]:
                _AUTH_USER_CACHE.pop(stale, None)
        if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
            _AUTH_USER_CACHE[key] = (user_data, now + _AUTH_CACHE_TTL_SEC)


def clear_auth_cache() -> None:
    with _AUTH_CACHE_LOCK:
        _AUTH_USER_CACHE.clear()


class AuthService:
    """Resolves bearer tokens to identities via Supabase Auth. Tokens are issued elsewhere."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_current_user(self, token: str) -> Dict[str, Any]:
        key = _token_key(token)
        now = time.monotonic()
        cached = _cached_identity(key, now)
        if cached is not None:
            return cached

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            message = str(e)
            logger.info("Token rejected by Supabase Auth: %s", message)
            if "JWT" in message or "expired" in message.lower() or "invalid" in message.lower():
                raise HTTPException(status_code=401, detail=INVALID_TOKEN_DETAIL)
            raise HTTPException(status_code=401, detail="Authentication failed")

        if not user_response or not user_response.user:
            raise HTTPException(status_code=401, detail=INVALID_TOKEN_DETAIL)

        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "created_at": user.created_at,
        }
        _remember_identity(key, user_data, now)
        return user_data
