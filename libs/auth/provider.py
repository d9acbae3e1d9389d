"""Supabase Auth operations used by the API.

The Supabase Python client is synchronous; every call runs in a worker thread
so request handlers stay non-blocking. Provider failures are re-raised as
``AuthProviderError`` with the provider's own message, which the API returns
to the caller unchanged.
"""

import asyncio
from typing import Any, Optional

from libs.auth.models import AuthSession
from libs.common.config import get_settings
from libs.common.errors import GymError
from libs.common.logging import get_logger
from libs.common.supabase import get_supabase_admin_client, get_supabase_client

logger = get_logger(__name__)


class AuthProviderError(GymError):
    """Failure reported by the authentication provider."""

    status_code = 400
    code = "auth_provider_error"
    default_message = "authentication provider error"


def _user_id(response: Any) -> str:
    user = getattr(response, "user", None)
    user_id = getattr(user, "id", None)
    if user_id is None and isinstance(user, dict):
        user_id = user.get("id")
    if not user_id:
        raise AuthProviderError("auth provider returned no user")
    return str(user_id)


class SupabaseAuthProvider:
    """Async facade over Supabase Auth."""

    async def _call(self, action: str, fn, *args) -> Any:
        try:
            return await asyncio.to_thread(fn, *args)
        except AuthProviderError:
            raise
        except Exception as exc:
            logger.warning(
                "Auth provider call failed",
                extra={"extra_fields": {"action": action, "error": str(exc)}},
            )
            raise AuthProviderError(str(exc)) from exc

    async def sign_up(
        self, email: str, password: str, metadata: Optional[dict] = None
    ) -> str:
        """Self-service sign-up. Returns the new auth user id."""
        client = get_supabase_client()
        credentials = {
            "email": email,
            "password": password,
            "options": {"data": metadata or {}},
        }
        response = await self._call("sign_up", client.auth.sign_up, credentials)
        return _user_id(response)

    async def create_user(
        self, email: str, password: str, metadata: Optional[dict] = None
    ) -> str:
        """Admin-initiated account creation (no confirmation step)."""
        admin = get_supabase_admin_client()
        attributes = {
            "email": email,
            "password": password,
            "email_confirm": True,
            "user_metadata": metadata or {},
        }
        response = await self._call(
            "create_user", admin.auth.admin.create_user, attributes
        )
        return _user_id(response)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        client = get_supabase_client()
        response = await self._call(
            "sign_in",
            client.auth.sign_in_with_password,
            {"email": email, "password": password},
        )
        session = getattr(response, "session", None)
        if session is None:
            raise AuthProviderError("auth provider returned no session")
        return AuthSession(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_in=session.expires_in,
            user_id=_user_id(response),
        )

    async def sign_out(self, access_token: str) -> None:
        admin = get_supabase_admin_client()
        await self._call("sign_out", admin.auth.admin.sign_out, access_token)

    async def update_password(self, user_id: str, new_password: str) -> None:
        admin = get_supabase_admin_client()
        await self._call(
            "update_password",
            admin.auth.admin.update_user_by_id,
            user_id,
            {"password": new_password},
        )

    async def update_email(self, user_id: str, new_email: str) -> None:
        admin = get_supabase_admin_client()
        await self._call(
            "update_email",
            admin.auth.admin.update_user_by_id,
            user_id,
            {"email": new_email},
        )

    async def delete_user(self, user_id: str) -> None:
        admin = get_supabase_admin_client()
        await self._call("delete_user", admin.auth.admin.delete_user, user_id)

    async def send_password_reset(self, email: str) -> None:
        client = get_supabase_client()
        redirect_url = f"{get_settings().FRONTEND_URL.rstrip('/')}/reset-password"
        await self._call(
            "send_password_reset",
            client.auth.reset_password_for_email,
            email,
            {"redirect_to": redirect_url},
        )


def get_auth_provider() -> SupabaseAuthProvider:
    """FastAPI dependency; tests override it with a mock."""
    return SupabaseAuthProvider()
