"""Supabase Auth (GoTrue) client implementation.

Talks to the `/auth/v1` REST API with email/password grants.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID, uuid4

import httpx
import logfire
from pydantic import ValidationError as PydanticValidationError

from fitjourney.domain.error import AuthError, UnexpectedError
from fitjourney.domain.model.session import Identity, Session, SignUpProfile
from fitjourney.domain.service.session_service import IdentityClient
from fitjourney.domain.value import Email, UserId
from fitjourney.util.error import TokenDecodeError
from fitjourney.util.jwt import read_access_token_claims


class SupabaseAuthClient(IdentityClient):
    """Base class for Supabase auth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealSupabaseAuthClient(SupabaseAuthClient):
    """Identity client backed by the Supabase Auth REST API."""

    def __init__(
        self,
        auth_url: str,
        anon_key: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Supabase auth client.

        Args:
            auth_url: Base URL of the auth API (.../auth/v1)
            anon_key: Project anon key
            timeout: Transport timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.auth_url = auth_url.rstrip("/")
        self.anon_key = anon_key
        self.timeout = timeout
        self.transport = transport

    async def sign_in_with_password(self, email: Email, password: str) -> Session:
        """Exchange email and password for a session."""
        body = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": str(email), "password": password},
        )
        return self._parse_session(body)

    async def sign_up(
        self, email: Email, password: str, profile: SignUpProfile
    ) -> Session:
        """Create an account; the project must auto-confirm emails."""
        body = await self._request(
            "POST",
            "/signup",
            json={
                "email": str(email),
                "password": password,
                "data": {
                    "full_name": profile.full_name.strip(),
                    "avatar_url": profile.avatar_url,
                    "created_at": datetime.now(timezone.utc).isoformat(),
                },
            },
        )
        if "access_token" not in body:
            logfire.warn("Sign up returned no session", email=str(email))
            raise AuthError(
                "Account created, but it must be confirmed by email before signing in"
            )
        return self._parse_session(body)

    async def refresh_session(self, refresh_token: str) -> Session:
        """Exchange a refresh token for a new session."""
        body = await self._request(
            "POST",
            "/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        )
        return self._parse_session(body)

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session's refresh tokens."""
        await self._request("POST", "/logout", token=access_token)

    async def reset_password_for_email(self, email: Email) -> None:
        """Ask the backend to send a password reset email."""
        await self._request("POST", "/recover", json={"email": str(email)})

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
        token: str | None = None,
    ) -> dict[str, Any]:
        """Send a request to the auth API.

        Raises:
            AuthError: If the backend rejects the request (4xx)
            UnexpectedError: On transport failure, 5xx or malformed JSON
        """
        headers = {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {token or self.anon_key}",
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.auth_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.request(
                    method, path, params=params, json=json, headers=headers
                )
        except httpx.HTTPError as e:
            logfire.error("Auth backend HTTP error", path=path, error=str(e))
            raise UnexpectedError(f"Could not reach the authentication service: {e}")

        if 400 <= response.status_code < 500:
            message = self._error_message(response)
            logfire.warn(
                "Auth request rejected",
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise AuthError(message)

        if response.status_code >= 300:
            logfire.error(
                "Auth backend failure",
                path=path,
                status_code=response.status_code,
                error=response.text,
            )
            raise UnexpectedError(
                f"Authentication service returned {response.status_code}"
            )

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError:
            raise UnexpectedError("Malformed response from authentication service")

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Extract the human readable message from a GoTrue error body."""
        try:
            body = response.json()
        except ValueError:
            return response.text or f"Request rejected ({response.status_code})"

        if isinstance(body, dict):
            for field in ("error_description", "msg", "message", "error"):
                if body.get(field):
                    return str(body[field])
        return f"Request rejected ({response.status_code})"

    @staticmethod
    def _parse_session(body: dict[str, Any]) -> Session:
        """Build a Session from a GoTrue token response.

        Raises:
            UnexpectedError: If required fields are missing or malformed
        """
        try:
            access_token = body["access_token"]
            claims = read_access_token_claims(access_token)

            if body.get("expires_at"):
                expires_at = datetime.fromtimestamp(
                    int(body["expires_at"]), tz=timezone.utc
                )
            elif body.get("expires_in"):
                expires_at = datetime.now(timezone.utc) + timedelta(
                    seconds=int(body["expires_in"])
                )
            else:
                expires_at = claims.exp

            user = body.get("user") or {}
            metadata = user.get("user_metadata") or {}

            return Session(
                access_token=access_token,
                refresh_token=body["refresh_token"],
                token_type=body.get("token_type", "bearer"),
                expires_at=expires_at,
                identity=Identity(
                    user_id=UserId(UUID(user.get("id") or claims.sub)),
                    email=Email(user.get("email") or claims.email or ""),
                    full_name=metadata.get("full_name") or None,
                ),
            )
        except (KeyError, TypeError, ValueError, TokenDecodeError) as e:
            # PydanticValidationError is a ValueError
            logfire.error("Malformed auth session", error=str(e))
            raise UnexpectedError(f"Malformed session from authentication service: {e}")


class MockSupabaseAuthClient(SupabaseAuthClient):
    """Mock identity client for testing.

    Keeps accounts in memory and issues opaque tokens without network calls.
    """

    def __init__(
        self,
        delay_seconds: float = 0.0,
        session_lifetime_seconds: int = 3600,
        fail_sign_out: bool = False,
    ) -> None:
        """Initialize mock client.

        Args:
            delay_seconds: Artificial latency for every call
            session_lifetime_seconds: Lifetime of issued access tokens
            fail_sign_out: Make remote sign-out fail
        """
        self.delay_seconds = delay_seconds
        self.session_lifetime_seconds = session_lifetime_seconds
        self.fail_sign_out = fail_sign_out
        self._accounts: dict[str, tuple[str, Identity]] = {}
        self._refresh_tokens: dict[str, Identity] = {}
        self.password_reset_requests: list[str] = []
        self.sign_out_calls = 0

    def add_account(
        self, email: str, password: str, full_name: str | None = None
    ) -> Identity:
        """Register an account directly (test setup helper)."""
        identity = Identity(
            user_id=UserId(uuid4()), email=Email(email), full_name=full_name
        )
        self._accounts[str(identity.email).lower()] = (password, identity)
        return identity

    async def sign_in_with_password(self, email: Email, password: str) -> Session:
        """Return a session for a known account with matching password."""
        await self._latency()
        account = self._accounts.get(str(email).lower())
        if account is None or account[0] != password:
            raise AuthError("Invalid login credentials")
        return self._issue(account[1])

    async def sign_up(
        self, email: Email, password: str, profile: SignUpProfile
    ) -> Session:
        """Create an account and return its session."""
        await self._latency()
        if str(email).lower() in self._accounts:
            raise AuthError("User already registered")
        try:
            identity = self.add_account(str(email), password, profile.full_name)
        except PydanticValidationError as e:
            raise AuthError(str(e))
        return self._issue(identity)

    async def refresh_session(self, refresh_token: str) -> Session:
        """Rotate a refresh token."""
        await self._latency()
        identity = self._refresh_tokens.pop(refresh_token, None)
        if identity is None:
            raise AuthError("Invalid Refresh Token")
        return self._issue(identity)

    async def sign_out(self, access_token: str) -> None:
        """Count sign-outs; optionally fail."""
        await self._latency()
        self.sign_out_calls += 1
        if self.fail_sign_out:
            raise UnexpectedError("Could not reach the authentication service")

    async def reset_password_for_email(self, email: Email) -> None:
        """Record the reset request."""
        await self._latency()
        self.password_reset_requests.append(str(email))

    async def _latency(self) -> None:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)

    def _issue(self, identity: Identity) -> Session:
        refresh_token = f"mock-refresh-{uuid4().hex}"
        self._refresh_tokens[refresh_token] = identity
        return Session(
            access_token=f"mock-access-{uuid4().hex}",
            refresh_token=refresh_token,
            expires_at=datetime.now(timezone.utc)
            + timedelta(seconds=self.session_lifetime_seconds),
            identity=identity,
        )
