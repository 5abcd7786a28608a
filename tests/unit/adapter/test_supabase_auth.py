"""Unit tests for RealSupabaseAuthClient against a mocked transport."""

import json
import time
from uuid import uuid4

import httpx
import jwt
import pytest

from fitjourney.adapter.supabase.auth import RealSupabaseAuthClient
from fitjourney.domain.error import AuthError, UnexpectedError
from fitjourney.domain.model import SignUpProfile
from fitjourney.domain.value import Email

AUTH_URL = "https://proj.supabase.co/auth/v1"
ANON_KEY = "anon-key"


def make_token(user_id: str, email: str = "a@x.com", lifetime: int = 3600) -> str:
    return jwt.encode(
        {"sub": user_id, "email": email, "exp": int(time.time()) + lifetime},
        "test-secret",
        algorithm="HS256",
    )


def token_body(user_id: str, email: str = "a@x.com", **extra) -> dict:
    body = {
        "access_token": make_token(user_id, email),
        "refresh_token": "refresh-1",
        "token_type": "bearer",
        "expires_in": 3600,
        "user": {
            "id": user_id,
            "email": email,
            "user_metadata": {"full_name": "Ada"},
        },
    }
    body.update(extra)
    return body


def build_client(handler) -> RealSupabaseAuthClient:
    return RealSupabaseAuthClient(
        auth_url=AUTH_URL,
        anon_key=ANON_KEY,
        transport=httpx.MockTransport(handler),
    )


class TestSignIn:
    """Tests for password sign-in."""

    @pytest.mark.asyncio
    async def test_sign_in_parses_session(self):
        """A token response should become a Session."""
        user_id = str(uuid4())
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["grant_type"] = request.url.params.get("grant_type")
            seen["apikey"] = request.headers.get("apikey")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=token_body(user_id))

        client = build_client(handler)

        session = await client.sign_in_with_password(Email("a@x.com"), "secret1")

        assert seen == {
            "path": "/auth/v1/token",
            "grant_type": "password",
            "apikey": ANON_KEY,
            "body": {"email": "a@x.com", "password": "secret1"},
        }
        assert str(session.identity.user_id) == user_id
        assert str(session.identity.email) == "a@x.com"
        assert session.identity.full_name == "Ada"
        assert session.refresh_token == "refresh-1"
        assert not session.is_expired()

    @pytest.mark.asyncio
    async def test_identity_falls_back_to_token_claims(self):
        """Without a user object the identity should come from the JWT."""
        user_id = str(uuid4())
        body = token_body(user_id, email="b@x.com")
        del body["user"]
        del body["expires_in"]

        client = build_client(lambda request: httpx.Response(200, json=body))

        session = await client.sign_in_with_password(Email("b@x.com"), "secret1")

        assert str(session.identity.user_id) == user_id
        assert str(session.identity.email) == "b@x.com"
        assert session.identity.full_name is None

    @pytest.mark.asyncio
    async def test_rejected_credentials_raise_auth_error(self):
        """A 400 from the backend should carry its message."""
        client = build_client(
            lambda request: httpx.Response(
                400,
                json={
                    "error": "invalid_grant",
                    "error_description": "Invalid login credentials",
                },
            )
        )

        with pytest.raises(AuthError, match="Invalid login credentials"):
            await client.sign_in_with_password(Email("a@x.com"), "wrong")

    @pytest.mark.asyncio
    async def test_server_error_is_unexpected(self):
        """A 5xx should raise UnexpectedError, not AuthError."""
        client = build_client(lambda request: httpx.Response(503, text="down"))

        with pytest.raises(UnexpectedError):
            await client.sign_in_with_password(Email("a@x.com"), "secret1")

    @pytest.mark.asyncio
    async def test_transport_failure_is_unexpected(self):
        """A connection failure should raise UnexpectedError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = build_client(handler)

        with pytest.raises(UnexpectedError, match="Could not reach"):
            await client.sign_in_with_password(Email("a@x.com"), "secret1")

    @pytest.mark.asyncio
    async def test_malformed_session_is_unexpected(self):
        """A token response without a valid JWT should raise UnexpectedError."""
        client = build_client(
            lambda request: httpx.Response(
                200, json={"access_token": "not-a-jwt", "refresh_token": "r"}
            )
        )

        with pytest.raises(UnexpectedError, match="Malformed session"):
            await client.sign_in_with_password(Email("a@x.com"), "secret1")


class TestOtherCalls:
    """Tests for sign-up, refresh, sign-out and password reset."""

    @pytest.mark.asyncio
    async def test_sign_up_sends_profile(self):
        """Sign up should send the profile as user metadata."""
        user_id = str(uuid4())
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=token_body(user_id))

        client = build_client(handler)

        session = await client.sign_up(
            Email("a@x.com"), "secret1", SignUpProfile(full_name=" Ada ")
        )

        assert seen["path"] == "/auth/v1/signup"
        assert seen["body"]["data"]["full_name"] == "Ada"
        assert seen["body"]["data"]["avatar_url"] == ""
        assert str(session.identity.user_id) == user_id

    @pytest.mark.asyncio
    async def test_sign_up_without_session_fails(self):
        """Sign up requiring email confirmation should raise AuthError."""
        client = build_client(
            lambda request: httpx.Response(200, json={"id": str(uuid4())})
        )

        with pytest.raises(AuthError, match="confirmed"):
            await client.sign_up(
                Email("a@x.com"), "secret1", SignUpProfile(full_name="Ada")
            )

    @pytest.mark.asyncio
    async def test_refresh_uses_refresh_token_grant(self):
        """Refresh should use the refresh_token grant."""
        user_id = str(uuid4())
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["grant_type"] = request.url.params.get("grant_type")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=token_body(user_id))

        client = build_client(handler)

        await client.refresh_session("refresh-0")

        assert seen == {
            "grant_type": "refresh_token",
            "body": {"refresh_token": "refresh-0"},
        }

    @pytest.mark.asyncio
    async def test_sign_out_sends_bearer_token(self):
        """Sign out should authenticate with the session's access token."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["authorization"] = request.headers.get("authorization")
            return httpx.Response(204)

        client = build_client(handler)

        await client.sign_out("access-123")

        assert seen == {
            "path": "/auth/v1/logout",
            "authorization": "Bearer access-123",
        }

    @pytest.mark.asyncio
    async def test_password_reset_posts_email(self):
        """Password reset should post the email to /recover."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={})

        client = build_client(handler)

        await client.reset_password_for_email(Email("a@x.com"))

        assert seen == {"path": "/auth/v1/recover", "body": {"email": "a@x.com"}}
