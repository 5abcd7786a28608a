"""Session domain service.

Owns the single session of a client instance: sign-in, sign-up, sign-out,
transparent refresh, local persistence and change notification.
"""

import asyncio
import itertools
from typing import Any, Callable, Optional

import logfire
from pydantic import ValidationError as PydanticValidationError

from fitjourney.config import AuthSettings
from fitjourney.domain.error import (
    AuthError,
    AuthTimeoutError,
    DomainError,
    ValidationError,
)
from fitjourney.domain.model.session import Identity, Session, SignUpProfile
from fitjourney.domain.value import AuthState, Email, SessionEvent

from .base import Service

SessionListener = Callable[[SessionEvent, Optional[Session]], None]


class IdentityClient:
    """Generic identity backend interface."""

    async def sign_in_with_password(self, email: Email, password: str) -> Session:
        """Exchange credentials for a session.

        Raises:
            AuthError: If the credentials are rejected
            UnexpectedError: On transport or parse failure
        """
        raise NotImplementedError

    async def sign_up(
        self, email: Email, password: str, profile: SignUpProfile
    ) -> Session:
        """Create an account and return its first session.

        Raises:
            AuthError: If the account cannot be created or no session is issued
            UnexpectedError: On transport or parse failure
        """
        raise NotImplementedError

    async def refresh_session(self, refresh_token: str) -> Session:
        """Exchange a refresh token for a new session.

        Raises:
            AuthError: If the refresh token is no longer valid
            UnexpectedError: On transport or parse failure
        """
        raise NotImplementedError

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session on the backend."""
        raise NotImplementedError

    async def reset_password_for_email(self, email: Email) -> None:
        """Ask the backend to send a password reset email."""
        raise NotImplementedError


class SessionStorage:
    """Local key/value storage for the persisted session."""

    async def load(self, key: str) -> dict[str, Any] | None:
        """Return the stored value for `key`, or None."""
        raise NotImplementedError

    async def save(self, key: str, value: dict[str, Any]) -> None:
        """Store `value` under `key`, replacing any previous value."""
        raise NotImplementedError

    async def remove(self, key: str) -> None:
        """Delete `key` if present."""
        raise NotImplementedError


class Subscription:
    """Handle returned by `SessionChannel.subscribe`."""

    def __init__(self, channel: "SessionChannel", token: int) -> None:
        self._channel = channel
        self._token = token

    @property
    def active(self) -> bool:
        """Whether the listener still receives events."""
        return self._channel._has(self._token)

    def unsubscribe(self) -> None:
        """Stop receiving events. Safe to call more than once."""
        self._channel._remove(self._token)


class SessionChannel:
    """Publish/subscribe channel for session transitions.

    Broadcasts iterate over a snapshot of the listeners, so listeners may
    subscribe or unsubscribe at any time, including from inside a callback.
    """

    def __init__(self) -> None:
        self._listeners: dict[int, SessionListener] = {}
        self._tokens = itertools.count()

    def subscribe(self, listener: SessionListener) -> Subscription:
        """Register a listener.

        Args:
            listener: Called with the event and the new session (or None)

        Returns:
            Subscription handle used to unsubscribe
        """
        token = next(self._tokens)
        self._listeners[token] = listener
        return Subscription(self, token)

    def publish(self, event: SessionEvent, session: Optional[Session]) -> None:
        """Deliver an event to every current listener.

        A failing listener is logged and does not prevent delivery to others.
        """
        for listener in list(self._listeners.values()):
            try:
                listener(event, session)
            except Exception as e:
                logfire.error(
                    "Session listener failed", session_event=event.value, error=str(e)
                )

    @property
    def listener_count(self) -> int:
        """Number of active listeners."""
        return len(self._listeners)

    def _has(self, token: int) -> bool:
        return token in self._listeners

    def _remove(self, token: int) -> None:
        self._listeners.pop(token, None)


class SessionStore(Service):
    """Domain service holding at most one active session per client.

    State machine: ANONYMOUS -> AUTHENTICATING -> AUTHENTICATED -> ANONYMOUS.
    AUTHENTICATING always resolves within the configured timeout.
    """

    def __init__(
        self,
        identity_client: IdentityClient,
        storage: SessionStorage,
        auth_settings: AuthSettings,
        channel: SessionChannel | None = None,
    ) -> None:
        """Initialize session store.

        Args:
            identity_client: Identity backend client
            storage: Local storage for the persisted session
            auth_settings: Authentication settings
            channel: Change notification channel (a new one by default)
        """
        self.identity_client = identity_client
        self.storage = storage
        self.auth_settings = auth_settings
        self.channel = channel or SessionChannel()
        self._session: Session | None = None
        self._state = AuthState.ANONYMOUS
        self._refresh_lock = asyncio.Lock()

    @property
    def state(self) -> AuthState:
        """Current authentication state."""
        return self._state

    def on_session_change(self, listener: SessionListener) -> Subscription:
        """Register a session change listener.

        Args:
            listener: Called on sign-in, refresh and sign-out

        Returns:
            Subscription handle; call `unsubscribe()` to stop listening
        """
        return self.channel.subscribe(listener)

    async def restore(self) -> Session | None:
        """Load the persisted session at startup and announce it.

        Returns:
            The restored session, or None if the user must sign in
        """
        with logfire.span("session_store.restore"):
            session = await self.get_current_session()
            self.channel.publish(SessionEvent.INITIAL_SESSION, session)
            logfire.info("Session restored", authenticated=session is not None)
            return session

    async def get_current_session(self) -> Session | None:
        """Return the active session, refreshing it if it has expired.

        Never raises: storage and transport failures are logged and reported
        as "not authenticated".

        Returns:
            The active session, or None
        """
        try:
            session = self._session or await self._load_persisted()
            if session is None:
                return None

            if session.is_expired(
                margin_seconds=self.auth_settings.refresh_margin_seconds
            ):
                return await self._refresh(session)

            return session
        except (DomainError, OSError, ValueError) as e:
            logfire.warn("Could not resolve current session", error=str(e))
            return None

    async def get_current_identity(self) -> Identity | None:
        """Return the identity of the active session, or None."""
        session = await self.get_current_session()
        return session.identity if session else None

    async def access_token(self) -> str | None:
        """Return the access token of the active session, or None."""
        session = await self.get_current_session()
        return session.access_token if session else None

    async def sign_in(self, email: str, password: str) -> Session:
        """Sign in with email and password.

        Args:
            email: Account email
            password: Account password

        Returns:
            The new session

        Raises:
            ValidationError: If the email or password is malformed
            AuthError: If the credentials are rejected
            AuthTimeoutError: If the backend does not answer in time
        """
        address = self._validate_credentials(email, password)
        with logfire.span("session_store.sign_in", email=str(address)):
            session = await self._authenticate(
                "Sign in",
                self.identity_client.sign_in_with_password(address, password),
            )
            logfire.info("User signed in", user_id=str(session.identity.user_id))
            return session

    async def sign_up(
        self, email: str, password: str, profile: SignUpProfile
    ) -> Session:
        """Create an account and sign in to it.

        Args:
            email: Account email
            password: Account password
            profile: Profile data stored with the account

        Returns:
            The new session

        Raises:
            ValidationError: If the email, password or name is malformed
            AuthError: If the account cannot be created
            AuthTimeoutError: If the backend does not answer in time
        """
        address = self._validate_credentials(email, password)
        if not profile.full_name.strip():
            raise ValidationError("Please fill in all fields")

        with logfire.span("session_store.sign_up", email=str(address)):
            session = await self._authenticate(
                "Sign up",
                self.identity_client.sign_up(address, password, profile),
            )
            logfire.info("User signed up", user_id=str(session.identity.user_id))
            return session

    async def sign_out(self) -> None:
        """Sign out.

        The remote call is best effort; the local session is always cleared
        and subscribers are always told.
        """
        session = self._session
        with logfire.span("session_store.sign_out", had_session=session is not None):
            try:
                if session is not None:
                    await self.identity_client.sign_out(session.access_token)
            except DomainError as e:
                logfire.warn(
                    "Remote sign-out failed, clearing local session", error=str(e)
                )
            finally:
                await self._clear()
                self.channel.publish(SessionEvent.SIGNED_OUT, None)

    async def request_password_reset(self, email: str) -> None:
        """Ask the backend to email a password reset link.

        Args:
            email: Account email

        Raises:
            ValidationError: If the email is malformed
        """
        address = self._parse_email(email)
        with logfire.span("session_store.request_password_reset", email=str(address)):
            try:
                await self.identity_client.reset_password_for_email(address)
            except DomainError as e:
                logfire.warn("Password reset request failed", error=str(e))

    async def _authenticate(self, operation: str, call) -> Session:
        """Run a sign-in style call under the timeout bound."""
        timeout = self.auth_settings.request_timeout_seconds
        self._state = AuthState.AUTHENTICATING
        try:
            session = await asyncio.wait_for(call, timeout=timeout)
        except asyncio.TimeoutError:
            self._settle_state()
            logfire.warn(f"{operation} timed out", timeout_seconds=timeout)
            raise AuthTimeoutError(operation, timeout)
        except BaseException:
            self._settle_state()
            raise

        await self._set_session(session)
        self.channel.publish(SessionEvent.SIGNED_IN, session)
        return session

    async def _refresh(self, session: Session) -> Session | None:
        """Refresh an expired session (serialised across callers)."""
        async with self._refresh_lock:
            current = self._session
            if current is not None and current is not session and not current.is_expired(
                margin_seconds=self.auth_settings.refresh_margin_seconds
            ):
                # Another caller refreshed while we waited
                return current

            with logfire.span("session_store.refresh"):
                try:
                    refreshed = await self.identity_client.refresh_session(
                        session.refresh_token
                    )
                except AuthError as e:
                    logfire.info("Session expired", error=str(e))
                    await self._clear()
                    self.channel.publish(SessionEvent.SIGNED_OUT, None)
                    return None

            await self._set_session(refreshed)
            self.channel.publish(SessionEvent.TOKEN_REFRESHED, refreshed)
            return refreshed

    async def _load_persisted(self) -> Session | None:
        data = await self.storage.load(self.auth_settings.session_storage_key)
        if data is None:
            return None
        session = Session.model_validate(data)
        self._session = session
        self._state = AuthState.AUTHENTICATED
        return session

    async def _set_session(self, session: Session) -> None:
        self._session = session
        self._state = AuthState.AUTHENTICATED
        try:
            await self.storage.save(
                self.auth_settings.session_storage_key, session.model_dump(mode="json")
            )
        except OSError as e:
            logfire.warn("Could not persist session", error=str(e))

    async def _clear(self) -> None:
        self._session = None
        self._state = AuthState.ANONYMOUS
        try:
            await self.storage.remove(self.auth_settings.session_storage_key)
        except OSError as e:
            logfire.warn("Could not remove persisted session", error=str(e))

    def _settle_state(self) -> None:
        self._state = (
            AuthState.AUTHENTICATED if self._session is not None else AuthState.ANONYMOUS
        )

    def _validate_credentials(self, email: str, password: str) -> Email:
        if not email or not password:
            raise ValidationError("Please fill in all fields")
        address = self._parse_email(email)
        minimum = self.auth_settings.min_password_length
        if len(password) < minimum:
            raise ValidationError(f"Password must be at least {minimum} characters")
        return address

    @staticmethod
    def _parse_email(email: str) -> Email:
        try:
            return Email(email or "")
        except PydanticValidationError:
            raise ValidationError("Please enter a valid email")
