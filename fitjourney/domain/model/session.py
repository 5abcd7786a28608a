"""Identity and session entities.

An Identity is the authenticated user as seen by this client. A Session is
the token bundle proving it, owned by the SessionStore (one per client).
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fitjourney.domain.model.common import DomainModel
from fitjourney.domain.value import Email, UserId


class Identity(DomainModel):
    """Authenticated user reference.

    `user_id` is the immutable key for everything the user owns; `email`
    can change and is kept for display and storage key naming.
    """

    user_id: UserId
    email: Email
    full_name: Optional[str] = None


class Session(DomainModel):
    """Live proof of authentication with refresh capability."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_at: datetime
    identity: Identity

    def is_expired(
        self, now: Optional[datetime] = None, margin_seconds: int = 0
    ) -> bool:
        """Whether the access token is expired or about to expire.

        Args:
            now: Reference time (defaults to current UTC time)
            margin_seconds: Treat tokens expiring within this window as expired

        Returns:
            True if the session needs a refresh
        """
        now = now or datetime.now(timezone.utc)
        return self.expires_at <= now + timedelta(seconds=margin_seconds)


class SignUpProfile(DomainModel):
    """Profile data attached to a new account."""

    full_name: str
    avatar_url: str = ""
