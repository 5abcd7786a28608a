"""Object storage domain service."""

from datetime import datetime, timezone

import logfire

from fitjourney.config import StorageSettings
from fitjourney.domain.error import StorageError
from fitjourney.domain.value import (
    ContainerPolicy,
    Email,
    HabitType,
    MediaPayload,
    ObjectMetadata,
)

from .base import Service


class ObjectStorageGateway:
    """Generic blob storage interface."""

    async def ensure_container(self, name: str, policy: ContainerPolicy) -> None:
        """Create the container unless it already exists.

        Idempotent and safe to call concurrently; "already exists" is success.

        Raises:
            StorageError: If the container cannot be listed or created
        """
        raise NotImplementedError

    async def upload(
        self,
        container: str,
        key: str,
        payload: MediaPayload,
        metadata: ObjectMetadata,
    ) -> None:
        """Upload a payload under `key`, overwriting any existing object.

        Raises:
            StorageError: If the upload fails
        """
        raise NotImplementedError

    async def resolve_public_address(self, container: str, key: str) -> str:
        """Return a publicly fetchable URL for an object.

        Raises:
            StorageError: If the container is unknown or not public
        """
        raise NotImplementedError


def build_object_key(
    owner_email: Email, category: HabitType | str, at: datetime | None = None
) -> str:
    """Build the storage key for a verification photo.

    Format: `{ownerLocalPart}_{category}_{millisecondTimestamp}.jpg`. Unique
    per owner, category and millisecond; collisions are not ruled out.

    Args:
        owner_email: Email of the photo owner
        category: Habit category
        at: Timestamp to embed (defaults to now)

    Returns:
        Object key
    """
    at = at or datetime.now(timezone.utc)
    value = category.value if isinstance(category, HabitType) else category
    millis = int(at.timestamp() * 1000)
    return f"{owner_email.local_part}_{value}_{millis}.jpg"


class MediaStorageService(Service):
    """Domain service storing verification photos in the shared container."""

    def __init__(
        self, gateway: ObjectStorageGateway, storage_settings: StorageSettings
    ) -> None:
        """Initialize media storage service.

        Args:
            gateway: Object storage gateway
            storage_settings: Container name and policy
        """
        self.gateway = gateway
        self.storage_settings = storage_settings

    @property
    def policy(self) -> ContainerPolicy:
        """Policy applied when the container has to be created."""
        return ContainerPolicy(
            public=self.storage_settings.public,
            file_size_limit=self.storage_settings.file_size_limit,
        )

    async def store(
        self, owner_email: Email, category: HabitType, payload: MediaPayload
    ) -> str:
        """Store a photo and return its public URL.

        Args:
            owner_email: Email of the photo owner (used in the key)
            category: Habit category (used in the key)
            payload: Processed image

        Returns:
            Public URL of the stored photo

        Raises:
            StorageError: If any storage step fails
        """
        container = self.storage_settings.container
        key = build_object_key(owner_email, category)

        with logfire.span(
            "media_storage.store", container=container, key=key, size=payload.size
        ):
            if payload.size > self.storage_settings.file_size_limit:
                raise StorageError(
                    f"Image is {payload.size} bytes, the limit is "
                    f"{self.storage_settings.file_size_limit} bytes"
                )

            await self.gateway.ensure_container(container, self.policy)
            await self.gateway.upload(
                container,
                key,
                payload,
                ObjectMetadata(
                    content_type=payload.content_type,
                    cache_control_seconds=self.storage_settings.cache_control_seconds,
                ),
            )
            url = await self.gateway.resolve_public_address(container, key)

            logfire.info("Photo stored", container=container, key=key)
            return url
