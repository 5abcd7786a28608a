"""Supabase Storage gateway implementation.

Talks to the `/storage/v1` REST API: bucket listing and creation, object
upload and public URL resolution.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import quote

import httpx
import logfire

from fitjourney.domain.error import StorageError
from fitjourney.domain.service.storage_service import ObjectStorageGateway
from fitjourney.domain.value import ContainerPolicy, MediaPayload, ObjectMetadata

AccessTokenProvider = Callable[[], Awaitable[str | None]]


class SupabaseStorageGateway(ObjectStorageGateway):
    """Base class for storage gateways.

    Provides type distinction for dependency injection.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, container: str) -> asyncio.Lock:
        """Per-container lock serialising in-process creation attempts."""
        return self._locks.setdefault(container, asyncio.Lock())


class RealSupabaseStorageGateway(SupabaseStorageGateway):
    """Object storage backed by the Supabase Storage REST API."""

    def __init__(
        self,
        storage_url: str,
        anon_key: str,
        access_token_provider: AccessTokenProvider | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize storage gateway.

        Args:
            storage_url: Base URL of the storage API (.../storage/v1)
            anon_key: Project anon key
            access_token_provider: Returns the signed-in user's access token,
                so requests run with the user's permissions
            timeout: Transport timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        super().__init__()
        self.storage_url = storage_url.rstrip("/")
        self.anon_key = anon_key
        self.access_token_provider = access_token_provider
        self.timeout = timeout
        self.transport = transport

        # Known containers -> public flag
        self._containers: dict[str, bool] = {}

    async def ensure_container(self, name: str, policy: ContainerPolicy) -> None:
        """Create the container unless it already exists."""
        if name in self._containers:
            return

        async with self._lock_for(name):
            if name in self._containers:
                return

            with logfire.span("storage.ensure_container", container=name):
                buckets = await self._list_buckets()
                existing = next((b for b in buckets if b.get("name") == name), None)
                if existing is not None:
                    self._containers[name] = bool(existing.get("public"))
                    return

                response = await self._send(
                    "POST",
                    "/bucket",
                    json={
                        "id": name,
                        "name": name,
                        "public": policy.public,
                        "file_size_limit": policy.file_size_limit,
                    },
                )

                if self._is_conflict(response):
                    # Created by another client between list and create
                    logfire.info("Storage container already exists", container=name)
                    bucket = await self._get_bucket(name)
                    self._containers[name] = bool(bucket.get("public"))
                    return

                if response.status_code >= 300:
                    raise StorageError(
                        "Failed to create storage bucket: " + self._error_message(response)
                    )

                self._containers[name] = policy.public
                logfire.info(
                    "Storage container created", container=name, public=policy.public
                )

    async def upload(
        self,
        container: str,
        key: str,
        payload: MediaPayload,
        metadata: ObjectMetadata,
    ) -> None:
        """Upload a payload, overwriting any object with the same key."""
        with logfire.span(
            "storage.upload", container=container, key=key, size=payload.size
        ):
            response = await self._send(
                "POST",
                f"/object/{container}/{quote(key)}",
                content=payload.data,
                headers={
                    "Content-Type": metadata.content_type,
                    "Cache-Control": f"max-age={metadata.cache_control_seconds}",
                    "x-upsert": "true",
                },
            )
            if response.status_code >= 300:
                raise StorageError(
                    "Failed to upload image: " + self._error_message(response)
                )

    async def resolve_public_address(self, container: str, key: str) -> str:
        """Return the public URL of an object in a public container."""
        public = self._containers.get(container)
        if public is None:
            bucket = await self._get_bucket(container)
            public = bool(bucket.get("public"))
            self._containers[container] = public

        if not public:
            raise StorageError(
                f"Failed to get public URL for image: container {container} is not public"
            )
        return f"{self.storage_url}/object/public/{container}/{quote(key)}"

    async def _list_buckets(self) -> list[dict[str, Any]]:
        response = await self._send("GET", "/bucket")
        if response.status_code >= 300:
            raise StorageError(
                "Failed to list storage buckets: " + self._error_message(response)
            )
        body = self._json(response)
        return body if isinstance(body, list) else []

    async def _get_bucket(self, name: str) -> dict[str, Any]:
        response = await self._send("GET", f"/bucket/{name}")
        if response.status_code >= 300:
            raise StorageError(
                f"Storage container {name} not found: " + self._error_message(response)
            )
        body = self._json(response)
        return body if isinstance(body, dict) else {}

    async def _send(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request to the storage API.

        Raises:
            StorageError: On transport failure
        """
        token = None
        if self.access_token_provider is not None:
            token = await self.access_token_provider()

        request_headers = {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {token or self.anon_key}",
            **(headers or {}),
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.storage_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                return await client.request(
                    method, path, json=json, content=content, headers=request_headers
                )
        except httpx.HTTPError as e:
            logfire.error("Storage backend HTTP error", path=path, error=str(e))
            raise StorageError(f"Could not reach the storage service: {e}")

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            raise StorageError("Malformed response from storage service")

    @staticmethod
    def _is_conflict(response: httpx.Response) -> bool:
        """Whether a create-bucket response means "already exists".

        Older storage servers answer 400 with statusCode "409" in the body.
        """
        if response.status_code == 409:
            return True
        if response.status_code != 400:
            return False
        try:
            body = response.json()
        except ValueError:
            return False
        if not isinstance(body, dict):
            return False
        return str(body.get("statusCode")) == "409" or "already exists" in str(
            body.get("message", "")
        )

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or str(response.status_code)
        if isinstance(body, dict):
            return str(body.get("message") or body.get("error") or response.status_code)
        return str(response.status_code)


class InMemoryStorageGateway(SupabaseStorageGateway):
    """In-memory object storage for testing."""

    def __init__(self, base_url: str = "https://storage.test/storage/v1") -> None:
        super().__init__()
        self.base_url = base_url.rstrip("/")
        self.containers: dict[str, ContainerPolicy] = {}
        self.objects: dict[tuple[str, str], tuple[MediaPayload, ObjectMetadata]] = {}
        self.create_calls = 0
        self.upload_calls = 0
        self.fail_uploads = False

    async def ensure_container(self, name: str, policy: ContainerPolicy) -> None:
        """Create the container once; later calls are no-ops."""
        async with self._lock_for(name):
            if name in self.containers:
                return
            # Yield so concurrent callers really interleave
            await asyncio.sleep(0)
            self.create_calls += 1
            self.containers[name] = policy

    async def upload(
        self,
        container: str,
        key: str,
        payload: MediaPayload,
        metadata: ObjectMetadata,
    ) -> None:
        """Store the payload in memory."""
        self.upload_calls += 1
        if self.fail_uploads:
            raise StorageError("Failed to upload image: simulated outage")
        policy = self.containers.get(container)
        if policy is None:
            raise StorageError(f"Failed to upload image: bucket {container} not found")
        if payload.size > policy.file_size_limit:
            raise StorageError("Failed to upload image: object exceeds size limit")
        self.objects[(container, key)] = (payload, metadata)

    async def resolve_public_address(self, container: str, key: str) -> str:
        """Return a fake public URL."""
        policy = self.containers.get(container)
        if policy is None or not policy.public:
            raise StorageError("Failed to get public URL for image")
        return f"{self.base_url}/object/public/{container}/{quote(key)}"
