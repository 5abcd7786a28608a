"""Mock providers for testing."""

from .auth import MockAuthProvider
from .persistence import MockPersistenceProvider
from .storage import MockStorageProvider
from .container import build_test_container

__all__ = [
    "MockAuthProvider",
    "MockPersistenceProvider",
    "MockStorageProvider",
    "build_test_container",
]
