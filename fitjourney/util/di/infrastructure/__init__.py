"""Infrastructure providers."""

# Import bases
from .auth import AuthProvider
from .persistence import PersistenceProvider
from .storage import StorageProvider

# Import implementations (needed for __subclasses__())
from .auth import ProdAuthProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .storage import ProdStorageProvider  # noqa: F401

__all__ = [
    "AuthProvider",
    "PersistenceProvider",
    "ProdAuthProvider",
    "ProdPersistenceProvider",
    "ProdStorageProvider",
    "StorageProvider",
]
