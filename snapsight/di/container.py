# Local application imports
from .base_container import BaseContainer
from .providers import (
    DatabaseProvider,
    DetectionProvider,
    PhotoProvider,
    RepositoryProvider,
    StorageProvider,
)


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.
    
    Registration order is important:
    1. Database connections (DatabaseProvider)
    2. Repositories (RepositoryProvider) - depends on database
    3. Blob storage (StorageProvider)
    4. Vision client and detection service (DetectionProvider)
    5. Photo use cases (PhotoProvider) - depend on all of the above
    """
    
    def __init__(self) -> None:
        super().__init__()
        self.setup()
    
    def setup(self) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → repositories → storage → detection → use cases
        """
        DatabaseProvider.register(self)
        RepositoryProvider.register(self)
        StorageProvider.register(self)
        DetectionProvider.register(self)
        PhotoProvider.register(self)


# Global container instance (singleton pattern)
_container: DIContainer | None = None


def get_container() -> DIContainer:
    """
    Get the global DI container instance (singleton pattern)
    
    Returns:
        DIContainer instance with all dependencies registered
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def reset_container() -> None:
    """Drop the global container (used on shutdown and in tests)"""
    global _container
    _container = None
