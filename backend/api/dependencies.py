"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.auth.repository import UserRepository
    from modules.appliances.repository import ApplianceRepository
    from modules.appliances.service import ApplianceService


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._user_repository: "UserRepository | None" = None
        self._appliance_repository: "ApplianceRepository | None" = None
        self._appliance_service: "ApplianceService | None" = None

    @property
    def user_repository(self) -> "UserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            from shared.database import get_supabase_client
            self._user_repository = UserRepository(get_supabase_client())
        return self._user_repository

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            # Users are looked up lazily so token checks work without a database
            self._auth_service = AuthService()
        return self._auth_service

    @property
    def appliance_repository(self) -> "ApplianceRepository":
        """Get the appliance repository instance."""
        if self._appliance_repository is None:
            from modules.appliances.repository import ApplianceRepository
            from shared.database import get_supabase_client
            self._appliance_repository = ApplianceRepository(get_supabase_client())
        return self._appliance_repository

    @property
    def appliances(self) -> "ApplianceService":
        """Get the appliance service instance."""
        if self._appliance_service is None:
            from modules.appliances.ownership import OwnerResolver
            from modules.appliances.service import ApplianceService
            from shared.config import get_settings

            settings = get_settings()
            self._appliance_service = ApplianceService(
                repository=self.appliance_repository,
                owner_resolver=OwnerResolver(
                    self.user_repository.get_id_by_email,
                    settings.default_owner_email,
                ),
                expiring_soon_days=settings.expiring_soon_days,
            )
        return self._appliance_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._user_repository = None
        self._appliance_repository = None
        self._appliance_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_appliance_service() -> "ApplianceService":
    """FastAPI dependency for appliance service."""
    return get_container().appliances
