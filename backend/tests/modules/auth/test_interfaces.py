from unittest.mock import MagicMock

from modules.auth.interfaces import IAuthService
from modules.auth.service import AuthService
from shared.config import Settings


class TestAuthInterface:
    def test_interface_methods_exist(self):
        """IAuthService should define required methods."""
        for method in ["validate_token", "get_user_by_id", "get_user_by_email"]:
            assert hasattr(IAuthService, method)

    def test_service_implements_interface(self):
        """An AuthService instance should satisfy the runtime-checkable protocol."""
        service = AuthService(settings=Settings(supabase_jwt_secret="x"), users=MagicMock())
        assert isinstance(service, IAuthService)
