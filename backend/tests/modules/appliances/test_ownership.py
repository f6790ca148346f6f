"""Tests for ownership scoping and owner resolution."""

import pytest
from unittest.mock import MagicMock

import httpx
from postgrest.exceptions import APIError

from modules.appliances.exceptions import OwnerUnresolvedError
from modules.appliances.ownership import OwnerResolver, is_owned_by, scope_to_owner


class TestScopeToOwner:
    def test_unscoped_query_unchanged(self):
        query = MagicMock()
        assert scope_to_owner(query, None) is query
        query.eq.assert_not_called()

    def test_scoped_query_filters_on_user_id(self):
        query = MagicMock()
        scoped = scope_to_owner(query, "user-1")
        query.eq.assert_called_once_with("user_id", "user-1")
        assert scoped is query.eq.return_value


class TestIsOwnedBy:
    def test_unscoped_sees_everything(self):
        assert is_owned_by({"user_id": "user-1"}, None)
        assert is_owned_by({"user_id": None}, None)

    def test_owner_match(self):
        assert is_owned_by({"user_id": "user-1"}, "user-1")

    def test_other_owner(self):
        assert not is_owned_by({"user_id": "user-2"}, "user-1")

    def test_unowned_row_not_visible_to_users(self):
        assert not is_owned_by({"user_id": None}, "user-1")


class TestOwnerResolver:
    def test_acting_user_wins(self):
        """The acting user is used without consulting the fallback."""
        lookup = MagicMock()
        resolver = OwnerResolver(lookup, "default@example.com")

        assert resolver.resolve("user-1") == "user-1"
        lookup.assert_not_called()

    def test_falls_back_to_default_owner(self):
        lookup = MagicMock(return_value="default-user")
        resolver = OwnerResolver(lookup, "default@example.com")

        assert resolver.resolve(None) == "default-user"
        lookup.assert_called_once_with("default@example.com")

    def test_unknown_default_owner(self):
        resolver = OwnerResolver(lambda email: None, "default@example.com")

        with pytest.raises(OwnerUnresolvedError) as exc_info:
            resolver.resolve(None)

        assert exc_info.value.code == "OWNER_UNRESOLVED"
        assert exc_info.value.details["default_owner_email"] == "default@example.com"

    def test_fallback_disabled(self):
        """An empty default owner email disables the fallback."""
        lookup = MagicMock()
        resolver = OwnerResolver(lookup, "")

        with pytest.raises(OwnerUnresolvedError):
            resolver.resolve(None)
        lookup.assert_not_called()
        assert resolver.default_owner_email is None

    def test_lookup_store_error_is_unresolved(self):
        lookup = MagicMock(side_effect=APIError({"message": "boom", "code": "500"}))
        resolver = OwnerResolver(lookup, "default@example.com")

        with pytest.raises(OwnerUnresolvedError):
            resolver.resolve(None)

    def test_lookup_transport_error_is_unresolved(self):
        lookup = MagicMock(side_effect=httpx.ConnectError("unreachable"))
        resolver = OwnerResolver(lookup, "default@example.com")

        with pytest.raises(OwnerUnresolvedError):
            resolver.resolve(None)

    def test_empty_acting_user_uses_fallback(self):
        resolver = OwnerResolver(lambda email: "default-user", "default@example.com")
        assert resolver.resolve("") == "default-user"
