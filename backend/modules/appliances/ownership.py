"""
Ownership scoping and owner resolution.

Scoping: when an acting user is given, queries are restricted to rows whose
``user_id`` equals that user. A row owned by someone else is simply not
returned, which makes it indistinguishable from a missing one.

Resolution: a new appliance is owned by the acting user, else by the
configured default owner (looked up by email), else creation fails.
"""

import logging
from typing import Any, Callable, Optional, TypeVar

import httpx
from postgrest.exceptions import APIError

from .exceptions import OwnerUnresolvedError

logger = logging.getLogger(__name__)

OWNER_COLUMN = "user_id"

Q = TypeVar("Q")


def scope_to_owner(query: Q, acting_user_id: Optional[str]) -> Q:
    """Add an owner filter to a PostgREST query builder when a user is acting."""
    if acting_user_id is None:
        return query
    return query.eq(OWNER_COLUMN, acting_user_id)  # type: ignore[attr-defined]


def is_owned_by(row: dict[str, Any], acting_user_id: Optional[str]) -> bool:
    """Whether a row is visible to ``acting_user_id`` (always true when unscoped)."""
    if acting_user_id is None:
        return True
    owner = row.get(OWNER_COLUMN)
    return owner is not None and str(owner) == acting_user_id


class OwnerResolver:
    """
    Two-step owner resolution for new appliances.

    Args:
        lookup_user_id: Returns the user ID registered for an email, or None.
        default_owner_email: Email of the fallback owner; empty disables it.
    """

    def __init__(
        self,
        lookup_user_id: Callable[[str], Optional[str]],
        default_owner_email: Optional[str] = None,
    ):
        self._lookup_user_id = lookup_user_id
        self._default_owner_email = default_owner_email or None

    @property
    def default_owner_email(self) -> Optional[str]:
        return self._default_owner_email

    def resolve(self, acting_user_id: Optional[str]) -> str:
        """
        Return the owner for a new appliance.

        Raises:
            OwnerUnresolvedError: No acting user and no resolvable default owner
        """
        if acting_user_id:
            return acting_user_id

        if not self._default_owner_email:
            raise OwnerUnresolvedError()

        try:
            owner_id = self._lookup_user_id(self._default_owner_email)
        except (APIError, httpx.HTTPError):
            logger.exception(
                "Default owner lookup failed for %s", self._default_owner_email
            )
            owner_id = None

        if not owner_id:
            raise OwnerUnresolvedError(self._default_owner_email)

        logger.info("No acting user; assigning appliance to default owner %s", owner_id)
        return owner_id
