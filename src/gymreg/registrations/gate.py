"""AuthorizationGate - admits only callers with an administrator record."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gymreg.registrations.exceptions import Unauthorized

if TYPE_CHECKING:
    from gymreg.state_store import StateStore, User

logger = logging.getLogger(__name__)


class AuthorizationGate:
    """Checks the caller against the user table.

    Any existing user counts as an administrator; there is no role column.
    """

    def __init__(self, state_store: StateStore) -> None:
        self.state_store = state_store

    def check(self, caller_id: int | None) -> User:
        """Confirm the caller is an administrator.

        Args:
            caller_id: Identity resolved upstream, None when absent.

        Returns:
            The matching User.

        Raises:
            Unauthorized: If no user with that ID exists.
        """
        user = self.state_store.get_user(caller_id) if caller_id is not None else None
        if user is None:
            logger.info("Rejected caller %s: not an administrator", caller_id)
            raise Unauthorized()
        return user
