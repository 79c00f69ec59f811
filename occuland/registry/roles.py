"""Role-based access control for privileged registry calls.

Two roles exist. DEFAULT_ADMIN_ROLE administers every role, itself
included; MINTER_ROLE gates minting. The member sets are independent:
holding ADMIN does not make an account a minter and vice versa.

Usage:
    roles = AccessControl()
    roles.setup_role(Role.ADMIN, deployer)
    roles.grant_role(deployer, Role.MINTER, minter)   # True: newly granted
    roles.has_role(Role.MINTER, minter)               # True
"""

from __future__ import annotations

import logging
from enum import Enum

from .constants import MSG_RENOUNCE_ONLY_SELF
from .errors import InvalidArgument, Unauthorized

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Named capability sets."""

    ADMIN = "DEFAULT_ADMIN_ROLE"
    MINTER = "MINTER_ROLE"


def to_role(value: Role | str) -> Role:
    """Accept a Role or its string name ("MINTER_ROLE")."""
    try:
        return Role(value)
    except ValueError:
        raise InvalidArgument(f"Unknown role: {value!r}") from None


class AccessControl:
    """Role membership table with admin-gated grant and revoke.

    Mutating methods return True when membership actually changed and False
    for the idempotent no-op case, so the owning registry knows whether to
    emit an event.
    """

    _members: dict[Role, dict[str, None]]

    def __init__(self) -> None:
        # Ordered sets (dict keys) so members come back in grant order
        self._members = {role: {} for role in Role}

    def has_role(self, role: Role | str, account: str) -> bool:
        """Pure lookup; unknown roles are held by nobody."""
        try:
            return account in self._members[Role(role)]
        except ValueError:
            return False

    def get_role_admin(self, role: Role | str) -> Role:
        """Role whose holders may grant and revoke ``role``."""
        to_role(role)
        return Role.ADMIN

    def role_members(self, role: Role | str) -> list[str]:
        """Members of a role in grant order."""
        return list(self._members[to_role(role)])

    def check_role(self, role: Role | str, account: str) -> None:
        """Raise Unauthorized unless account holds role."""
        r = to_role(role)
        if not self.has_role(r, account):
            raise Unauthorized(
                f"AccessControl: account {account} is missing role {r.value}",
                account=account,
                role=r.value,
            )

    def setup_role(self, role: Role | str, account: str) -> bool:
        """Grant without an authorization check. Construction-time only."""
        return self._add(to_role(role), account)

    def grant_role(self, caller: str, role: Role | str, account: str) -> bool:
        """Add account to role. Caller must hold the role's admin role."""
        r = to_role(role)
        self.check_role(self.get_role_admin(r), caller)
        return self._add(r, account)

    def revoke_role(self, caller: str, role: Role | str, account: str) -> bool:
        """Remove account from role. Caller must hold the role's admin role."""
        r = to_role(role)
        self.check_role(self.get_role_admin(r), caller)
        return self._remove(r, account)

    def renounce_role(self, caller: str, role: Role | str, account: str) -> bool:
        """Give up one's own role. ``account`` must be the caller."""
        r = to_role(role)
        if caller != account:
            raise Unauthorized(MSG_RENOUNCE_ONLY_SELF, caller=caller, account=account)
        return self._remove(r, account)

    def _add(self, role: Role, account: str) -> bool:
        if not isinstance(account, str) or not account:
            raise InvalidArgument(f"Invalid account: {account!r}")
        if account in self._members[role]:
            return False
        self._members[role][account] = None
        logger.debug("Role %s granted to %s", role.value, account)
        return True

    def _remove(self, role: Role, account: str) -> bool:
        if account not in self._members[role]:
            return False
        del self._members[role][account]
        logger.debug("Role %s revoked from %s", role.value, account)
        return True
