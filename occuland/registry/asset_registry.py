"""Occuland asset registry: role-gated minting and owner-initiated bridge back.

Token lifecycle:

    NonExistent --mint (MINTER)--> Owned(owner)
    Owned(owner) --transfer_from (owner/approved)--> Owned(new owner)
    Owned(owner) --bridge_back (owner)--> NonExistent (terminal)

Bridging back burns the token here; whatever represents the asset on the
other side of the bridge is outside this registry. A bridged-back id is
never reissued.

Token ids follow ``registry.token_id_policy``:

- sequential: ids come from a monotonic counter. The id argument to
  mint() is the asset's source id and is kept on the token, so minting
  the same source id twice yields two distinct tokens.
- explicit: the id argument is the token id itself and must never have
  been used in this registry.
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import get_validated_config
from ..config_schema import RegistryConfig
from .constants import MSG_NON_OWNER, MSG_NOT_MINTER
from .errors import AlreadyExists, InvalidArgument, NotFound, RegistryError, Unauthorized
from .logger import EventLogger
from .receipts import Receipt
from .roles import AccessControl, Role, to_role
from .tokens import TokenRegistry, require_account, to_token_id

logger = logging.getLogger(__name__)


class AssetRegistry(TokenRegistry):
    """Occuland NFT asset registry.

    Construction grants DEFAULT_ADMIN_ROLE to the deployer and MINTER_ROLE
    to ``minter``. Both roles stay independently managed afterwards.
    """

    DEFAULT_ADMIN_ROLE = Role.ADMIN
    MINTER_ROLE = Role.MINTER

    config: RegistryConfig
    roles: AccessControl
    _source_ids: dict[int, int | str]
    _next_token_id: int

    def __init__(
        self,
        deployer: str,
        minter: str,
        config: RegistryConfig | None = None,
        event_logger: EventLogger | None = None,
    ) -> None:
        require_account(deployer, "deployer")
        require_account(minter, "minter")
        self.config = config if config is not None else get_validated_config().registry
        super().__init__(self.config.name, self.config.symbol, event_logger)

        self.deployer = deployer
        self.roles = AccessControl()
        self._source_ids = {}
        self._next_token_id = self.config.first_token_id

        events: list[dict[str, Any]] = []
        for role, account in ((Role.ADMIN, deployer), (Role.MINTER, minter)):
            if self.roles.setup_role(role, account):
                self._emit(events, "RoleGranted", role=role.value, account=account, sender=deployer)
        logger.info(
            "%s deployed by %s (minter=%s, id policy=%s)",
            self._symbol, deployer, minter, self.config.token_id_policy,
        )

    # ===== ACCESS CONTROL =====

    def has_role(self, role: Role | str, account: str) -> bool:
        """Check role membership. Never fails."""
        return self.roles.has_role(role, account)

    def get_role_admin(self, role: Role | str) -> Role:
        """Role that administers ``role`` (always DEFAULT_ADMIN_ROLE)."""
        return self.roles.get_role_admin(role)

    def role_members(self, role: Role | str) -> list[str]:
        """Members of a role in grant order."""
        return self.roles.role_members(role)

    def grant_role(self, caller: str, role: Role | str, account: str) -> Receipt:
        """Grant a role. Idempotent; caller must hold DEFAULT_ADMIN_ROLE.

        Raises:
            Unauthorized: If caller lacks the role's admin role.
        """
        r = to_role(role)
        try:
            changed = self.roles.grant_role(caller, r, account)
        except RegistryError as exc:
            raise self._reject("grant_role", exc) from None
        events: list[dict[str, Any]] = []
        if changed:
            self._emit(events, "RoleGranted", role=r.value, account=account, sender=caller)
        return self._receipt("grant_role", caller, events)

    def revoke_role(self, caller: str, role: Role | str, account: str) -> Receipt:
        """Revoke a role. Idempotent; caller must hold DEFAULT_ADMIN_ROLE.

        Raises:
            Unauthorized: If caller lacks the role's admin role.
        """
        r = to_role(role)
        try:
            changed = self.roles.revoke_role(caller, r, account)
        except RegistryError as exc:
            raise self._reject("revoke_role", exc) from None
        events: list[dict[str, Any]] = []
        if changed:
            self._emit(events, "RoleRevoked", role=r.value, account=account, sender=caller)
        return self._receipt("revoke_role", caller, events)

    def renounce_role(self, caller: str, role: Role | str, account: str) -> Receipt:
        """Drop one of the caller's own roles."""
        r = to_role(role)
        try:
            changed = self.roles.renounce_role(caller, r, account)
        except RegistryError as exc:
            raise self._reject("renounce_role", exc) from None
        events: list[dict[str, Any]] = []
        if changed:
            self._emit(events, "RoleRevoked", role=r.value, account=account, sender=caller)
        return self._receipt("renounce_role", caller, events)

    # ===== MINT / BRIDGE BACK =====

    def mint(self, caller: str, to: str, token_id: int | str, uri: str) -> Receipt:
        """Mint a token to ``to`` with metadata ``uri``.

        Args:
            caller: Account making the call; must hold MINTER_ROLE.
            to: Recipient and initial owner.
            token_id: Source id (sequential policy) or token id (explicit).
            uri: Metadata URI, immutable afterwards.

        Returns:
            Receipt whose token_id is the id actually minted.

        Raises:
            Unauthorized: "x" if caller is not a minter (admins included).
            AlreadyExists: Explicit policy, id already used.
            InvalidArgument: Bad recipient or id.
        """
        if not self.roles.has_role(Role.MINTER, caller):
            raise self._reject("mint", Unauthorized(MSG_NOT_MINTER, caller=caller))
        if not isinstance(uri, str):
            raise self._reject("mint", InvalidArgument(f"Invalid token URI: {uri!r}"))

        try:
            if self.config.token_id_policy == "explicit":
                new_id = to_token_id(token_id)
                source_id: int | str = new_id
            else:
                new_id = self._next_token_id
                source_id = self._normalize_source_id(token_id)
            self._check_mint(to, new_id)
        except (InvalidArgument, AlreadyExists) as exc:
            raise self._reject("mint", exc) from None

        events: list[dict[str, Any]] = []
        self._mint(to, new_id, uri, events)
        self._source_ids[new_id] = source_id
        if new_id >= self._next_token_id:
            self._next_token_id = new_id + 1
        logger.debug("%s: minted token %d to %s (source id %s)", self._symbol, new_id, to, source_id)
        return self._receipt("mint", caller, events, new_id)

    def bridge_back(self, caller: str, token_id: int | str) -> Receipt:
        """Burn a token so it can be represented on the other side of the bridge.

        Raises:
            NotFound: If the token does not exist (generic, for any caller).
            Unauthorized: "non owner" if caller does not own the token.
        """
        try:
            tid = self._require_exists(token_id)
        except NotFound as exc:
            raise self._reject("bridge_back", exc) from None
        owner = self._owners[tid]
        if caller != owner:
            raise self._reject("bridge_back", Unauthorized(MSG_NON_OWNER, caller=caller, token_id=tid))

        events: list[dict[str, Any]] = []
        source_id = self._source_ids.pop(tid, None)
        self._burn(tid, events)
        self._emit(events, "BridgedBack", owner=owner, token_id=tid, source_id=source_id)
        logger.info("%s: token %d bridged back by %s", self._symbol, tid, owner)
        return self._receipt("bridge_back", caller, events, tid)

    def source_id_of(self, token_id: int | str) -> int | str:
        """Id argument the token was minted with.

        Raises:
            NotFound: If the token does not exist.
        """
        return self._source_ids[self._require_exists(token_id)]

    @staticmethod
    def _normalize_source_id(value: int | str) -> int | str:
        """Source ids are kept as given, with decimal strings read as ints."""
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise InvalidArgument(f"Invalid source id: {value!r}")
        if isinstance(value, str):
            if not value:
                raise InvalidArgument("Invalid source id: ''")
            return int(value) if value.isdecimal() else value
        return value
