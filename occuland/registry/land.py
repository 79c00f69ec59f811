"""Land registry: open minting of sequential parcels plus update operators.

Anyone may mint a parcel for themselves. Each parcel can delegate an
update operator, an account allowed to act on the parcel's content
without owning it. At most one operator is recorded per parcel; setting a
new one overwrites the old, and moving the parcel clears it.

Who may set the operator is governed by ``land.update_operator_policy``:

- owner_or_approved: the owner, the account approved for the parcel, or
  an operator approved for all of the owner's parcels
- anyone: no check beyond the parcel existing
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import get_validated_config
from ..config_schema import LandConfig
from .constants import MSG_UNAUTHORIZED_USER, ZERO_ADDRESS
from .errors import InvalidArgument, NotFound, Unauthorized
from .logger import EventLogger
from .receipts import Receipt
from .tokens import TokenRegistry, require_account, to_token_id

logger = logging.getLogger(__name__)


class LandRegistry(TokenRegistry):
    """Mintable parcel registry with per-parcel update operators."""

    config: LandConfig
    _update_operators: dict[int, str]
    _next_land_id: int

    def __init__(
        self,
        deployer: str,
        config: LandConfig | None = None,
        event_logger: EventLogger | None = None,
    ) -> None:
        require_account(deployer, "deployer")
        self.config = config if config is not None else get_validated_config().land
        super().__init__(self.config.name, self.config.symbol, event_logger)
        self.deployer = deployer
        self._update_operators = {}
        self._next_land_id = 1

    def mint_land(self, caller: str) -> Receipt:
        """Mint the next parcel id to the caller."""
        require_account(caller, "caller")
        events: list[dict[str, Any]] = []
        land_id = self._next_land_id
        self._mint(caller, land_id, "", events)
        self._next_land_id += 1
        logger.debug("%s: parcel %d minted to %s", self._symbol, land_id, caller)
        return self._receipt("mint_land", caller, events, land_id)

    def set_update_operator(self, caller: str, token_id: int | str, operator: str) -> Receipt:
        """Record ``operator`` as the parcel's update operator.

        ZERO_ADDRESS clears the delegation.

        Raises:
            NotFound: If the parcel does not exist.
            Unauthorized: If the policy is owner_or_approved and caller is
                neither owner nor approved.
        """
        require_account(caller, "caller")
        require_account(operator, "operator")
        try:
            tid = self._require_exists(token_id)
        except NotFound as exc:
            raise self._reject("set_update_operator", exc) from None
        if (
            self.config.update_operator_policy == "owner_or_approved"
            and not self._is_approved_or_owner(caller, tid)
        ):
            raise self._reject(
                "set_update_operator",
                Unauthorized(MSG_UNAUTHORIZED_USER, caller=caller, token_id=tid),
            )

        events: list[dict[str, Any]] = []
        if operator == ZERO_ADDRESS:
            self._update_operators.pop(tid, None)
        else:
            self._update_operators[tid] = operator
        self._emit(events, "UpdateOperator", token_id=tid, operator=operator)
        return self._receipt("set_update_operator", caller, events, tid)

    def update_operator(self, token_id: int | str) -> str:
        """Delegated operator of a parcel, or ZERO_ADDRESS. Never fails."""
        try:
            tid = to_token_id(token_id)
        except InvalidArgument:
            return ZERO_ADDRESS
        return self._update_operators.get(tid, ZERO_ADDRESS)

    def _before_token_transfer(
        self, from_: str, to: str, token_id: int, events: list[dict[str, Any]]
    ) -> None:
        if self._update_operators.pop(token_id, None) is not None:
            self._emit(events, "UpdateOperator", token_id=token_id, operator=ZERO_ADDRESS)
