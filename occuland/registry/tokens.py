"""Ownable, enumerable, approvable token core shared by both registries.

TokenRegistry holds the state every non-fungible registry needs:

- owners: {token_id: account}
- per-owner token lists in insertion order (index-stable for the tokens
  that remain when another is removed)
- the global token list, also in insertion order
- single-token approvals and operator ("approval for all") grants
- token URIs, immutable once set at mint time
- burned ids, which are never minted again

Every public mutating call takes the caller as its first argument, checks
all of its preconditions, and only then mutates. A rejected call raises a
RegistryError and leaves the state untouched.

Thread-safety: registries are NOT thread-safe. Calls are expected to be
serialized by the host, one at a time.
"""

from __future__ import annotations

import logging
from typing import Any

from .constants import (
    MSG_APPROVAL_TO_CURRENT_OWNER,
    MSG_APPROVE_NOT_OWNER_NOR_APPROVED_FOR_ALL,
    MSG_APPROVE_TO_CALLER,
    MSG_GLOBAL_INDEX_OUT_OF_BOUNDS,
    MSG_MINT_TO_ZERO,
    MSG_NONEXISTENT_TOKEN,
    MSG_OWNER_INDEX_OUT_OF_BOUNDS,
    MSG_TOKEN_ALREADY_MINTED,
    MSG_TRANSFER_FROM_INCORRECT_OWNER,
    MSG_TRANSFER_NOT_OWNER_NOR_APPROVED,
    MSG_TRANSFER_TO_ZERO,
    ZERO_ADDRESS,
)
from .errors import (
    AlreadyExists,
    ErrorCode,
    IndexOutOfRange,
    InvalidArgument,
    NotFound,
    RegistryError,
    Unauthorized,
)
from .logger import EventLogger, get_event_logger
from .receipts import Receipt

logger = logging.getLogger(__name__)


def to_token_id(value: int | str) -> int:
    """Normalize a token id argument.

    Accepts ints and decimal strings ("2"), the two forms callers pass ids
    in. Ids are positive integers.

    Raises:
        InvalidArgument: If the value is not a positive integer id.
    """
    if isinstance(value, bool):
        raise InvalidArgument(f"Invalid token id: {value!r}")
    if isinstance(value, str):
        if not value.strip().isdecimal():
            raise InvalidArgument(f"Invalid token id: {value!r}")
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        raise InvalidArgument(f"Invalid token id: {value!r}")
    return value


def require_account(account: str, what: str = "account") -> str:
    """Check that an account is a non-empty string identity."""
    if not isinstance(account, str) or not account:
        raise InvalidArgument(f"Invalid {what}: {account!r}")
    return account


class TokenRegistry:
    """Non-fungible token registry with enumeration and approvals.

    Subclasses add the minting and burning entry points; this class only
    exposes the internal ``_mint`` / ``_burn`` primitives for them.
    """

    _owners: dict[int, str]
    _owned_tokens: dict[str, list[int]]
    _all_tokens: list[int]
    _token_uris: dict[int, str]
    _token_approvals: dict[int, str]
    _operator_approvals: dict[str, set[str]]
    _burned: set[int]
    _tx_count: int
    event_logger: EventLogger

    def __init__(
        self,
        name: str,
        symbol: str,
        event_logger: EventLogger | None = None,
    ) -> None:
        self._name = name
        self._symbol = symbol
        self._owners = {}
        # Per-owner and global token lists, both in insertion order
        self._owned_tokens = {}
        self._all_tokens = []
        self._token_uris = {}
        self._token_approvals = {}
        self._operator_approvals = {}
        # Burned ids are terminal
        self._burned = set()
        self._tx_count = 0
        self.event_logger = event_logger if event_logger is not None else get_event_logger()

    # ===== METADATA =====

    def name(self) -> str:
        """Collection name."""
        return self._name

    def symbol(self) -> str:
        """Collection symbol."""
        return self._symbol

    # ===== QUERIES =====

    def total_supply(self) -> int:
        """Count of live (minted and not burned) tokens."""
        return len(self._all_tokens)

    def exists(self, token_id: int | str) -> bool:
        """Check whether a token id is currently live."""
        try:
            tid = to_token_id(token_id)
        except InvalidArgument:
            return False
        return tid in self._owners

    def is_burned(self, token_id: int | str) -> bool:
        """Check whether a token id was minted and later burned."""
        return to_token_id(token_id) in self._burned

    def balance_of(self, account: str) -> int:
        """Number of tokens owned by an account (0 for unknown accounts)."""
        return len(self._owned_tokens.get(account, []))

    def owner_of(self, token_id: int | str) -> str:
        """Current owner of a token.

        Raises:
            NotFound: If the token does not exist.
        """
        return self._owners[self._require_exists(token_id)]

    def token_of_owner_by_index(self, account: str, index: int) -> int:
        """Token id at ``index`` in the account's owned-token list.

        Raises:
            IndexOutOfRange: If index is negative or past the end.
        """
        owned = self._owned_tokens.get(account, [])
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(owned):
            raise IndexOutOfRange(
                MSG_OWNER_INDEX_OUT_OF_BOUNDS, account=account, index=index
            )
        return owned[index]

    def token_by_index(self, index: int) -> int:
        """Token id at ``index`` in the global token list.

        Raises:
            IndexOutOfRange: If index is negative or past the end.
        """
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(self._all_tokens):
            raise IndexOutOfRange(MSG_GLOBAL_INDEX_OUT_OF_BOUNDS, index=index)
        return self._all_tokens[index]

    def tokens_of_owner(self, account: str) -> list[int]:
        """All token ids owned by an account, in index order."""
        return list(self._owned_tokens.get(account, []))

    def token_uri(self, token_id: int | str) -> str:
        """Metadata URI recorded at mint time.

        Raises:
            NotFound: If the token does not exist.
        """
        return self._token_uris.get(self._require_exists(token_id), "")

    # ===== APPROVALS =====

    def get_approved(self, token_id: int | str) -> str:
        """Account approved for a single token, or ZERO_ADDRESS.

        Raises:
            NotFound: If the token does not exist.
        """
        tid = self._require_exists(token_id)
        return self._token_approvals.get(tid, ZERO_ADDRESS)

    def is_approved_for_all(self, owner: str, operator: str) -> bool:
        """Check whether operator may manage every token of owner."""
        return operator in self._operator_approvals.get(owner, set())

    def approve(self, caller: str, to: str, token_id: int | str) -> Receipt:
        """Approve ``to`` to transfer one token. ZERO_ADDRESS clears it.

        The caller must be the owner or an operator approved for all of the
        owner's tokens.
        """
        require_account(caller, "caller")
        require_account(to, "approved account")
        tid = self._require_exists(token_id)
        owner = self._owners[tid]
        if to == owner:
            raise self._reject("approve", InvalidArgument(MSG_APPROVAL_TO_CURRENT_OWNER))
        if caller != owner and not self.is_approved_for_all(owner, caller):
            raise self._reject(
                "approve",
                Unauthorized(MSG_APPROVE_NOT_OWNER_NOR_APPROVED_FOR_ALL, caller=caller, token_id=tid),
            )

        events: list[dict[str, Any]] = []
        if to == ZERO_ADDRESS:
            self._token_approvals.pop(tid, None)
        else:
            self._token_approvals[tid] = to
        self._emit(events, "Approval", owner=owner, approved=to, token_id=tid)
        return self._receipt("approve", caller, events, tid)

    def set_approval_for_all(self, caller: str, operator: str, approved: bool) -> Receipt:
        """Grant or withdraw an operator's right to manage all caller's tokens."""
        require_account(caller, "caller")
        require_account(operator, "operator")
        if operator == caller:
            raise self._reject("set_approval_for_all", InvalidArgument(MSG_APPROVE_TO_CALLER))

        events: list[dict[str, Any]] = []
        operators = self._operator_approvals.setdefault(caller, set())
        if approved:
            operators.add(operator)
        else:
            operators.discard(operator)
        self._emit(events, "ApprovalForAll", owner=caller, operator=operator, approved=bool(approved))
        return self._receipt("set_approval_for_all", caller, events)

    # ===== TRANSFERS =====

    def transfer_from(
        self, caller: str, from_: str, to: str, token_id: int | str
    ) -> Receipt:
        """Move a token from its owner to another account.

        Raises:
            NotFound: If the token does not exist.
            Unauthorized: If caller is neither owner nor approved, or
                ``from_`` is not the current owner.
            InvalidArgument: If ``to`` is the zero address.
        """
        require_account(caller, "caller")
        try:
            tid = self._require_exists(token_id)
        except NotFound as exc:
            raise self._reject("transfer_from", exc) from None
        if not self._is_approved_or_owner(caller, tid):
            raise self._reject(
                "transfer_from",
                Unauthorized(MSG_TRANSFER_NOT_OWNER_NOR_APPROVED, caller=caller, token_id=tid),
            )
        if self._owners[tid] != from_:
            raise self._reject(
                "transfer_from",
                Unauthorized(MSG_TRANSFER_FROM_INCORRECT_OWNER, code=ErrorCode.NOT_OWNER, token_id=tid),
            )
        require_account(to, "recipient")
        if to == ZERO_ADDRESS:
            raise self._reject("transfer_from", InvalidArgument(MSG_TRANSFER_TO_ZERO))

        events: list[dict[str, Any]] = []
        self._transfer(from_, to, tid, events)
        logger.debug("%s: token %d transferred %s -> %s", self._symbol, tid, from_, to)
        return self._receipt("transfer_from", caller, events, tid)

    # ===== INTERNAL PRIMITIVES =====

    def _require_exists(self, token_id: int | str) -> int:
        """Normalize a token id and check it is live.

        Raises:
            NotFound: If the token does not exist (including burned ids and
                ids that are not valid positive integers).
        """
        try:
            tid = to_token_id(token_id)
        except InvalidArgument:
            raise NotFound(MSG_NONEXISTENT_TOKEN, token_id=token_id) from None
        if tid not in self._owners:
            raise NotFound(MSG_NONEXISTENT_TOKEN, token_id=tid)
        return tid

    def _is_approved_or_owner(self, spender: str, token_id: int) -> bool:
        owner = self._owners[token_id]
        return (
            spender == owner
            or self._token_approvals.get(token_id) == spender
            or self.is_approved_for_all(owner, spender)
        )

    def _check_mint(self, to: str, token_id: int) -> None:
        """Validate a mint without mutating anything."""
        require_account(to, "recipient")
        if to == ZERO_ADDRESS:
            raise InvalidArgument(MSG_MINT_TO_ZERO)
        if token_id in self._owners or token_id in self._burned:
            raise AlreadyExists(MSG_TOKEN_ALREADY_MINTED, token_id=token_id)

    def _mint(self, to: str, token_id: int, uri: str, events: list[dict[str, Any]]) -> None:
        """Create a token. Raises AlreadyExists for a live or burned id."""
        self._check_mint(to, token_id)
        self._owners[token_id] = to
        self._owned_tokens.setdefault(to, []).append(token_id)
        self._all_tokens.append(token_id)
        if uri:
            self._token_uris[token_id] = uri
        self._emit(events, "Transfer", **{"from": ZERO_ADDRESS, "to": to, "token_id": token_id})

    def _burn(self, token_id: int, events: list[dict[str, Any]]) -> None:
        """Destroy a live token. The id can never be minted again."""
        owner = self._owners.pop(token_id)
        self._remove_from_owner(owner, token_id)
        self._all_tokens.remove(token_id)
        self._token_uris.pop(token_id, None)
        self._token_approvals.pop(token_id, None)
        self._burned.add(token_id)
        self._emit(events, "Transfer", **{"from": owner, "to": ZERO_ADDRESS, "token_id": token_id})

    def _transfer(self, from_: str, to: str, token_id: int, events: list[dict[str, Any]]) -> None:
        self._before_token_transfer(from_, to, token_id, events)
        self._token_approvals.pop(token_id, None)
        self._remove_from_owner(from_, token_id)
        self._owners[token_id] = to
        self._owned_tokens.setdefault(to, []).append(token_id)
        self._emit(events, "Transfer", **{"from": from_, "to": to, "token_id": token_id})

    def _before_token_transfer(
        self, from_: str, to: str, token_id: int, events: list[dict[str, Any]]
    ) -> None:
        """Hook run before an owner-to-owner move. No-op by default."""

    def _remove_from_owner(self, owner: str, token_id: int) -> None:
        owned = self._owned_tokens[owner]
        owned.remove(token_id)
        if not owned:
            del self._owned_tokens[owner]

    # ===== EVENTS & RECEIPTS =====

    def _emit(self, events: list[dict[str, Any]], event_type: str, **data: Any) -> None:
        """Log an event and collect it for the current call's receipt."""
        event = self.event_logger.log(event_type, {"registry": self._symbol, **data})
        events.append(dict(event))

    def _receipt(
        self,
        action: str,
        caller: str,
        events: list[dict[str, Any]],
        token_id: int | None = None,
    ) -> Receipt:
        self._tx_count += 1
        return Receipt(
            action=action,
            caller=caller,
            sequence=self._tx_count,
            token_id=token_id,
            events=events,
        )

    def _reject(self, action: str, exc: RegistryError) -> RegistryError:
        """Log a rejected call and hand the exception back for raising."""
        logger.warning("%s %s rejected: %s", self._symbol, action, exc.message)
        return exc
