"""Centralized constants for the registry package.

Revert messages and sentinel accounts live here to avoid string literals
scattered across modules.
"""

# The "none" account: unset approvals, operators and the mint/burn side of
# Transfer events
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Revert messages surfaced verbatim to callers
MSG_NOT_MINTER = "x"
MSG_NON_OWNER = "non owner"
MSG_TRANSFER_NOT_OWNER_NOR_APPROVED = "ERC721: transfer caller is not owner nor approved"
MSG_TRANSFER_FROM_INCORRECT_OWNER = "ERC721: transfer from incorrect owner"
MSG_TRANSFER_TO_ZERO = "ERC721: transfer to the zero address"
MSG_MINT_TO_ZERO = "ERC721: mint to the zero address"
MSG_TOKEN_ALREADY_MINTED = "ERC721: token already minted"
MSG_NONEXISTENT_TOKEN = "ERC721: invalid token ID"
MSG_OWNER_INDEX_OUT_OF_BOUNDS = "ERC721Enumerable: owner index out of bounds"
MSG_GLOBAL_INDEX_OUT_OF_BOUNDS = "ERC721Enumerable: global index out of bounds"
MSG_APPROVAL_TO_CURRENT_OWNER = "ERC721: approval to current owner"
MSG_APPROVE_NOT_OWNER_NOR_APPROVED_FOR_ALL = (
    "ERC721: approve caller is not owner nor approved for all"
)
MSG_APPROVE_TO_CALLER = "ERC721: approve to caller"
MSG_RENOUNCE_ONLY_SELF = "AccessControl: can only renounce roles for self"
MSG_UNAUTHORIZED_USER = "Unauthorized user"
