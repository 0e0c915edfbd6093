"""Origin checks performed before a call reaches a pallet."""

from __future__ import annotations

from src.core.exceptions import BadOrigin
from src.core.types import AccountId, Origin, is_account_id


def ensure_signed(origin: Origin) -> AccountId:
    """Return the signing account, or raise ``BadOrigin``.

    Root and unsigned origins are rejected, as are signed origins whose
    identity is not an int, str, bytes or non-empty tuple of those.
    """

    if origin.kind != "signed" or origin.account is None:
        raise BadOrigin(f"Expected a signed origin, got '{origin.kind}'.")
    if not is_account_id(origin.account):
        raise BadOrigin(f"Unsupported signer identity {origin.account!r}.")
    return origin.account
