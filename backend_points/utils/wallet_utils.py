"""Wallet validation utilities."""

from solders.pubkey import Pubkey

from backend_points.core.exceptions import InvalidWalletError


def is_valid_wallet(w: str) -> bool:
    """Return True if w is a valid Solana wallet (Pubkey) address."""
    try:
        Pubkey.from_string(w.strip())
        return True
    except ValueError:
        return False


def require_wallet(w: str | None) -> str:
    """Return the stripped wallet or raise InvalidWalletError."""
    if w is None or not w.strip():
        raise InvalidWalletError("wallet must be non-empty")
    w = w.strip()
    if not is_valid_wallet(w):
        raise InvalidWalletError(f"Invalid Solana wallet: {w}")
    return w
