"""Anchor discriminators for the rarity and staking programs.

Accounts are prefixed with sha256("account:<Name>")[:8] and instruction data
with sha256("global:<snake_name>")[:8].
"""

import hashlib

from nftstake.errors import AccountDecodeError

DISCRIMINATOR_SIZE = 8


def _sha256_first8(s: str) -> bytes:
    return hashlib.sha256(s.encode()).digest()[:DISCRIMINATOR_SIZE]


def account_discriminator(name: str) -> bytes:
    return _sha256_first8(f"account:{name}")


def sighash(name: str) -> bytes:
    return _sha256_first8(f"global:{name}")


DISCRIMINATOR_RARITY_INFO = account_discriminator("RarityInfo")
DISCRIMINATOR_POOL_INFO = account_discriminator("PoolInfo")


def validate_discriminator(data: bytes, expected: bytes) -> None:
    """Validate the 8-byte discriminator prefix. Raises AccountDecodeError on mismatch."""
    if len(data) < DISCRIMINATOR_SIZE:
        raise AccountDecodeError(
            f"data too short: {len(data)} bytes, need at least {DISCRIMINATOR_SIZE}"
        )
    got = data[:DISCRIMINATOR_SIZE]
    if got != expected:
        raise AccountDecodeError(
            f"invalid discriminator: got {got.hex()}, want {expected.hex()}"
        )
