"""Address derivation for rarity info, pool info and vault accounts."""

from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import dataclass
from typing import Union

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from nftstake.config import MAX_NONCE
from nftstake.errors import InvalidSeedLengthError, NonceNotFoundError
from nftstake.seed import POOL_INFO_SEED, encode_rarity_seed

logger = logging.getLogger(__name__)

MAX_SEED_LEN = 32

SEED_POOL_INFO = POOL_INFO_SEED.encode()
SEED_PROVE_TOKEN_VAULT = b"prove_token_vault"

TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_string(
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
)


def derive_from_seed(base: Pubkey, seed: str, owner_program_id: Pubkey) -> Pubkey:
    """Derive a create-with-seed address. Raises InvalidSeedLengthError past 32 bytes."""
    seed_len = len(seed.encode("utf-8"))
    if seed_len > MAX_SEED_LEN:
        raise InvalidSeedLengthError(
            f"seed is {seed_len} bytes, max is {MAX_SEED_LEN}"
        )
    return Pubkey.create_with_seed(base, seed, owner_program_id)


def derive_program_address(
    seeds: list[bytes], program_id: Pubkey
) -> tuple[Pubkey, int]:
    return Pubkey.find_program_address(seeds, program_id)


def derive_rarity_info_address(
    admin: Pubkey, collection: str, rarity: str, nonce: int, program_id: Pubkey
) -> Pubkey:
    seed = encode_rarity_seed(collection, rarity, nonce)
    return derive_from_seed(admin, seed, program_id)


def derive_pool_info_pda(
    rarity_info: Pubkey, program_id: Pubkey
) -> tuple[Pubkey, int]:
    return derive_program_address([bytes(rarity_info), SEED_POOL_INFO], program_id)


def derive_prove_token_authority_pda(
    pool_info: Pubkey, program_id: Pubkey
) -> tuple[Pubkey, int]:
    return derive_program_address(
        [bytes(pool_info), SEED_PROVE_TOKEN_VAULT], program_id
    )


def get_associated_token_address(owner: Pubkey, mint: Pubkey) -> Pubkey:
    addr, _ = Pubkey.find_program_address(
        [bytes(owner), bytes(TOKEN_PROGRAM_ID), bytes(mint)],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )
    return addr


# ---------------------------------------------------------------------------
# Nonce search
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NonceFound:
    nonce: int
    seed: str


@dataclass(frozen=True)
class NonceNotFound:
    tried: int


NonceSearchResult = Union[NonceFound, NonceNotFound]


def search_nonce(
    admin: Pubkey,
    collection: str,
    rarity: str,
    address: Pubkey,
    program_id: Pubkey,
    max_nonce: int = MAX_NONCE,
) -> NonceSearchResult:
    """Replay nonces 0..max_nonce until one reproduces ``address``.

    The nonce is never stored on chain, only the address derived from it, so
    the only way back is to try every candidate in order.
    """
    for nonce in range(max_nonce + 1):
        seed = encode_rarity_seed(collection, rarity, nonce)
        if derive_from_seed(admin, seed, program_id) == address:
            logger.debug(
                "found nonce %d for %s/%s at %s", nonce, collection, rarity, address
            )
            return NonceFound(nonce, seed)
    return NonceNotFound(tried=max_nonce + 1)


def next_free_nonce(
    admin: Pubkey,
    collection: str,
    rarity: str,
    taken: Collection[Pubkey],
    program_id: Pubkey,
    max_nonce: int = MAX_NONCE,
) -> int:
    """Return the lowest nonce whose derived address is not already in ``taken``."""
    for nonce in range(max_nonce + 1):
        addr = derive_rarity_info_address(admin, collection, rarity, nonce, program_id)
        if addr not in taken:
            return nonce
    raise NonceNotFoundError(
        f"all nonces 0..{max_nonce} are taken for {collection}/{rarity}"
    )
