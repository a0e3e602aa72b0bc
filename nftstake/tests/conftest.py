import struct

import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from nftstake.config import RARITY_PROGRAM_IDS, STAKING_PROGRAM_IDS
from nftstake.discriminator import DISCRIMINATOR_POOL_INFO, DISCRIMINATOR_RARITY_INFO
from nftstake.state import (
    RARITY_INFO_SPACE,
    LinkedPair,
    Located,
    PoolAddresses,
    PoolInfo,
    RarityInfo,
    encode_name,
)


def _key(n: int) -> Pubkey:
    return Pubkey.from_bytes(bytes([n]) * 32)


@pytest.fixture
def rarity_program_id() -> Pubkey:
    return Pubkey.from_string(RARITY_PROGRAM_IDS["devnet"])


@pytest.fixture
def staking_program_id() -> Pubkey:
    return Pubkey.from_string(STAKING_PROGRAM_IDS["devnet"])


@pytest.fixture
def key():
    return _key


@pytest.fixture
def rarity_account_data():
    """Build a full-capacity rarity info account, zero filled past the mint list."""

    def build(admin, collection, rarity, mints, discriminator=DISCRIMINATOR_RARITY_INFO):
        data = (
            discriminator
            + bytes(admin)
            + encode_name(collection)
            + encode_name(rarity)
            + struct.pack("<I", len(mints))
            + b"".join(bytes(m) for m in mints)
        )
        return data.ljust(RARITY_INFO_SPACE, b"\x00")

    return build


@pytest.fixture
def pool_account_data():
    def build(admin, mint, rarity_info, authority, vault, total_locked):
        return (
            DISCRIMINATOR_POOL_INFO
            + bytes(admin)
            + bytes(mint)
            + bytes(rarity_info)
            + bytes(authority)
            + bytes(vault)
            + struct.pack("<Q", total_locked)
        )

    return build


@pytest.fixture
def make_pair():
    """Build a linked pair with ``n_mints`` allow-listed mints and ``staked`` locked."""
    counter = iter(range(10, 250))

    def build(collection, rarity, n_mints, staked):
        rarity_key = _key(next(counter))
        mints = [_key(next(counter)) for _ in range(n_mints)]
        rarity_info = RarityInfo(
            admin=_key(1),
            collection=collection,
            rarity=rarity,
            derivation=Located(rarity_key),
            mint_list=mints,
        )
        pool_info = PoolInfo(
            admin=_key(1),
            prove_token_mint=_key(2),
            rarity_info=rarity_key,
            total_staked_amount=staked,
            addresses=PoolAddresses(
                key=_key(next(counter)),
                authority=_key(next(counter)),
                vault=_key(next(counter)),
            ),
        )
        return LinkedPair(rarity_info, pool_info)

    return build
