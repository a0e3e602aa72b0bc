"""Live-network compatibility tests.

These tests fetch real rarity and pool accounts and check that decoding,
pairing and nonce recovery agree with what the programs stored.

Run with:
    NFTSTAKE_COMPAT_TEST=1 NFTSTAKE_ENV=devnet uv run pytest -k compat -v

Requires network access to a Solana RPC node.
"""

import os

import pytest

from nftstake.client import Client
from nftstake.errors import NonceNotFoundError


def skip_unless_compat() -> None:
    if not os.environ.get("NFTSTAKE_COMPAT_TEST"):
        pytest.skip("set NFTSTAKE_COMPAT_TEST=1 to run compatibility tests against a live cluster")


def compat_client() -> Client:
    return Client.from_env(os.environ.get("NFTSTAKE_ENV", "devnet"))


class TestCompatFetchAll:
    def test_pairs_link(self) -> None:
        skip_unless_compat()
        pairs = compat_client().fetch_all()
        for pair in pairs:
            assert pair.pool_info.rarity_info == pair.rarity_info.key
            assert len(pair.rarity_info.mint_list) <= 512

    def test_pool_addresses_rederive(self) -> None:
        skip_unless_compat()
        client = compat_client()
        for pair in client.fetch_all():
            stored = pair.pool_info.resolved
            assert pair.pool_info.find_key_and_authority_and_vault(client.staking_program_id) == stored

    def test_nonce_recovery(self) -> None:
        skip_unless_compat()
        client = compat_client()
        for info in client.fetch_rarity_infos():
            try:
                resolved = info.find_nonce_and_seed(client.rarity_program_id)
            except NonceNotFoundError:
                continue
            assert resolved.address == info.key
