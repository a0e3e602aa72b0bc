"""RPC client for fetching and updating NFT rarity and staking accounts."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional, Protocol, Sequence

import base58  # type: ignore[import-untyped]
from solana.rpc.types import MemcmpOpts  # type: ignore[import-untyped]
from solders.instruction import Instruction  # type: ignore[import-untyped]
from solders.keypair import Keypair  # type: ignore[import-untyped]
from solders.pubkey import Pubkey  # type: ignore[import-untyped]
from solders.signature import Signature  # type: ignore[import-untyped]
from solders.transaction import Transaction  # type: ignore[import-untyped]

from nftstake.config import (
    RARITY_PROGRAM_IDS,
    RPC_URL_ENV_VAR,
    SOLANA_RPC_URLS,
    STAKING_PROGRAM_IDS,
)
from nftstake.discriminator import DISCRIMINATOR_RARITY_INFO, DISCRIMINATOR_SIZE
from nftstake.errors import NotFoundError
from nftstake.reconcile import reconcile_all
from nftstake.rpc import new_rpc_client
from nftstake.state import (
    POOL_INFO_SPACE,
    LinkedPair,
    PoolInfo,
    PoolInfoAccount,
    RarityInfo,
    RarityInfoAccount,
)

logger = logging.getLogger(__name__)

# Both account types store the admin key right after the discriminator.
ADMIN_OFFSET = DISCRIMINATOR_SIZE


class SolanaClient(Protocol):
    def get_account_info(self, pubkey: Pubkey) -> Any: ...

    def get_program_accounts(
        self, pubkey: Pubkey, encoding: str = ..., filters: Any = ...
    ) -> Any: ...

    def get_latest_blockhash(self) -> Any: ...

    def send_transaction(self, txn: Transaction) -> Any: ...


class Client:
    """Client for the NFT rarity and staking programs."""

    def __init__(
        self,
        solana_rpc: SolanaClient,
        rarity_program_id: Pubkey,
        staking_program_id: Pubkey,
    ) -> None:
        self._solana_rpc = solana_rpc
        self.rarity_program_id = rarity_program_id
        self.staking_program_id = staking_program_id

    @classmethod
    def from_env(cls, env: str) -> Client:
        """Create a client configured for the given environment.

        Args:
            env: Environment name ("mainnet-beta", "devnet", "localnet").
                The NFTSTAKE_RPC_URL environment variable overrides the RPC URL.
        """
        url = os.environ.get(RPC_URL_ENV_VAR) or SOLANA_RPC_URLS[env]
        return cls(
            new_rpc_client(url),
            Pubkey.from_string(RARITY_PROGRAM_IDS[env]),
            Pubkey.from_string(STAKING_PROGRAM_IDS[env]),
        )

    @classmethod
    def mainnet_beta(cls) -> Client:
        return cls.from_env("mainnet-beta")

    @classmethod
    def devnet(cls) -> Client:
        return cls.from_env("devnet")

    @classmethod
    def localnet(cls) -> Client:
        return cls.from_env("localnet")

    # -- Reads --

    def fetch_rarity_infos(self, admin: Optional[Pubkey] = None) -> list[RarityInfo]:
        filters: list = [
            MemcmpOpts(offset=0, bytes=base58.b58encode(DISCRIMINATOR_RARITY_INFO).decode())
        ]
        if admin is not None:
            filters.append(MemcmpOpts(offset=ADMIN_OFFSET, bytes=str(admin)))
        return [
            RarityInfo.from_account(addr, RarityInfoAccount.from_bytes(data))
            for addr, data in self._fetch_program_accounts(self.rarity_program_id, filters)
        ]

    def fetch_pool_infos(self, admin: Optional[Pubkey] = None) -> list[PoolInfo]:
        filters: list = [POOL_INFO_SPACE]
        if admin is not None:
            filters.append(MemcmpOpts(offset=ADMIN_OFFSET, bytes=str(admin)))
        return [
            PoolInfo.from_account(addr, PoolInfoAccount.from_bytes(data))
            for addr, data in self._fetch_program_accounts(self.staking_program_id, filters)
        ]

    def fetch_all(self, admin: Optional[Pubkey] = None) -> list[LinkedPair]:
        """Fetch pools and rarity infos, optionally for one admin, and link them."""
        pools = self.fetch_pool_infos(admin)
        rarity_infos = self.fetch_rarity_infos(admin)
        pairs = reconcile_all(rarity_infos, pools)
        logger.debug(
            "linked %d pairs from %d rarity infos and %d pools",
            len(pairs),
            len(rarity_infos),
            len(pools),
        )
        return pairs

    def fetch_rarity_info(self, address: Pubkey) -> RarityInfo:
        data = self._fetch_account_data(address)
        return RarityInfo.from_account(address, RarityInfoAccount.from_bytes(data))

    def fetch_pool_info(self, address: Pubkey) -> PoolInfo:
        data = self._fetch_account_data(address)
        return PoolInfo.from_account(address, PoolInfoAccount.from_bytes(data))

    # -- Writes --

    def send_batch(
        self,
        instructions: Sequence[Instruction],
        payer: Keypair,
        signers: Sequence[Keypair] = (),
    ) -> Signature:
        """Sign ``instructions`` as one transaction and submit it."""
        blockhash = self._solana_rpc.get_latest_blockhash().value.blockhash
        txn = Transaction.new_signed_with_payer(
            list(instructions), payer.pubkey(), [payer, *signers], blockhash
        )
        resp = self._solana_rpc.send_transaction(txn)
        logger.debug("sent %d instructions: %s", len(instructions), resp.value)
        return resp.value

    def send_batches(
        self,
        batches: Sequence[Sequence[Instruction]],
        payer: Keypair,
        signers: Sequence[Keypair] = (),
    ) -> list[Signature]:
        """Submit each batch in order, stopping at the first failure."""
        return [self.send_batch(batch, payer, signers) for batch in batches]

    # -- Internal helpers --

    def _fetch_account_data(self, address: Pubkey) -> bytes:
        resp = self._solana_rpc.get_account_info(address)
        if resp.value is None:
            raise NotFoundError(f"account not found: {address}")
        return bytes(resp.value.data)

    def _fetch_program_accounts(
        self, program_id: Pubkey, filters: list
    ) -> list[tuple[Pubkey, bytes]]:
        resp = self._solana_rpc.get_program_accounts(
            program_id,
            encoding="base64",
            filters=filters,
        )
        return [(acct.pubkey, bytes(acct.account.data)) for acct in resp.value]
