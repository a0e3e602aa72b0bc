"""Instruction batches for creating and updating rarity and pool infos.

Each ``list[Instruction]`` returned here is meant to be sent as one
transaction. Operations that need several transactions return them in
submission order.
"""

from __future__ import annotations

import logging
from typing import Sequence, TypeVar

from solders.instruction import Instruction  # type: ignore[import-untyped]
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from nftstake.config import MAX_INSTRUCTIONS_PER_TXN, MAX_MINTS_PER_APPEND
from nftstake.errors import BatchLimitExceededError, RarityMismatchError
from nftstake.instructions import (
    build_append_mint_to_rarity_info_ix,
    build_create_ata_idempotent_ix,
    build_create_rarity_info_account_ix,
    build_initiate_pool_info_ix,
    build_initiate_rarity_info_ix,
    build_stake_ix,
    build_unstake_ix,
    build_update_pool_info_admin_ix,
    build_update_rarity_info_admin_ix,
)
from nftstake.pda import get_associated_token_address
from nftstake.state import PoolInfo, RarityInfo, encode_name

logger = logging.getLogger(__name__)

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split ``items`` into consecutive chunks of at most ``size``, keeping order."""
    if size <= 0:
        raise BatchLimitExceededError(f"chunk size must be positive, got {size}")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def pack_groups(
    groups: Sequence[list[Instruction]],
    limit: int = MAX_INSTRUCTIONS_PER_TXN,
) -> list[list[Instruction]]:
    """Pack instruction groups into transactions of at most ``limit`` instructions.

    A group is never split across transactions.
    """
    batches: list[list[Instruction]] = []
    current: list[Instruction] = []
    for group in groups:
        if len(group) > limit:
            raise BatchLimitExceededError(
                f"instruction group of {len(group)} exceeds {limit} per transaction"
            )
        if len(current) + len(group) > limit:
            batches.append(current)
            current = []
        current.extend(group)
    if current:
        batches.append(current)
    return batches


# ---------------------------------------------------------------------------
# Rarity program
# ---------------------------------------------------------------------------


def initiate_rarity_info_txn(
    rarity_info: RarityInfo, program_id: Pubkey
) -> list[Instruction]:
    """Allocate the rarity info account at its derived address, then initialize it."""
    # Names are checked before derivation so a bad name leaves the state unchanged.
    encode_name(rarity_info.collection)
    encode_name(rarity_info.rarity)
    resolved = rarity_info.find_key_and_seed(program_id)
    return [
        build_create_rarity_info_account_ix(
            rarity_info.admin, resolved.address, resolved.seed, program_id
        ),
        build_initiate_rarity_info_ix(
            rarity_info.admin,
            resolved.address,
            rarity_info.collection,
            rarity_info.rarity,
            program_id,
        ),
    ]


def update_rarity_info_admin_txn(
    rarity_info: RarityInfo, new_admin: Pubkey, program_id: Pubkey
) -> list[Instruction]:
    return [
        build_update_rarity_info_admin_ix(
            rarity_info.admin, rarity_info.key, new_admin, program_id
        )
    ]


def append_mint_to_rarity_info_txn(
    rarity_info: RarityInfo,
    mints: Sequence[Pubkey],
    program_id: Pubkey,
    mints_per_ix: int = MAX_MINTS_PER_APPEND,
) -> list[list[Instruction]]:
    """One append instruction per transaction, each carrying up to ``mints_per_ix`` mints."""
    if mints_per_ix > MAX_MINTS_PER_APPEND:
        raise BatchLimitExceededError(
            f"{mints_per_ix} mints per instruction exceeds {MAX_MINTS_PER_APPEND}"
        )
    txns = [
        [
            build_append_mint_to_rarity_info_ix(
                rarity_info.admin, rarity_info.key, chunk, program_id
            )
        ]
        for chunk in chunked(mints, mints_per_ix)
    ]
    logger.debug(
        "split %d mints into %d append transactions for %s",
        len(mints),
        len(txns),
        rarity_info.key,
    )
    return txns


# ---------------------------------------------------------------------------
# Staking program
# ---------------------------------------------------------------------------


def initiate_pool_info_txn(
    pool_info: PoolInfo,
    rarity_info: RarityInfo,
    rarity_program_id: Pubkey,
    staking_program_id: Pubkey,
) -> list[Instruction]:
    """Create the pool vault if absent, then initialize the pool info."""
    resolved = rarity_info.resolve(rarity_program_id)
    if resolved.address != pool_info.rarity_info:
        raise RarityMismatchError(
            f"pool info references {pool_info.rarity_info}, "
            f"rarity info derives to {resolved.address}"
        )
    addrs = pool_info.find_key_and_authority_and_vault(staking_program_id)
    return [
        build_create_ata_idempotent_ix(
            pool_info.admin, addrs.vault, addrs.authority, pool_info.prove_token_mint
        ),
        build_initiate_pool_info_ix(
            pool_info.admin,
            addrs.key,
            pool_info.rarity_info,
            pool_info.prove_token_mint,
            addrs.authority,
            addrs.vault,
            staking_program_id,
        ),
    ]


def update_pool_info_admin_txn(
    new_admin: Pubkey, pool_info: PoolInfo, program_id: Pubkey
) -> list[Instruction]:
    return [
        build_update_pool_info_admin_ix(
            pool_info.admin, pool_info.key, new_admin, program_id
        )
    ]


def stake_txn(
    pool_info: PoolInfo,
    user: Pubkey,
    nft_mints: Sequence[Pubkey],
    program_id: Pubkey,
) -> list[list[Instruction]]:
    """Stake each NFT from the user's associated token account.

    Per NFT the vault token account is created if absent and the stake
    instruction follows it in the same transaction. The user's prove token
    account is created once, at the start of the first transaction.
    """
    addrs = pool_info.resolved
    user_prove = get_associated_token_address(user, pool_info.prove_token_mint)
    groups = []
    for mint in nft_mints:
        nft_vault = get_associated_token_address(addrs.authority, mint)
        groups.append(
            [
                build_create_ata_idempotent_ix(user, nft_vault, addrs.authority, mint),
                build_stake_ix(
                    user,
                    addrs.key,
                    pool_info.rarity_info,
                    mint,
                    get_associated_token_address(user, mint),
                    nft_vault,
                    addrs.authority,
                    addrs.vault,
                    user_prove,
                    program_id,
                ),
            ]
        )
    if groups:
        create_user_prove = build_create_ata_idempotent_ix(
            user, user_prove, user, pool_info.prove_token_mint
        )
        groups[0] = [create_user_prove] + groups[0]
    return pack_groups(groups)


def unstake_txn(
    pool_info: PoolInfo,
    user: Pubkey,
    nft_mints: Sequence[Pubkey],
    program_id: Pubkey,
) -> list[list[Instruction]]:
    """Return each NFT to the user's associated token account, creating it if absent."""
    addrs = pool_info.resolved
    user_prove = get_associated_token_address(user, pool_info.prove_token_mint)
    groups = []
    for mint in nft_mints:
        user_nft = get_associated_token_address(user, mint)
        groups.append(
            [
                build_create_ata_idempotent_ix(user, user_nft, user, mint),
                build_unstake_ix(
                    user,
                    addrs.key,
                    pool_info.rarity_info,
                    mint,
                    user_nft,
                    get_associated_token_address(addrs.authority, mint),
                    addrs.authority,
                    addrs.vault,
                    user_prove,
                    program_id,
                ),
            ]
        )
    return pack_groups(groups)
