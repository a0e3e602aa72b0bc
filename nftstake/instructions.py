"""Instruction builders for the rarity and staking programs.

Instruction data is the Anchor sighash followed by the Borsh-encoded
arguments.
"""

from __future__ import annotations

from typing import Sequence

from borsh_construct import CStruct, U8, Vec  # type: ignore[import-untyped]
from solders.instruction import AccountMeta, Instruction  # type: ignore[import-untyped]
from solders.pubkey import Pubkey  # type: ignore[import-untyped]
from solders.system_program import (  # type: ignore[import-untyped]
    ID as SYS_PROGRAM_ID,
    CreateAccountWithSeedParams,
    create_account_with_seed,
)

from nftstake.config import RARITY_INFO_LAMPORTS
from nftstake.discriminator import sighash
from nftstake.pda import ASSOCIATED_TOKEN_PROGRAM_ID, TOKEN_PROGRAM_ID
from nftstake.state import NAME_SIZE, RARITY_INFO_SPACE, encode_name

InitiateRarityInfoLayout = CStruct(
    "collection" / U8[NAME_SIZE],
    "rarity" / U8[NAME_SIZE],
)
UpdateAdminLayout = CStruct("new_admin" / U8[32])
AppendMintLayout = CStruct("mint_list" / Vec(U8[32]))

# Associated token account program instruction tag.
ATA_CREATE_IDEMPOTENT = 1


def encode_initiate_rarity_info(collection: str, rarity: str) -> bytes:
    data = InitiateRarityInfoLayout.build(
        {
            "collection": list(encode_name(collection)),
            "rarity": list(encode_name(rarity)),
        }
    )
    return sighash("initiate_rarity_info") + data


def encode_update_admin(name: str, new_admin: Pubkey) -> bytes:
    return sighash(name) + UpdateAdminLayout.build({"new_admin": list(bytes(new_admin))})


def encode_append_mint(mints: Sequence[Pubkey]) -> bytes:
    data = AppendMintLayout.build({"mint_list": [list(bytes(m)) for m in mints]})
    return sighash("append_mint_to_rarity_info") + data


# ---------------------------------------------------------------------------
# System and token programs
# ---------------------------------------------------------------------------


def build_create_rarity_info_account_ix(
    admin: Pubkey, rarity_info: Pubkey, seed: str, program_id: Pubkey
) -> Instruction:
    return create_account_with_seed(
        CreateAccountWithSeedParams(
            from_pubkey=admin,
            to_pubkey=rarity_info,
            base=admin,
            seed=seed,
            lamports=RARITY_INFO_LAMPORTS,
            space=RARITY_INFO_SPACE,
            owner=program_id,
        )
    )


def build_create_ata_idempotent_ix(
    payer: Pubkey, ata: Pubkey, owner: Pubkey, mint: Pubkey
) -> Instruction:
    accounts = [
        AccountMeta(payer, True, True),
        AccountMeta(ata, False, True),
        AccountMeta(owner, False, False),
        AccountMeta(mint, False, False),
        AccountMeta(SYS_PROGRAM_ID, False, False),
        AccountMeta(TOKEN_PROGRAM_ID, False, False),
    ]
    return Instruction(
        ASSOCIATED_TOKEN_PROGRAM_ID, bytes([ATA_CREATE_IDEMPOTENT]), accounts
    )


# ---------------------------------------------------------------------------
# Rarity program
# ---------------------------------------------------------------------------


def build_initiate_rarity_info_ix(
    admin: Pubkey,
    rarity_info: Pubkey,
    collection: str,
    rarity: str,
    program_id: Pubkey,
) -> Instruction:
    accounts = [
        AccountMeta(admin, True, True),
        AccountMeta(rarity_info, False, True),
    ]
    return Instruction(
        program_id, encode_initiate_rarity_info(collection, rarity), accounts
    )


def build_update_rarity_info_admin_ix(
    admin: Pubkey, rarity_info: Pubkey, new_admin: Pubkey, program_id: Pubkey
) -> Instruction:
    accounts = [
        AccountMeta(admin, True, False),
        AccountMeta(rarity_info, False, True),
    ]
    data = encode_update_admin("update_rarity_info_admin", new_admin)
    return Instruction(program_id, data, accounts)


def build_append_mint_to_rarity_info_ix(
    admin: Pubkey, rarity_info: Pubkey, mints: Sequence[Pubkey], program_id: Pubkey
) -> Instruction:
    accounts = [
        AccountMeta(admin, True, False),
        AccountMeta(rarity_info, False, True),
    ]
    return Instruction(program_id, encode_append_mint(mints), accounts)


# ---------------------------------------------------------------------------
# Staking program
# ---------------------------------------------------------------------------


def build_initiate_pool_info_ix(
    admin: Pubkey,
    pool_info: Pubkey,
    rarity_info: Pubkey,
    prove_token_mint: Pubkey,
    prove_token_authority: Pubkey,
    prove_token_vault: Pubkey,
    program_id: Pubkey,
) -> Instruction:
    accounts = [
        AccountMeta(admin, True, True),
        AccountMeta(pool_info, False, True),
        AccountMeta(rarity_info, False, False),
        AccountMeta(prove_token_mint, False, False),
        AccountMeta(prove_token_authority, False, False),
        AccountMeta(prove_token_vault, False, False),
        AccountMeta(SYS_PROGRAM_ID, False, False),
        AccountMeta(TOKEN_PROGRAM_ID, False, False),
    ]
    return Instruction(program_id, sighash("initiate_pool_info"), accounts)


def build_update_pool_info_admin_ix(
    admin: Pubkey, pool_info: Pubkey, new_admin: Pubkey, program_id: Pubkey
) -> Instruction:
    accounts = [
        AccountMeta(admin, True, False),
        AccountMeta(pool_info, False, True),
    ]
    data = encode_update_admin("update_pool_info_admin", new_admin)
    return Instruction(program_id, data, accounts)


def _build_stake_ix(
    name: str,
    user: Pubkey,
    pool_info: Pubkey,
    rarity_info: Pubkey,
    nft_mint: Pubkey,
    user_nft_account: Pubkey,
    nft_vault: Pubkey,
    prove_token_authority: Pubkey,
    prove_token_vault: Pubkey,
    user_prove_token_account: Pubkey,
    program_id: Pubkey,
) -> Instruction:
    accounts = [
        AccountMeta(user, True, True),
        AccountMeta(pool_info, False, True),
        AccountMeta(rarity_info, False, False),
        AccountMeta(nft_mint, False, False),
        AccountMeta(user_nft_account, False, True),
        AccountMeta(nft_vault, False, True),
        AccountMeta(prove_token_authority, False, False),
        AccountMeta(prove_token_vault, False, True),
        AccountMeta(user_prove_token_account, False, True),
        AccountMeta(TOKEN_PROGRAM_ID, False, False),
    ]
    return Instruction(program_id, sighash(name), accounts)


def build_stake_ix(
    user: Pubkey,
    pool_info: Pubkey,
    rarity_info: Pubkey,
    nft_mint: Pubkey,
    user_nft_account: Pubkey,
    nft_vault: Pubkey,
    prove_token_authority: Pubkey,
    prove_token_vault: Pubkey,
    user_prove_token_account: Pubkey,
    program_id: Pubkey,
) -> Instruction:
    return _build_stake_ix(
        "stake", user, pool_info, rarity_info, nft_mint, user_nft_account,
        nft_vault, prove_token_authority, prove_token_vault,
        user_prove_token_account, program_id,
    )


def build_unstake_ix(
    user: Pubkey,
    pool_info: Pubkey,
    rarity_info: Pubkey,
    nft_mint: Pubkey,
    user_nft_account: Pubkey,
    nft_vault: Pubkey,
    prove_token_authority: Pubkey,
    prove_token_vault: Pubkey,
    user_prove_token_account: Pubkey,
    program_id: Pubkey,
) -> Instruction:
    return _build_stake_ix(
        "unstake", user, pool_info, rarity_info, nft_mint, user_nft_account,
        nft_vault, prove_token_authority, prove_token_vault,
        user_prove_token_account, program_id,
    )
