from nftstake.client import Client
from nftstake.config import (
    MAX_NONCE,
    RARITY_PROGRAM_IDS,
    SOLANA_RPC_URLS,
    STAKING_PROGRAM_IDS,
)
from nftstake.errors import (
    AccountDecodeError,
    BatchLimitExceededError,
    DerivationMismatchError,
    InvalidNonceError,
    InvalidSeedLengthError,
    MissingNonceError,
    NftStakeError,
    NoMatchingCollectionError,
    NonceNotFoundError,
    NotFoundError,
    RarityMismatchError,
    UnresolvedAddressError,
)
from nftstake.pda import (
    NonceFound,
    NonceNotFound,
    derive_from_seed,
    derive_pool_info_pda,
    derive_program_address,
    derive_prove_token_authority_pda,
    derive_rarity_info_address,
    get_associated_token_address,
    next_free_nonce,
    search_nonce,
)
from nftstake.reconcile import AssetMatch, match_assets, reconcile_all
from nftstake.rpc import new_rpc_client
from nftstake.seed import POOL_INFO_SEED, RARITY_INFO_SEED, encode_rarity_seed, encode_seed
from nftstake.state import (
    Assigned,
    LinkedPair,
    Located,
    PoolAddresses,
    PoolInfo,
    PoolInfoAccount,
    RarityInfo,
    RarityInfoAccount,
    Resolved,
)
from nftstake.stats import find_by_pool_address, staked_amount, staked_percentage
from nftstake.transaction import (
    append_mint_to_rarity_info_txn,
    initiate_pool_info_txn,
    initiate_rarity_info_txn,
    stake_txn,
    unstake_txn,
    update_pool_info_admin_txn,
    update_rarity_info_admin_txn,
)

__all__ = [
    "Client",
    "MAX_NONCE",
    "RARITY_PROGRAM_IDS",
    "SOLANA_RPC_URLS",
    "STAKING_PROGRAM_IDS",
    "AccountDecodeError",
    "BatchLimitExceededError",
    "DerivationMismatchError",
    "InvalidNonceError",
    "InvalidSeedLengthError",
    "MissingNonceError",
    "NftStakeError",
    "NoMatchingCollectionError",
    "NonceNotFoundError",
    "NotFoundError",
    "RarityMismatchError",
    "UnresolvedAddressError",
    "NonceFound",
    "NonceNotFound",
    "derive_from_seed",
    "derive_pool_info_pda",
    "derive_program_address",
    "derive_prove_token_authority_pda",
    "derive_rarity_info_address",
    "get_associated_token_address",
    "next_free_nonce",
    "search_nonce",
    "AssetMatch",
    "match_assets",
    "reconcile_all",
    "new_rpc_client",
    "POOL_INFO_SEED",
    "RARITY_INFO_SEED",
    "encode_rarity_seed",
    "encode_seed",
    "Assigned",
    "LinkedPair",
    "Located",
    "PoolAddresses",
    "PoolInfo",
    "PoolInfoAccount",
    "RarityInfo",
    "RarityInfoAccount",
    "Resolved",
    "find_by_pool_address",
    "staked_amount",
    "staked_percentage",
    "append_mint_to_rarity_info_txn",
    "initiate_pool_info_txn",
    "initiate_rarity_info_txn",
    "stake_txn",
    "unstake_txn",
    "update_pool_info_admin_txn",
    "update_rarity_info_admin_txn",
]
