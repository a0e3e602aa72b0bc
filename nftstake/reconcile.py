"""Pairing of rarity infos with pool infos, and NFT mint matching."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from nftstake.state import LinkedPair, PoolInfo, RarityInfo

logger = logging.getLogger(__name__)


@dataclass
class AssetMatch:
    pair: LinkedPair
    index: int  # position of pair in the list passed to match_assets
    mint: Pubkey


def index_pools_by_rarity(pool_infos: Iterable[PoolInfo]) -> dict[Pubkey, PoolInfo]:
    """Index pools by the rarity info they reference.

    Only one pool should reference a given rarity info. When several do, the
    first one in input order wins and the rest are ignored.
    """
    index: dict[Pubkey, PoolInfo] = {}
    for pool in pool_infos:
        if pool.rarity_info in index:
            logger.debug(
                "ignoring duplicate pool %s for rarity info %s",
                pool.addresses.key if pool.addresses else "<unresolved>",
                pool.rarity_info,
            )
            continue
        index[pool.rarity_info] = pool
    return index


def reconcile_all(
    rarity_infos: Iterable[RarityInfo], pool_infos: Iterable[PoolInfo]
) -> list[LinkedPair]:
    """Link every rarity info to its pool, in rarity info order.

    Rarity infos without a pool are dropped.
    """
    pools = index_pools_by_rarity(pool_infos)
    pairs = []
    for rarity_info in rarity_infos:
        pool = pools.get(rarity_info.key)
        if pool is None:
            logger.debug(
                "rarity info %s (%s/%s) has no pool",
                rarity_info.key,
                rarity_info.collection,
                rarity_info.rarity,
            )
            continue
        pairs.append(LinkedPair(rarity_info, pool))
    return pairs


def match_assets(
    pairs: Sequence[LinkedPair], mints: Iterable[Pubkey]
) -> list[AssetMatch]:
    """Match each mint to the first pair whose allow-list contains it.

    Mints that no pair lists are left out of the result.
    """
    allow_lists = [set(pair.rarity_info.mint_list) for pair in pairs]
    matches = []
    for mint in mints:
        for index, allowed in enumerate(allow_lists):
            if mint in allowed:
                matches.append(AssetMatch(pairs[index], index, mint))
                break
    return matches
