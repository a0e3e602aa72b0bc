"""Staking statistics over linked rarity/pool pairs.

Collection and rarity filters match exactly; an empty string matches all.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from nftstake.errors import NoMatchingCollectionError, NotFoundError
from nftstake.state import LinkedPair


def _filtered(
    pairs: Iterable[LinkedPair], collection: str, rarity: str
) -> Iterator[LinkedPair]:
    for pair in pairs:
        if collection and pair.rarity_info.collection != collection:
            continue
        if rarity and pair.rarity_info.rarity != rarity:
            continue
        yield pair


def staked_percentage(
    pairs: Iterable[LinkedPair], collection: str = "", rarity: str = ""
) -> float:
    """Fraction of allow-listed mints currently staked, in [0, 1]."""
    total = 0
    staked = 0
    for pair in _filtered(pairs, collection, rarity):
        total += len(pair.rarity_info.mint_list)
        staked += pair.pool_info.total_staked_amount
    if total == 0:
        raise NoMatchingCollectionError(
            f"no allow-listed mints for collection={collection!r} rarity={rarity!r}"
        )
    return staked / total


def staked_amount(
    pairs: Iterable[LinkedPair], collection: str = "", rarity: str = ""
) -> int:
    return sum(
        pair.pool_info.total_staked_amount
        for pair in _filtered(pairs, collection, rarity)
    )


def find_by_pool_address(pairs: Iterable[LinkedPair], address: Pubkey) -> LinkedPair:
    for pair in pairs:
        if pair.pool_info.addresses is not None and pair.pool_info.key == address:
            return pair
    raise NotFoundError(f"no pool info at {address}")
