#!/usr/bin/env python3
"""Example CLI that fetches NFT staking pools and prints staking statistics."""

import argparse
import logging
import sys

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from nftstake.client import Client
from nftstake.errors import NoMatchingCollectionError
from nftstake.reconcile import match_assets
from nftstake.stats import staked_amount, staked_percentage


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch NFT staking pools")
    parser.add_argument(
        "--env",
        default="mainnet-beta",
        choices=["mainnet-beta", "devnet", "localnet"],
        help="Environment to connect to",
    )
    parser.add_argument("--admin", help="Only show pools managed by this admin key")
    parser.add_argument("--collection", default="", help="Collection filter for statistics")
    parser.add_argument("--rarity", default="", help="Rarity filter for statistics")
    parser.add_argument(
        "--mint",
        action="append",
        default=[],
        help="NFT mint to look up (repeatable)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print(f"Fetching NFT staking pools from {args.env}...\n")

    client = Client.from_env(args.env)
    admin = Pubkey.from_string(args.admin) if args.admin else None

    try:
        pairs = client.fetch_all(admin)
    except Exception as e:
        print(f"Error fetching pools: {e}")
        sys.exit(1)

    print(f"=== Pools ({len(pairs)}) ===")
    for pair in pairs:
        r, p = pair.rarity_info, pair.pool_info
        print(
            f"  {r.collection}/{r.rarity}: pool {str(p.key)[:16]}... "
            f"staked {p.total_staked_amount}/{len(r.mint_list)}"
        )
    print()

    print("=== Statistics ===")
    print(f"Staked Amount:      {staked_amount(pairs, args.collection, args.rarity)}")
    try:
        pct = staked_percentage(pairs, args.collection, args.rarity)
        print(f"Staked Percentage:  {pct * 100:.2f}%")
    except NoMatchingCollectionError:
        print("Staked Percentage:  no matching collection")
    print()

    if args.mint:
        mints = [Pubkey.from_string(m) for m in args.mint]
        matches = match_assets(pairs, mints)
        print(f"=== Mint Matches ({len(matches)}/{len(mints)}) ===")
        for m in matches:
            r = m.pair.rarity_info
            print(f"  {m.mint}: {r.collection}/{r.rarity} (pool #{m.index})")
        print()

    print("Done.")


if __name__ == "__main__":
    main()
