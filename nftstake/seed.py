"""Seed strings for create-with-seed rarity info addresses.

The seed is built from the concatenated parts and a context tag, hex-encoded,
hashed with SHA-256, and the hex digest truncated to 32 characters. Clients in
every language must produce the same string, so the text encoding and hash are
fixed.
"""

from __future__ import annotations

import hashlib
from typing import Sequence, Union

RARITY_INFO_SEED = "rarity_info"
POOL_INFO_SEED = "pool_info"

SEED_LENGTH = 32


def encode_seed(parts: Sequence[Union[str, int]], tag: str) -> str:
    """Return the 32-character derivation seed for ``parts`` under ``tag``.

    Integers are rendered in decimal, so ``["Apes", "Gold", 3]`` hashes the
    text ``"ApesGold3" + tag``.
    """
    text = "".join(str(p) for p in parts) + tag
    hex_text = text.encode("utf-8").hex()
    return hashlib.sha256(hex_text.encode("ascii")).hexdigest()[:SEED_LENGTH]


def encode_rarity_seed(collection: str, rarity: str, nonce: int) -> str:
    return encode_seed([collection, rarity, nonce], RARITY_INFO_SEED)
