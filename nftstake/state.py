"""Account layouts and in-memory entities for the rarity and staking programs.

Binary layout matches the Anchor account structs. Deserialization uses
struct.unpack_from with little-endian byte order and tolerates extra
trailing bytes (rarity info accounts are allocated at full capacity).
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Optional, Union

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from nftstake.config import MAX_MINT_LIST_LEN, MAX_NONCE
from nftstake.discriminator import (
    DISCRIMINATOR_POOL_INFO,
    DISCRIMINATOR_RARITY_INFO,
    DISCRIMINATOR_SIZE,
    validate_discriminator,
)
from nftstake.errors import (
    AccountDecodeError,
    DerivationMismatchError,
    InvalidNonceError,
    MissingNonceError,
    NonceNotFoundError,
    UnresolvedAddressError,
)
from nftstake.pda import (
    NonceFound,
    derive_pool_info_pda,
    derive_prove_token_authority_pda,
    derive_rarity_info_address,
    get_associated_token_address,
    search_nonce,
)
from nftstake.seed import encode_rarity_seed

NAME_SIZE = 16

# 8 + 32 + 16 + 16 + 4 + 512*32
RARITY_INFO_SPACE = DISCRIMINATOR_SIZE + 32 + 2 * NAME_SIZE + 4 + MAX_MINT_LIST_LEN * 32


def _pubkey(data: bytes, offset: int) -> Pubkey:
    return Pubkey.from_bytes(data[offset : offset + 32])


def decode_name(raw: bytes) -> str:
    """Decode a zero-padded name buffer, trimming at the first zero byte."""
    return raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace")


def encode_name(name: str) -> bytes:
    """Encode ``name`` into a zero-padded 16-byte buffer."""
    raw = name.encode("utf-8")
    if len(raw) > NAME_SIZE:
        raise ValueError(f"name {name!r} is {len(raw)} bytes, max is {NAME_SIZE}")
    return raw.ljust(NAME_SIZE, b"\x00")


def _deserialize(data: bytes, discriminator: bytes, min_size: int) -> bytes:
    validate_discriminator(data, discriminator)
    body = data[DISCRIMINATOR_SIZE:]
    if len(body) < min_size:
        raise AccountDecodeError(
            f"account data too short: have {len(body)} bytes, need at least {min_size}"
        )
    return body


# ---------------------------------------------------------------------------
# Raw accounts
# ---------------------------------------------------------------------------


@dataclass
class RarityInfoAccount:
    admin: Pubkey
    collection: str  # [16]u8, zero padded
    rarity: str  # [16]u8, zero padded
    mint_list: list[Pubkey]  # Vec<Pubkey>, capacity 512

    HEADER_SIZE = 68  # 32 + 16 + 16 + 4

    @classmethod
    def from_bytes(
        cls, data: bytes, discriminator: bytes = DISCRIMINATOR_RARITY_INFO
    ) -> RarityInfoAccount:
        b = _deserialize(data, discriminator, cls.HEADER_SIZE)
        off = 0
        admin = _pubkey(b, off); off += 32
        collection = decode_name(b[off : off + NAME_SIZE]); off += NAME_SIZE
        rarity = decode_name(b[off : off + NAME_SIZE]); off += NAME_SIZE
        count = struct.unpack_from("<I", b, off)[0]; off += 4
        if count > MAX_MINT_LIST_LEN:
            raise AccountDecodeError(
                f"mint list length {count} exceeds capacity {MAX_MINT_LIST_LEN}"
            )
        if len(b) < off + count * 32:
            raise AccountDecodeError(
                f"account data too short for {count} mints: have {len(b)} bytes"
            )
        mints = [_pubkey(b, off + i * 32) for i in range(count)]
        return cls(admin=admin, collection=collection, rarity=rarity, mint_list=mints)


@dataclass
class PoolInfoAccount:
    admin: Pubkey
    prove_token_mint: Pubkey
    rarity_info: Pubkey
    prove_token_authority: Pubkey
    prove_token_vault: Pubkey
    total_locked: int  # u64

    STRUCT_SIZE = 168

    @classmethod
    def from_bytes(
        cls, data: bytes, discriminator: bytes = DISCRIMINATOR_POOL_INFO
    ) -> PoolInfoAccount:
        b = _deserialize(data, discriminator, cls.STRUCT_SIZE)
        off = 0
        admin = _pubkey(b, off); off += 32
        mint = _pubkey(b, off); off += 32
        rarity_info = _pubkey(b, off); off += 32
        authority = _pubkey(b, off); off += 32
        vault = _pubkey(b, off); off += 32
        total_locked = struct.unpack_from("<Q", b, off)[0]; off += 8
        assert off == cls.STRUCT_SIZE, f"PoolInfo byte coverage: {off} != {cls.STRUCT_SIZE}"
        return cls(
            admin=admin,
            prove_token_mint=mint,
            rarity_info=rarity_info,
            prove_token_authority=authority,
            prove_token_vault=vault,
            total_locked=total_locked,
        )


POOL_INFO_SPACE = DISCRIMINATOR_SIZE + PoolInfoAccount.STRUCT_SIZE


# ---------------------------------------------------------------------------
# Rarity info derivation state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Located:
    """Address read from chain; the nonce that produced it is not known yet."""

    address: Pubkey


@dataclass(frozen=True)
class Assigned:
    """Nonce chosen by an operator; the address has not been derived yet."""

    nonce: int


@dataclass(frozen=True)
class Resolved:
    address: Pubkey
    nonce: int
    seed: str


RarityDerivation = Union[Located, Assigned, Resolved]


def check_nonce(nonce: int) -> int:
    if not 0 <= nonce <= MAX_NONCE:
        raise InvalidNonceError(f"nonce {nonce} is outside 0..{MAX_NONCE}")
    return nonce


@dataclass
class RarityInfo:
    admin: Pubkey
    collection: str
    rarity: str
    derivation: RarityDerivation
    mint_list: list[Pubkey] = field(default_factory=list)

    @classmethod
    def from_account(cls, address: Pubkey, account: RarityInfoAccount) -> RarityInfo:
        return cls(
            admin=account.admin,
            collection=account.collection,
            rarity=account.rarity,
            derivation=Located(address),
            mint_list=list(account.mint_list),
        )

    @classmethod
    def with_nonce(
        cls,
        admin: Pubkey,
        collection: str,
        rarity: str,
        nonce: int,
        mint_list: Optional[list[Pubkey]] = None,
    ) -> RarityInfo:
        return cls(
            admin=admin,
            collection=collection,
            rarity=rarity,
            derivation=Assigned(check_nonce(nonce)),
            mint_list=list(mint_list or []),
        )

    @property
    def key(self) -> Pubkey:
        if isinstance(self.derivation, Assigned):
            raise UnresolvedAddressError(
                f"rarity info {self.collection}/{self.rarity} has no derived address"
            )
        return self.derivation.address

    @property
    def has_key(self) -> bool:
        return not isinstance(self.derivation, Assigned)

    @property
    def resolved(self) -> Resolved:
        if not isinstance(self.derivation, Resolved):
            raise UnresolvedAddressError(
                f"rarity info {self.collection}/{self.rarity} is not resolved"
            )
        return self.derivation

    def find_nonce_and_seed(self, program_id: Pubkey) -> Resolved:
        """Recover the nonce for a located address.

        Raises NonceNotFoundError, leaving the state unchanged, when no nonce
        in range reproduces the address. A resolved state is re-derived and
        must agree with its stored address.
        """
        if isinstance(self.derivation, Resolved):
            return self.find_key_and_seed(program_id)
        address = self.key
        result = search_nonce(
            self.admin, self.collection, self.rarity, address, program_id
        )
        if not isinstance(result, NonceFound):
            raise NonceNotFoundError(
                f"no nonce in 0..{result.tried - 1} derives {address} "
                f"for {self.collection}/{self.rarity}"
            )
        self.derivation = Resolved(address, result.nonce, result.seed)
        return self.derivation

    def find_key_and_seed(self, program_id: Pubkey) -> Resolved:
        """Derive the address from a known nonce.

        Raises MissingNonceError without a nonce, InvalidNonceError when the
        nonce is out of range, and DerivationMismatchError when a resolved
        state holds an address or seed its nonce does not derive. The state
        is left unchanged on error.
        """
        if isinstance(self.derivation, Located):
            raise MissingNonceError(
                f"rarity info {self.collection}/{self.rarity} has no nonce"
            )
        nonce = check_nonce(self.derivation.nonce)
        address = derive_rarity_info_address(
            self.admin, self.collection, self.rarity, nonce, program_id
        )
        seed = encode_rarity_seed(self.collection, self.rarity, nonce)
        derived = Resolved(address, nonce, seed)
        if isinstance(self.derivation, Resolved) and self.derivation != derived:
            raise DerivationMismatchError(
                f"rarity info {self.collection}/{self.rarity} holds "
                f"{self.derivation.address}, nonce {nonce} derives {address}"
            )
        self.derivation = derived
        return self.derivation

    def resolve(self, program_id: Pubkey) -> Resolved:
        """Search for the nonce of a located address, else derive forward."""
        if isinstance(self.derivation, Located):
            return self.find_nonce_and_seed(program_id)
        return self.find_key_and_seed(program_id)


# ---------------------------------------------------------------------------
# Pool info
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PoolAddresses:
    key: Pubkey
    authority: Pubkey
    vault: Pubkey


@dataclass
class PoolInfo:
    admin: Pubkey
    prove_token_mint: Pubkey
    rarity_info: Pubkey
    total_staked_amount: int = 0
    addresses: Optional[PoolAddresses] = None

    @classmethod
    def from_account(cls, address: Pubkey, account: PoolInfoAccount) -> PoolInfo:
        return cls(
            admin=account.admin,
            prove_token_mint=account.prove_token_mint,
            rarity_info=account.rarity_info,
            total_staked_amount=account.total_locked,
            addresses=PoolAddresses(
                key=address,
                authority=account.prove_token_authority,
                vault=account.prove_token_vault,
            ),
        )

    @property
    def resolved(self) -> PoolAddresses:
        if self.addresses is None:
            raise UnresolvedAddressError(
                f"pool info for rarity info {self.rarity_info} has no derived addresses"
            )
        return self.addresses

    @property
    def key(self) -> Pubkey:
        return self.resolved.key

    def find_key_and_authority_and_vault(self, program_id: Pubkey) -> PoolAddresses:
        """Derive the pool, its vault authority and the authority's token vault."""
        key, _ = derive_pool_info_pda(self.rarity_info, program_id)
        authority, _ = derive_prove_token_authority_pda(key, program_id)
        vault = get_associated_token_address(authority, self.prove_token_mint)
        self.addresses = PoolAddresses(key=key, authority=authority, vault=vault)
        return self.addresses


@dataclass
class LinkedPair:
    """A rarity info and the pool info that references it."""

    rarity_info: RarityInfo
    pool_info: PoolInfo
