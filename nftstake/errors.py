"""Exception types raised by the nftstake SDK."""


class NftStakeError(Exception):
    """Base class for all nftstake errors."""


class InvalidSeedLengthError(NftStakeError, ValueError):
    """Seed is longer than create-with-seed allows."""


class NonceNotFoundError(NftStakeError, LookupError):
    """No nonce in the searchable range reproduces the expected address."""


class MissingNonceError(NftStakeError, ValueError):
    """Forward derivation was attempted before a nonce was assigned."""


class UnresolvedAddressError(NftStakeError, ValueError):
    """An address was read before it was derived or located."""


class NoMatchingCollectionError(NftStakeError, ZeroDivisionError):
    """A staked-percentage query matched no eligible mints."""


class NotFoundError(NftStakeError, LookupError):
    """A lookup matched nothing."""


class BatchLimitExceededError(NftStakeError, ValueError):
    """An instruction group does not fit in a single transaction."""


class AccountDecodeError(NftStakeError, ValueError):
    """Raw account data does not match the expected layout."""


class InvalidNonceError(NftStakeError, ValueError):
    """A rarity info nonce is outside the searchable range."""


class DerivationMismatchError(NftStakeError, ValueError):
    """A stored rarity info address does not derive from its nonce."""


class RarityMismatchError(NftStakeError, ValueError):
    """A pool info references a different rarity info than the one supplied."""
