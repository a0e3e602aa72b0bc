"""Network configuration and protocol constants for the NFT staking programs."""

RARITY_PROGRAM_IDS = {
    "mainnet-beta": "7RarN6tqHVk4YfbXsDc3mJ2aWgz8hPuLyE9nQeBt5KpM",
    "devnet": "4RarTx8dnK2vPcEq6WzJm9hYbL3sGuXfA5tNeR7pQyDk",
    "localnet": "4RarTx8dnK2vPcEq6WzJm9hYbL3sGuXfA5tNeR7pQyDk",
}

STAKING_PROGRAM_IDS = {
    "mainnet-beta": "7StkP3wxZe2uGcLq8YdTmN4vRbj6hAsXfK9oE5iWnUQz",
    "devnet": "4StkYv6eBq3nHxTm8RcZp2aWjL5sGfU9dK7tEi4oNwXb",
    "localnet": "4StkYv6eBq3nHxTm8RcZp2aWjL5sGfU9dK7tEi4oNwXb",
}

SOLANA_RPC_URLS = {
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
    "devnet": "https://api.devnet.solana.com",
    "localnet": "http://localhost:8899",
}

# Overrides SOLANA_RPC_URLS[env] in Client.from_env when set.
RPC_URL_ENV_VAR = "NFTSTAKE_RPC_URL"

# Highest nonce tried when recovering a rarity info seed.
MAX_NONCE = 100

# Rarity info accounts are allocated once at full capacity.
MAX_MINT_LIST_LEN = 512
RARITY_INFO_LAMPORTS = 115452480

# Per-instruction and per-transaction ceilings enforced by the programs and
# the transaction size limit.
MAX_MINTS_PER_APPEND = 25
MAX_INSTRUCTIONS_PER_TXN = 4
