"""Registry constants and cluster defaults."""

# OtterSec verify registry program (mainnet).
REGISTRY_PROGRAM_ID = "EngB3ANqXh8nDFhzZYJkCfpCHWCHkTrJTCWKEuSFCh7B"

# Signer used by the OtterSec verification service itself.
ALTERNATE_SIGNER = "HUUEmwc1rjh748XF2MrYLNHS4zE2D56yT9pBAaj9ggWM"

PDA_SEED_TAG = b"otter_verify"

DISCRIMINANT_SIZE = 8
INITIALIZE_DISCRIMINANT = bytes([175, 175, 109, 31, 13, 152, 155, 237])
UPDATE_DISCRIMINANT = bytes([219, 200, 88, 176, 158, 63, 253, 127])
CLOSE_DISCRIMINANT = bytes([98, 165, 201, 177, 108, 65, 206, 96])

CLUSTER_URLS: dict[str, str] = {
    "localnet": "http://127.0.0.1:8899",
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "mainnet": "https://api.mainnet-beta.solana.com",
}

# Same fallback the Solana CLI uses when config.yml has no json_rpc_url.
DEFAULT_RPC_URL = CLUSTER_URLS["mainnet"]
DEFAULT_COMMITMENT = "confirmed"
