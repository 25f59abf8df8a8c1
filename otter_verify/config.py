"""Signer and RPC resolution from the Solana CLI configuration."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from solders.keypair import Keypair

from .constants import CLUSTER_URLS, DEFAULT_COMMITMENT, DEFAULT_RPC_URL
from .rpc import RegistryClient


_SIGNER_URI_SCHEMES = ("usb://", "prompt://")
_SIGNER_KEYWORDS = {"ASK", "stdin"}


def solana_config_path(path: str | Path | None = None) -> Path:
    if path:
        return Path(path).expanduser()
    env_path = os.environ.get("SOLANA_CONFIG") or os.environ.get("SOLANA_CONFIG_FILE")
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "solana" / "cli" / "config.yml"


def load_solana_cli_config(path: str | Path | None = None) -> dict[str, str]:
    """Read the flat ``key: value`` entries of the Solana CLI config.yml."""
    cfg_path = solana_config_path(path)
    try:
        text = cfg_path.read_text()
    except OSError:
        return {}
    cfg: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or line == "---":
            continue
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip()
        value = value.strip().strip("\"'")
        if key:
            cfg[key] = value
    return cfg


def load_explicit_config(path: str | Path | None = None) -> dict[str, str]:
    """Like load_solana_cli_config, but a path given on the command line must exist."""
    if path and not solana_config_path(path).exists():
        raise FileNotFoundError(f"Solana config not found: {path}")
    return load_solana_cli_config(path)


def resolve_rpc_url(
    rpc_url: str | None,
    cluster: str | None,
    cfg: dict[str, str],
) -> str:
    if rpc_url:
        return rpc_url
    if cluster:
        url = CLUSTER_URLS.get(cluster)
        if url is None:
            choices = ", ".join(sorted(CLUSTER_URLS))
            raise ValueError(f"Unknown cluster '{cluster}' (expected one of: {choices})")
        return url
    return cfg.get("json_rpc_url") or DEFAULT_RPC_URL


def resolve_keypair_path(keypair: str | None, cfg: dict[str, str]) -> Path:
    raw = keypair or cfg.get("keypair_path")
    if not raw:
        return Path.home() / ".config" / "solana" / "id.json"
    if raw in _SIGNER_KEYWORDS or raw.startswith(_SIGNER_URI_SCHEMES):
        raise ValueError(f"Unsupported signer '{raw}': only keypair files are supported")
    if raw.startswith("file://"):
        raw = raw[len("file://") :]
    return Path(raw).expanduser()


def load_keypair(path: Path) -> Keypair:
    if not path.exists():
        raise FileNotFoundError(f"Keypair not found: {path}")
    try:
        text = path.read_text()
    except OSError as exc:
        raise ValueError(f"Unable to read keypair file {path}: {exc}") from exc
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Unable to get signer from path {path}: not a JSON keypair file") from exc
    if not isinstance(raw, list) or len(raw) != 64:
        raise ValueError(f"Unable to get signer from path {path}: expected a JSON array of 64 bytes")
    try:
        return Keypair.from_bytes(bytes(raw))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Unable to get signer from path {path}: {exc}") from exc


@dataclass(frozen=True)
class UserConfig:
    signer: Keypair
    client: RegistryClient
    rpc_url: str


def get_user_config(
    config_path: str | Path | None = None,
    keypair: str | None = None,
    rpc_url: str | None = None,
    cluster: str | None = None,
    commitment: str = DEFAULT_COMMITMENT,
) -> UserConfig:
    """Load the signer keypair and RPC client, command-line overrides first."""
    cfg = load_explicit_config(config_path)
    url = resolve_rpc_url(rpc_url, cluster, cfg)
    signer = load_keypair(resolve_keypair_path(keypair, cfg))
    return UserConfig(
        signer=signer,
        client=RegistryClient(url, commitment=commitment),
        rpc_url=url,
    )
